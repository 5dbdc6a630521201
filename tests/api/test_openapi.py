"""Tests for the generated API description and docs pages."""

import pytest

ROUTE_TABLE = [
    ("/api/todos", "get", {"200"}),
    ("/api/todos", "post", {"201"}),
    ("/api/todos/{todo_id}", "get", {"200", "404"}),
    ("/api/todos/{todo_id}", "patch", {"200", "404"}),
    ("/api/todos/{todo_id}", "delete", {"204", "404"}),
]


@pytest.fixture
def openapi_doc(client):
    response = client.get("/docs/openapi.json")
    assert response.status_code == 200
    return response.json()


def test_docs_page_served(client):
    response = client.get("/docs")

    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "/docs/openapi.json" in response.text


def test_info_and_servers(openapi_doc):
    assert openapi_doc["openapi"].startswith("3.")
    assert openapi_doc["info"]["title"] == "Todos API (Demo)"
    assert openapi_doc["info"]["version"] == "1.0.0"
    assert openapi_doc["servers"] == [
        {"url": "http://localhost:3000", "description": "Local dev"}
    ]


@pytest.mark.parametrize("path, method, statuses", ROUTE_TABLE)
def test_routes_documented(openapi_doc, path, method, statuses):
    """Test every route of the todo API is described with its status codes."""
    operation = openapi_doc["paths"][path][method]

    assert statuses <= set(operation["responses"])
    assert "Todos" in operation["tags"]


def test_not_found_response_schema(openapi_doc):
    not_found = openapi_doc["paths"]["/api/todos/{todo_id}"]["get"]["responses"]["404"]

    schema = not_found["content"]["application/json"]["schema"]
    assert schema == {"$ref": "#/components/schemas/ErrorMessage"}


def test_todo_id_documented_as_integer(openapi_doc):
    for method in ("get", "patch", "delete"):
        parameters = openapi_doc["paths"]["/api/todos/{todo_id}"][method]["parameters"]

        assert parameters[0]["name"] == "todo_id"
        assert parameters[0]["in"] == "path"
        assert parameters[0]["schema"]["type"] == "integer"


def test_request_bodies_documented(openapi_doc):
    post_body = openapi_doc["paths"]["/api/todos"]["post"]["requestBody"]
    patch_body = openapi_doc["paths"]["/api/todos/{todo_id}"]["patch"]["requestBody"]

    assert post_body["content"]["application/json"]["schema"]["$ref"].endswith("/NewTodo")
    assert patch_body["content"]["application/json"]["schema"]["$ref"].endswith("/TodoUpdate")


def test_component_schemas(openapi_doc):
    schemas = openapi_doc["components"]["schemas"]

    todo = schemas["Todo"]
    assert set(todo["required"]) == {"id", "title", "done"}
    assert todo["properties"]["id"]["type"] == "integer"
    assert todo["properties"]["title"]["type"] == "string"
    assert todo["properties"]["done"]["type"] == "boolean"

    assert "title" in schemas["NewTodo"]["properties"]
    assert "required" not in schemas["NewTodo"]
    assert set(schemas["TodoUpdate"]["properties"]) == {"title", "done"}
    assert schemas["ErrorMessage"]["required"] == ["message"]
