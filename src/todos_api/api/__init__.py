"""
Todos HTTP API Service

Architecture:
- server.py: FastAPI application setup
- store.py: In-memory todo store
- todos.py: Todo collection endpoints
- models.py: Pydantic request/response models
- config.py: Service configuration management
- seed.py: Initial todo collection loading
- health.py: Health check endpoint
- metrics.py: Request and todo activity metrics
"""
