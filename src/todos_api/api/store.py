"""In-memory todo store with CRUD rules for the Todos API."""

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional

DEFAULT_TITLE = "Untitled"

PATCHABLE_FIELDS = ("title", "done")

_UNSET: Any = object()


class TodoNotFoundError(LookupError):
    """Raised when no todo matches the requested id."""

    def __init__(self, todo_id: Any):
        super().__init__(f"Todo {todo_id!r} not found")
        self.todo_id = todo_id


@dataclass
class TodoRecord:
    """A single todo item held by the store."""

    id: int
    title: Any = DEFAULT_TITLE
    done: Any = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class TodoPatch:
    """Partial update naming only the fields to change.

    Fields left unset are not touched by ``TodoStore.update``. A field set to
    ``None`` is still a change.
    """

    title: Any = _UNSET
    done: Any = _UNSET

    @classmethod
    def from_payload(cls, payload: Optional[Mapping[str, Any]]) -> "TodoPatch":
        """Build a patch from a request payload, keeping recognized keys only."""
        if not payload:
            return cls()
        return cls(**{name: payload[name] for name in PATCHABLE_FIELDS if name in payload})

    def changes(self) -> Dict[str, Any]:
        """Return the fields present in this patch."""
        return {
            name: getattr(self, name)
            for name in PATCHABLE_FIELDS
            if getattr(self, name) is not _UNSET
        }


class TodoStore:
    """Owns the ordered todo collection.

    Operations never suspend or block. The store holds no lock, so callers
    running handlers on multiple threads must serialize access themselves.
    Every returned record is a copy.
    """

    def __init__(self, seed: Iterable[TodoRecord] = ()):
        self._todos: List[TodoRecord] = []
        seen = set()
        for record in seed:
            if not isinstance(record.id, int) or isinstance(record.id, bool) or record.id < 1:
                raise ValueError(f"Seed todo id must be a positive integer, got {record.id!r}")
            if record.id in seen:
                raise ValueError(f"Duplicate seed todo id {record.id}")
            seen.add(record.id)
            self._todos.append(replace(record))

    def __len__(self) -> int:
        return len(self._todos)

    def list(self) -> List[TodoRecord]:
        """Return all todos in insertion order."""
        return [replace(todo) for todo in self._todos]

    def get(self, todo_id: int) -> TodoRecord:
        """Return the todo with ``todo_id``.

        Raises:
            TodoNotFoundError: If no todo has that id
        """
        return replace(self._todos[self._index_of(todo_id)])

    def create(self, title: Any = None) -> TodoRecord:
        """Append a new todo and return it.

        The id is one more than the current maximum (1 for an empty store), so
        deleting the highest id frees it for the next create.
        """
        next_id = max((todo.id for todo in self._todos), default=0) + 1
        if not isinstance(title, str) or not title:
            title = DEFAULT_TITLE
        todo = TodoRecord(id=next_id, title=title, done=False)
        self._todos.append(todo)
        return replace(todo)

    def update(self, todo_id: int, patch: TodoPatch) -> TodoRecord:
        """Merge ``patch`` into the todo with ``todo_id`` and return the result.

        Raises:
            TodoNotFoundError: If no todo has that id
        """
        index = self._index_of(todo_id)
        self._todos[index] = replace(self._todos[index], **patch.changes())
        return replace(self._todos[index])

    def delete(self, todo_id: int) -> None:
        """Remove the todo with ``todo_id``.

        Raises:
            TodoNotFoundError: If no todo has that id
        """
        del self._todos[self._index_of(todo_id)]

    def _index_of(self, todo_id: int) -> int:
        for index, todo in enumerate(self._todos):
            if todo.id == todo_id:
                return index
        raise TodoNotFoundError(todo_id)


def default_seed() -> List[TodoRecord]:
    """Records the service starts with when no seed file is configured."""
    return [
        TodoRecord(id=1, title="Buy coffee", done=False),
        TodoRecord(id=2, title="Write blog", done=True),
    ]
