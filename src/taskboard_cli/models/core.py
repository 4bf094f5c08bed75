"""Todo, category and subtask data models."""

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, EmailStr, Field, field_validator

TodoStatus = Literal["pending", "in_progress", "completed"]
TodoPriority = Literal["low", "medium", "high"]

# Fixed workflow order used for board columns and status moves
STATUS_ORDER: tuple[TodoStatus, ...] = ("pending", "in_progress", "completed")

STATUS_LABELS: dict[str, str] = {
    "pending": "Aberto",
    "in_progress": "Fazendo",
    "completed": "Feito",
}

PRIORITY_LABELS: dict[str, str] = {
    "low": "Baixa",
    "medium": "Média",
    "high": "Alta",
}

PRIORITY_COLORS: dict[str, str] = {
    "high": "#F31260",
    "medium": "#F5A524",
    "low": "#17C964",
}

DEFAULT_CATEGORY_COLOR = "#000000"


def _blank_to_none(value):
    """Treat empty form values as absent."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def to_timestamp(value: datetime | None) -> str | None:
    """Serialize a due date as a UTC ISO-8601 timestamp.

    Naive datetimes are taken to be UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


class Category(BaseModel):
    """Category model: a named, colored label attachable to todos.

    Attributes:
        id: Unique identifier for the category
        name: Category name
        color: Hex color code for display
        user_id: Owning user account
        created_at: Creation timestamp
    """

    id: str
    name: str
    color: str = DEFAULT_CATEGORY_COLOR
    user_id: str | None = None
    created_at: datetime | None = None


class CategoryCreate(BaseModel):
    """Model for creating a new category."""

    name: str
    color: str = DEFAULT_CATEGORY_COLOR


class CategoryUpdate(BaseModel):
    """Full overwrite of a category's editable fields."""

    name: str
    color: str

    @classmethod
    def from_category(cls, category: Category, **changes) -> "CategoryUpdate":
        """Build an overwrite from an existing category plus changed fields."""
        data = {"name": category.name, "color": category.color}
        data.update({k: v for k, v in changes.items() if v is not None})
        return cls(**data)


class Subtask(BaseModel):
    """Subtask model: a checklist item scoped to one todo.

    Attributes:
        id: Unique identifier for the subtask
        title: Subtask title
        description: Optional detailed description
        status: One of pending, in_progress, completed
        todo_id: Owning todo
    """

    id: str
    title: str
    description: str | None = None
    status: TodoStatus = "pending"
    todo_id: str
    created_at: datetime | None = None


class SubtaskCreate(BaseModel):
    """Model for creating a new subtask."""

    title: str
    description: str | None = None
    status: TodoStatus = "pending"


class SubtaskUpdate(BaseModel):
    """Full overwrite of a subtask's editable fields."""

    title: str
    description: str | None = None
    status: TodoStatus

    @classmethod
    def from_subtask(cls, subtask: Subtask) -> "SubtaskUpdate":
        return cls(
            title=subtask.title,
            description=subtask.description,
            status=subtask.status,
        )


class Todo(BaseModel):
    """Todo model as returned by the store, with its relations joined.

    Attributes:
        id: Unique identifier for the todo
        title: Todo title
        description: Optional detailed description
        status: Workflow column (pending, in_progress, completed)
        due_date: Optional due date
        priority: low, medium or high
        category_id: Optional reference to a category
        category: The referenced category row, or None if absent
        subtasks: Checklist items belonging to this todo
        user_id: Owning user account
        created_at: Creation timestamp
    """

    id: str
    title: str
    description: str | None = None
    status: TodoStatus = "pending"
    due_date: datetime | None = None
    priority: TodoPriority = "medium"
    category_id: str | None = None
    category: Category | None = None
    subtasks: list[Subtask] = Field(default_factory=list)
    user_id: str | None = None
    created_at: datetime | None = None

    @property
    def status_label(self) -> str:
        return STATUS_LABELS[self.status]

    @property
    def priority_label(self) -> str:
        return PRIORITY_LABELS[self.priority]


class TodoCreate(BaseModel):
    """Model for creating a new todo.

    Attributes:
        title: Todo title (required; emptiness is left to the caller)
        description: Optional detailed description
        status: Initial column, defaults to pending
        due_date: Optional due date
        priority: Defaults to medium
        category_id: Optional category reference
    """

    title: str
    description: str | None = None
    status: TodoStatus = "pending"
    due_date: datetime | None = None
    priority: TodoPriority = "medium"
    category_id: str | None = None

    @field_validator("due_date", "category_id", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        return _blank_to_none(value)


class TodoUpdate(BaseModel):
    """Full overwrite of a todo's editable fields.

    Every field is resent on save, so a missing value clears the stored one.
    """

    title: str
    description: str | None = None
    status: TodoStatus
    due_date: datetime | None = None
    priority: TodoPriority
    category_id: str | None = None

    @field_validator("due_date", "category_id", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        return _blank_to_none(value)

    @classmethod
    def from_todo(cls, todo: Todo, **changes) -> "TodoUpdate":
        """Build an overwrite from an existing todo plus changed fields.

        The category reference is taken from the embedded category row when
        present, so a todo whose category was deleted saves with none.
        """
        data = {
            "title": todo.title,
            "description": todo.description,
            "status": todo.status,
            "due_date": todo.due_date,
            "priority": todo.priority,
            "category_id": todo.category.id if todo.category else None,
        }
        data.update(changes)
        return cls(**data)


class User(BaseModel):
    """Authenticated user identity."""

    id: str
    email: EmailStr
