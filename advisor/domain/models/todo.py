from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime, timezone
from enum import Enum
from functools import cmp_to_key


class TodoStatus(str, Enum):
    """Todo lifecycle status"""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TodoPriority(str, Enum):
    """Todo priority levels"""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# Lower rank sorts first
STATUS_RANK = {
    TodoStatus.IN_PROGRESS: 0,
    TodoStatus.PENDING: 1,
    TodoStatus.COMPLETED: 2,
}

PRIORITY_RANK = {
    TodoPriority.HIGH: 0,
    TodoPriority.MEDIUM: 1,
    TodoPriority.LOW: 2,
}

STATUS_ICONS = {
    TodoStatus.COMPLETED: "✓",
    TodoStatus.IN_PROGRESS: "⚡",
    TodoStatus.PENDING: "⏳",
}

PRIORITY_TAGS = {
    TodoPriority.HIGH: " [HIGH]",
    TodoPriority.LOW: " [LOW]",
}


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC"""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class TodoInput(BaseModel):
    """Todo as sent by the model to the manage_todos tool"""
    model_config = ConfigDict(populate_by_name=True)

    content: str = Field(description="Task in imperative form, e.g. 'Analyze competitors'")
    active_form: str = Field(
        alias="activeForm",
        description="Task in present continuous form, e.g. 'Analyzing competitors'"
    )
    status: TodoStatus = Field(description="Task status")
    priority: Optional[TodoPriority] = Field(default=TodoPriority.MEDIUM, description="Task priority (optional)")


class TodoItem(TodoInput):
    """Todo with optional caller-supplied timestamps"""
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    completed_at: Optional[datetime] = Field(None, alias="completedAt")

    @field_validator("created_at", "completed_at")
    @classmethod
    def _timestamps_as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class Todo(TodoItem):
    """A tracked unit of work held in working memory"""

    def status_icon(self) -> str:
        return STATUS_ICONS[self.status]

    def priority_tag(self) -> str:
        return PRIORITY_TAGS.get(self.priority, "")

    def render_line(self, position: int) -> str:
        """Render the todo as a numbered context line"""
        return f"  {position}. {self.status_icon()} {self.content}{self.priority_tag()}"


class TodoProgress(BaseModel):
    """Status counts over a todo list"""
    total: int = 0
    completed: int = 0
    in_progress: int = 0
    pending: int = 0
    percentage: float = 0.0

    @classmethod
    def from_todos(cls, todos: List[Todo]) -> "TodoProgress":
        total = len(todos)
        completed = sum(1 for t in todos if t.status == TodoStatus.COMPLETED)
        return cls(
            total=total,
            completed=completed,
            in_progress=sum(1 for t in todos if t.status == TodoStatus.IN_PROGRESS),
            pending=sum(1 for t in todos if t.status == TodoStatus.PENDING),
            percentage=(completed / total) * 100 if total > 0 else 0.0
        )


def compare_todos(a: Todo, b: Todo) -> int:
    """Three-tier comparison: status, then priority, then creation time"""

    status_diff = STATUS_RANK[a.status] - STATUS_RANK[b.status]
    if status_diff != 0:
        return status_diff

    priority_a = a.priority or TodoPriority.MEDIUM
    priority_b = b.priority or TodoPriority.MEDIUM
    priority_diff = PRIORITY_RANK[priority_a] - PRIORITY_RANK[priority_b]
    if priority_diff != 0:
        return priority_diff

    # Missing timestamps compare as equal
    created_a, created_b = as_utc(a.created_at), as_utc(b.created_at)
    if created_a and created_b:
        if created_a < created_b:
            return -1
        if created_a > created_b:
            return 1

    return 0


def sort_todos(todos: List[Todo]) -> List[Todo]:
    """Return a new, stably sorted list; in-progress work first, completed last"""
    return sorted(todos, key=cmp_to_key(compare_todos))
