from typing import Dict, List, Any, Callable, Optional, Union
from datetime import datetime
import secrets
import string

from advisor.domain.models.conversation import (
    AnalysisKind, ConversationContext, Focus, IdeaContext, WorkingMemory, utcnow
)
from advisor.domain.models.todo import (
    Todo, TodoInput, TodoItem, TodoPriority, TodoProgress, TodoStatus, sort_todos
)
from advisor.infrastructure.observability.logging import agent_logger
from .memory.analysis_cache import AnalysisCache

_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits

# Field name for every accepted idea key, wire aliases included
IDEA_FIELD_NAMES: Dict[str, str] = {
    **{name: name for name in IdeaContext.model_fields},
    **{field.alias: name for name, field in IdeaContext.model_fields.items() if field.alias},
}


def generate_session_id(now: Optional[datetime] = None) -> str:
    """Build an id of the form session_<epoch-millis>_<random suffix>"""

    now = now or utcnow()
    suffix = "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(9))
    return f"session_{int(now.timestamp() * 1000)}_{suffix}"


class MemoryManager:
    """Owns the working memory of one conversation.

    All reads and writes of idea context, cached analyses, focus, concerns,
    recommendations and todos go through this class. Nothing here raises:
    missing or expired data reads as None and out-of-range todo indices are
    ignored.
    """

    def __init__(self, session_id: Optional[str] = None, clock: Optional[Callable[[], datetime]] = None):
        self.clock = clock or utcnow
        now = self.clock()
        self.context = ConversationContext(
            session_id=session_id or generate_session_id(now),
            created_at=now,
            last_updated_at=now,
            working_memory=WorkingMemory()
        )
        self.analysis_cache = AnalysisCache(self.memory.analyses, clock=self.clock)

    @property
    def session_id(self) -> str:
        return self.context.session_id

    @property
    def memory(self) -> WorkingMemory:
        return self.context.working_memory

    # Idea

    def update_idea(self, idea: Union[IdeaContext, Dict[str, Any]]) -> None:
        """Shallow-merge the non-null fields of idea into the current idea.

        Values are stored as given, without validation. Keys may be field
        names or wire aliases; unknown keys are ignored.
        """
        if isinstance(idea, IdeaContext):
            fields = idea.model_dump(exclude_unset=True)
        else:
            fields = {
                IDEA_FIELD_NAMES[key]: value
                for key, value in idea.items()
                if key in IDEA_FIELD_NAMES
            }
        updates = {name: value for name, value in fields.items() if value is not None}

        current = self.memory.idea or IdeaContext()
        self.memory.idea = current.model_copy(update=updates)

        self._touch()
        self._log("idea", "updated", {"fields": sorted(updates)})

    def get_idea(self) -> Optional[IdeaContext]:
        return self.memory.idea

    def has_idea(self) -> bool:
        return bool(self.memory.idea and self.memory.idea.description)

    # Analysis cache

    def cache_analysis(self, kind: Union[AnalysisKind, str], data: Any) -> None:
        """Cache an analysis result, replacing any earlier one of the same kind"""

        self.analysis_cache.set(kind, data)
        self._touch()
        self._log("analysis", "cached", {"kind": AnalysisKind(kind).value})

    def get_cached_analysis(self, kind: Union[AnalysisKind, str]) -> Optional[Any]:
        """Get a cached result, or None when absent or older than the TTL"""

        return self.analysis_cache.get(kind)

    def has_analysis(self, kind: Union[AnalysisKind, str]) -> bool:
        return self.analysis_cache.has(kind)

    def get_completed_analyses(self) -> List[str]:
        return [kind.value for kind in self.analysis_cache.completed_kinds()]

    # Focus

    def set_focus(self, focus: Union[Focus, str]) -> None:
        self.memory.current_focus = Focus(focus)
        self._touch()
        self._log("focus", "changed", {"focus": self.memory.current_focus.value})

    def get_focus(self) -> Optional[Focus]:
        return self.memory.current_focus

    # Recommendations and concerns

    def add_recommendation(self, recommendation: str) -> None:
        if recommendation not in self.memory.recommendations:
            self.memory.recommendations.append(recommendation)
            self._touch()

    def get_recommendations(self) -> List[str]:
        return self.memory.recommendations

    def clear_recommendations(self) -> None:
        self.memory.recommendations = []
        self._touch()

    def add_user_concern(self, concern: str) -> None:
        if concern not in self.memory.user_concerns:
            self.memory.user_concerns.append(concern)
            self._touch()

    def get_user_concerns(self) -> List[str]:
        return self.memory.user_concerns

    # Todos

    def add_todo(
        self,
        content: str,
        active_form: str,
        priority: Optional[Union[TodoPriority, str]] = TodoPriority.MEDIUM
    ) -> None:
        """Append a new pending todo; a missing priority means medium"""

        self.memory.todos.append(Todo(
            content=content,
            active_form=active_form,
            status=TodoStatus.PENDING,
            priority=TodoPriority(priority) if priority is not None else TodoPriority.MEDIUM,
            created_at=self.clock()
        ))

        self._touch()
        self._log("todos", "added", {"content": content})

    def update_todos(self, todos: List[Union[TodoInput, Dict[str, Any]]]) -> None:
        """Replace the whole todo list.

        A todo whose content matches an existing one keeps the original
        creation time. Completed todos get a completion time if none was
        supplied; other statuses carry none. Naive timestamps are read as UTC.
        """
        now = self.clock()
        updated: List[Todo] = []

        for raw in todos:
            if isinstance(raw, TodoInput):
                raw = raw.model_dump()
            item = TodoItem.model_validate(raw)
            existing = next((t for t in self.memory.todos if t.content == item.content), None)

            created_at = (existing.created_at if existing else None) or item.created_at or now
            completed_at = None
            if item.status == TodoStatus.COMPLETED:
                completed_at = item.completed_at or now

            updated.append(Todo(
                content=item.content,
                active_form=item.active_form,
                status=item.status,
                priority=item.priority,
                created_at=created_at,
                completed_at=completed_at
            ))

        self.memory.todos = updated
        self._touch()
        self._log("todos", "replaced", {"count": len(updated)})

    def update_todo_status(self, index: int, status: Union[TodoStatus, str]) -> None:
        """Set the status of the todo at index in storage order.

        Indices outside the list, negative ones included, are ignored.
        """
        if index < 0 or index >= len(self.memory.todos):
            return

        todo = self.memory.todos[index]
        todo.status = TodoStatus(status)
        todo.completed_at = self.clock() if todo.status == TodoStatus.COMPLETED else None

        self._touch()
        self._log("todos", "status_changed", {"content": todo.content, "status": todo.status.value})

    def sort_todos(self) -> List[Todo]:
        """Todos ordered by status, priority, then creation time"""
        return sort_todos(self.memory.todos)

    def get_todos(self) -> List[Todo]:
        return self.sort_todos()

    def get_progress(self) -> TodoProgress:
        return TodoProgress.from_todos(self.memory.todos)

    def has_incomplete_todos(self) -> bool:
        return any(t.status != TodoStatus.COMPLETED for t in self.memory.todos)

    def get_current_todo(self) -> Optional[Todo]:
        """First in-progress todo in storage order"""
        return next((t for t in self.memory.todos if t.status == TodoStatus.IN_PROGRESS), None)

    # Context rendering

    def build_context_summary(self) -> str:
        """Render working memory as the context block for the system prompt"""

        parts: List[str] = []

        if self.has_idea():
            idea = self.memory.idea
            parts.append(f"STARTUP IDEA: {idea.description}")
            if idea.target_market:
                parts.append(f"Target Market: {idea.target_market}")
            if idea.category:
                parts.append(f"Category: {idea.category}")

        completed = self.get_completed_analyses()
        if completed:
            parts.append(f"\nCOMPLETED ANALYSES: {', '.join(completed)}")

        focus = self.get_focus()
        if focus:
            parts.append(f"\nCURRENT FOCUS: {focus.value}")

        concerns = self.get_user_concerns()
        if concerns:
            parts.append("\nUSER CONCERNS:\n" + "\n".join(f"- {c}" for c in concerns))

        recommendations = self.get_recommendations()
        if recommendations:
            parts.append("\nRECOMMENDATIONS:\n" + "\n".join(f"- {r}" for r in recommendations))

        todos = self.get_todos()
        if todos:
            progress = self.get_progress()
            parts.append(f"\nTODOS ({progress.completed}/{progress.total} completed):")
            parts.extend(todo.render_line(index) for index, todo in enumerate(todos, start=1))

            current = self.get_current_todo()
            if current:
                parts.append(f"\nCURRENT TASK: {current.active_form}")

        if not parts:
            return ""

        return "\n--- CONTEXT ---\n" + "\n".join(parts) + "\n--- END CONTEXT ---\n"

    # Session

    def get_context(self) -> ConversationContext:
        return self.context

    def record_token_usage(self, tokens: int) -> None:
        """Add to the advisory token counter"""
        if tokens > 0:
            self.context.token_count += tokens

    def get_summary(self) -> str:
        """Human readable session summary for debugging"""

        progress = self.get_progress()
        current = self.get_current_todo()
        focus = self.get_focus()

        return "\n".join([
            f"Session: {self.session_id}",
            f"Created: {self.context.created_at.isoformat()}",
            f"Has Idea: {'Yes' if self.has_idea() else 'No'}",
            f"Completed Analyses: {', '.join(self.get_completed_analyses()) or 'None'}",
            f"Current Focus: {focus.value if focus else 'None'}",
            f"Todos: {progress.total} total, {progress.completed} completed ({progress.percentage:.0f}%)",
            f"Current Task: {current.active_form if current else 'None'}",
        ])

    def _touch(self) -> None:
        self.context.last_updated_at = self.clock()

    def _log(self, context_type: str, action: str, details: Optional[Dict[str, Any]] = None) -> None:
        agent_logger.log_context_update(self.session_id, context_type, action, details)
