"""
Todo management tool.

Lets the agent track progress of multi-step work. Every call carries the
complete todo list, which replaces the stored one.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from advisor.domain.exceptions import MissingContextError
from advisor.domain.models.todo import TodoInput, TodoItem
from .tool_executor import create_tool

NO_ACTIVE_TASK = "No active task"


class TodoListInput(BaseModel):
    """Input for the manage_todos tool"""
    todos: List[TodoInput] = Field(description="The complete todo list (replaces the existing list)")


def manage_todos(todos: List[Union[TodoInput, TodoItem, Dict[str, Any]]], memory: Optional[Any] = None) -> Dict[str, Any]:
    """
    Replace the session's todos and report progress.

    Args:
        todos: Complete desired todo list
        memory: MemoryManager of the session

    Returns:
        Dict with success flag, sorted todos, progress and current task

    Raises:
        MissingContextError: If no memory is supplied
    """
    if memory is None:
        raise MissingContextError("Memory context is required for todo management")

    memory.update_todos(todos)

    progress = memory.get_progress()
    current = memory.get_current_todo()

    return {
        "success": True,
        "todos": memory.get_todos(),
        "progress": {
            "total": progress.total,
            "completed": progress.completed,
            "inProgress": progress.in_progress,
            "pending": progress.pending,
            "percentage": round(progress.percentage),
        },
        "currentTask": current.active_form if current else NO_ACTIVE_TASK,
    }


def format_todo_result(result: Dict[str, Any]) -> str:
    if not result.get("success"):
        return "Failed to update todos"

    progress = result["progress"]
    todos = result["todos"]
    current_task = result["currentTask"]

    lines = [
        "Todo List Updated",
        f"Progress: {progress['completed']}/{progress['total']} completed ({progress['percentage']}%)",
    ]

    if progress["inProgress"] > 0:
        lines.append(f"⚡ {progress['inProgress']} in progress")
    if progress["pending"] > 0:
        lines.append(f"⏳ {progress['pending']} pending")

    if current_task != NO_ACTIVE_TASK:
        lines.append(f"\nCurrent Task: {current_task}")

    if todos:
        lines.append("\nTasks:")
        lines.extend(todo.render_line(index) for index, todo in enumerate(todos, start=1))

    return "\n".join(lines)


todo_tool = create_tool(
    name="manage_todos",
    description="""Manage the task list that tracks progress of multi-step work.

Use this tool when:
- Starting a complex task that needs several steps
- Updating task status as each step is finished
- The user asks about progress or what is being worked on

IMPORTANT:
- Send the COMPLETE todo list (all tasks, not only the changes)
- Always include content, activeForm and status for each todo
- Mark exactly ONE task as "in_progress" at a time
- Use priority "high" for urgent tasks and "low" for non-critical ones""",
    args_schema=TodoListInput,
    execute=manage_todos,
    format_result=format_todo_result
)
