"""Tests for the todo model and the three-tier sort."""

import itertools
import random
from datetime import datetime, timedelta, timezone

from advisor.domain.models.todo import (
    PRIORITY_RANK,
    STATUS_RANK,
    Todo,
    TodoItem,
    TodoPriority,
    TodoProgress,
    TodoStatus,
    compare_todos,
    sort_todos,
)

T0 = datetime(2025, 1, 1, tzinfo=timezone.utc)


def make_todo(content, status="pending", priority="medium", minutes=None):
    created_at = T0 + timedelta(minutes=minutes) if minutes is not None else None
    return Todo(
        content=content,
        active_form=f"{content}...",
        status=status,
        priority=priority,
        created_at=created_at,
    )


class TestTodoModel:
    """Tests for Todo fields and wire aliases."""

    def test_wire_aliases_accepted(self):
        """The camelCase wire schema populates snake_case fields."""
        item = TodoItem.model_validate(
            {"content": "Deploy", "activeForm": "Deploying", "status": "pending"}
        )
        assert item.active_form == "Deploying"
        assert item.priority == TodoPriority.MEDIUM
        assert item.created_at is None

    def test_render_line_tags(self):
        """High and low priorities are tagged, medium is not."""
        assert make_todo("A", "completed", "high").render_line(1) == "  1. ✓ A [HIGH]"
        assert make_todo("B", "in_progress", "medium").render_line(2) == "  2. ⚡ B"
        assert make_todo("C", "pending", "low").render_line(3) == "  3. ⏳ C [LOW]"


class TestSortTodos:
    """Tests for status, priority, creation-time ordering."""

    def test_scenario_in_progress_then_priority(self):
        """In-progress first, then pending by priority."""
        todos = [
            make_todo("Docs", "pending", "low", minutes=0),
            make_todo("Deploy", "pending", "high", minutes=1),
            make_todo("Fix bug", "in_progress", "high", minutes=2),
        ]
        assert [t.content for t in sort_todos(todos)] == ["Fix bug", "Deploy", "Docs"]

    def test_status_outranks_priority(self):
        """A low-priority pending todo still precedes a high-priority completed one."""
        todos = [
            make_todo("Done", "completed", "high", minutes=0),
            make_todo("Later", "pending", "low", minutes=1),
        ]
        assert [t.content for t in sort_todos(todos)] == ["Later", "Done"]

    def test_created_at_breaks_ties(self):
        """Older todos come first when status and priority tie."""
        todos = [
            make_todo("Newer", minutes=10),
            make_todo("Older", minutes=1),
        ]
        assert [t.content for t in sort_todos(todos)] == ["Older", "Newer"]

    def test_missing_priority_is_medium(self):
        """A todo without priority sorts between high and low."""
        todos = [
            make_todo("Low", priority="low", minutes=0),
            make_todo("None", priority=None, minutes=1),
            make_todo("High", priority="high", minutes=2),
        ]
        assert [t.content for t in sort_todos(todos)] == ["High", "None", "Low"]

    def test_missing_timestamps_compare_equal(self):
        """Todos lacking timestamps keep their relative order."""
        first = make_todo("First", minutes=None)
        second = make_todo("Second", minutes=5)
        assert compare_todos(first, second) == 0
        assert compare_todos(second, first) == 0
        assert [t.content for t in sort_todos([first, second])] == ["First", "Second"]

    def test_naive_timestamps_compare_as_utc(self):
        """Zoned and zone-less creation times order together without error."""
        naive = make_todo("Naive")
        naive.created_at = datetime(2025, 1, 1, 0, 30)
        zoned = make_todo("Zoned", minutes=10)

        assert compare_todos(naive, zoned) == 1
        assert compare_todos(zoned, naive) == -1
        assert [t.content for t in sort_todos([naive, zoned])] == ["Zoned", "Naive"]

    def test_naive_timestamp_input_normalized(self):
        item = TodoItem.model_validate({
            "content": "Deploy",
            "activeForm": "Deploying",
            "status": "completed",
            "createdAt": "2025-01-01T08:00:00",
            "completedAt": "2025-01-01T09:00:00+02:00",
        })
        assert item.created_at == datetime(2025, 1, 1, 8, tzinfo=timezone.utc)
        assert item.completed_at.utcoffset() == timedelta(hours=2)

    def test_stable_for_full_ties(self):
        """Fully tied todos retain storage order."""
        todos = [make_todo(name, minutes=3) for name in ("a", "b", "c", "d")]
        assert [t.content for t in sort_todos(todos)] == ["a", "b", "c", "d"]

    def test_returns_new_list(self):
        """Sorting never reorders the input list."""
        todos = [make_todo("Done", "completed"), make_todo("Now", "in_progress")]
        result = sort_todos(todos)
        assert result is not todos
        assert [t.content for t in todos] == ["Done", "Now"]
        assert sorted(t.content for t in result) == ["Done", "Now"]


class TestTodoProgress:
    """Tests for progress counting."""

    def test_empty_list(self):
        """Percentage is zero with no todos."""
        progress = TodoProgress.from_todos([])
        assert progress.total == 0
        assert progress.percentage == 0

    def test_counts(self):
        """Counts each status and computes the completed share."""
        progress = TodoProgress.from_todos([
            make_todo("a", "completed"),
            make_todo("b", "in_progress"),
            make_todo("c", "pending"),
            make_todo("d", "pending"),
        ])
        assert (progress.total, progress.completed, progress.in_progress, progress.pending) == (4, 1, 1, 2)
        assert progress.percentage == 25.0
        assert TodoStatus.COMPLETED.value == "completed"


class TestSortTotality:
    """Ordering holds for every status, priority and timestamp combination."""

    def test_sorted_keys_non_decreasing(self):
        combos = list(itertools.product(
            ["pending", "in_progress", "completed"],
            ["high", "medium", "low", None],
            [0, 5, 10],
        ))
        todos = [
            make_todo(f"t{index}", status, priority, minutes)
            for index, (status, priority, minutes) in enumerate(combos * 2)
        ]
        random.Random(7).shuffle(todos)

        result = sort_todos(todos)

        assert sorted(id(t) for t in result) == sorted(id(t) for t in todos)
        keys = [
            (STATUS_RANK[t.status], PRIORITY_RANK[t.priority or TodoPriority.MEDIUM], t.created_at)
            for t in result
        ]
        assert keys == sorted(keys)

        # Equal keys keep their input order
        positions = {id(t): index for index, t in enumerate(todos)}
        for before, after in zip(result, result[1:]):
            if compare_todos(before, after) == 0:
                assert positions[id(before)] < positions[id(after)]
