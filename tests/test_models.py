"""Unit tests for Pydantic models."""

import pytest
from pydantic import ValidationError

from taskdeck.models import (
    TaskStatus, Task, Project,
    TASK_STATUSES, TASK_STATUSES_SORT_ORDER, TASK_PRIORITIES,
    priority_indicator, dump_projects, load_projects,
)


class TestTask:
    """Test Task model."""

    def test_defaults(self):
        """A bare task is UpNext without priority."""
        task = Task(title="Write report")
        assert task.status == TaskStatus.UP_NEXT
        assert task.priority == 0

    def test_status_from_string(self):
        """Statuses load from their stored names."""
        task = Task.model_validate({"title": "x", "status": "OnGoing", "priority": 2})
        assert task.status == TaskStatus.ON_GOING
        assert task.priority == 2

    def test_invalid_status(self):
        """Unknown statuses are rejected."""
        with pytest.raises(ValidationError):
            Task.model_validate({"title": "x", "status": "Blocked", "priority": 0})

    def test_invalid_priority(self):
        """Only 0, 1, 2 and 3 are priorities."""
        with pytest.raises(ValidationError, match="Invalid priority"):
            Task(title="x", priority=4)

    def test_empty_title_is_allowed(self):
        """The model itself does not police titles."""
        assert Task(title="").title == ""

    def test_priority_indicator(self):
        """Higher priority shows more exclamation marks."""
        assert Task(title="a", priority=1).priority_indicator() == "!!!"
        assert Task(title="a", priority=2).priority_indicator() == "!!"
        assert Task(title="a", priority=3).priority_indicator() == "!"
        assert Task(title="a", priority=0).priority_indicator() == ""
        assert priority_indicator(7) == ""


class TestProject:
    """Test Project model."""

    def test_done_count_and_completion(self):
        """Completion is the integer share of done tasks."""
        project = Project(title="p", tasks=[
            Task(title="a", status=TaskStatus.DONE),
            Task(title="b"),
            Task(title="c", status=TaskStatus.DONE),
        ])
        assert project.done_count() == 2
        assert project.completion() == 66

    def test_empty_project(self):
        """An empty project is 0% complete."""
        project = Project(title="p")
        assert project.tasks == []
        assert project.completion() == 0


class TestOrders:
    """The picker order and the display order differ on purpose."""

    def test_status_orders(self):
        assert [s.value for s in TASK_STATUSES] == ["UpNext", "OnGoing", "Done"]
        assert [s.value for s in TASK_STATUSES_SORT_ORDER] == ["OnGoing", "UpNext", "Done"]

    def test_priority_order_puts_unset_last(self):
        assert TASK_PRIORITIES == [1, 2, 3, 0]


class TestSerialization:
    """Collections serialize to the on-disk JSON shape."""

    def test_dump_shape(self):
        projects = [Project(title="p", tasks=[Task(title="t", status=TaskStatus.DONE, priority=3)])]
        assert dump_projects(projects) == [
            {"title": "p", "tasks": [{"title": "t", "status": "Done", "priority": 3}]}
        ]

    def test_load_is_inverse_of_dump(self, sample_projects):
        assert load_projects(dump_projects(sample_projects)) == sample_projects
