"""Unit tests for the task display order."""

from taskdeck.models import Task, TaskStatus
from taskdeck.ordering import order_tasks, sort_tasks, reselection_key


def _task(title, status, priority=0):
    return Task(title=title, status=status, priority=priority)


class TestSortTasks:
    """Test grouping by status and ordering by priority."""

    def test_status_groups_then_priority(self):
        """Done/UpNext/OnGoing with priorities 0/1/0 display OnGoing, UpNext, Done."""
        tasks = [
            _task("a", TaskStatus.DONE, 0),
            _task("b", TaskStatus.UP_NEXT, 1),
            _task("c", TaskStatus.ON_GOING, 0),
        ]
        assert [t.title for t in sort_tasks(tasks)] == ["c", "b", "a"]

    def test_unset_priority_sorts_last_within_status(self):
        tasks = [
            _task("none", TaskStatus.UP_NEXT, 0),
            _task("low", TaskStatus.UP_NEXT, 3),
            _task("high", TaskStatus.UP_NEXT, 1),
            _task("mid", TaskStatus.UP_NEXT, 2),
        ]
        assert [t.title for t in sort_tasks(tasks)] == ["high", "mid", "low", "none"]

    def test_ties_keep_stored_order(self):
        tasks = [
            _task("first", TaskStatus.DONE, 2),
            _task("second", TaskStatus.DONE, 2),
            _task("third", TaskStatus.DONE, 2),
        ]
        assert [t.title for t in sort_tasks(tasks)] == ["first", "second", "third"]

    def test_input_list_untouched(self):
        tasks = [_task("a", TaskStatus.DONE), _task("b", TaskStatus.ON_GOING)]
        sort_tasks(tasks)
        assert [t.title for t in tasks] == ["a", "b"]


class TestOrderTasks:
    """Test re-selection by title."""

    def test_selected_task_follows_its_title(self):
        tasks = [
            _task("a", TaskStatus.DONE, 0),
            _task("b", TaskStatus.UP_NEXT, 1),
            _task("c", TaskStatus.ON_GOING, 0),
        ]
        ordered, index = order_tasks(tasks, 0)
        assert ordered[index].title == "a"
        assert index == 2

        # running again with the new index keeps the same task
        again, index_again = order_tasks(ordered, index)
        assert again[index_again].title == "a"

    def test_missing_key_falls_back_to_zero(self):
        tasks = [_task("a", TaskStatus.DONE), _task("b", TaskStatus.ON_GOING)]
        _, index = order_tasks(tasks, 10)
        assert index == 0

    def test_empty_list(self):
        ordered, index = order_tasks([], None)
        assert ordered == []
        assert index == 0

    def test_reselection_key(self):
        tasks = [_task("a", TaskStatus.DONE)]
        assert reselection_key(tasks, 0) == "a"
        assert reselection_key(tasks, None) == "a"
        assert reselection_key(tasks, 3) == ""
        assert reselection_key([], 0) == ""
