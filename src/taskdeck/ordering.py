"""Display order of a project's tasks and re-selection of the highlighted task."""
from typing import List, Optional, Tuple

from .models import Task, TASK_STATUSES_SORT_ORDER, TASK_PRIORITIES


def reselection_key(tasks: List[Task], selected: Optional[int]) -> str:
    """Title of the selected task, or '' when there is none."""
    index = 0 if selected is None else selected
    if 0 <= index < len(tasks):
        return tasks[index].title
    return ""


def _status_rank(task: Task) -> int:
    return TASK_STATUSES_SORT_ORDER.index(task.status)


def _priority_rank(task: Task) -> int:
    return TASK_PRIORITIES.index(task.priority)


def sort_tasks(tasks: List[Task]) -> List[Task]:
    """
    Group tasks by status (OnGoing, UpNext, Done) and order each group by
    priority (1, 2, 3, then unset). Tasks with equal status and priority
    keep their stored order.
    """
    by_priority = sorted(tasks, key=_priority_rank)
    return sorted(by_priority, key=_status_rank)


def order_tasks(tasks: List[Task], selected: Optional[int]) -> Tuple[List[Task], int]:
    """
    Sort tasks for display and find where the selected task ended up.

    Returns:
        The sorted tasks and the index of the task whose title matches the
        previously selected one, 0 when it is gone.
    """
    key = reselection_key(tasks, selected)
    ordered = sort_tasks(tasks)
    new_index = next((i for i, t in enumerate(ordered) if t.title == key), 0)
    return ordered, new_index
