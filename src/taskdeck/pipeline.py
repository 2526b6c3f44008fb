"""
Mutation pipeline: every change copies the collection, edits one element,
writes the whole collection and reloads it from disk.
"""
from typing import List, Optional

from .data.core import Store
from .models import Project, Task, TaskStatus, PRIORITY_UNSET
from .ordering import order_tasks
from .selection import Selection, CursorId
from .logs import get_logger

log = get_logger("pipeline")


class Pipeline:
    def __init__(self, store: Store, selection: Selection):
        self.store = store
        self.selection = selection
        self.projects: List[Project] = []

    # -------------------- current elements --------------------
    @property
    def project_index(self) -> int:
        return self.selection.index(CursorId.PROJECTS)

    @property
    def task_index(self) -> int:
        return self.selection.index(CursorId.TASKS)

    def current_project(self) -> Optional[Project]:
        if 0 <= self.project_index < len(self.projects):
            return self.projects[self.project_index]
        return None

    def current_tasks(self) -> List[Task]:
        project = self.current_project()
        return project.tasks if project is not None else []

    def current_task(self) -> Optional[Task]:
        tasks = self.current_tasks()
        if 0 <= self.task_index < len(tasks):
            return tasks[self.task_index]
        return None

    # -------------------- loading --------------------
    def reload_projects(self):
        """Re-read the collection and keep the project cursor inside the list."""
        self.projects = self.store.read()
        cursor = self.selection[CursorId.PROJECTS]
        if self.projects and (cursor.selected is None or cursor.selected >= len(self.projects)):
            cursor.select(len(self.projects) - 1)
        elif not self.projects:
            cursor.reset()

    def load_tasks(self):
        """Sort the selected project's tasks for display and re-select the same task."""
        project = self.current_project()
        if project is None:
            return
        cursor = self.selection[CursorId.TASKS]
        ordered, index = order_tasks(project.tasks, cursor.selected)
        project.tasks = ordered
        cursor.select(index)

    def reload_tasks(self):
        self.projects = self.store.read()
        self.load_tasks()

    def _copy(self) -> List[Project]:
        return [p.model_copy(deep=True) for p in self.projects]

    def _commit(self, projects: List[Project], tasks: bool):
        self.store.write(projects)
        if tasks:
            self.reload_tasks()
        else:
            self.reload_projects()

    # -------------------- projects --------------------
    def create_project(self, title: str) -> bool:
        if not title:
            return False
        projects = self._copy()
        projects.append(Project(title=title, tasks=[]))
        log.debug(f"Creating project '{title}'")
        self._commit(projects, tasks=False)
        return True

    def rename_project(self, title: str) -> bool:
        if not title or self.current_project() is None:
            return False
        projects = self._copy()
        projects[self.project_index].title = title
        log.debug(f"Renaming project {self.project_index} to '{title}'")
        self._commit(projects, tasks=False)
        return True

    def delete_project(self) -> bool:
        if self.current_project() is None:
            return False
        projects = self._copy()
        removed = projects.pop(self.project_index)
        log.debug(f"Deleting project '{removed.title}'")
        self._commit(projects, tasks=False)
        return True

    # -------------------- tasks --------------------
    def create_task(self, title: str) -> bool:
        """Append an UpNext task without priority and select it."""
        if not title or self.current_project() is None:
            return False
        projects = self._copy()
        tasks = projects[self.project_index].tasks
        tasks.append(Task(title=title, status=TaskStatus.UP_NEXT, priority=PRIORITY_UNSET))
        # the reload re-selects by the title found at this index
        self.selection[CursorId.TASKS].select(len(tasks) - 1)
        log.debug(f"Creating task '{title}' in project {self.project_index}")
        self._commit(projects, tasks=True)
        return True

    def rename_task(self, title: str) -> bool:
        if not title or self.current_task() is None:
            return False
        projects = self._copy()
        projects[self.project_index].tasks[self.task_index].title = title
        log.debug(f"Renaming task {self.task_index} to '{title}'")
        self._commit(projects, tasks=True)
        return True

    def delete_task(self) -> bool:
        if self.current_task() is None:
            return False
        projects = self._copy()
        removed = projects[self.project_index].tasks.pop(self.task_index)
        log.debug(f"Deleting task '{removed.title}'")
        self._commit(projects, tasks=True)
        return True

    def change_status(self, status: TaskStatus) -> bool:
        if self.current_task() is None:
            return False
        projects = self._copy()
        projects[self.project_index].tasks[self.task_index].status = status
        log.debug(f"Setting status of task {self.task_index} to {status.value}")
        self._commit(projects, tasks=True)
        return True

    def change_priority(self, priority: int) -> bool:
        if self.current_task() is None:
            return False
        projects = self._copy()
        projects[self.project_index].tasks[self.task_index].priority = priority
        log.debug(f"Setting priority of task {self.task_index} to {priority}")
        self._commit(projects, tasks=True)
        return True
