"""
View state machine.

The application is always in exactly one ViewMode. Input events arrive one at
a time through App.handle(), which dispatches on the current mode; each mode
handler edits the text buffer, moves the active cursor, or runs a pipeline
mutation and picks the next mode. Commands that need a current project or
task are skipped when the list is empty.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

from .data.core import Store
from .editbuffer import EditBuffer
from .models import TASK_STATUSES, TASK_PRIORITIES, TaskStatus, priority_indicator
from .pipeline import Pipeline
from .selection import Selection, CursorId, Cursor
from .logs import get_logger

log = get_logger("view")


class ViewMode(Enum):
    VIEW_PROJECTS = "ViewProjects"
    RENAME_PROJECT = "RenameProject"
    ADD_PROJECT = "AddProject"
    DELETE_PROJECT = "DeleteProject"
    VIEW_TASKS = "ViewTasks"
    RENAME_TASK = "RenameTask"
    CHANGE_STATUS_TASK = "ChangeStatusTask"
    CHANGE_PRIORITY_TASK = "ChangePriorityTask"
    ADD_TASK = "AddTask"
    DELETE_TASK = "DeleteTask"
    INFO_MIGRATION = "InfoMigration"


class Key(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    CONFIRM = "confirm"
    CANCEL = "cancel"
    RENAME = "rename"
    NEW = "new"
    DELETE = "delete"
    PRIORITY = "priority"
    YES = "yes"
    NO = "no"
    QUIT = "quit"
    TEXT = "text"
    BACKSPACE = "backspace"
    DELETE_CHAR = "delete_char"
    HOME = "home"
    END = "end"


@dataclass(frozen=True)
class InputEvent:
    key: Key
    char: Optional[str] = None

    @classmethod
    def text(cls, char: str) -> 'InputEvent':
        return cls(Key.TEXT, char)


ACTIVE_CURSOR: Dict[ViewMode, CursorId] = {
    ViewMode.VIEW_PROJECTS: CursorId.PROJECTS,
    ViewMode.RENAME_PROJECT: CursorId.PROJECTS,
    ViewMode.ADD_PROJECT: CursorId.PROJECTS,
    ViewMode.DELETE_PROJECT: CursorId.PROJECTS,
    ViewMode.INFO_MIGRATION: CursorId.PROJECTS,
    ViewMode.VIEW_TASKS: CursorId.TASKS,
    ViewMode.RENAME_TASK: CursorId.TASKS,
    ViewMode.ADD_TASK: CursorId.TASKS,
    ViewMode.DELETE_TASK: CursorId.TASKS,
    ViewMode.CHANGE_STATUS_TASK: CursorId.STATUS,
    ViewMode.CHANGE_PRIORITY_TASK: CursorId.PRIORITY,
}

TEXT_MODES = (ViewMode.RENAME_PROJECT, ViewMode.ADD_PROJECT, ViewMode.RENAME_TASK, ViewMode.ADD_TASK)
DELETE_MODES = (ViewMode.DELETE_PROJECT, ViewMode.DELETE_TASK)
TASK_MODES = (ViewMode.VIEW_TASKS, ViewMode.RENAME_TASK, ViewMode.ADD_TASK, ViewMode.DELETE_TASK,
              ViewMode.CHANGE_STATUS_TASK, ViewMode.CHANGE_PRIORITY_TASK)

HELP: Dict[ViewMode, List[str]] = {
    ViewMode.VIEW_PROJECTS: ["enter/right open", "n new", "r rename", "d delete", "up/down move", "q quit"],
    ViewMode.VIEW_TASKS: ["enter status", "p priority", "n new", "r rename", "d delete", "esc/left back", "q quit"],
    ViewMode.CHANGE_STATUS_TASK: ["up/down choose", "enter apply", "esc cancel"],
    ViewMode.CHANGE_PRIORITY_TASK: ["up/down choose", "enter apply", "esc cancel"],
    ViewMode.DELETE_PROJECT: ["y delete", "n keep"],
    ViewMode.DELETE_TASK: ["y delete", "n keep"],
    ViewMode.INFO_MIGRATION: ["any key to continue"],
}
for _mode in TEXT_MODES:
    HELP[_mode] = ["enter save", "esc cancel"]

MIGRATION_NOTICE = "Your data file was upgraded to the latest format."


@dataclass
class ItemView:
    text: str
    status: Optional[TaskStatus] = None
    priority: int = 0
    done: int = 0
    total: int = 0
    completion: int = 0


@dataclass
class ViewSnapshot:
    """Everything a renderer needs to draw the current state."""

    mode: ViewMode
    heading: str
    items: List[ItemView]
    active_cursor: CursorId
    selected: Optional[int]
    list_selected: Optional[int]
    picker: List[ItemView] = field(default_factory=list)
    edit_text: Optional[str] = None
    edit_cursor: int = 0
    confirmation: Optional[str] = None
    message: Optional[str] = None
    help: List[str] = field(default_factory=list)

    @property
    def editing(self) -> bool:
        return self.edit_text is not None


class App:
    def __init__(self, store: Store, show_help: bool = True, migrated: bool = False):
        self.selection = Selection()
        self.pipeline = Pipeline(store, self.selection)
        self.buffer = EditBuffer()
        self.show_help = show_help
        self.mode = ViewMode.INFO_MIGRATION if migrated else ViewMode.VIEW_PROJECTS
        self.pipeline.reload_projects()
        self._handlers: Dict[ViewMode, Callable[[InputEvent], bool]] = {
            ViewMode.VIEW_PROJECTS: self._view_projects,
            ViewMode.RENAME_PROJECT: self._rename_project,
            ViewMode.ADD_PROJECT: self._add_project,
            ViewMode.DELETE_PROJECT: self._delete_project,
            ViewMode.VIEW_TASKS: self._view_tasks,
            ViewMode.RENAME_TASK: self._rename_task,
            ViewMode.CHANGE_STATUS_TASK: self._change_status,
            ViewMode.CHANGE_PRIORITY_TASK: self._change_priority,
            ViewMode.ADD_TASK: self._add_task,
            ViewMode.DELETE_TASK: self._delete_task,
            ViewMode.INFO_MIGRATION: self._info_migration,
        }

    # -------------------- state --------------------
    @property
    def projects(self):
        return self.pipeline.projects

    @property
    def active_cursor(self) -> Cursor:
        return self.selection[ACTIVE_CURSOR[self.mode]]

    def _list_length(self, cursor_id: CursorId) -> int:
        if cursor_id == CursorId.PROJECTS:
            return len(self.pipeline.projects)
        if cursor_id == CursorId.TASKS:
            return len(self.pipeline.current_tasks())
        if cursor_id == CursorId.STATUS:
            return len(TASK_STATUSES)
        return len(TASK_PRIORITIES)

    def _move(self, event: InputEvent):
        cursor_id = ACTIVE_CURSOR[self.mode]
        length = self._list_length(cursor_id)
        if event.key == Key.DOWN:
            self.selection[cursor_id].next(length)
        elif event.key == Key.UP:
            self.selection[cursor_id].previous(length)

    def _goto(self, mode: ViewMode):
        log.debug(f"{self.mode.value} -> {mode.value}")
        self.mode = mode

    # -------------------- dispatch --------------------
    def handle(self, event: InputEvent) -> bool:
        """Process one input event. Returns False when the application should exit."""
        return self._handlers[self.mode](event)

    def _info_migration(self, event: InputEvent) -> bool:
        self._goto(ViewMode.VIEW_PROJECTS)
        return True

    def _view_projects(self, event: InputEvent) -> bool:
        has_project = self.pipeline.current_project() is not None
        if event.key in (Key.CONFIRM, Key.RIGHT):
            if has_project:
                self.pipeline.load_tasks()
                self.selection[CursorId.TASKS].reset()
                self._goto(ViewMode.VIEW_TASKS)
        elif event.key == Key.RENAME:
            if has_project:
                self.buffer.set(self.pipeline.current_project().title)
                self._goto(ViewMode.RENAME_PROJECT)
        elif event.key == Key.NEW:
            self.buffer.reset()
            self._goto(ViewMode.ADD_PROJECT)
        elif event.key == Key.DELETE:
            if has_project:
                self._goto(ViewMode.DELETE_PROJECT)
        elif event.key in (Key.UP, Key.DOWN):
            self._move(event)
        elif event.key == Key.QUIT:
            return False
        return True

    def _edit(self, event: InputEvent):
        """Forward an event to the text buffer."""
        if event.key == Key.BACKSPACE:
            self.buffer.backspace()
        elif event.key == Key.DELETE_CHAR:
            self.buffer.delete()
        elif event.key == Key.LEFT:
            self.buffer.left()
        elif event.key == Key.RIGHT:
            self.buffer.right()
        elif event.key == Key.HOME:
            self.buffer.home()
        elif event.key == Key.END:
            self.buffer.end()
        elif event.char:
            self.buffer.insert(event.char)

    def _text_prompt(self, event: InputEvent, submit: Callable[[str], bool], back: ViewMode) -> bool:
        if event.key == Key.CONFIRM:
            submit(self.buffer.value)
            self.buffer.reset()
            self._goto(back)
        elif event.key == Key.CANCEL:
            self.buffer.reset()
            self._goto(back)
        else:
            self._edit(event)
        return True

    def _rename_project(self, event: InputEvent) -> bool:
        return self._text_prompt(event, self.pipeline.rename_project, ViewMode.VIEW_PROJECTS)

    def _add_project(self, event: InputEvent) -> bool:
        return self._text_prompt(event, self.pipeline.create_project, ViewMode.VIEW_PROJECTS)

    def _confirm_delete(self, event: InputEvent, delete: Callable[[], bool], cursor_id: CursorId, back: ViewMode) -> bool:
        if event.key == Key.YES:
            index = self.selection.index(cursor_id)
            delete()
            self.selection[cursor_id].select(max(0, index - 1))
            self._goto(back)
        elif event.key in (Key.NO, Key.CANCEL):
            self._goto(back)
        return True

    def _delete_project(self, event: InputEvent) -> bool:
        return self._confirm_delete(event, self.pipeline.delete_project, CursorId.PROJECTS, ViewMode.VIEW_PROJECTS)

    def _view_tasks(self, event: InputEvent) -> bool:
        task = self.pipeline.current_task()
        if event.key in (Key.CANCEL, Key.LEFT):
            self.pipeline.reload_projects()
            self._goto(ViewMode.VIEW_PROJECTS)
        elif event.key == Key.CONFIRM:
            if task is not None:
                self.selection[CursorId.STATUS].select(TASK_STATUSES.index(task.status))
                self._goto(ViewMode.CHANGE_STATUS_TASK)
        elif event.key == Key.PRIORITY:
            if task is not None:
                self.selection[CursorId.PRIORITY].select(TASK_PRIORITIES.index(task.priority))
                self._goto(ViewMode.CHANGE_PRIORITY_TASK)
        elif event.key == Key.RENAME:
            if task is not None:
                self.buffer.set(task.title)
                self._goto(ViewMode.RENAME_TASK)
        elif event.key == Key.NEW:
            self.buffer.reset()
            self._goto(ViewMode.ADD_TASK)
        elif event.key == Key.DELETE:
            if task is not None:
                self._goto(ViewMode.DELETE_TASK)
        elif event.key in (Key.UP, Key.DOWN):
            self._move(event)
        elif event.key == Key.QUIT:
            return False
        return True

    def _rename_task(self, event: InputEvent) -> bool:
        return self._text_prompt(event, self.pipeline.rename_task, ViewMode.VIEW_TASKS)

    def _add_task(self, event: InputEvent) -> bool:
        return self._text_prompt(event, self.pipeline.create_task, ViewMode.VIEW_TASKS)

    def _delete_task(self, event: InputEvent) -> bool:
        return self._confirm_delete(event, self.pipeline.delete_task, CursorId.TASKS, ViewMode.VIEW_TASKS)

    def _picker(self, event: InputEvent, cursor_id: CursorId, apply: Callable[[int], None]) -> bool:
        if event.key in (Key.UP, Key.DOWN):
            self._move(event)
        elif event.key == Key.CONFIRM:
            apply(self.selection.index(cursor_id))
            self.selection[cursor_id].reset()
            self._goto(ViewMode.VIEW_TASKS)
        elif event.key == Key.CANCEL:
            self._goto(ViewMode.VIEW_TASKS)
        return True

    def _change_status(self, event: InputEvent) -> bool:
        return self._picker(event, CursorId.STATUS,
                            lambda i: self.pipeline.change_status(TASK_STATUSES[i]))

    def _change_priority(self, event: InputEvent) -> bool:
        return self._picker(event, CursorId.PRIORITY,
                            lambda i: self.pipeline.change_priority(TASK_PRIORITIES[i]))

    # -------------------- render contract --------------------
    def snapshot(self) -> ViewSnapshot:
        in_tasks = self.mode in TASK_MODES
        if in_tasks:
            project = self.pipeline.current_project()
            heading = project.title if project is not None else ""
            items = [ItemView(text=t.title, status=t.status, priority=t.priority)
                     for t in self.pipeline.current_tasks()]
            list_cursor = CursorId.TASKS
        else:
            heading = "Projects"
            items = [ItemView(text=p.title, done=p.done_count(), total=len(p.tasks),
                              completion=p.completion())
                     for p in self.pipeline.projects]
            list_cursor = CursorId.PROJECTS

        picker: List[ItemView] = []
        if self.mode == ViewMode.CHANGE_STATUS_TASK:
            picker = [ItemView(text=s.value, status=s) for s in TASK_STATUSES]
        elif self.mode == ViewMode.CHANGE_PRIORITY_TASK:
            picker = [ItemView(text=priority_indicator(p) or "-", priority=p) for p in TASK_PRIORITIES]

        confirmation = None
        if self.mode == ViewMode.DELETE_PROJECT:
            confirmation = self.pipeline.current_project().title
        elif self.mode == ViewMode.DELETE_TASK:
            confirmation = self.pipeline.current_task().title

        active = ACTIVE_CURSOR[self.mode]
        return ViewSnapshot(
            mode=self.mode,
            heading=heading,
            items=items,
            active_cursor=active,
            selected=self.selection[active].selected,
            list_selected=self.selection[list_cursor].selected if items else None,
            picker=picker,
            edit_text=self.buffer.value if self.mode in TEXT_MODES else None,
            edit_cursor=self.buffer.cursor,
            confirmation=confirmation,
            message=MIGRATION_NOTICE if self.mode == ViewMode.INFO_MIGRATION else None,
            help=HELP.get(self.mode, []) if self.show_help else [],
        )
