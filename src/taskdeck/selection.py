from enum import Enum
from typing import Dict, Optional


class CursorId(Enum):
    PROJECTS = "projects"
    TASKS = "tasks"
    STATUS = "status"
    PRIORITY = "priority"


class Cursor:
    """The highlighted index of a displayed list, wrapping at both ends."""

    def __init__(self, selected: Optional[int] = 0):
        self.selected = selected

    def select(self, index: Optional[int]):
        self.selected = index

    def reset(self):
        self.selected = 0

    def next(self, length: int):
        if length <= 0:
            return
        if self.selected is None or self.selected >= length - 1:
            self.selected = 0
        else:
            self.selected += 1

    def previous(self, length: int):
        if length <= 0:
            return
        if self.selected is None:
            self.selected = 0
        elif self.selected == 0:
            self.selected = length - 1
        else:
            self.selected -= 1

    def __repr__(self) -> str:
        return f"Cursor(selected={self.selected})"


class Selection:
    """One cursor per selectable list, addressed by CursorId."""

    def __init__(self):
        self.cursors: Dict[CursorId, Cursor] = {cursor_id: Cursor() for cursor_id in CursorId}

    def __getitem__(self, cursor_id: CursorId) -> Cursor:
        return self.cursors[cursor_id]

    def index(self, cursor_id: CursorId) -> int:
        """Selected index of a cursor, 0 when nothing is selected."""
        selected = self.cursors[cursor_id].selected
        return 0 if selected is None else selected
