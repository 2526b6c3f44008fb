"""taskdeck curses-based terminal user interface."""

import curses
from typing import Dict, Optional, Union

from .models import TaskStatus, priority_indicator
from .view import App, InputEvent, Key, ViewMode, ViewSnapshot, ItemView

# Integer codes: curses function keys plus the control characters. Printable
# characters arrive from get_wch() as str and are looked up in the *_CHARS tables.
ENTER_KEYS = (10, 13, curses.KEY_ENTER)
ESC = 27
BACKSPACE_KEYS = (curses.KEY_BACKSPACE, 127, 8)

COMMAND_KEYS: Dict[int, Key] = {
    curses.KEY_UP: Key.UP,
    curses.KEY_DOWN: Key.DOWN,
    curses.KEY_LEFT: Key.LEFT,
    curses.KEY_RIGHT: Key.RIGHT,
    ESC: Key.CANCEL,
}

COMMAND_CHARS: Dict[str, Key] = {
    "k": Key.UP,
    "j": Key.DOWN,
    "r": Key.RENAME,
    "n": Key.NEW,
    "d": Key.DELETE,
    "p": Key.PRIORITY,
    "q": Key.QUIT,
}

EDIT_KEYS: Dict[int, Key] = {
    ESC: Key.CANCEL,
    curses.KEY_LEFT: Key.LEFT,
    curses.KEY_RIGHT: Key.RIGHT,
    curses.KEY_HOME: Key.HOME,
    curses.KEY_END: Key.END,
    curses.KEY_DC: Key.DELETE_CHAR,
}

CONFIRM_CHARS: Dict[str, Key] = {
    "y": Key.YES,
    "Y": Key.YES,
    "n": Key.NO,
    "N": Key.NO,
}


def completion_level(percentage: int) -> str:
    """Colour band of a project's [done/total] tag."""
    if percentage == 0:
        return "none"
    if percentage == 100:
        return "done"
    if percentage > 50:
        return "most"
    if percentage >= 25:
        return "half"
    return "some"


def _translate_code(code: int, snapshot: ViewSnapshot) -> Optional[InputEvent]:
    if code in ENTER_KEYS:
        return InputEvent(Key.CONFIRM)
    if snapshot.editing:
        if code in BACKSPACE_KEYS:
            return InputEvent(Key.BACKSPACE)
        key = EDIT_KEYS.get(code)
        return InputEvent(key) if key else None
    if snapshot.confirmation is not None:
        return InputEvent(Key.CANCEL) if code == ESC else None
    key = COMMAND_KEYS.get(code)
    if key:
        return InputEvent(key)
    # any key dismisses the migration notice
    return InputEvent(Key.TEXT)


def _translate_char(char: str, snapshot: ViewSnapshot) -> Optional[InputEvent]:
    if snapshot.editing:
        return InputEvent.text(char) if char.isprintable() else None
    if snapshot.confirmation is not None:
        key = CONFIRM_CHARS.get(char)
        return InputEvent(key) if key else None
    key = COMMAND_CHARS.get(char)
    if key:
        return InputEvent(key, char)
    return InputEvent.text(char)


def translate_key(ch: Union[int, str], snapshot: ViewSnapshot) -> Optional[InputEvent]:
    """
    Map a get_wch() result to an input event for the current mode.

    An int is a curses key code, a str is a typed character. Control
    characters such as Enter or Esc come as str and are treated as codes.
    """
    if isinstance(ch, str):
        if len(ch) == 1 and (ord(ch) < 32 or ord(ch) == 127):
            return _translate_code(ord(ch), snapshot)
        return _translate_char(ch, snapshot)
    return _translate_code(ch, snapshot)


class TUI:
    """Curses renderer: draws snapshots of the app and feeds it key events."""

    def __init__(self, stdscr, app: App):
        self.stdscr = stdscr
        self.app = app
        curses.curs_set(0)
        self.stdscr.keypad(True)
        self.height, self.width = self.stdscr.getmaxyx()

        self.has_colors = curses.has_colors()
        if self.has_colors:
            curses.start_color()
            try:
                curses.use_default_colors()
            except curses.error:
                pass
            curses.init_pair(1, curses.COLOR_GREEN, -1)
            curses.init_pair(2, curses.COLOR_YELLOW, -1)
            curses.init_pair(3, curses.COLOR_MAGENTA, -1)
            curses.init_pair(4, curses.COLOR_RED, -1)
            self.STATUS_COLORS = {
                TaskStatus.DONE: curses.color_pair(1),
                TaskStatus.ON_GOING: curses.color_pair(2),
                TaskStatus.UP_NEXT: curses.color_pair(3),
            }
            self.COMPLETION_COLORS = {
                "none": curses.A_DIM,
                "some": curses.A_NORMAL,
                "half": curses.color_pair(3),
                "most": curses.color_pair(2),
                "done": curses.color_pair(1),
            }
            self.COL_PRIORITY = curses.color_pair(4)
        else:
            self.STATUS_COLORS = {
                TaskStatus.DONE: curses.A_DIM,
                TaskStatus.ON_GOING: curses.A_BOLD,
                TaskStatus.UP_NEXT: curses.A_NORMAL,
            }
            self.COMPLETION_COLORS = {
                "none": curses.A_DIM,
                "done": curses.A_BOLD,
            }
            self.COL_PRIORITY = curses.A_BOLD

    def _put(self, y: int, x: int, text: str, attrs: int = curses.A_NORMAL):
        if 0 <= y < self.height and x < self.width - 1:
            self.stdscr.addnstr(y, x, text, self.width - 1 - x, attrs)

    def _popup(self, h: int, w: int):
        """Centered window, or None when the terminal is too small for it."""
        if h > self.height or w > self.width:
            return None
        win = curses.newwin(h, w, (self.height - h) // 2, (self.width - w) // 2)
        win.erase()
        win.border()
        return win

    def _item_line(self, item: ItemView) -> str:
        if item.status is None:
            return f"[{item.done}/{item.total}] {item.text}"
        prefix = f"[{priority_indicator(item.priority)}] " if item.priority else ""
        return f"{prefix}[{item.status.value}] {item.text}"

    def _item_attrs(self, item: ItemView) -> int:
        if item.status is not None:
            return self.STATUS_COLORS.get(item.status, curses.A_NORMAL)
        return self.COMPLETION_COLORS.get(completion_level(item.completion), curses.A_NORMAL)

    def draw(self, snapshot: ViewSnapshot):
        """Render heading, item list, popups and the help footer."""
        self.stdscr.erase()
        self.height, self.width = self.stdscr.getmaxyx()

        self._put(0, 0, snapshot.heading, curses.A_BOLD)
        top = 2
        body_h = self.height - top - 2
        if body_h < 1:
            self.stdscr.refresh()
            return

        if not snapshot.items:
            self._put(top, 2, "Nothing here yet. Press 'n' to add.", curses.A_DIM)

        selected = snapshot.list_selected
        scroll = max(0, (selected or 0) - body_h + 1)
        for i, item in enumerate(snapshot.items[scroll:scroll + body_h]):
            idx = scroll + i
            attrs = curses.A_NORMAL | self._item_attrs(item)
            marker = "> " if idx == selected else "  "
            if idx == selected:
                attrs |= curses.A_BOLD
            self._put(top + i, 0, marker + self._item_line(item), attrs)

        if snapshot.picker:
            self._draw_picker(snapshot)
        if snapshot.editing:
            self._draw_prompt(snapshot)
        if snapshot.confirmation is not None:
            self._put(self.height - 2, 0, f'Are you sure to delete? "{snapshot.confirmation}" [y/n]', curses.A_BOLD)
        if snapshot.message:
            self._put(self.height // 2, max(0, (self.width - len(snapshot.message)) // 2), snapshot.message, curses.A_BOLD)

        if snapshot.help:
            self._put(self.height - 1, 0, " | ".join(snapshot.help), curses.A_DIM)

        self.stdscr.refresh()

    def _draw_picker(self, snapshot: ViewSnapshot):
        w = 20
        win = self._popup(len(snapshot.picker) + 2, w)
        if win is None:
            return
        title = " Status " if snapshot.mode == ViewMode.CHANGE_STATUS_TASK else " Priority "
        win.addnstr(0, 2, title, w - 4, curses.A_BOLD)
        for i, item in enumerate(snapshot.picker):
            marker = "> " if i == snapshot.selected else "  "
            attrs = curses.A_BOLD if i == snapshot.selected else curses.A_NORMAL
            if item.status is not None:
                attrs |= self.STATUS_COLORS.get(item.status, curses.A_NORMAL)
            else:
                attrs |= self.COL_PRIORITY
            win.addnstr(1 + i, 1, marker + item.text, w - 3, attrs)
        win.refresh()

    def _draw_prompt(self, snapshot: ViewSnapshot):
        w = max(10, min(60, self.width - 4))
        win = self._popup(3, w)
        if win is None:
            return
        title = " Rename " if snapshot.mode in (ViewMode.RENAME_PROJECT, ViewMode.RENAME_TASK) else " Add new "
        win.addnstr(0, 2, title, w - 4, curses.A_BOLD)
        visible = w - 4
        offset = max(0, snapshot.edit_cursor - visible + 1)
        win.addnstr(1, 2, snapshot.edit_text[offset:offset + visible], visible)
        curses.curs_set(1)
        win.move(1, 2 + snapshot.edit_cursor - offset)
        win.refresh()

    def run(self):
        while True:
            snapshot = self.app.snapshot()
            curses.curs_set(0)
            self.draw(snapshot)
            ch = self.stdscr.get_wch()
            if ch == curses.KEY_RESIZE:
                continue
            event = translate_key(ch, snapshot)
            if event is None:
                continue
            if not self.app.handle(event):
                break


def start_curses(app: App):
    """Initialize curses and run the TUI."""

    def _main(stdscr):
        TUI(stdscr, app).run()

    curses.wrapper(_main)
