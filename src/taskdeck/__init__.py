"""
taskdeck - A terminal task manager: projects hold tasks, tasks have a status
and an optional priority.

The data lives in a single JSON file per data format version; the store
upgrades older files through an ordered migration chain on startup.
"""

from .version import VERSION
from .models import (
    TaskStatus,
    Task,
    Project,
    TASK_STATUSES,
    TASK_PRIORITIES,
)
from .data import Store
from .migrate import JSON_VERSIONS
from .view import App, ViewMode, Key, InputEvent

__version__ = VERSION

__all__ = [
    "VERSION",
    "TaskStatus",
    "Task",
    "Project",
    "TASK_STATUSES",
    "TASK_PRIORITIES",
    "Store",
    "JSON_VERSIONS",
    "App",
    "ViewMode",
    "Key",
    "InputEvent",
]
