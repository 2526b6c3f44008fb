from pydantic import BaseModel, Field, field_validator
from enum import Enum
from typing import List

class TaskStatus(Enum):
    UP_NEXT = "UpNext"
    ON_GOING = "OnGoing"
    DONE = "Done"

# Order offered by the status picker
TASK_STATUSES: List[TaskStatus] = [TaskStatus.UP_NEXT, TaskStatus.ON_GOING, TaskStatus.DONE]

# Order used to group tasks on screen
TASK_STATUSES_SORT_ORDER: List[TaskStatus] = [TaskStatus.ON_GOING, TaskStatus.UP_NEXT, TaskStatus.DONE]

# 1 is the highest priority, 0 means unset and always comes last
TASK_PRIORITIES: List[int] = [1, 2, 3, 0]

PRIORITY_UNSET = 0


def priority_indicator(priority: int) -> str:
    """Render a priority as exclamation marks: 1 -> '!!!', 2 -> '!!', 3 -> '!', 0 -> ''."""
    if priority == PRIORITY_UNSET or priority not in TASK_PRIORITIES:
        return ""
    return "!" * (len(TASK_PRIORITIES) - TASK_PRIORITIES.index(priority) - 1)


class Task(BaseModel):
    """A titled unit of work inside a project."""

    title: str = Field(description="The human readable title of the task.")
    status: TaskStatus = Field(default=TaskStatus.UP_NEXT, description="Current status of the task")
    priority: int = Field(default=PRIORITY_UNSET, description="0 when unset, otherwise 1 (high), 2 (medium) or 3 (low)")

    @field_validator('priority')
    @classmethod
    def validate_priority(cls, v):
        if v not in TASK_PRIORITIES:
            raise ValueError(f"Invalid priority: {v}")
        return v

    def priority_indicator(self) -> str:
        return priority_indicator(self.priority)


class Project(BaseModel):
    """A named container of tasks."""

    title: str = Field(description="The human readable title of the project.")
    tasks: List[Task] = Field(
        default_factory=list,
        description="List of project tasks"
    )

    def done_count(self) -> int:
        return sum(1 for t in self.tasks if t.status == TaskStatus.DONE)

    def completion(self) -> int:
        """Percentage of done tasks, 0 for an empty project."""
        if not self.tasks:
            return 0
        return (self.done_count() * 100) // len(self.tasks)


def dump_projects(projects: List[Project]) -> List[dict]:
    """Serialize a collection into plain JSON-ready data."""
    return [p.model_dump(mode='json') for p in projects]


def load_projects(data: List[dict]) -> List[Project]:
    """Build a collection from plain data, validating every record."""
    return [Project.model_validate(p) for p in data]
