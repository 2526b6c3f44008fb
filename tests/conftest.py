"""
Pytest configuration for taskdeck tests.

Provides stores backed by temporary directories and small collection builders.
"""

import pytest

from taskdeck.data import Store
from taskdeck.models import Project, Task, TaskStatus


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Keep data files out of the real home directory."""
    monkeypatch.setenv("TASKDECK_DATA_DIR", str(tmp_path / "data"))
    return tmp_path


@pytest.fixture
def data_dir(tmp_path):
    path = tmp_path / "store"
    path.mkdir()
    return path


@pytest.fixture
def store(data_dir):
    """A store whose data file has been resolved (empty collection)."""
    s = Store(data_dir)
    s.check()
    return s



@pytest.fixture
def sample_projects():
    return [
        Project(title="Home", tasks=[
            Task(title="Paint fence", status=TaskStatus.DONE, priority=0),
            Task(title="Fix sink", status=TaskStatus.UP_NEXT, priority=1),
            Task(title="Water plants", status=TaskStatus.ON_GOING, priority=0),
        ]),
        Project(title="Work", tasks=[]),
        Project(title="Books", tasks=[
            Task(title="Dune", status=TaskStatus.ON_GOING, priority=2),
        ]),
    ]


@pytest.fixture
def filled_store(store, sample_projects):
    store.write(sample_projects)
    return store
