"""Unit tests for the copy, edit, write and reload pipeline."""

import pytest

from taskdeck.models import TaskStatus
from taskdeck.pipeline import Pipeline
from taskdeck.selection import Selection, CursorId


@pytest.fixture
def pipeline(filled_store):
    p = Pipeline(filled_store, Selection())
    p.reload_projects()
    return p


def titles(tasks):
    return [t.title for t in tasks]


class TestLoading:
    """Test reading the collection into the pipeline."""

    def test_reload_projects(self, pipeline):
        assert [p.title for p in pipeline.projects] == ["Home", "Work", "Books"]
        assert pipeline.current_project().title == "Home"

    def test_load_tasks_sorts_current_project(self, pipeline):
        pipeline.load_tasks()
        assert titles(pipeline.current_tasks()) == ["Water plants", "Fix sink", "Paint fence"]

    def test_reload_clamps_project_cursor(self, pipeline, filled_store, sample_projects):
        pipeline.selection[CursorId.PROJECTS].select(2)
        filled_store.write(sample_projects[:1])
        pipeline.reload_projects()
        assert pipeline.project_index == 0

    def test_empty_project_has_no_current_task(self, pipeline):
        pipeline.selection[CursorId.PROJECTS].select(1)
        pipeline.load_tasks()
        assert pipeline.current_tasks() == []
        assert pipeline.current_task() is None


class TestProjects:
    """Test project mutations."""

    def test_create_appends_and_persists(self, pipeline, filled_store):
        assert pipeline.create_project("Garden") is True
        assert [p.title for p in filled_store.read()] == ["Home", "Work", "Books", "Garden"]
        assert pipeline.projects[-1].tasks == []

    def test_empty_title_writes_nothing(self, pipeline, filled_store):
        before = filled_store.path.read_text()
        assert pipeline.create_project("") is False
        assert pipeline.rename_project("") is False
        assert filled_store.path.read_text() == before

    def test_whitespace_title_is_a_title(self, pipeline, filled_store):
        assert pipeline.create_project(" ") is True
        assert [p.title for p in filled_store.read()][-1] == " "

    def test_rename_selected(self, pipeline, filled_store):
        pipeline.selection[CursorId.PROJECTS].select(1)
        assert pipeline.rename_project("Office") is True
        assert [p.title for p in filled_store.read()] == ["Home", "Office", "Books"]

    def test_delete_selected(self, pipeline, filled_store):
        pipeline.selection[CursorId.PROJECTS].select(2)
        assert pipeline.delete_project() is True
        assert [p.title for p in filled_store.read()] == ["Home", "Work"]
        # the cursor is clamped into the shorter list
        assert pipeline.project_index == 1

    def test_delete_without_projects(self, store):
        pipeline = Pipeline(store, Selection())
        pipeline.reload_projects()
        assert pipeline.delete_project() is False
        assert pipeline.rename_project("x") is False


class TestTasks:
    """Test task mutations inside the selected project."""

    @pytest.fixture
    def home(self, pipeline):
        pipeline.load_tasks()
        return pipeline

    def test_create_task_is_up_next_and_selected(self, home, filled_store):
        assert home.create_task("Clean gutters") is True
        task = home.current_task()
        assert task.title == "Clean gutters"
        assert task.status == TaskStatus.UP_NEXT
        assert task.priority == 0
        stored = filled_store.read()[0].tasks
        assert "Clean gutters" in titles(stored)

    def test_create_task_without_project(self, store):
        pipeline = Pipeline(store, Selection())
        pipeline.reload_projects()
        assert pipeline.create_task("x") is False

    def test_empty_task_title_is_ignored(self, home):
        assert home.create_task("") is False
        assert home.rename_task("") is False
        assert len(home.current_tasks()) == 3

    def test_rename_task(self, home, filled_store):
        home.selection[CursorId.TASKS].select(1)
        assert home.rename_task("Fix kitchen sink") is True
        assert home.current_task().title == "Fix kitchen sink"
        assert "Fix kitchen sink" in titles(filled_store.read()[0].tasks)

    def test_delete_task(self, home, filled_store):
        home.selection[CursorId.TASKS].select(0)
        assert home.delete_task() is True
        assert titles(filled_store.read()[0].tasks) == ["Fix sink", "Paint fence"]

    def test_status_change_keeps_selection_on_task(self, home, filled_store):
        home.selection[CursorId.TASKS].select(2)
        assert home.current_task().title == "Paint fence"
        assert home.change_status(TaskStatus.ON_GOING) is True
        assert home.current_task().title == "Paint fence"
        assert home.current_task().status == TaskStatus.ON_GOING
        assert titles(home.current_tasks()) == ["Water plants", "Paint fence", "Fix sink"]
        stored = {t.title: t for t in filled_store.read()[0].tasks}
        assert stored["Paint fence"].status == TaskStatus.ON_GOING

    def test_priority_change_reorders_within_status(self, home):
        home.selection[CursorId.TASKS].select(2)
        home.change_status(TaskStatus.ON_GOING)
        assert home.change_priority(1) is True
        assert titles(home.current_tasks()) == ["Paint fence", "Water plants", "Fix sink"]
        assert home.current_task().title == "Paint fence"
        assert home.current_task().priority == 1

    def test_no_task_selected(self, pipeline):
        pipeline.selection[CursorId.PROJECTS].select(1)
        pipeline.load_tasks()
        assert pipeline.change_status(TaskStatus.DONE) is False
        assert pipeline.change_priority(1) is False
        assert pipeline.delete_task() is False

    def test_failed_write_leaves_memory_untouched(self, home, filled_store, monkeypatch):
        from taskdeck.recovery import FileOperationError

        def fail(projects):
            raise FileOperationError("disk full")

        monkeypatch.setattr(filled_store, "write", fail)
        with pytest.raises(FileOperationError):
            home.rename_task("never stored")
        assert "never stored" not in titles(home.current_tasks())
