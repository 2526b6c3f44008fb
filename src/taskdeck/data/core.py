"""
Store - versioned persistence for the project collection.

This module resolves which data file version is on disk, runs the migration
chain when it is behind, and reads/writes the whole collection against the
resolved version.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Type, Union

from pydantic import ValidationError

from taskdeck.recovery import CorruptionError, StoreNotReadyError
from taskdeck.migration import Migration
from taskdeck.migrate import MigrationEngine, data_file_name
from taskdeck.models import Project, dump_projects, load_projects
from taskdeck.logs import get_logger
from .io import atomic_write, load_json_file, DATA_JSON
from .validate import validate_document

log = get_logger("data")

DATA_DIR_ENV = "TASKDECK_DATA_DIR"

def default_data_dir() -> Path:
    """Per-user application directory holding the data and config files."""
    override = os.getenv(DATA_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "taskdeck"


@dataclass
class StoreContext:
    """The data file version every read and write goes to."""

    version: str


class Store:
    def __init__(self, data_dir: Union[Path, str, None] = None,
                 versions: Optional[List[str]] = None,
                 migrations: Optional[Dict[str, Type[Migration]]] = None):
        self.data_dir = Path(data_dir) if data_dir is not None else default_data_dir()
        self.engine = MigrationEngine(versions, migrations)
        self.context: Optional[StoreContext] = None

    @property
    def versions(self) -> List[str]:
        return self.engine.available_versions

    @property
    def path(self) -> Path:
        """The data file of the active version."""
        return self.data_dir / data_file_name(self._require_context().version)

    def _require_context(self) -> StoreContext:
        if self.context is None:
            raise StoreNotReadyError("The data file version has not been resolved; call check() first")
        return self.context

    def _find_version(self) -> Optional[str]:
        for version in self.versions:
            if (self.data_dir / data_file_name(version)).exists():
                return version
        return None

    def check(self) -> bool:
        """
        Resolve the data file version, creating or migrating the file as needed.

        Returns:
            True if migrations were applied, so the caller can tell the user.
        """
        version = self._find_version()
        if version is None:
            latest = self.engine.latest_version
            log.info(f"No data file found in {self.data_dir}; creating an empty one at version {latest}")
            atomic_write(DATA_JSON, self.data_dir / data_file_name(latest), [], create_dirs=True)
            self.context = StoreContext(version=latest)
            return False

        log.info(f"DATA: {version}; APP: {self.engine.latest_version};")
        context = StoreContext(version=version)
        migrated = self.engine.migrate(self.data_dir, context)
        self.context = context
        return migrated

    def read(self) -> List[Project]:
        """Load the whole collection from the active data file."""
        context = self._require_context()
        path = self.data_dir / data_file_name(context.version)
        data = load_json_file(path)
        if data is None:
            raise CorruptionError(f"Data file {path} disappeared")
        validate_document(data, context.version, source=str(path))
        try:
            return load_projects(data)
        except ValidationError as e:
            raise CorruptionError(f"Data file {path} contains invalid records: {e}") from e

    def write(self, projects: List[Project]):
        """Overwrite the active data file with the whole collection."""
        context = self._require_context()
        path = self.data_dir / data_file_name(context.version)
        atomic_write(DATA_JSON, path, dump_projects(projects))
        log.debug(f"Wrote {len(projects)} projects to {path}")
