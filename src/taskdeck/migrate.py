import os
import json
import shutil
from pathlib import Path
from typing import List, Dict, Tuple, Type

from .migration import Migration
from .recovery import MigrationError, TaskDeckError
from .data.io import atomic_write_text, load_json_file
from .logs import get_logger

log = get_logger("migrate")

# --- Constants and Configuration ---
# Hand-maintained list of data file versions, oldest first.
#                 sha of 0.1.0
JSON_VERSIONS: List[str] = ["6ad96"]

# Migration classes keyed by the version they upgrade to. Every version after
# the first one needs an entry.
MIGRATIONS: Dict[str, Type[Migration]] = {}

def data_file_name(version: str) -> str:
    return f"{version}.json"

# --- Migration Engine Class ---
class MigrationEngine:
    """
    Applies the ordered migration chain to a data file.

    The engine walks the version list from the version found on disk to the
    newest one, upgrading the document and renaming the file at each step.
    """
    def __init__(self, versions: List[str] = None, migrations: Dict[str, Type[Migration]] = None):
        self.available_versions = list(JSON_VERSIONS if versions is None else versions)
        if not self.available_versions:
            raise MigrationError("No data versions are declared")
        self.migrations: Dict[str, Migration] = {}
        self._load_migration_classes(MIGRATIONS if migrations is None else migrations)
        self.latest_version = self.available_versions[-1]
        log.debug(f"Known data versions: {self.available_versions}; latest: {self.latest_version}")

    def _load_migration_classes(self, migrations: Dict[str, Type[Migration]]):
        """Instantiates one migration per version step and checks the chain has no holes."""
        for to_version in self.available_versions[1:]:
            migration_class = migrations.get(to_version)
            if migration_class is None:
                raise MigrationError(f"No migration declared for data version '{to_version}'")
            if not (isinstance(migration_class, type) and issubclass(migration_class, Migration)):
                raise MigrationError(f"Migration for '{to_version}' is not a Migration subclass")
            self.migrations[to_version] = migration_class()

    def get_migration_path(self, current_version: str) -> List[Tuple[str, str]]:
        """
        Determines the sequence of migrations needed to get from
        current_version to the latest version.

        Args:
            current_version: The version tag of the data on disk.

        Returns:
            A list of (from_version, to_version) steps, empty when current.
        """
        try:
            current_index = self.available_versions.index(current_version)
        except ValueError:
            raise MigrationError(f"Current version '{current_version}' is not a known data version.")

        return [
            (self.available_versions[i], self.available_versions[i + 1])
            for i in range(current_index, len(self.available_versions) - 1)
        ]

    def migrate(self, data_dir: Path, context) -> bool:
        """
        Upgrades the data file of context.version to the latest version.

        Each step reads the raw document, hands it to the migration, writes
        the result and renames the file after the new version. context.version
        follows the file. A backup of the original file is restored if a step
        fails.

        Returns:
            True if at least one migration was applied.
        """
        migration_path = self.get_migration_path(context.version)
        if not migration_path:
            log.debug(f"No migration needed from version {context.version}.")
            return False

        original_version = context.version
        original_path = Path(data_dir) / data_file_name(original_version)
        backup_path = original_path.with_name(original_path.name + ".bak")
        shutil.copy2(original_path, backup_path)
        log.info(f"Created backup at {backup_path}")

        try:
            for from_version, to_version in migration_path:
                log.info(f"Migrating from {from_version} to {to_version}...")
                from_path = Path(data_dir) / data_file_name(from_version)
                to_path = Path(data_dir) / data_file_name(to_version)

                data = load_json_file(from_path)
                text = self.migrations[to_version].upgrade(data)
                try:
                    json.loads(text)
                except (TypeError, json.JSONDecodeError) as e:
                    raise MigrationError(f"Migration to {to_version} produced an invalid document: {e}") from e

                atomic_write_text(from_path, text)
                os.replace(from_path, to_path)
                context.version = to_version

            log.info(f"Successfully migrated data to version {self.latest_version}.")
            return True

        except (TaskDeckError, OSError, ValueError, KeyError, TypeError) as e:
            log.error(f"Migration failed. Restoring from backup. Error: {e}")
            current_path = Path(data_dir) / data_file_name(context.version)
            if current_path != original_path and current_path.exists():
                current_path.unlink()
            shutil.copy2(backup_path, original_path)
            context.version = original_version
            if isinstance(e, MigrationError):
                raise
            raise MigrationError(f"Migration from {original_version} failed: {e}") from e
        finally:
            if backup_path.exists():
                os.remove(backup_path)
