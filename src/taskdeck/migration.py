import abc
import json
from typing import Any, List

# Raw, untyped document of the previous schema version: the parsed JSON array.
MigrationData = List[Any]

class Migration(abc.ABC):
    """
    An abstract base class for all migration steps.

    Each concrete migration upgrades the raw document of the version right
    before VERSION in the chain into the serialized document of VERSION.
    """
    # The version tag this migration upgrades to (e.g., '911fc').
    VERSION = None

    @abc.abstractmethod
    def upgrade(self, data: MigrationData) -> str:
        """
        Applies schema changes to the data to upgrade it to the new version.

        Args:
            data: The parsed JSON array of the previous version.

        Returns:
            The serialized JSON text of the new version.
        """
        pass

    @staticmethod
    def dump(data: MigrationData) -> str:
        """Serialize an upgraded document the way the store writes it."""
        return json.dumps(data, indent=2, ensure_ascii=False)
