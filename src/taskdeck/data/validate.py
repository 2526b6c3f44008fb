import json
from typing import Any, Optional

from importlib.resources import files
from jsonschema import validate, ValidationError, SchemaError

from taskdeck.logs import get_logger
from taskdeck.recovery import CorruptionError, FatalError

# Configure log for clear output
log = get_logger("data.validate")

SCHEMA_PACKAGE = "taskdeck"
SCHEMA_DIR = "schemas"

def _load_schema(schema_version: str) -> Optional[dict]:
    """
    Loads the JSON schema shipped for a schema version tag.

    Args:
        schema_version: The version tag (e.g., '6ad96').

    Returns:
        A dictionary representing the loaded JSON schema, or None when no
        schema is shipped for that tag.
    """
    schema_file = files(SCHEMA_PACKAGE) / SCHEMA_DIR / f"{schema_version}.json"
    if not schema_file.is_file():
        return None

    log.debug(f"Loading schema from: {schema_file}")
    try:
        return json.loads(schema_file.read_text(encoding='utf-8'))
    except json.JSONDecodeError as e:
        raise FatalError(f"The schema for '{schema_version}' is not valid JSON: {e}") from e

def validate_document(data: Any, schema_version: str, source: str = "<memory>") -> bool:
    """
    Validates a raw document against the schema of its version.

    Args:
        data: The parsed JSON document.
        schema_version: The version tag the document claims to be.
        source: Where the document came from, for error messages.

    Returns:
        True if the document is valid, or if no schema is shipped for the tag.

    Raises:
        CorruptionError: The document does not match the schema.
        FatalError: The schema itself is invalid.
    """
    schema = _load_schema(schema_version)
    if schema is None:
        log.debug(f"No schema shipped for version '{schema_version}', skipping validation of {source}")
        return True

    try:
        validate(instance=data, schema=schema)
    except ValidationError as e:
        log.error(f"'{source}' FAILED validation against schema version '{schema_version}'.")
        raise CorruptionError(f"{source} does not match schema version '{schema_version}': {e.message}") from e
    except SchemaError as e:
        raise FatalError(f"The schema for '{schema_version}' is invalid: {e.message}") from e

    log.debug(f"'{source}' is VALID for schema version '{schema_version}'.")
    return True
