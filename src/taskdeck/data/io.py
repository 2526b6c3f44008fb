import tempfile, yaml, json, os
from typing import Union, Any, List
from pathlib import Path
from taskdeck.recovery import FileOperationError, FatalError, CorruptionError
from taskdeck.logs import get_logger

log = get_logger("io")

DATA_YAML = 0
DATA_JSON = 1

def _cleanup(temp_path):
    if temp_path is not None and os.path.exists(temp_path):
        try:
            os.unlink(temp_path)
            log.debug(f"Cleaned up temporary file: {temp_path}")
        except OSError as cleanup_error:
            log.warning(f"Could not clean up temp file {temp_path}: {cleanup_error}")

def _create_dirs(file_path : Path):
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
    except (OSError, PermissionError) as e:
        error_msg = f"Cannot create directory {file_path.parent}: {e}"
        log.error(error_msg)
        raise FileOperationError(error_msg) from e

def atomic_write_text(file_path : Union[Path, str], text : str, create_dirs : bool = False):
    """
    Replace the content of file_path with text. The text goes to a temporary
    file next to the target which then replaces it, so readers see either the
    old or the new document, never half of one.
    """
    file_path = Path(file_path)
    temp_path = None

    try:
        if create_dirs:
            _create_dirs(file_path)

        with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8', dir=file_path.parent, prefix=f".{file_path.name}.", suffix='.tmp', delete=False) as temp_file:
            temp_path = temp_file.name
            temp_file.write(text)
            temp_file.flush()
            os.fsync(temp_file.fileno())

        os.replace(temp_path, file_path)
        log.debug(f"Successfully saved file: {file_path}")
        return True

    except (IOError, OSError, PermissionError) as e:
        _cleanup(temp_path)
        error_msg = f"I/O error saving file {file_path}: {e}"
        log.error(error_msg)
        raise FileOperationError(error_msg) from e

def atomic_write(data_type : int, file_path : Union[Path, str], data : Any, create_dirs : bool = False):
    """
    Serialize and save data to a YAML or JSON file using atomic updates.
    """
    file_path = Path(file_path)
    try:
        if data_type == DATA_YAML:
            text = yaml.safe_dump(data, default_flow_style=False, sort_keys=False, indent=2, allow_unicode=True)
        elif data_type == DATA_JSON:
            text = json.dumps(data, indent=2, ensure_ascii=False)
        else:
            raise FatalError("Unsupported Data Format")
    except (yaml.YAMLError, TypeError, ValueError) as e:
        # FATAL ERROR: Data cannot be serialized
        error_msg = (f"Data serialization failed for {file_path}. "
                    f"In-memory data may be corrupt or contain non-serializable types: {e}")
        log.critical(error_msg)
        raise FatalError(error_msg) from e

    return atomic_write_text(file_path, text, create_dirs=create_dirs)

def load_json_file(file_path : Union[Path, str]) -> Union[None, List]:
    """
    Load and parse a JSON data file.

    Args:
        file_path: Path to the JSON file

    Returns:
        The parsed array, or None if the file doesn't exist

    Raises:
        CorruptionError: the file is unreadable, not JSON, or not a JSON array
    """
    file_path = Path(file_path)
    if not file_path.exists():
        return None

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise CorruptionError(f"JSON syntax error in {file_path}: {e}") from e
    except (IOError, OSError, UnicodeDecodeError) as e:
        raise CorruptionError(f"Failed to read file {file_path}: {e}") from e

    # Basic sanity check for data corruption
    if not isinstance(data, list):
        raise CorruptionError(f"File {file_path} contains invalid data structure")

    return data

def load_yaml_file(file_path : Union[Path, str]) -> Any:
    """
    Load and parse a YAML file.

    Returns:
        Parsed data, or None if the file doesn't exist

    Raises:
        yaml.YAMLError: the file is not valid YAML
        FileOperationError: the file cannot be read
    """
    file_path = Path(file_path)
    if not file_path.exists():
        return None

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f)
    except (IOError, OSError) as e:
        raise FileOperationError(f"Failed to read file {file_path}: {e}") from e
