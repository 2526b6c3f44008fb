from pathlib import Path
from typing import Union

import yaml
from pydantic import BaseModel, Field, ValidationError

from .recovery import ConfigError, FileOperationError
from .data.io import atomic_write, load_yaml_file, DATA_YAML
from .logs import get_logger

log = get_logger("config")

CONFIG_FILE_NAME = "config.yml"

class Config(BaseModel):
    """User settings read once at startup."""

    class Ui(BaseModel):
        show_help: bool = Field(default=True, description="Show the key help footer")

    ui: 'Config.Ui' = Field(default_factory=lambda: Config.Ui(), description="Interface settings")

Config.model_rebuild()

def config_path(data_dir: Union[Path, str]) -> Path:
    return Path(data_dir) / CONFIG_FILE_NAME

def load_config(data_dir: Union[Path, str]) -> Config:
    """
    Read config.yml from the data directory, writing the defaults first when
    the file does not exist.

    Raises:
        ConfigError: the file is not YAML or does not have the expected shape
    """
    path = config_path(data_dir)
    try:
        raw = load_yaml_file(path)
    except yaml.YAMLError as e:
        raise ConfigError(f"The configuration file {path} is invalid. Fix its formatting or delete the file: {e}") from e
    except FileOperationError as e:
        raise ConfigError(str(e)) from e

    if raw is None and not path.exists():
        config = Config()
        log.info(f"Creating default configuration at {path}")
        atomic_write(DATA_YAML, path, config.model_dump(), create_dirs=True)
        return config

    try:
        return Config.model_validate(raw if raw is not None else {})
    except ValidationError as e:
        raise ConfigError(f"The configuration file {path} is invalid. Fix its formatting or delete the file: {e}") from e
