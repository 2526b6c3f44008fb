import logging
import os
import sys
from pathlib import Path

def _log_dir() -> Path:
    override = os.getenv('TASKDECK_LOG_DIR')
    if override:
        return Path(override)
    return Path.home() / ".local" / "share" / "taskdeck" / "logs"

def setup_logging(console: bool = True):
    """Set up logging configuration for the taskdeck package with environment-based levels.

    The interactive UI calls this again with ``console=False`` so log records
    never draw over the curses screen; the file handler is kept either way.
    """
    # Determine log level from environment
    env_level = os.getenv('TASKDECK_LOG_LEVEL', '').upper()
    is_debug = os.getenv('TASKDECK_DEBUG', '').lower() in ('1', 'true', 'yes')

    # Set log level based on environment - default to WARNING for regular users
    if is_debug:
        level = logging.DEBUG
    elif env_level:
        level = getattr(logging, env_level, logging.WARNING)
    else:
        level = logging.WARNING

    log_format = '[%(asctime)s] %(levelname)-8s [%(name)s:%(funcName)s:%(lineno)d] %(message)s'
    date_format = '%Y-%m-%d %H:%M:%S'

    detailed_formatter = logging.Formatter(log_format, date_format)
    console_formatter = logging.Formatter(
        '%(levelname)-8s [%(name)s] %(message)s' if is_debug
        else '%(levelname)s: %(message)s'
    )

    logger = logging.getLogger('taskdeck')
    logger.setLevel(logging.DEBUG)  # Logger accepts all, handlers filter
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # File handler (always detailed). An unwritable log directory only costs us the log file.
    log_dir = _log_dir()
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / "taskdeck.log")
    except OSError:
        file_handler = None
    if file_handler is not None:
        file_handler.setFormatter(detailed_formatter)
        file_handler.setLevel(logging.DEBUG)
        logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(console_formatter)
        console_handler.setLevel(level)
        logger.addHandler(console_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    # Prevent propagation to root logger
    logger.propagate = False

    return logger

# Initialize logging when package is imported
setup_logging()

def get_logger(name: str = None):
    """Get a logger instance for a specific module."""
    if name:
        return logging.getLogger(f'taskdeck.{name}')
    return logging.getLogger('taskdeck')
