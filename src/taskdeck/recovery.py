class TaskDeckError(Exception):
    """Base exception for all taskdeck errors."""
    pass

class RecoverableError(TaskDeckError):
    """An error that can be recovered from without data loss."""
    pass

class FatalError(TaskDeckError):
    """An error that requires application termination."""
    pass

class CorruptionError(FatalError):
    """Corrupted data file - from JSON syntax errors to documents that do not match their schema"""
    pass

class MigrationError(CorruptionError):
    """Data migration failed or the migration chain is incomplete."""
    pass

class ConfigError(FatalError):
    """The configuration file cannot be parsed or has an invalid shape."""
    pass

class StoreNotReadyError(FatalError):
    """The store was used before its schema version was resolved."""
    pass

class FileOperationError(RecoverableError):
    """File operation failed."""
    pass
