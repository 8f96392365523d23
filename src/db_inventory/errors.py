# ABOUTME: Exception hierarchy for the inventory pipeline
# ABOUTME: Run-level errors end the run; record, file and line errors are logged and skipped


class InventoryError(Exception):
    """Base exception for inventory pipeline errors."""

    pass


class FetchError(InventoryError):
    """Raised when the site manifest cannot be retrieved or parsed."""

    pass


class PathDerivationError(InventoryError):
    """Raised when a record's link cannot be turned into a local folder path."""

    pass


class DirectoryListError(InventoryError):
    """Raised when a record's site directory cannot be listed."""

    pass


class FileReadError(InventoryError):
    """Raised when a configuration file cannot be read."""

    pass


class LineParseError(InventoryError):
    """Raised when a configuration line cannot be parsed."""

    pass


class OutputWriteError(InventoryError):
    """Raised when the inventory file cannot be written."""

    pass
