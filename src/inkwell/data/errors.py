"""Data layer error hierarchy."""

from inkwell.errors import InkwellError


class DataError(InkwellError):
    """Base for all inkwell.data errors."""


class DriverNotInstalledError(DataError):
    """Raised when the required database driver is not installed."""


class StoreError(DataError):
    """Raised when a connection, query or statement deadline fails."""


class MigrationError(DataError):
    """Raised when a schema migration cannot be discovered or applied."""
