"""Custom exceptions for idasync."""


class IdasyncError(Exception):
    """Base exception for idasync errors."""

    pass


class IdasyncConfigError(IdasyncError):
    """Configuration is missing, malformed or has invalid values."""

    pass


class SourceMissingError(IdasyncError):
    """Source directory does not exist.

    Raised by ``SyncEngine.validate_source`` before any work is done, so the
    destination is left untouched.
    """

    def __init__(self, source: str):
        self.source = source
        super().__init__(f"Source directory does not exist: {source}")


class SourceNotDirectoryError(IdasyncError):
    """Source path exists but is not a directory."""

    def __init__(self, source: str):
        self.source = source
        super().__init__(f"Source path is not a directory: {source}")


class PathTypeConflictError(IdasyncError):
    """A destination path has a different type than the source needs.

    Raised when a file would overwrite a destination directory, or when a
    destination file sits where the source needs a directory.
    """

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{message}: {path}")
