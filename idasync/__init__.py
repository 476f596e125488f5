"""idasync - one-way folder synchronization from source to destination."""

from .exceptions import (
    IdasyncConfigError,
    IdasyncError,
    PathTypeConflictError,
    SourceMissingError,
    SourceNotDirectoryError,
)
from .output import OutputFormatter
from .sync import (
    SyncConfiguration,
    SyncEngine,
    SyncResult,
    load_config_from_json,
    matches_pattern,
)

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "SyncEngine",
    "SyncConfiguration",
    "SyncResult",
    "OutputFormatter",
    "load_config_from_json",
    "matches_pattern",
    "IdasyncError",
    "IdasyncConfigError",
    "PathTypeConflictError",
    "SourceMissingError",
    "SourceNotDirectoryError",
]
