"""Sync engine for idasync - one-way directory mirroring."""

from .comparator import FileComparator, SyncAction, SyncDecision, needs_copy
from .config import SyncConfiguration, load_config_from_json
from .engine import SyncEngine
from .operations import SyncOperations
from .patterns import matches_pattern
from .result import SyncResult
from .scanner import DirectoryScanner, ScanResult

__all__ = [
    "SyncEngine",
    "SyncConfiguration",
    "SyncResult",
    "SyncOperations",
    "load_config_from_json",
    "DirectoryScanner",
    "ScanResult",
    "FileComparator",
    "SyncAction",
    "SyncDecision",
    "needs_copy",
    "matches_pattern",
]
