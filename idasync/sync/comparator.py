"""File comparison logic for sync operations."""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Union

from .patterns import matches_pattern

logger = logging.getLogger(__name__)


class SyncAction(str, Enum):
    """Actions that can be taken during sync."""

    COPY = "copy"
    """Copy source file to destination (new or changed)"""

    UNCHANGED = "unchanged"
    """Destination already matches source (same mtime and size)"""

    SKIP = "skip"
    """Source file matches a copy exclusion"""

    DELETE = "delete"
    """Delete destination file that is absent from source"""

    KEEP = "keep"
    """Destination-only file matches a delete exclusion"""


@dataclass
class SyncDecision:
    """Represents a decision about how to sync a file."""

    action: SyncAction
    """Action to take"""

    reason: str
    """Human-readable reason for this decision"""

    relative_path: str
    """Relative path of the file"""


def needs_copy(source_path: Union[str, Path], dest_path: Union[str, Path]) -> bool:
    """Decide whether a source file must be copied over its destination.

    Only modification time and size are compared. Two files with the same
    mtime and size are treated as identical even if their contents differ.

    Args:
        source_path: Absolute path of the source file
        dest_path: Absolute path of the destination file

    Returns:
        True if the destination is missing, cannot be stat'ed, or differs
        in mtime (exact, nanoseconds) or size
    """
    source_stat = os.stat(source_path)
    try:
        dest_stat = os.stat(dest_path)
    except OSError:
        return True

    return (
        source_stat.st_mtime_ns != dest_stat.st_mtime_ns
        or source_stat.st_size != dest_stat.st_size
    )


class FileComparator:
    """Compares source and destination trees to determine sync actions."""

    def __init__(
        self,
        copy_exclusions: Iterable[str] = (),
        delete_exclusions: Iterable[str] = (),
    ):
        """Initialize file comparator.

        Args:
            copy_exclusions: Patterns of source files never copied
            delete_exclusions: Patterns of destination files never deleted
        """
        self.copy_exclusions = tuple(copy_exclusions)
        self.delete_exclusions = tuple(delete_exclusions)

    def decide_copy(
        self, relative_path: str, source_root: Path, dest_root: Path
    ) -> SyncDecision:
        """Decide what the copy phase does with one source file.

        Excluded files are reported as SKIP without looking at the
        destination at all.
        """
        if matches_pattern(relative_path, self.copy_exclusions):
            return SyncDecision(
                action=SyncAction.SKIP,
                reason="Matches copy exclusion",
                relative_path=relative_path,
            )

        if needs_copy(source_root / relative_path, dest_root / relative_path):
            return SyncDecision(
                action=SyncAction.COPY,
                reason="New or changed source file",
                relative_path=relative_path,
            )

        return SyncDecision(
            action=SyncAction.UNCHANGED,
            reason="Same modification time and size",
            relative_path=relative_path,
        )

    def decide_delete(self, relative_path: str) -> SyncDecision:
        """Decide what the delete phase does with a destination-only file."""
        if matches_pattern(relative_path, self.delete_exclusions):
            return SyncDecision(
                action=SyncAction.KEEP,
                reason="Matches delete exclusion",
                relative_path=relative_path,
            )

        return SyncDecision(
            action=SyncAction.DELETE,
            reason="File not present in source",
            relative_path=relative_path,
        )

    def compare_deletions(
        self, source_files: set[str], dest_files: set[str]
    ) -> list[SyncDecision]:
        """Build delete-phase decisions for destination-only files.

        Args:
            source_files: Relative paths found in the source tree
            dest_files: Relative paths found in the destination tree

        Returns:
            List of SyncDecision objects, sorted by path
        """
        orphans = dest_files - source_files
        logger.debug("Found %d destination-only file(s)", len(orphans))
        return [self.decide_delete(path) for path in sorted(orphans)]
