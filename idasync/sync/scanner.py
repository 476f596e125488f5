"""Directory scanning utilities for sync operations."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


@dataclass
class ScanResult:
    """Files and directories found below a tree root."""

    files: set[str] = field(default_factory=set)
    """Relative paths of regular files (forward slashes)"""

    directories: set[str] = field(default_factory=set)
    """Relative paths of directories, each listed individually"""


class DirectoryScanner:
    """Walks a directory tree and collects root-relative paths.

    A missing root is treated as an empty tree. Any other filesystem error
    propagates to the caller. Symbolic links are never followed: a link
    is neither a file nor a directory, so it is left out of both sets and
    nothing behind it is walked.

    Examples:
        >>> scanner = DirectoryScanner()
        >>> files = scanner.scan_files(Path("/sync/folder"))
        >>> "subdir/file.txt" in files
        True
    """

    def scan(self, root: Union[str, Path]) -> ScanResult:
        """Recursively scan a directory tree.

        Args:
            root: Directory to scan

        Returns:
            ScanResult with relative file and directory paths
        """
        root_path = Path(root)
        result = ScanResult()

        # Explicit work list of (absolute dir, relative prefix)
        pending: list[tuple[Path, str]] = [(root_path, "")]
        while pending:
            directory, prefix = pending.pop()
            try:
                with os.scandir(directory) as entries:
                    for entry in entries:
                        relative_path = f"{prefix}{entry.name}"
                        if entry.is_dir(follow_symlinks=False):
                            result.directories.add(relative_path)
                            pending.append((Path(entry.path), f"{relative_path}/"))
                        elif entry.is_file(follow_symlinks=False):
                            result.files.add(relative_path)
            except FileNotFoundError:
                logger.debug("Directory not found, treating as empty: %s", directory)
                continue

        logger.debug(
            "Scanned %s: %d file(s), %d directories",
            root_path,
            len(result.files),
            len(result.directories),
        )
        return result

    def scan_files(self, root: Union[str, Path]) -> set[str]:
        """Return relative paths of all regular files below root."""
        return self.scan(root).files

    def scan_directories(self, root: Union[str, Path]) -> set[str]:
        """Return relative paths of all directories below root."""
        return self.scan(root).directories


def path_depth(relative_path: str) -> int:
    """Number of segments in a relative path ("a/b" -> 2)."""
    return relative_path.count("/") + 1
