"""Filesystem operations used by the sync engine."""

import logging
import os
import shutil
from pathlib import Path

from ..exceptions import PathTypeConflictError

logger = logging.getLogger(__name__)


class SyncOperations:
    """Copy, delete and directory removal on the destination tree."""

    def __init__(self, source_root: Path, dest_root: Path):
        """Initialize sync operations.

        Args:
            source_root: Absolute source directory
            dest_root: Absolute destination directory
        """
        self.source_root = source_root
        self.dest_root = dest_root

    def copy_file(self, relative_path: str) -> Path:
        """Copy a source file to the destination and carry over its times.

        Missing parent directories are created. The destination gets the
        source's modification and access times so that a later comparison
        sees matching timestamps. Permissions and ownership are not copied.

        Args:
            relative_path: Path relative to both roots

        Returns:
            Destination path that was written

        Raises:
            PathTypeConflictError: If the destination or one of its parents
                exists with the wrong type
        """
        source_path = self.source_root / relative_path
        dest_path = self.dest_root / relative_path

        if dest_path.is_dir():
            raise PathTypeConflictError(
                relative_path, "Destination is a directory, cannot copy file"
            )

        try:
            dest_path.parent.mkdir(parents=True, exist_ok=True)
        except (FileExistsError, NotADirectoryError) as e:
            raise PathTypeConflictError(
                relative_path, "Destination parent is not a directory"
            ) from e

        shutil.copyfile(source_path, dest_path)

        source_stat = os.stat(source_path)
        os.utime(dest_path, ns=(source_stat.st_atime_ns, source_stat.st_mtime_ns))
        logger.debug("Copied %s -> %s", source_path, dest_path)
        return dest_path

    def delete_file(self, relative_path: str) -> None:
        """Delete a destination file permanently."""
        dest_path = self.dest_root / relative_path
        dest_path.unlink()
        logger.debug("Deleted %s", dest_path)

    def remove_empty_directory(self, relative_path: str) -> bool:
        """Remove a destination directory if it has no entries.

        Args:
            relative_path: Directory path relative to the destination root

        Returns:
            True if the directory was removed, False if it was not empty

        Raises:
            OSError: If listing or removing the directory fails
        """
        dest_dir = self.dest_root / relative_path
        with os.scandir(dest_dir) as entries:
            if any(True for _ in entries):
                return False
        dest_dir.rmdir()
        return True
