"""Core sync engine for executing sync operations."""

import logging
import os
import time
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Optional, Union

from ..exceptions import SourceMissingError, SourceNotDirectoryError
from ..output import OutputFormatter
from .comparator import FileComparator, SyncAction
from .config import SyncConfiguration
from .operations import SyncOperations
from .result import SyncResult
from .scanner import DirectoryScanner, path_depth

logger = logging.getLogger(__name__)

LOG_PREFIX = "[idasync]"


class SyncEngine:
    """Mirrors a source directory into a destination directory.

    A sync runs three phases one after another: copy new or changed files,
    delete destination files that are absent from the source, then prune
    destination directories that ended up empty.
    """

    def __init__(
        self,
        config: Optional[SyncConfiguration] = None,
        output: Optional[OutputFormatter] = None,
    ):
        """Initialize sync engine.

        Args:
            config: Sync configuration (defaults to no exclusions)
            output: Output formatter for verbose progress lines; defaults
                to a quiet formatter that prints nothing, so
                ``verbose=True`` only shows output when a non-quiet
                formatter such as ``OutputFormatter()`` is passed
        """
        self.config = config or SyncConfiguration()
        self.output = output or OutputFormatter(quiet=True)
        self.scanner = DirectoryScanner()
        self.comparator = FileComparator(
            copy_exclusions=self.config.copy_exclusions,
            delete_exclusions=self.config.delete_exclusions,
        )

    def validate_source(self, source: Union[str, Path]) -> Path:
        """Check that the source exists and is a directory.

        Args:
            source: Source directory path

        Returns:
            Absolute source path

        Raises:
            SourceMissingError: If the source does not exist
            SourceNotDirectoryError: If the source is not a directory
        """
        source_abs = Path(os.path.abspath(source))
        if not source_abs.exists():
            raise SourceMissingError(str(source_abs))
        if not source_abs.is_dir():
            raise SourceNotDirectoryError(str(source_abs))
        return source_abs

    def sync(
        self, source: Union[str, Path], destination: Union[str, Path]
    ) -> SyncResult:
        """Synchronize source directory to destination directory.

        A missing source leaves the destination untouched and returns an
        all-zero result. Callers that must fail in that case should call
        ``validate_source`` first.

        Args:
            source: Source directory path
            destination: Destination directory path (created if missing)

        Returns:
            SyncResult with copy, delete and skip counts

        Raises:
            SourceNotDirectoryError: If the source is not a directory
            PathTypeConflictError: If a file and a directory collide
            OSError: On any other filesystem failure

        Examples:
            >>> engine = SyncEngine(SyncConfiguration(copy_exclusions=("*.log",)))
            >>> result = engine.sync("./src", "./dist")
            >>> print(f"Copied {result.copied} file(s)")
        """
        dest_abs = Path(os.path.abspath(destination))
        try:
            source_abs = self.validate_source(source)
        except SourceMissingError as e:
            logger.warning("%s", e)
            self._log(f"{e}, nothing to do")
            return SyncResult()

        start_time = time.time()
        self._log(f"Syncing from {source_abs} to {dest_abs}")
        if self.config.dry_run:
            self._log("Dry run: no changes will be made")
        else:
            dest_abs.mkdir(parents=True, exist_ok=True)

        source_files, dest_files = self._discover(source_abs, dest_abs)

        result = SyncResult()
        operations = SyncOperations(source_abs, dest_abs)

        self._copy_phase(source_files, operations, result)
        self._delete_phase(source_files, dest_files, operations, result)
        if not self.config.dry_run:
            self._cleanup_empty_directories(source_abs, operations)

        logger.debug("Sync finished in %.2fs", time.time() - start_time)
        self._log(
            f"Sync complete: {result.copied} copied, "
            f"{result.deleted} deleted, {result.skipped} skipped"
        )
        return result

    def _log(self, message: str) -> None:
        """Emit a progress line when verbose logging is enabled."""
        logger.debug(message)
        if self.config.verbose:
            self.output.info(f"{LOG_PREFIX} {message}")

    def _discover(self, source_abs: Path, dest_abs: Path) -> tuple[set[str], set[str]]:
        """Scan both trees and return their relative file paths."""
        if self.config.max_workers > 1:
            with ThreadPoolExecutor(max_workers=2) as executor:
                source_future = executor.submit(self.scanner.scan_files, source_abs)
                dest_future = executor.submit(self.scanner.scan_files, dest_abs)
                source_files = source_future.result()
                dest_files = dest_future.result()
        else:
            source_files = self.scanner.scan_files(source_abs)
            dest_files = self.scanner.scan_files(dest_abs)

        logger.debug(
            "Found %d source file(s), %d destination file(s)",
            len(source_files),
            len(dest_files),
        )
        return source_files, dest_files

    def _copy_phase(
        self,
        source_files: set[str],
        operations: SyncOperations,
        result: SyncResult,
    ) -> None:
        """Copy new and changed files, counting excluded ones as skipped."""
        to_copy: list[str] = []
        for relative_path in sorted(source_files):
            decision = self.comparator.decide_copy(
                relative_path, operations.source_root, operations.dest_root
            )
            if decision.action == SyncAction.SKIP:
                self._log(f"Skipping copy (excluded): {relative_path}")
                result.skipped += 1
            elif decision.action == SyncAction.COPY:
                to_copy.append(relative_path)

        if self.config.dry_run:
            for relative_path in to_copy:
                self._log(f"Would copy: {relative_path}")
                result.copied += 1
            return

        if self.config.max_workers > 1 and len(to_copy) > 1:
            self._copy_parallel(to_copy, operations, result)
            return

        for relative_path in to_copy:
            operations.copy_file(relative_path)
            self._log(f"Copied: {relative_path}")
            result.copied += 1

    def _copy_parallel(
        self,
        to_copy: list[str],
        operations: SyncOperations,
        result: SyncResult,
    ) -> None:
        """Copy files with a thread pool; the first failure aborts the rest."""
        logger.debug(
            "Copying %d file(s) with %d workers",
            len(to_copy),
            self.config.max_workers,
        )
        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            futures: dict[Future, str] = {
                executor.submit(operations.copy_file, path): path for path in to_copy
            }
            try:
                for future in as_completed(futures):
                    future.result()
                    self._log(f"Copied: {futures[future]}")
                    result.copied += 1
            except BaseException:
                for future in futures:
                    future.cancel()
                raise

    def _delete_phase(
        self,
        source_files: set[str],
        dest_files: set[str],
        operations: SyncOperations,
        result: SyncResult,
    ) -> None:
        """Delete destination-only files unless excluded from deletion."""
        decisions = self.comparator.compare_deletions(source_files, dest_files)
        for decision in decisions:
            relative_path = decision.relative_path
            if decision.action == SyncAction.KEEP:
                # Delete exclusions are not counted as skipped
                self._log(f"Skipping delete (excluded): {relative_path}")
                continue

            if self.config.dry_run:
                self._log(f"Would delete: {relative_path}")
            else:
                operations.delete_file(relative_path)
                self._log(f"Deleted: {relative_path}")
            result.deleted += 1

    def _cleanup_empty_directories(
        self, source_abs: Path, operations: SyncOperations
    ) -> None:
        """Remove empty destination directories that do not exist in source.

        Directories are visited deepest first so that a parent is judged
        only after its children had a chance to be removed. Failures are
        ignored per directory.
        """
        dest_dirs = self.scanner.scan_directories(operations.dest_root)
        ordered = sorted(dest_dirs, key=lambda d: (-path_depth(d), d))

        for relative_dir in ordered:
            if os.path.exists(source_abs / relative_dir):
                continue

            try:
                removed = operations.remove_empty_directory(relative_dir)
            except OSError as e:
                logger.debug("Could not remove directory %s: %s", relative_dir, e)
                if self.config.verbose:
                    self.output.warning(
                        f"{LOG_PREFIX} Could not remove directory {relative_dir}: {e}"
                    )
                continue

            if removed:
                self._log(f"Removed empty directory: {relative_dir}")
