"""Result summary returned by a sync run."""

from dataclasses import dataclass


@dataclass
class SyncResult:
    """Counts of the actions taken by one ``SyncEngine.sync`` call."""

    copied: int = 0
    """Files copied to the destination (new or changed)"""

    deleted: int = 0
    """Destination files removed because they are absent from the source"""

    skipped: int = 0
    """Source files not copied because they match a copy exclusion"""

    @property
    def total_actions(self) -> int:
        """Number of files written or removed."""
        return self.copied + self.deleted

    def to_dict(self) -> dict:
        """Convert result to dictionary for JSON output."""
        return {
            "copied": self.copied,
            "deleted": self.deleted,
            "skipped": self.skipped,
        }
