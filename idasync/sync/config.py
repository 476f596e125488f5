"""Sync configuration and JSON config file loading."""

import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Iterable, Optional, Union

from ..exceptions import IdasyncConfigError

logger = logging.getLogger(__name__)

# Accepted config keys mapped to SyncConfiguration field names
_KEY_ALIASES: dict[str, str] = {
    "copyExclusions": "copy_exclusions",
    "copy_exclusions": "copy_exclusions",
    "deleteExclusions": "delete_exclusions",
    "delete_exclusions": "delete_exclusions",
    "verboseLogging": "verbose",
    "verbose": "verbose",
    "dryRun": "dry_run",
    "dry_run": "dry_run",
    "maxWorkers": "max_workers",
    "max_workers": "max_workers",
}


@dataclass(frozen=True)
class SyncConfiguration:
    """Immutable settings for a SyncEngine.

    Examples:
        >>> config = SyncConfiguration(copy_exclusions=("*.log",))
        >>> config.verbose
        False
    """

    copy_exclusions: tuple[str, ...] = field(default_factory=tuple)
    """Patterns of source files that are never copied"""

    delete_exclusions: tuple[str, ...] = field(default_factory=tuple)
    """Patterns of destination files that are never deleted"""

    verbose: bool = False
    """Emit a progress line for each copy/delete/skip/removal"""

    dry_run: bool = False
    """Report what would change without touching the destination"""

    max_workers: int = 1
    """Worker threads used for discovery and copying"""

    def __post_init__(self) -> None:
        # Accept any iterable of patterns but store tuples
        object.__setattr__(
            self, "copy_exclusions", _pattern_tuple(self.copy_exclusions)
        )
        object.__setattr__(
            self, "delete_exclusions", _pattern_tuple(self.delete_exclusions)
        )
        if (
            isinstance(self.max_workers, bool)
            or not isinstance(self.max_workers, int)
            or self.max_workers < 1
        ):
            raise IdasyncConfigError(
                f"max_workers must be a positive integer, got {self.max_workers!r}"
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SyncConfiguration":
        """Create a configuration from a dictionary.

        Both camelCase (``copyExclusions``) and snake_case
        (``copy_exclusions``) keys are accepted.

        Args:
            data: Dictionary of configuration values

        Returns:
            SyncConfiguration instance

        Raises:
            IdasyncConfigError: If a key is unknown or a value has a bad type
        """
        if not isinstance(data, dict):
            raise IdasyncConfigError("Configuration must be a JSON object")

        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _KEY_ALIASES.get(key)
            if name is None:
                raise IdasyncConfigError(f"Unknown configuration key: {key}")

            if name in ("copy_exclusions", "delete_exclusions"):
                if not isinstance(value, list) or not all(
                    isinstance(p, str) for p in value
                ):
                    raise IdasyncConfigError(f"{key} must be a list of strings")
            elif name in ("verbose", "dry_run"):
                if not isinstance(value, bool):
                    raise IdasyncConfigError(f"{key} must be a boolean")
            elif name == "max_workers":
                if isinstance(value, bool) or not isinstance(value, int):
                    raise IdasyncConfigError(f"{key} must be an integer")

            kwargs[name] = value

        return cls(**kwargs)

    def merged(
        self,
        copy_exclusions: Iterable[str] = (),
        delete_exclusions: Iterable[str] = (),
        verbose: Optional[bool] = None,
        dry_run: Optional[bool] = None,
        max_workers: Optional[int] = None,
    ) -> "SyncConfiguration":
        """Return a new configuration with extra patterns and overrides.

        Patterns are appended after the existing ones. ``None`` keeps the
        current value of a setting.
        """
        changes: dict[str, Any] = {
            "copy_exclusions": self.copy_exclusions + tuple(copy_exclusions),
            "delete_exclusions": self.delete_exclusions + tuple(delete_exclusions),
        }
        if verbose is not None:
            changes["verbose"] = verbose
        if dry_run is not None:
            changes["dry_run"] = dry_run
        if max_workers is not None:
            changes["max_workers"] = max_workers
        return replace(self, **changes)


def _pattern_tuple(patterns: Optional[Iterable[str]]) -> tuple[str, ...]:
    if patterns is None:
        return ()
    if isinstance(patterns, str):
        # A bare string is one pattern, not a sequence of characters
        return (patterns,)
    return tuple(patterns)


def load_config_from_json(path: Union[str, Path]) -> SyncConfiguration:
    """Load a sync configuration from a JSON file.

    Example file::

        {
            "copyExclusions": ["*.log", "tmp/*"],
            "deleteExclusions": ["config.json"],
            "verboseLogging": true
        }

    Args:
        path: Path to the JSON file

    Returns:
        SyncConfiguration instance

    Raises:
        IdasyncConfigError: If the file cannot be read or is invalid
    """
    config_path = Path(path)
    try:
        with open(config_path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise IdasyncConfigError(f"Config file not found: {config_path}") from e
    except json.JSONDecodeError as e:
        raise IdasyncConfigError(f"Invalid JSON in {config_path}: {e}") from e
    except OSError as e:
        raise IdasyncConfigError(f"Cannot read config file {config_path}: {e}") from e

    logger.debug("Loaded configuration from %s", config_path)
    return SyncConfiguration.from_dict(data)
