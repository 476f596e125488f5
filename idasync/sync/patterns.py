"""Glob-like exclusion pattern matching.

Patterns support two wildcards:

- ``*`` matches zero or more characters except ``/``
- ``?`` matches exactly one character except ``/``

Every other character matches literally. A pattern without a slash is
matched against the file name only, so ``*.log`` excludes log files at any
depth. A pattern containing a slash is matched against the whole relative
path. When such a pattern matches one of the path's parent directories,
the whole subtree below it is covered, so ``temp/*`` matches ``temp/a.tmp``
and ``temp/sub/a.tmp`` but not ``tempfoo/a.tmp``. Matching is anchored and
case-insensitive.
"""

import re
from functools import lru_cache
from typing import Iterable, Optional


def normalize_separators(path: str) -> str:
    """Convert Windows-style separators to forward slashes."""
    return path.replace("\\", "/")


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> re.Pattern:
    """Compile a glob-like pattern into an anchored regular expression.

    Args:
        pattern: Pattern string (separators already normalized)

    Returns:
        Compiled case-insensitive regex
    """
    parts: list[str] = []
    for char in pattern:
        if char == "*":
            parts.append("[^/]*")
        elif char == "?":
            parts.append("[^/]")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.IGNORECASE)


def match_single(relative_path: str, pattern: str) -> bool:
    """Check a relative path against one pattern.

    Args:
        relative_path: Path relative to the tree root
        pattern: Glob-like pattern

    Returns:
        True if the pattern matches
    """
    normalized_path = normalize_separators(relative_path)
    normalized_pattern = normalize_separators(pattern)

    regex = compile_pattern(normalized_pattern)

    if "/" not in normalized_pattern:
        return regex.fullmatch(normalized_path.rsplit("/", 1)[-1]) is not None

    # Try the full path first, then each parent directory
    segments = normalized_path.split("/")
    for end in range(len(segments), 0, -1):
        if regex.fullmatch("/".join(segments[:end])) is not None:
            return True
    return False


def matches_pattern(relative_path: str, patterns: Optional[Iterable[str]]) -> bool:
    """Check if a relative path matches any of the given patterns.

    Args:
        relative_path: Path relative to the tree root
        patterns: Glob-like patterns, checked in order

    Returns:
        True if at least one pattern matches; False for an empty list

    Examples:
        >>> matches_pattern("dir/a.log", ["*.log"])
        True
        >>> matches_pattern("tempfoo/a.tmp", ["temp/*"])
        False
    """
    if not patterns:
        return False
    return any(match_single(relative_path, pattern) for pattern in patterns)
