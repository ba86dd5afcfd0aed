"""
Utility functions for slash-separated remote paths.

Paths are kept in a normalized form: segments joined by a single
separator, no leading or trailing separator, and the root as "".
"""
from typing import List, Tuple

from ..config import PATH_SEPARATOR


def path_segments(path: str, separator: str = PATH_SEPARATOR) -> List[str]:
    """Split a path into its non-empty segments."""
    return [part for part in path.split(separator) if part]


def normalize_path(path: str, separator: str = PATH_SEPARATOR) -> str:
    """
    Normalize a path.

    Leading, trailing and repeated separators are dropped, so "/a//b/"
    becomes "a/b" and both "" and "/" become "".
    """
    return separator.join(path_segments(path, separator))


def join_path(*parts: str, separator: str = PATH_SEPARATOR) -> str:
    """Join path fragments, ignoring empty ones."""
    segments: List[str] = []
    for part in parts:
        segments.extend(path_segments(part, separator))
    return separator.join(segments)


def split_path(path: str, separator: str = PATH_SEPARATOR) -> Tuple[str, str]:
    """
    Split a path into (parent_path, leaf_name).

    The parent of a top-level item is the root "".
    """
    segments = path_segments(path, separator)
    if not segments:
        return "", ""
    return separator.join(segments[:-1]), segments[-1]


def basename(path: str, separator: str = PATH_SEPARATOR) -> str:
    """Return the last segment of a path."""
    return split_path(path, separator)[1]


class PathPrefixer:
    """Prepends a configured root to user supplied relative paths."""

    def __init__(self, prefix: str = "", separator: str = PATH_SEPARATOR):
        self.separator = separator
        self.prefix = normalize_path(prefix, separator)

    def prefix_path(self, path: str) -> str:
        return join_path(self.prefix, path, separator=self.separator)

    def strip_prefix(self, location: str) -> str:
        """Inverse of prefix_path for locations inside the prefix."""
        location = normalize_path(location, self.separator)
        if not self.prefix:
            return location
        if location == self.prefix:
            return ""
        head = self.prefix + self.separator
        if location.startswith(head):
            return location[len(head):]
        return location
