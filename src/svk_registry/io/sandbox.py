"""Path-sandboxed file access.

Every file the registry reads goes through a SandboxedRoot. A caller-supplied
relative path is checked lexically first (no filesystem access at all), then
resolved and checked again so symlinks cannot lead outside the root.
"""

import logging
import posixpath
from pathlib import Path

logger = logging.getLogger(__name__)


class PathTraversalError(ValueError):
    """Raised when a relative path would escape its sandbox root."""

    def __init__(self) -> None:
        super().__init__("Invalid path")


def normalize_relative_path(relative_path: str) -> str:
    """Normalize a caller-supplied relative path or raise PathTraversalError.

    Pure string handling; never touches the filesystem.

    Args:
        relative_path: Path relative to a sandbox root, using ``/`` separators

    Returns:
        The normalized path (e.g. ``"a/./b.md"`` -> ``"a/b.md"``)

    Raises:
        PathTraversalError: If the path is empty, absolute, or has a ``..`` segment
    """
    if not relative_path or relative_path.startswith(("/", "\\")):
        raise PathTraversalError()

    raw_segments = relative_path.replace("\\", "/").split("/")
    if ".." in raw_segments:
        raise PathTraversalError()

    normalized = posixpath.normpath(relative_path)
    if normalized == "." or ".." in normalized.split("/"):
        raise PathTraversalError()
    return normalized


class SandboxedRoot:
    """Read-only view of a directory that never yields paths outside it."""

    def __init__(self, base: Path) -> None:
        self._base = base

    @property
    def base(self) -> Path:
        return self._base

    def resolve(self, relative_path: str) -> Path:
        """Resolve a relative path to an absolute path inside the root.

        Args:
            relative_path: Caller-supplied path relative to the root

        Returns:
            Absolute, symlink-resolved path that is a strict descendant of the root

        Raises:
            PathTraversalError: If the path escapes the root in any form
        """
        normalized = normalize_relative_path(relative_path)

        base = self._base.resolve()
        candidate = (base / normalized).resolve()
        if candidate == base or not candidate.is_relative_to(base):
            logger.debug("Rejected path outside %s: %s", base, relative_path)
            raise PathTraversalError()
        return candidate

    def contains(self, path: Path) -> bool:
        """Check whether an absolute path resolves to a strict descendant of the root."""
        base = self._base.resolve()
        resolved = path.resolve()
        return resolved != base and resolved.is_relative_to(base)

    def exists(self, relative_path: str) -> bool:
        """Check for a regular file at ``relative_path``; traversal counts as absent."""
        try:
            return self.resolve(relative_path).is_file()
        except PathTraversalError:
            return False

    def read_text(self, relative_path: str) -> str:
        """Read a UTF-8 file inside the root.

        Raises:
            PathTraversalError: If the path escapes the root
            FileNotFoundError: If no regular file exists at the path
            UnicodeDecodeError: If the file is present but not valid UTF-8
        """
        absolute = self.resolve(relative_path)
        if not absolute.is_file():
            raise FileNotFoundError(relative_path)
        return absolute.read_text(encoding="utf-8")

    def relative(self, path: Path) -> str:
        """Return ``path`` relative to the root, with ``/`` separators.

        Raises:
            PathTraversalError: If the path does not resolve inside the root
        """
        if not self.contains(path):
            raise PathTraversalError()
        return path.resolve().relative_to(self._base.resolve()).as_posix()
