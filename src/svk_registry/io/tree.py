"""Directory enumeration helpers.

Nothing here is cached: each call walks the tree as it is right now. Missing or
unreadable directories are a normal state (a producer has not run yet), so they
enumerate as empty instead of raising.
"""

from collections.abc import Iterable
from pathlib import Path

MARKDOWN_SUFFIX = ".md"

# Never descended into when collecting artifact files
SKIPPED_DIRECTORIES = frozenset({".git", "node_modules"})


def _entries(directory: Path) -> list[Path]:
    try:
        return sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError:
        # Absent or unreadable
        return []


def _is_directory(entry: Path) -> bool:
    # Symlinked directories are not followed, which also rules out cycles
    return entry.is_dir() and not entry.is_symlink()


def count_markdown_files(directory: Path) -> int:
    """Count ``.md`` files under ``directory``, recursively."""
    count = 0
    for entry in _entries(directory):
        if _is_directory(entry):
            count += count_markdown_files(entry)
        elif entry.name.endswith(MARKDOWN_SUFFIX):
            count += 1
    return count


def list_markdown_files(directory: Path) -> list[str]:
    """List ``.md`` filenames directly inside ``directory``, sorted."""
    return [
        entry.name
        for entry in _entries(directory)
        if entry.is_file() and entry.name.endswith(MARKDOWN_SUFFIX)
    ]


def list_subdirectories(directory: Path) -> list[str]:
    """List names of immediate subdirectories of ``directory``, sorted."""
    return [entry.name for entry in _entries(directory) if _is_directory(entry)]


def collect_artifact_files(directory: Path, suffixes: Iterable[str]) -> list[Path]:
    """Collect files with any of ``suffixes`` under ``directory``, recursively.

    Skips ``.git`` and ``node_modules``. Results are sorted by path so repeated
    calls over an unchanged tree return identical lists.
    """
    wanted = tuple(suffixes)
    files: list[Path] = []
    for entry in _entries(directory):
        if _is_directory(entry):
            if entry.name in SKIPPED_DIRECTORIES:
                continue
            files.extend(collect_artifact_files(entry, wanted))
        elif entry.name.endswith(wanted):
            files.append(entry)
    return sorted(files)
