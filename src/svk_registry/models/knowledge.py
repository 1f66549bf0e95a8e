"""Enumeration results for knowledge sources."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Category:
    """First-level subdirectory of a dynamic source.

    Categories with sub-subdirectories report their names and a recursive
    count; flat categories report their markdown files instead.
    """

    name: str
    file_count: int
    subcategories: tuple[str, ...] | None = None
    files: tuple[str, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        if self.subcategories is not None:
            return {"subcategories": list(self.subcategories), "file_count": self.file_count}
        return {"files": list(self.files or ()), "file_count": self.file_count}


@dataclass(frozen=True)
class DomainPack:
    """Discovered grouping under a source's ``domain-packs`` directory."""

    name: str
    file_count: int
    index: str | None  # Relative path of the pack's INDEX.md, if present

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "index": self.index, "file_count": self.file_count}
