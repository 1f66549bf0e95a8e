"""Knowledge source models."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class SourceKind(Enum):
    """How a source's contents are discovered."""

    DYNAMIC = "dynamic"  # Directories enumerated at query time
    STATIC = "static"  # Closed allow-list of filenames


@dataclass(frozen=True)
class KnowledgeSource:
    """A declared root of artifacts the registry can query."""

    source_id: str  # Globally unique, stable identifier
    name: str
    description: str
    base_path: str  # Relative to the registry root
    primary_index: str | None = None
    static_files: tuple[str, ...] = ()

    @property
    def kind(self) -> SourceKind:
        """Static sources carry an allow-list; everything else is enumerated."""
        if self.static_files:
            return SourceKind.STATIC
        return SourceKind.DYNAMIC

    def base_dir(self, registry_root: Path) -> Path:
        """Return the absolute base directory under the registry root."""
        return registry_root / self.base_path
