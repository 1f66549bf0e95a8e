"""Knowledge source registry and on-demand enumeration.

The registry itself is an immutable table of declared sources. Everything it
reports about their contents is recomputed from the filesystem on each call.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from svk_registry.io.sandbox import SandboxedRoot
from svk_registry.io.sources import load_sources
from svk_registry.io.tree import count_markdown_files, list_markdown_files, list_subdirectories
from svk_registry.models.knowledge import Category, DomainPack
from svk_registry.models.source import KnowledgeSource, SourceKind

DOMAIN_PACKS_DIR = "domain-packs"
DOMAIN_PACK_INDEX = "INDEX.md"


@dataclass(frozen=True)
class SourceRegistry:
    """Immutable set of knowledge sources known for the process lifetime."""

    sources: tuple[KnowledgeSource, ...]

    @staticmethod
    def bundled() -> "SourceRegistry":
        """Registry built from the package's bundled sources.yaml."""
        return SourceRegistry(sources=tuple(load_sources()))

    def list_sources(self) -> list[KnowledgeSource]:
        return list(self.sources)

    def source_ids(self) -> list[str]:
        return [source.source_id for source in self.sources]

    def get(self, source_id: str) -> KnowledgeSource | None:
        for source in self.sources:
            if source.source_id == source_id:
                return source
        return None

    def unknown_source(self, source_id: str) -> dict[str, Any]:
        """Inline error for an unknown id, listing the valid alternatives."""
        return {
            "error": f"Unknown knowledge base: {source_id}",
            "available": self.source_ids(),
        }


def sandbox_for(source: KnowledgeSource, registry_root: Path) -> SandboxedRoot:
    """Sandbox rooted at the source's base directory."""
    return SandboxedRoot(source.base_dir(registry_root))


def existing_static_files(source: KnowledgeSource, registry_root: Path) -> list[str]:
    """Return the allow-listed files of a static source that exist on disk."""
    sandbox = sandbox_for(source, registry_root)
    return [name for name in source.static_files if sandbox.exists(name)]


def discover_domain_packs(base_dir: Path) -> list[DomainPack]:
    """Discover packs under ``<base_dir>/domain-packs``.

    A missing ``domain-packs`` directory means there are no packs.
    """
    packs_dir = base_dir / DOMAIN_PACKS_DIR
    packs: list[DomainPack] = []
    for pack_name in list_subdirectories(packs_dir):
        pack_dir = packs_dir / pack_name
        has_index = (pack_dir / DOMAIN_PACK_INDEX).is_file()
        packs.append(
            DomainPack(
                name=pack_name,
                file_count=count_markdown_files(pack_dir),
                index=f"{DOMAIN_PACKS_DIR}/{pack_name}/{DOMAIN_PACK_INDEX}" if has_index else None,
            )
        )
    return packs


def enumerate_category(category_dir: Path) -> Category:
    """Describe one first-level directory with one level of lookahead."""
    subdirs = list_subdirectories(category_dir)
    if subdirs:
        return Category(
            name=category_dir.name,
            file_count=count_markdown_files(category_dir),
            subcategories=tuple(subdirs),
        )
    files = list_markdown_files(category_dir)
    return Category(name=category_dir.name, file_count=len(files), files=tuple(files))


def describe_source(source: KnowledgeSource, registry_root: Path) -> dict[str, Any]:
    """Detailed breakdown of a single source.

    Args:
        source: Source to enumerate
        registry_root: Directory that source base paths are relative to

    Returns:
        Per-category breakdown for dynamic sources, existing files for static ones
    """
    if source.kind == SourceKind.STATIC:
        existing = existing_static_files(source, registry_root)
        return {
            "source": source.source_id,
            "name": source.name,
            "primary_index": source.primary_index,
            "files": existing,
            "total_files": len(existing),
        }

    base_dir = source.base_dir(registry_root)
    categories = {
        name: enumerate_category(base_dir / name).to_dict()
        for name in list_subdirectories(base_dir)
    }

    result: dict[str, Any] = {
        "source": source.source_id,
        "name": source.name,
        "primary_index": source.primary_index,
        "categories": categories,
        "total_files": count_markdown_files(base_dir),
    }

    packs = discover_domain_packs(base_dir)
    if packs:
        result["domain_packs"] = [pack.to_dict() for pack in packs]

    return result


def summarize_source(source: KnowledgeSource, registry_root: Path) -> dict[str, Any]:
    """Lightweight overview entry for a single source."""
    if source.kind == SourceKind.STATIC:
        return {
            "source": source.source_id,
            "name": source.name,
            "description": source.description,
            "files": existing_static_files(source, registry_root),
        }

    base_dir = source.base_dir(registry_root)
    entry: dict[str, Any] = {
        "source": source.source_id,
        "name": source.name,
        "description": source.description,
        "primary_index": source.primary_index,
        "categories": list_subdirectories(base_dir),
        "file_count": count_markdown_files(base_dir),
    }

    packs = discover_domain_packs(base_dir)
    if packs:
        entry["domain_packs"] = [pack.to_dict() for pack in packs]

    return entry


def describe_overview(registry: SourceRegistry, registry_root: Path) -> dict[str, Any]:
    """Overview of every registered source, in declaration order."""
    return {
        "knowledge_bases": [
            summarize_source(source, registry_root) for source in registry.list_sources()
        ]
    }
