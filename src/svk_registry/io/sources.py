"""Knowledge source declarations I/O."""

from pathlib import Path

import yaml

from svk_registry.models.source import KnowledgeSource


def bundled_sources_path() -> Path:
    """Return the path of the sources.yaml shipped with the package."""
    return Path(__file__).parent.parent / "data" / "sources.yaml"


def load_sources(sources_path: Path | None = None) -> list[KnowledgeSource]:
    """Load source declarations from a sources.yaml file.

    Args:
        sources_path: File to load; defaults to the bundled declarations

    Returns:
        Sources in declaration order

    Raises:
        ValueError: If a source id is declared twice
    """
    path = sources_path if sources_path is not None else bundled_sources_path()

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not data or "sources" not in data:
        return []

    sources = [
        KnowledgeSource(
            source_id=entry["source_id"],
            name=entry["name"],
            description=entry.get("description", ""),
            base_path=entry["base_path"],
            primary_index=entry.get("primary_index"),
            static_files=tuple(entry.get("static_files") or ()),
        )
        for entry in data["sources"]
    ]

    seen: set[str] = set()
    for source in sources:
        if source.source_id in seen:
            raise ValueError(f"Duplicate knowledge source id: {source.source_id}")
        seen.add(source.source_id)

    return sources
