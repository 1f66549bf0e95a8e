from svk_registry.models.knowledge import Category, DomainPack
from svk_registry.models.source import KnowledgeSource, SourceKind
from svk_registry.models.state import MARKER_FIELD, ProducerState

__all__ = [
    "MARKER_FIELD",
    "Category",
    "DomainPack",
    "KnowledgeSource",
    "ProducerState",
    "SourceKind",
]
