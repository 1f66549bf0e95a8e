from svk_registry.io.frontmatter import MarkdownDocument, describe_document, parse_document
from svk_registry.io.sandbox import PathTraversalError, SandboxedRoot, normalize_relative_path
from svk_registry.io.sources import load_sources
from svk_registry.io.tree import (
    collect_artifact_files,
    count_markdown_files,
    list_markdown_files,
    list_subdirectories,
)

__all__ = [
    "MarkdownDocument",
    "PathTraversalError",
    "SandboxedRoot",
    "collect_artifact_files",
    "count_markdown_files",
    "describe_document",
    "list_markdown_files",
    "list_subdirectories",
    "load_sources",
    "normalize_relative_path",
    "parse_document",
]
