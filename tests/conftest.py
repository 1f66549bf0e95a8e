"""Shared fixtures for svk-registry tests."""

from pathlib import Path

import pytest

from svk_registry.context import RegistryContext
from svk_registry.models.source import KnowledgeSource
from svk_registry.registry import SourceRegistry


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """An empty project root."""
    path = tmp_path / "project"
    path.mkdir()
    return path


@pytest.fixture
def repo_dir(tmp_path: Path) -> Path:
    """Registry root holding the demo knowledge sources.

    Layout:
        kb/demo/INDEX.md
        kb/demo/alpha/{a,b}.md
        kb/demo/beta/sub/c.md
        docs/A.md  (B.md is declared but absent)
    """
    path = tmp_path / "repo"
    demo = path / "kb" / "demo"
    (demo / "alpha").mkdir(parents=True)
    (demo / "beta" / "sub").mkdir(parents=True)
    (demo / "INDEX.md").write_text("# Demo index\n", encoding="utf-8")
    (demo / "alpha" / "a.md").write_text("alpha a\n", encoding="utf-8")
    (demo / "alpha" / "b.md").write_text("alpha b\n", encoding="utf-8")
    (demo / "beta" / "sub" / "c.md").write_text("beta c\n", encoding="utf-8")

    (path / "docs").mkdir()
    (path / "docs" / "A.md").write_text("# Static A\n", encoding="utf-8")
    return path


@pytest.fixture
def demo_registry() -> SourceRegistry:
    return SourceRegistry(
        sources=(
            KnowledgeSource(
                source_id="demo",
                name="Demo",
                description="Demo knowledge base",
                base_path="kb/demo",
                primary_index="INDEX.md",
            ),
            KnowledgeSource(
                source_id="static",
                name="Static",
                description="Allow-listed files",
                base_path="docs",
                static_files=("A.md", "B.md"),
            ),
        )
    )


@pytest.fixture
def ctx(project_dir: Path, repo_dir: Path, demo_registry: SourceRegistry) -> RegistryContext:
    return RegistryContext.for_test(
        project_dir=project_dir, repo_dir=repo_dir, registry=demo_registry
    )
