"""Tests for the search query."""

from pathlib import Path

import pytest

from svk_registry.context import RegistryContext
from svk_registry.io.sandbox import SandboxedRoot
from svk_registry.queries import SearchQuery, dispatch
from svk_registry.queries.search import find_excerpts


def _write(root: Path, relative: str, content: str) -> None:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


class TestFindExcerpts:
    def test_excerpt_includes_two_lines_of_context(self) -> None:
        content = "one\ntwo\nthree\nMATCH here\nfive\nsix\nseven"

        excerpts = find_excerpts(content, "match")

        assert len(excerpts) == 1
        assert excerpts[0].line == 4
        assert excerpts[0].excerpt == "two\nthree\nMATCH here\nfive\nsix"

    def test_context_is_clipped_at_file_edges(self) -> None:
        excerpts = find_excerpts("match\nsecond", "MATCH")

        assert excerpts[0].excerpt == "match\nsecond"

    def test_at_most_three_excerpts(self) -> None:
        content = "\n".join(f"hit {i}" for i in range(10))

        assert [e.line for e in find_excerpts(content, "hit")] == [1, 2, 3]


def test_empty_query_is_an_error(ctx: RegistryContext) -> None:
    assert dispatch(ctx, SearchQuery(query="   ")) == {"error": "Search query is required."}


def test_invalid_scope_lists_valid_scopes(ctx: RegistryContext) -> None:
    result = dispatch(ctx, SearchQuery(query="x", scope="everything"))

    assert result["error"] == 'Unknown scope "everything".'
    assert result["valid"] == ["docs", "audit", "decisions", "all", "knowledge"]


def test_no_artifacts_message(ctx: RegistryContext) -> None:
    result = dispatch(ctx, SearchQuery(query="oracle"))

    assert result == {
        "query": "oracle",
        "scope": "all",
        "total_files_matched": 0,
        "results": [],
        "message": 'No SVK artifacts found in scope "all".',
    }


def test_no_results_message(ctx: RegistryContext) -> None:
    _write(ctx.project_dir, ".docs/OVERVIEW.md", "Nothing relevant.")

    result = dispatch(ctx, SearchQuery(query="oracle"))

    assert result["results"] == []
    assert result["message"] == 'No results for "oracle" in scope "all".'


def test_search_all_is_case_insensitive_and_ordered(ctx: RegistryContext) -> None:
    _write(ctx.project_dir, ".docs/OVERVIEW.md", "Uses an Oracle.")
    _write(ctx.project_dir, ".audit/findings/H001.md", "oracle manipulation")
    _write(ctx.project_dir, ".audit/STATE.json", '{"skill": "sos", "note": "ORACLE"}')
    _write(ctx.project_dir, ".audit/notes.txt", "oracle")

    result = dispatch(ctx, SearchQuery(query="oracle"))

    assert [r["path"] for r in result["results"]] == [
        ".audit/STATE.json",
        ".audit/findings/H001.md",
        ".docs/OVERVIEW.md",
    ]
    assert result["total_files_matched"] == 3
    assert all(r["source"] == "project" for r in result["results"])


def test_search_docs_scope_excludes_audit(ctx: RegistryContext) -> None:
    _write(ctx.project_dir, ".docs/OVERVIEW.md", "oracle")
    _write(ctx.project_dir, ".audit/FINAL_REPORT.md", "oracle")

    result = dispatch(ctx, SearchQuery(query="oracle", scope="docs"))

    assert [r["path"] for r in result["results"]] == [".docs/OVERVIEW.md"]


def test_search_audit_scope_covers_bulwark(ctx: RegistryContext) -> None:
    _write(ctx.project_dir, ".bulwark/findings/OC001.md", "SSRF in webhook")

    result = dispatch(ctx, SearchQuery(query="ssrf", scope="audit"))

    assert result["results"][0]["path"] == ".bulwark/findings/OC001.md"
    assert result["results"][0]["matches"] == [{"line": 1, "excerpt": "SSRF in webhook"}]


def test_decisions_are_reported_once_in_all_scope(ctx: RegistryContext) -> None:
    _write(ctx.project_dir, ".docs/DECISIONS/001.md", "oracle choice")

    result = dispatch(ctx, SearchQuery(query="oracle"))

    assert [r["path"] for r in result["results"]] == [".docs/DECISIONS/001.md"]


def test_knowledge_scope_searches_registered_sources(ctx: RegistryContext) -> None:
    result = dispatch(ctx, SearchQuery(query="alpha", scope="knowledge"))

    assert [(r["source"], r["path"]) for r in result["results"]] == [
        ("demo", "alpha/a.md"),
        ("demo", "alpha/b.md"),
    ]


def test_unreadable_file_is_reported(ctx: RegistryContext) -> None:
    _write(ctx.project_dir, ".docs/OK.md", "oracle")
    (ctx.project_dir / ".docs" / "BAD.md").write_bytes(b"\xff\xfe")

    result = dispatch(ctx, SearchQuery(query="oracle", scope="docs"))

    assert [r["path"] for r in result["results"]] == [".docs/OK.md"]
    assert result["errors"] == [
        {"source": "project", "path": ".docs/BAD.md", "error": "Unreadable file"}
    ]


def test_knowledge_scope_limits_static_sources_to_allow_list(ctx: RegistryContext) -> None:
    _write(ctx.repo_dir, "docs/private.md", "Static but not listed")

    result = dispatch(ctx, SearchQuery(query="static", scope="knowledge"))

    assert [(r["source"], r["path"]) for r in result["results"]] == [("static", "A.md")]


def test_permission_denied_file_does_not_fail_the_search(
    ctx: RegistryContext, monkeypatch: pytest.MonkeyPatch
) -> None:
    _write(ctx.project_dir, ".docs/OK.md", "oracle")
    _write(ctx.project_dir, ".docs/BAD.md", "oracle")
    original_read_text = SandboxedRoot.read_text

    def _read_text(self: SandboxedRoot, relative_path: str) -> str:
        if relative_path.endswith("BAD.md"):
            raise PermissionError(13, "Permission denied", relative_path)
        return original_read_text(self, relative_path)

    monkeypatch.setattr(SandboxedRoot, "read_text", _read_text)

    result = dispatch(ctx, SearchQuery(query="oracle", scope="docs"))

    assert [r["path"] for r in result["results"]] == [".docs/OK.md"]
    assert result["errors"] == [
        {"source": "project", "path": ".docs/BAD.md", "error": "Unreadable file"}
    ]


def test_symlink_outside_project_is_not_searched(
    ctx: RegistryContext, tmp_path: Path
) -> None:
    outside = tmp_path / "outside.md"
    outside.write_text("oracle secret", encoding="utf-8")
    (ctx.project_dir / ".docs").mkdir()
    (ctx.project_dir / ".docs" / "link.md").symlink_to(outside)

    result = dispatch(ctx, SearchQuery(query="oracle", scope="docs"))

    assert result["results"] == []
    assert "errors" not in result
