"""Tests for path-sandboxed file access."""

from pathlib import Path

import pytest

from svk_registry.io.sandbox import PathTraversalError, SandboxedRoot, normalize_relative_path


@pytest.mark.parametrize(
    "relative_path",
    [
        "",
        "/etc/passwd",
        "\\windows\\system32",
        "..",
        "../secret.md",
        "../../etc/passwd",
        "alpha/../../escape.md",
        "alpha/../a.md",
        "alpha\\..\\..\\escape.md",
        ".",
        "./",
    ],
)
def test_normalize_rejects_escaping_paths(relative_path: str) -> None:
    with pytest.raises(PathTraversalError):
        normalize_relative_path(relative_path)


@pytest.mark.parametrize(
    ("relative_path", "expected"),
    [
        ("a.md", "a.md"),
        ("alpha/a.md", "alpha/a.md"),
        ("./alpha//a.md", "alpha/a.md"),
        ("..hidden.md", "..hidden.md"),
    ],
)
def test_normalize_accepts_relative_paths(relative_path: str, expected: str) -> None:
    assert normalize_relative_path(relative_path) == expected


def test_traversal_error_message_is_uninformative() -> None:
    with pytest.raises(PathTraversalError) as exc_info:
        normalize_relative_path("../../etc/passwd")

    assert str(exc_info.value) == "Invalid path"
    assert isinstance(exc_info.value, ValueError)


def test_traversal_is_rejected_without_filesystem_access(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """A path with a .. segment must fail before anything touches the disk."""
    sandbox = SandboxedRoot(tmp_path)

    def _fail(*args: object, **kwargs: object) -> None:
        raise AssertionError("filesystem accessed")

    monkeypatch.setattr(Path, "resolve", _fail)
    monkeypatch.setattr(Path, "read_text", _fail)
    monkeypatch.setattr(Path, "is_file", _fail)

    with pytest.raises(PathTraversalError):
        sandbox.read_text("../../etc/passwd")


def test_read_text_returns_file_content(tmp_path: Path) -> None:
    (tmp_path / "alpha").mkdir()
    (tmp_path / "alpha" / "a.md").write_text("# A\nbody\n", encoding="utf-8")

    content = SandboxedRoot(tmp_path).read_text("alpha/a.md")

    assert content == (tmp_path / "alpha" / "a.md").read_text(encoding="utf-8")


def test_read_text_missing_file_raises_file_not_found(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        SandboxedRoot(tmp_path).read_text("missing.md")


def test_read_text_directory_raises_file_not_found(tmp_path: Path) -> None:
    (tmp_path / "alpha").mkdir()

    with pytest.raises(FileNotFoundError):
        SandboxedRoot(tmp_path).read_text("alpha")


def test_symlink_escaping_root_is_rejected(tmp_path: Path) -> None:
    root = tmp_path / "root"
    root.mkdir()
    outside = tmp_path / "secret.md"
    outside.write_text("secret", encoding="utf-8")
    (root / "link.md").symlink_to(outside)

    sandbox = SandboxedRoot(root)

    with pytest.raises(PathTraversalError):
        sandbox.read_text("link.md")
    assert sandbox.exists("link.md") is False


def test_prefix_sibling_directory_is_not_inside_root(tmp_path: Path) -> None:
    """``/base-other`` shares a string prefix with ``/base`` but is outside it."""
    root = tmp_path / "base"
    root.mkdir()
    sibling = tmp_path / "base-other"
    sibling.mkdir()
    (sibling / "x.md").write_text("x", encoding="utf-8")

    assert SandboxedRoot(root).contains(sibling / "x.md") is False


def test_root_itself_is_not_a_descendant(tmp_path: Path) -> None:
    assert SandboxedRoot(tmp_path).contains(tmp_path) is False


def test_relative_returns_posix_path(tmp_path: Path) -> None:
    (tmp_path / "a" / "b").mkdir(parents=True)
    target = tmp_path / "a" / "b" / "c.md"
    target.write_text("c", encoding="utf-8")

    assert SandboxedRoot(tmp_path).relative(target) == "a/b/c.md"


def test_relative_outside_root_raises(tmp_path: Path) -> None:
    root = tmp_path / "root"
    root.mkdir()

    with pytest.raises(PathTraversalError):
        SandboxedRoot(root).relative(tmp_path / "other.md")
