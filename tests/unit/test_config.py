"""Tests for environment-based configuration."""

from pathlib import Path

import pytest

from svk_registry.config import RegistryConfig


def test_defaults(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("SVK_PROJECT_DIR", raising=False)
    monkeypatch.delenv("SVK_REPO_DIR", raising=False)
    monkeypatch.delenv("SVK_DEBUG", raising=False)
    monkeypatch.chdir(tmp_path)

    config = RegistryConfig.from_env()

    assert config.project_dir == tmp_path.absolute()
    assert config.repo_dir == config.project_dir
    assert config.debug is False


def test_environment_values(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("SVK_PROJECT_DIR", str(tmp_path / "project"))
    monkeypatch.setenv("SVK_REPO_DIR", str(tmp_path / "repo"))
    monkeypatch.setenv("SVK_DEBUG", "TRUE")

    config = RegistryConfig.from_env()

    assert config.project_dir == tmp_path / "project"
    assert config.repo_dir == tmp_path / "repo"
    assert config.debug is True


def test_overrides_take_precedence(tmp_path: Path) -> None:
    config = RegistryConfig(project_dir=tmp_path / "a", repo_dir=tmp_path / "a", debug=False)

    overridden = config.with_overrides(project_dir=tmp_path / "b", debug=True)

    assert overridden.project_dir == tmp_path / "b"
    assert overridden.repo_dir == tmp_path / "a"
    assert overridden.debug is True
