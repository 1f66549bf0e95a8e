"""Tests for convention-based producer state discovery."""

import json
from pathlib import Path

from svk_registry.scanner import count_history_entries, scan_producer_states


def _write_state(project_dir: Path, dir_name: str, content: str) -> None:
    state_dir = project_dir / dir_name
    state_dir.mkdir(parents=True, exist_ok=True)
    (state_dir / "STATE.json").write_text(content, encoding="utf-8")


def test_empty_project_has_no_states(project_dir: Path) -> None:
    assert scan_producer_states(project_dir) == []
    assert count_history_entries(project_dir) == 0


def test_missing_project_dir_has_no_states(tmp_path: Path) -> None:
    assert scan_producer_states(tmp_path / "missing") == []


def test_unknown_producer_is_discovered_by_convention(project_dir: Path) -> None:
    state = {"skill": "widget", "phase": "draft"}
    _write_state(project_dir, ".widget", json.dumps(state))

    states = scan_producer_states(project_dir)

    assert [s.to_dict() for s in states] == [{"skill": "widget", "dir": ".widget", "state": state}]


def test_states_are_sorted_by_directory(project_dir: Path) -> None:
    _write_state(project_dir, ".zeta", json.dumps({"skill": "z"}))
    _write_state(project_dir, ".audit", json.dumps({"skill": "stronghold-of-security"}))

    assert [s.dir for s in scan_producer_states(project_dir)] == [".audit", ".zeta"]


def test_unrecognizable_state_files_are_skipped(project_dir: Path) -> None:
    _write_state(project_dir, ".malformed", "{not json")
    _write_state(project_dir, ".list", "[1, 2]")
    _write_state(project_dir, ".nomarker", json.dumps({"phase": "scan"}))
    _write_state(project_dir, ".emptymarker", json.dumps({"skill": ""}))
    _write_state(project_dir, ".numbermarker", json.dumps({"skill": 3}))
    (project_dir / ".nostate").mkdir()
    _write_state(project_dir, ".good", json.dumps({"skill": "good"}))

    assert [s.skill for s in scan_producer_states(project_dir)] == ["good"]


def test_visible_directories_are_ignored(project_dir: Path) -> None:
    _write_state(project_dir, "visible", json.dumps({"skill": "visible"}))

    assert scan_producer_states(project_dir) == []


def test_undecodable_state_file_is_skipped(project_dir: Path) -> None:
    (project_dir / ".binary").mkdir()
    (project_dir / ".binary" / "STATE.json").write_bytes(b"\xff\xfe\x00garbage")

    assert scan_producer_states(project_dir) == []


def test_history_counts_both_archives(project_dir: Path) -> None:
    (project_dir / ".audit-history" / "2025-01-01").mkdir(parents=True)
    (project_dir / ".audit-history" / "2025-02-01").mkdir()
    (project_dir / ".audit-history" / "notes.md").write_text("x", encoding="utf-8")
    (project_dir / ".bulwark-history" / "2025-03-01").mkdir(parents=True)

    assert count_history_entries(project_dir) == 3
