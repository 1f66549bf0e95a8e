"""Convention-based discovery of producer state in a project tree.

Producers announce themselves by writing ``.<something>/STATE.json`` with a
``skill`` field. The scanner only discovers; a state file that cannot be read
or lacks the marker is not an SVK artifact and is skipped without complaint.
"""

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from svk_registry.io.sandbox import SandboxedRoot
from svk_registry.io.tree import list_subdirectories
from svk_registry.models.state import MARKER_FIELD, ProducerState

logger = logging.getLogger(__name__)

STATE_FILENAME = "STATE.json"
HISTORY_DIRS = (".audit-history", ".bulwark-history")


def _load_state(sandbox: SandboxedRoot, dir_name: str) -> ProducerState | None:
    state_path = f"{dir_name}/{STATE_FILENAME}"
    try:
        raw = sandbox.read_text(state_path)
    except (OSError, ValueError):
        # Not a readable UTF-8 file inside the project
        return None

    try:
        state = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.debug("Skipping malformed %s: %s", state_path, e)
        return None

    if not isinstance(state, dict):
        logger.debug("Skipping %s: not a JSON object", state_path)
        return None

    skill = state.get(MARKER_FIELD)
    if not isinstance(skill, str) or not skill:
        logger.debug("Skipping %s: no %r marker", state_path, MARKER_FIELD)
        return None

    return ProducerState(skill=skill, dir=dir_name, state=state)


def scan_producer_states(project_dir: Path) -> list[ProducerState]:
    """Find every hidden top-level directory holding a recognizable STATE.json.

    Args:
        project_dir: Project root to scan (may not exist)

    Returns:
        One ProducerState per recognized directory, sorted by directory name
    """
    sandbox = SandboxedRoot(project_dir)
    states: list[ProducerState] = []
    for dir_name in list_subdirectories(project_dir):
        if not dir_name.startswith("."):
            continue
        state = _load_state(sandbox, dir_name)
        if state is not None:
            states.append(state)
    return states


def count_history_entries(project_dir: Path, history_dirs: Iterable[str] = HISTORY_DIRS) -> int:
    """Count archived runs: subdirectories across all history roots."""
    return sum(len(list_subdirectories(project_dir / name)) for name in history_dirs)
