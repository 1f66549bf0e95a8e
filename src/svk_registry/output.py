"""Output routing for CLI commands.

Machine-readable data goes to stdout; anything meant for a human goes to
stderr so JSON consumers never see it.
"""

import json
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any

import click


def user_output(message: str) -> None:
    """Print a human-facing message to stderr."""
    click.echo(message, err=True)


def machine_output(message: str) -> None:
    """Print machine-readable output to stdout."""
    click.echo(message)


def _serialize_for_json(obj: Any) -> Any:
    """Recursively convert Paths and dataclasses in plain dict structures."""
    if isinstance(obj, Path):
        return str(obj)
    if is_dataclass(obj) and not isinstance(obj, type):
        return _serialize_for_json(asdict(obj))
    if isinstance(obj, dict):
        return {key: _serialize_for_json(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_serialize_for_json(item) for item in obj]
    return obj


def emit_json(data: dict[str, Any]) -> None:
    """Write ``data`` to stdout as indented JSON."""
    machine_output(json.dumps(_serialize_for_json(data), indent=2, ensure_ascii=False))
