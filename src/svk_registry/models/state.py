"""Producer state records discovered in the project tree."""

from dataclasses import dataclass
from typing import Any

# Field every producer state file must carry to be recognized
MARKER_FIELD = "skill"


@dataclass(frozen=True)
class ProducerState:
    """One producer's STATE.json, keyed by its marker field.

    Only the marker is interpreted here; everything else stays in ``state``
    as the producer wrote it.
    """

    skill: str
    dir: str  # Hidden directory name relative to the project root
    state: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {"skill": self.skill, "dir": self.dir, "state": self.state}
