"""Real clock backed by datetime.now()."""

from datetime import UTC, datetime

from svk_registry.integrations.time.abc import Time


class RealTime(Time):
    """Production clock."""

    def now(self) -> datetime:
        return datetime.now(UTC)
