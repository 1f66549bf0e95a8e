"""Fake clock for testing.

FakeTime always returns the instant it was constructed with.
"""

from datetime import UTC, datetime

from svk_registry.integrations.time.abc import Time


class FakeTime(Time):
    """Frozen clock.

    This class has NO public setup methods. The instant is provided via
    constructor.
    """

    def __init__(self, now: datetime | None = None) -> None:
        """Create FakeTime.

        Args:
            now: Instant to report; defaults to 2025-01-01T00:00:00Z
        """
        self._now = now if now is not None else datetime(2025, 1, 1, tzinfo=UTC)

    def now(self) -> datetime:
        return self._now
