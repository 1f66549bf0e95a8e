from svk_registry.integrations.time.abc import Time
from svk_registry.integrations.time.real import RealTime

__all__ = [
    "RealTime",
    "Time",
]
