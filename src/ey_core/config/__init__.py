"""Node attributes and recipe settings."""
from .settings import TimezoneSettings, DEFAULT_ZONEPATH, DEFAULT_LOCALTIME_PATH
from .node import NodeAttributes

__all__ = [
    "TimezoneSettings",
    "DEFAULT_ZONEPATH",
    "DEFAULT_LOCALTIME_PATH",
    "NodeAttributes",
]
