"""Converge - declarative timezone management for a host.

A run reads the node's requested timezone, checks it against the zoneinfo
tree, points /etc/localtime at it and restarts dependent services once
at the end of the run:
- Send desired state, not individual commands
- Unknown timezones abort the run before anything changes
- Restarts are delayed and coalesced

Usage:
    from ey_core.converge import ConvergeEngine, ExecuteOptions

    engine = ConvergeEngine()
    result = engine.run({
        "engineyard": {"environment": {"timezone": "America/Chicago"}},
        "dna": {"instance_role": "app"},
    }, ExecuteOptions(dry_run=True))
"""

from .engine import ConvergeEngine
from .schema import (
    TimezoneRequest,
    TimezonePlan,
    LinkChange,
    ChangeType,
    Notification,
    ServiceAction,
    ExecuteOptions,
    RunResult,
)
from .parser import RequestParser, ParseError
from .validator import TimezoneValidator, TimezoneNotRecognized, zone_path
from .planner import TimezonePlanner, read_current_target, summarize_plan
from .notifications import NotificationQueue, FlushResult
from .executor import LinkExecutor, replace_symlink

__all__ = [
    # Main engine
    "ConvergeEngine",
    # Schema classes
    "TimezoneRequest",
    "TimezonePlan",
    "LinkChange",
    "ChangeType",
    "Notification",
    "ServiceAction",
    "ExecuteOptions",
    "RunResult",
    # Parser
    "RequestParser",
    "ParseError",
    # Components (for advanced use)
    "TimezoneValidator",
    "TimezoneNotRecognized",
    "zone_path",
    "TimezonePlanner",
    "read_current_target",
    "summarize_plan",
    "NotificationQueue",
    "FlushResult",
    "LinkExecutor",
    "replace_symlink",
]
