"""Schema definitions for a convergence run.

Defines the timezone request, the plan produced from it and the run result.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..services.base import ServiceAction


class ChangeType(str, Enum):
    """Type of change to the localtime link."""
    CREATE = "create"
    MODIFY = "modify"
    NO_CHANGE = "no_change"


@dataclass(frozen=True)
class Notification:
    """A deferred trigger; identity is (service, action)."""
    service: str
    action: ServiceAction = ServiceAction.RESTART

    def __str__(self) -> str:
        return f"service[{self.service}]:{self.action.value}"


@dataclass
class TimezoneRequest:
    """Timezone and role read from node attributes."""
    zone: str = ""
    role: Optional[str] = None

    @property
    def has_zone(self) -> bool:
        return self.zone != ""


# --- Plan ---

@dataclass
class LinkChange:
    """A change to the localtime symlink."""
    path: str
    target: str
    change_type: ChangeType
    current_target: Optional[str] = None

    def describe(self) -> str:
        if self.change_type == ChangeType.CREATE:
            return f"Created link {self.path} -> {self.target}"
        return (
            f"Relinked {self.path} -> {self.target} "
            f"(was: {self.current_target})"
        )


@dataclass
class TimezonePlan:
    """Mutations and notifications decided for one timezone request."""
    link: Optional[LinkChange] = None
    notifications: list[Notification] = field(default_factory=list)

    @property
    def no_change(self) -> bool:
        """Check if there is nothing to do."""
        return self.link is None


# --- Execution ---

@dataclass
class ExecuteOptions:
    """Options for a convergence run."""
    dry_run: bool = False
    audit_context: str = ""
    user: Optional[str] = None


@dataclass
class RunResult:
    """Result of a convergence run."""
    success: bool = False
    dry_run: bool = False
    changes_made: list[str] = field(default_factory=list)
    notifications_fired: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "success": self.success,
            "dry_run": self.dry_run,
            "changes_made": self.changes_made,
            "notifications_fired": self.notifications_fired,
            "errors": self.errors,
        }

