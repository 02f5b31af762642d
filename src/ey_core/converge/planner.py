"""Decide what the timezone linker needs to do.

Planning is pure: given the request and the link's current target it
returns the link change and notifications, touching nothing on disk.
"""
import os
from typing import Optional

from ..config.settings import TimezoneSettings
from .schema import (
    TimezoneRequest,
    TimezonePlan,
    LinkChange,
    ChangeType,
    Notification,
    ServiceAction,
)
from .validator import zone_path


def read_current_target(path: str) -> Optional[str]:
    """
    Read where ``path`` currently points.

    Returns:
        None if nothing exists at ``path``, the normalised link target for
        a symlink, or ``path`` itself for a regular file.
    """
    if os.path.islink(path):
        target = os.readlink(path)
        if not os.path.isabs(target):
            target = os.path.join(os.path.dirname(path), target)
        return os.path.normpath(target)

    if os.path.lexists(path):
        return path

    return None


class TimezonePlanner:
    """Compute the plan for a validated timezone request."""

    def __init__(self, settings: TimezoneSettings):
        self.settings = settings

    def plan(
        self,
        request: TimezoneRequest,
        current_target: Optional[str]
    ) -> TimezonePlan:
        """
        Plan the link change and notifications for a request.

        An empty zone yields an empty plan: the current link, whatever it
        is, is left in place.

        Args:
            request: Validated timezone request
            current_target: Result of read_current_target() for the link

        Returns:
            TimezonePlan, empty if the link already matches
        """
        if not request.has_zone:
            return TimezonePlan()

        target = zone_path(self.settings.zonepath, request.zone)
        if current_target == target:
            return TimezonePlan()

        change = LinkChange(
            path=self.settings.localtime_path,
            target=target,
            change_type=ChangeType.CREATE if current_target is None else ChangeType.MODIFY,
            current_target=current_target,
        )

        return TimezonePlan(
            link=change,
            notifications=self.notifications_for(request.role),
        )

    def notifications_for(self, role: Optional[str]) -> list[Notification]:
        """Services to restart once the link changes."""
        notifications = [
            Notification(self.settings.cron_service, ServiceAction.RESTART),
            Notification(self.settings.syslog_service, ServiceAction.RESTART),
        ]
        if self.settings.has_web_service(role):
            notifications.append(
                Notification(self.settings.web_service, ServiceAction.RESTART)
            )
        return notifications


def summarize_plan(plan: TimezonePlan) -> str:
    """
    Create a human-readable summary of a plan.

    Useful for dry-run output and logging.
    """
    if plan.no_change:
        return "No changes needed - timezone link already matches"

    link = plan.link
    lines = []

    if link.change_type == ChangeType.CREATE:
        lines.append(f"  [+] Create link {link.path}")
    else:
        lines.append(f"  [~] Relink {link.path}")
        lines.append(f"      (was: {link.current_target})")
    lines.append(f"      Target: {link.target}")

    if plan.notifications:
        lines.append("")
        lines.append("Delayed notifications:")
        for notification in plan.notifications:
            lines.append(f"  [*] {notification}")

    return "\n".join(lines)
