"""Delayed notification queue for a convergence run.

Triggers are collected while the run converges and fired once each when
it ends, no matter how many times they were raised.
"""
import logging
from dataclasses import dataclass, field
from typing import Optional

from ..services.base import ServiceController
from .schema import Notification, ServiceAction

logger = logging.getLogger(__name__)


@dataclass
class FlushResult:
    """Outcome of firing the queued notifications."""
    fired: list[Notification] = field(default_factory=list)
    failed: dict[Notification, str] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return not self.failed


class NotificationQueue:
    """Coalescing queue of delayed notifications."""

    def __init__(self):
        # dict keeps first-notified order
        self._pending: dict[Notification, list[str]] = {}

    def notify(
        self,
        service: str,
        action: ServiceAction = ServiceAction.RESTART,
        source: Optional[str] = None,
    ) -> Notification:
        """Queue a notification; repeats coalesce into the first one."""
        notification = Notification(service, action)
        return self.add(notification, source)

    def add(self, notification: Notification, source: Optional[str] = None) -> Notification:
        sources = self._pending.setdefault(notification, [])
        if source:
            sources.append(source)
        logger.debug(f"Queued {notification} (notified {len(sources) or 1}x)")
        return notification

    @property
    def pending(self) -> list[Notification]:
        return list(self._pending)

    def sources(self, notification: Notification) -> list[str]:
        """Resources that raised a notification."""
        return list(self._pending.get(notification, []))

    def __len__(self) -> int:
        return len(self._pending)

    def __contains__(self, notification: object) -> bool:
        return notification in self._pending

    def flush(self, controller: Optional[ServiceController], dry_run: bool = False) -> FlushResult:
        """
        Fire every queued notification once and empty the queue.

        A failed restart is recorded and the remaining notifications
        still fire.

        Args:
            controller: Service control backend (unused in dry-run)
            dry_run: Log what would fire without calling the controller

        Returns:
            FlushResult with fired and failed notifications
        """
        result = FlushResult()
        pending = self.pending
        self._pending.clear()

        for notification in pending:
            if dry_run:
                logger.info(f"[DRY-RUN] Would run {notification}")
                result.fired.append(notification)
                continue

            logger.info(f"Running delayed notification {notification}")
            try:
                controller.run(notification.action, notification.service)
            except Exception as e:
                logger.error(f"{notification} failed: {e}")
                result.failed[notification] = str(e)
                continue
            result.fired.append(notification)

        return result
