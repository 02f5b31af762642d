"""Executor for applying a timezone plan to the host.

Relinks the localtime file and queues the plan's delayed notifications.
"""
import logging
import os
from typing import Optional

from ..utils.audit_log import log_change, setup_audit_logging
from ..utils.logging_config import timed_section
from .notifications import NotificationQueue
from .schema import (
    TimezonePlan,
    LinkChange,
    ExecuteOptions,
)

logger = logging.getLogger(__name__)


def replace_symlink(path: str, target: str) -> None:
    """Point ``path`` at ``target``, replacing whatever is there atomically."""
    tmp_path = f"{path}.ey-core.tmp"
    if os.path.lexists(tmp_path):
        os.unlink(tmp_path)

    os.symlink(target, tmp_path)
    try:
        os.replace(tmp_path, path)
    except OSError:
        os.unlink(tmp_path)
        raise


class LinkExecutor:
    """Apply timezone plans."""

    def __init__(self, audit_log_path: Optional[str] = None):
        """
        Initialize executor.

        Args:
            audit_log_path: Path to audit log file (optional)
        """
        self.audit_log_path = audit_log_path
        if audit_log_path:
            setup_audit_logging(audit_log_path)

    def apply(
        self,
        plan: TimezonePlan,
        queue: NotificationQueue,
        options: ExecuteOptions
    ) -> list[str]:
        """
        Apply a plan and queue its notifications.

        Notifications are only queued when the link actually changes; in
        dry-run mode they are queued so the preview lists them, but the
        link is left alone.

        Args:
            plan: Plan from TimezonePlanner
            queue: Delayed notification queue of the current run
            options: Execution options (dry_run, etc.)

        Returns:
            Human-readable descriptions of the changes made

        Raises:
            OSError: If the link could not be replaced
        """
        if plan.no_change:
            logger.info("Timezone link up to date")
            return []

        link = plan.link
        source = f"link[{link.path}]"

        if options.dry_run:
            logger.info(f"[DRY-RUN] Would link {link.path} -> {link.target}")
            self._audit(link, options, success=True)
            changes = [f"[PREVIEW] {link.describe()}"]
        else:
            self._relink(link, options)
            changes = [link.describe()]

        for notification in plan.notifications:
            queue.add(notification, source=source)

        return changes

    def _relink(self, link: LinkChange, options: ExecuteOptions) -> None:
        logger.info(f"Linking {link.path} -> {link.target}")
        try:
            with timed_section("relink", target=link.path, zone_file=link.target):
                replace_symlink(link.path, link.target)
        except OSError as e:
            logger.error(f"Failed to link {link.path}: {e}")
            self._audit(link, options, success=False, error=str(e))
            raise

        self._audit(link, options, success=True)

    def _audit(
        self,
        link: LinkChange,
        options: ExecuteOptions,
        success: bool,
        error: Optional[str] = None
    ) -> None:
        log_change(
            path=link.path,
            operation=f"link_{link.change_type.value}",
            success=success,
            before=link.current_target,
            after=link.target,
            error=error,
            dry_run=options.dry_run,
            context=options.audit_context,
            user=options.user,
        )
