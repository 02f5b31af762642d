"""Convergence engine - orchestrates a full run of the timezone recipe.

Provides a single entry point for:
1. Parsing the timezone request from node attributes
2. Validating it against the zoneinfo tree (fatal on failure)
3. Planning the link change against the current link
4. Applying the link change
5. Firing delayed notifications once at the end of the run
"""
import logging
from typing import Any, Optional, Union

from ..config.node import NodeAttributes
from ..config.settings import TimezoneSettings
from ..services import ServiceController, create_controller
from ..utils.logging_config import timed_section
from .schema import (
    TimezoneRequest,
    TimezonePlan,
    ExecuteOptions,
    RunResult,
)
from .parser import RequestParser
from .validator import TimezoneValidator
from .planner import TimezonePlanner, read_current_target, summarize_plan
from .executor import LinkExecutor
from .notifications import NotificationQueue

logger = logging.getLogger(__name__)

NodeInput = Union[NodeAttributes, dict[str, Any]]


class ConvergeEngine:
    """
    Converge the host's timezone to the node's requested zone.

    Usage:
        engine = ConvergeEngine(controller=SystemdController())
        result = engine.run(NodeAttributes.load(), ExecuteOptions(dry_run=True))
    """

    def __init__(
        self,
        controller: Optional[ServiceController] = None,
        settings: Optional[TimezoneSettings] = None,
        audit_log_path: Optional[str] = None,
    ):
        """
        Initialize the engine.

        Args:
            controller: Service control backend (systemd if not given)
            settings: Recipe settings; taken from the node when not given
            audit_log_path: Path to audit log file (optional)
        """
        self._controller = controller
        self.settings = settings
        self.parser = RequestParser()
        self.executor = LinkExecutor(audit_log_path)

    @property
    def controller(self) -> ServiceController:
        if self._controller is None:
            self._controller = create_controller("systemd")
        return self._controller

    def run(
        self,
        node: NodeInput,
        options: Optional[ExecuteOptions] = None,
    ) -> RunResult:
        """
        Run the recipe once and fire delayed notifications.

        Args:
            node: Node attributes for this run
            options: Execution options

        Returns:
            RunResult; success is False if a delayed notification failed

        Raises:
            ParseError: If the node data is malformed
            TimezoneNotRecognized: If the requested zone does not exist
            OSError: If the link could not be written
        """
        options = options or ExecuteOptions()
        result = RunResult(dry_run=options.dry_run)
        queue = NotificationQueue()

        with timed_section("converge", target="timezones"):
            result.changes_made.extend(self.converge_timezone(node, queue, options))

        if len(queue):
            logger.info(f"Running {len(queue)} delayed notifications")
        controller = None if options.dry_run else self.controller
        flush = queue.flush(controller, dry_run=options.dry_run)

        result.notifications_fired = [str(n) for n in flush.fired]
        result.errors = [f"{n}: {error}" for n, error in flush.failed.items()]
        result.success = flush.success

        if not result.changes_made:
            result.changes_made = ["No changes needed - timezone already converged"]

        return result

    def converge_timezone(
        self,
        node: NodeInput,
        queue: NotificationQueue,
        options: ExecuteOptions,
    ) -> list[str]:
        """
        Converge the localtime link, queueing notifications on change.

        Can be called several times within one run; notifications share
        ``queue`` and so fire at most once each.
        """
        request, settings = self._prepare(node)
        plan = self.plan(request, settings)
        return self.executor.apply(plan, queue, options)

    def plan(self, request: TimezoneRequest, settings: TimezoneSettings) -> TimezonePlan:
        """Plan against the link as it currently is on disk."""
        current = read_current_target(settings.localtime_path)
        logger.debug(f"{settings.localtime_path} currently points at {current}")
        return TimezonePlanner(settings).plan(request, current)

    def preview(self, node: NodeInput) -> str:
        """
        Preview changes without applying.

        Returns human-readable plan summary.
        """
        request, settings = self._prepare(node)
        return summarize_plan(self.plan(request, settings))

    def _prepare(self, node: NodeInput) -> tuple[TimezoneRequest, TimezoneSettings]:
        if isinstance(node, dict):
            node = NodeAttributes(node)

        settings = self.settings or node.settings
        request = self.parser.parse(node)

        logger.info(
            f"Requested timezone: {request.zone or '(none)'}, "
            f"role: {request.role or '(none)'}"
        )
        TimezoneValidator(settings).validate(request)
        return request, settings
