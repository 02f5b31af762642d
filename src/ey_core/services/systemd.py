"""Service control through the init system's command line tools."""
import logging
import subprocess
from abc import abstractmethod

from ..utils.logging_config import timed
from ..utils.retry import with_retry
from .base import ServiceController, ServiceControlError

logger = logging.getLogger(__name__)

# Seconds to wait for a single restart
DEFAULT_TIMEOUT = 60


class CommandServiceController(ServiceController):
    """Run a service command, retrying transient failures."""

    name = "command"

    def __init__(self, timeout: float = DEFAULT_TIMEOUT):
        self.timeout = timeout

    @abstractmethod
    def command(self, action: str, service: str) -> list[str]:
        """Build the command line for ``action`` on ``service``."""
        pass

    @timed("service_restart")
    def restart(self, service: str) -> None:
        self._execute("restart", service)

    @with_retry(max_attempts=3, min_wait=1, max_wait=10)
    def _execute(self, action: str, service: str) -> None:
        cmd = self.command(action, service)
        logger.debug(f"Running: {' '.join(cmd)}")

        proc = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=self.timeout,
            check=False,
        )

        if proc.returncode != 0:
            detail = (proc.stderr or proc.stdout).strip()
            raise ServiceControlError(
                service, action, detail or f"exit status {proc.returncode}"
            )

        logger.info(f"Service {service}: {action} OK")


class SystemdController(CommandServiceController):
    """systemctl based control."""

    name = "systemd"

    def command(self, action: str, service: str) -> list[str]:
        return ["systemctl", action, service]


class SysVController(CommandServiceController):
    """``service`` wrapper based control for non-systemd hosts."""

    name = "sysv"

    def command(self, action: str, service: str) -> list[str]:
        return ["service", service, action]
