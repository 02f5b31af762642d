"""Base service control abstraction."""
from abc import ABC, abstractmethod
from enum import Enum


class ServiceAction(str, Enum):
    """Action a notification triggers on a service."""
    RESTART = "restart"


class ServiceControlError(Exception):
    """A service action failed."""

    def __init__(self, service: str, action: str, detail: str = ""):
        self.service = service
        self.action = action
        self.detail = detail
        message = f"Failed to {action} service '{service}'"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class ServiceController(ABC):
    """Abstract base class for service control backends."""

    name = "base"

    @abstractmethod
    def restart(self, service: str) -> None:
        """Restart a service.

        Raises:
            ServiceControlError: If the restart failed
        """
        pass

    def run(self, action: ServiceAction, service: str) -> None:
        """Dispatch a notification action to its handler."""
        if action == ServiceAction.RESTART:
            self.restart(service)
            return
        raise ServiceControlError(service, str(action), "unsupported action")
