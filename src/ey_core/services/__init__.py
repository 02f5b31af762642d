"""Service control backends for delayed notifications."""
from .base import ServiceController, ServiceControlError, ServiceAction
from .systemd import CommandServiceController, SystemdController, SysVController

__all__ = [
    "ServiceController",
    "ServiceControlError",
    "ServiceAction",
    "CommandServiceController",
    "SystemdController",
    "SysVController",
]

# Controller type registry
CONTROLLER_TYPES = {
    "systemd": SystemdController,
    "sysv": SysVController,
}


def create_controller(kind: str = "systemd", **kwargs) -> ServiceController:
    """Factory function to create service controllers."""
    kind = kind.lower()
    if kind not in CONTROLLER_TYPES:
        raise ValueError(f"Unknown service controller: {kind}")

    return CONTROLLER_TYPES[kind](**kwargs)
