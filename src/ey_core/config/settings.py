"""Settings for the timezone recipe."""
from dataclasses import dataclass, field
from typing import Any, Optional


DEFAULT_ZONEPATH = "/usr/share/zoneinfo/"
DEFAULT_LOCALTIME_PATH = "/etc/localtime"

# Instance roles that run nginx
DEFAULT_WEB_ROLES = frozenset({"solo", "app", "app_master"})


@dataclass
class TimezoneSettings:
    """Paths and service names used by the timezone linker.

    Defaults match a stock Engine Yard instance; any field can be
    overridden from the ``timezones:`` block of the node file.
    """
    zonepath: str = DEFAULT_ZONEPATH
    localtime_path: str = DEFAULT_LOCALTIME_PATH
    cron_service: str = "cron"
    syslog_service: str = "syslog-ng"
    web_service: str = "nginx"
    web_roles: frozenset[str] = field(default_factory=lambda: DEFAULT_WEB_ROLES)

    def has_web_service(self, role: Optional[str]) -> bool:
        """Check if an instance role runs the web server."""
        return role in self.web_roles

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "TimezoneSettings":
        """Build settings from a config block, ignoring unknown keys.

        Raises:
            ValueError: If the block is not a mapping
        """
        if not data:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(
                f"Invalid timezones settings {data!r}: must be a mapping"
            )

        known = {
            key: value for key, value in data.items()
            if key in cls.__dataclass_fields__
        }
        if "web_roles" in known:
            roles = known["web_roles"]
            if isinstance(roles, str):
                roles = [roles]
            known["web_roles"] = frozenset(roles or [])
        return cls(**known)
