"""Cookbook metadata and dependency manifest.

The composition engine resolves and orders these; nothing here validates
versions or detects cycles.
"""
from dataclasses import dataclass, field


@dataclass(frozen=True)
class CookbookMetadata:
    """Static metadata for a cookbook."""
    name: str
    maintainer: str = ""
    depends: tuple[str, ...] = field(default_factory=tuple)

    def depends_on(self, name: str) -> bool:
        """Check if the cookbook declares a dependency on ``name``."""
        return name in self.depends

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "maintainer": self.maintainer,
            "depends": list(self.depends),
        }


METADATA = CookbookMetadata(
    name="ey-core",
    maintainer="Engine Yard",
    depends=(
        "logrotate",
        "run-one",
        "sysctl",
        "ey-instance-api",
        "ntp",
        "openssl",
        "security_updates",
        "ey-hosts",
        "timezones",
        "syslog-ng",
        "prechef",
        "unattended-upgrades",
    ),
)

# Previous dependency set, inactive:
#   ey-lib, ntp, emerge, ephemeraldisk, ey-dynamic, ey-instance-api, lockrun,
#   logrotate, openssl, prechef, security_updates, sysctl, sysklogd,
#   timezones, ey-hosts
