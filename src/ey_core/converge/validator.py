"""Pre-flight validation for the timezone request.

Catches unknown timezones before anything on disk is touched.
"""
import logging
import os

from ..config.settings import TimezoneSettings
from .schema import TimezoneRequest

logger = logging.getLogger(__name__)


class TimezoneNotRecognized(Exception):
    """Requested timezone has no zoneinfo entry. Aborts the whole run."""

    def __init__(self, zone: str):
        self.zone = zone
        super().__init__(f"Timezone '{zone}' not recognized.")


def zone_path(zonepath: str, zone: str) -> str:
    """Join a zone name onto the zoneinfo root.

    Leading slashes on the zone are dropped so the result always lives
    under ``zonepath``, and duplicate separators are collapsed.
    """
    return os.path.normpath(os.path.join(zonepath, zone.lstrip("/")))


class TimezoneValidator:
    """Validate a timezone request against the installed zoneinfo tree."""

    def __init__(self, settings: TimezoneSettings):
        self.settings = settings

    def zone_path(self, zone: str) -> str:
        return zone_path(self.settings.zonepath, zone)

    def is_known(self, zone: str) -> bool:
        """Check if ``zone`` names a timezone-data file under zonepath."""
        # A trailing slash names a directory, never a zone file
        if not zone or zone.endswith("/"):
            return False

        root = os.path.normpath(self.settings.zonepath)
        path = self.zone_path(zone)
        if not path.startswith(root + os.sep):
            return False

        # Aliases are often symlinks, isfile follows them
        return os.path.isfile(path)

    def validate(self, request: TimezoneRequest) -> None:
        """
        Validate a timezone request.

        An empty zone means "no preference" and always passes.

        Raises:
            TimezoneNotRecognized: If a non-empty zone has no zoneinfo entry
        """
        if not request.has_zone:
            logger.debug("No timezone requested, leaving system default")
            return

        if not self.is_known(request.zone):
            logger.error(
                f"Timezone '{request.zone}' not found under {self.settings.zonepath}"
            )
            raise TimezoneNotRecognized(request.zone)
