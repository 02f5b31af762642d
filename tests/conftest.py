"""Shared fixtures: a fake zoneinfo tree and a recording service controller."""
import os

import pytest

from ey_core.config.settings import TimezoneSettings
from ey_core.services.base import ServiceController, ServiceControlError


class RecordingController(ServiceController):
    """Service controller that records restarts instead of running them."""

    name = "recording"

    def __init__(self, failing=()):
        self.restarted = []
        self.failing = set(failing)

    def restart(self, service):
        if service in self.failing:
            raise ServiceControlError(service, "restart", "unit not found")
        self.restarted.append(service)


@pytest.fixture
def zoneinfo(tmp_path):
    """Minimal zoneinfo tree with a couple of zones and an alias."""
    root = tmp_path / "zoneinfo"
    (root / "America").mkdir(parents=True)
    (root / "US").mkdir()
    (root / "America" / "Chicago").write_bytes(b"TZif2-chicago")
    (root / "America" / "Los_Angeles").write_bytes(b"TZif2-la")
    (root / "UTC").write_bytes(b"TZif2-utc")
    os.symlink("../America/Chicago", root / "US" / "Central")
    return root


@pytest.fixture
def localtime(tmp_path):
    """Path standing in for /etc/localtime (not created)."""
    etc = tmp_path / "etc"
    etc.mkdir()
    return etc / "localtime"


@pytest.fixture
def settings(zoneinfo, localtime):
    return TimezoneSettings(
        zonepath=str(zoneinfo) + "/",
        localtime_path=str(localtime),
    )


@pytest.fixture
def controller():
    return RecordingController()


@pytest.fixture
def make_node(zoneinfo, localtime):
    """Build a node dict pointing the recipe at the fake tree."""
    def _make(zone=None, role=None):
        node = {
            "engineyard": {"environment": {}},
            "dna": {},
            "timezones": {
                "zonepath": str(zoneinfo) + "/",
                "localtime_path": str(localtime),
            },
        }
        if zone is not None:
            node["engineyard"]["environment"]["timezone"] = zone
        if role is not None:
            node["dna"]["instance_role"] = role
        return node

    return _make
