"""Node attributes loaded from YAML (or dna.json) configuration."""
import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml

from .settings import TimezoneSettings

logger = logging.getLogger(__name__)


class NodeAttributes:
    """Per-run node data: environment settings and instance metadata.

    Expected layout (or the same structure as ``dna.json``):

    ```yaml
    engineyard:
      environment:
        timezone: America/Chicago
    dna:
      instance_role: app_master
    timezones:            # optional overrides
      web_service: nginx
    ```
    """

    def __init__(self, data: Optional[dict[str, Any]] = None, source: Optional[str] = None):
        self._data: dict[str, Any] = data or {}
        self.source = source

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "NodeAttributes":
        """Load node attributes from a file, searching defaults if needed.

        ``*.json`` files (Chef's dna.json) are read with the json module,
        anything else as YAML.

        Raises:
            FileNotFoundError: If no node file exists
            ValueError: If the file is malformed or not a mapping
        """
        path = str(config_path or cls._find_config())
        with open(path) as f:
            try:
                if path.endswith(".json"):
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
            except (json.JSONDecodeError, yaml.YAMLError) as e:
                raise ValueError(f"Invalid node file {path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Node file {path} must contain a mapping")

        logger.debug(f"Loaded node attributes from {path}")
        return cls(data, source=path)

    @staticmethod
    def _find_config() -> str:
        """Find the node file."""
        env_path = os.environ.get("EY_CORE_NODE_FILE")
        if env_path:
            return env_path

        search_paths = [
            Path.cwd() / "configs" / "node.yaml",
            Path.cwd() / "node.yaml",
            Path.home() / ".config" / "ey-core" / "node.yaml",
            Path("/etc/chef/dna.json"),
        ]

        for path in search_paths:
            if path.exists():
                return str(path)

        raise FileNotFoundError(
            "Could not find node attributes. Create one in ./configs/node.yaml"
        )

    def get(self, *keys: str, default: Any = None) -> Any:
        """Look up a nested attribute, e.g. ``get("dna", "instance_role")``."""
        value: Any = self._data
        for key in keys:
            if not isinstance(value, dict) or key not in value:
                return default
            value = value[key]
        return value

    @property
    def timezone(self) -> Any:
        """Raw timezone value from the environment config."""
        return self.get("engineyard", "environment", "timezone")

    @property
    def instance_role(self) -> Optional[str]:
        return self.get("dna", "instance_role")

    @property
    def settings(self) -> TimezoneSettings:
        return TimezoneSettings.from_dict(self.get("timezones"))
