"""Tests for node attributes and recipe settings."""
import json

import pytest

from ey_core.config import NodeAttributes, TimezoneSettings, DEFAULT_ZONEPATH


class TestTimezoneSettings:
    """Tests for TimezoneSettings."""

    def test_defaults(self):
        settings = TimezoneSettings()

        assert settings.zonepath == DEFAULT_ZONEPATH == "/usr/share/zoneinfo/"
        assert settings.localtime_path == "/etc/localtime"
        assert settings.cron_service == "cron"
        assert settings.syslog_service == "syslog-ng"
        assert settings.web_service == "nginx"
        assert settings.web_roles == {"solo", "app", "app_master"}

    def test_from_dict_overrides(self):
        settings = TimezoneSettings.from_dict({
            "web_service": "apache2",
            "web_roles": ["app"],
            "unknown_key": True,
        })

        assert settings.web_service == "apache2"
        assert settings.has_web_service("app")
        assert not settings.has_web_service("solo")

    def test_from_empty_dict(self):
        assert TimezoneSettings.from_dict(None) == TimezoneSettings()

    def test_non_mapping_block_raises(self):
        """A scalar timezones block is rejected, not iterated."""
        with pytest.raises(ValueError) as exc:
            TimezoneSettings.from_dict("nginx")

        assert "must be a mapping" in str(exc.value)


class TestNodeAttributes:
    """Tests for NodeAttributes loading."""

    @pytest.fixture
    def node_file(self, tmp_path):
        """Create a temporary node file for testing."""
        path = tmp_path / "node.yaml"
        path.write_text("""
engineyard:
  environment:
    timezone: America/Los_Angeles
dna:
  instance_role: app_master
timezones:
  web_service: nginx-custom
""")
        return path

    def test_load_yaml(self, node_file):
        node = NodeAttributes.load(str(node_file))

        assert node.timezone == "America/Los_Angeles"
        assert node.instance_role == "app_master"
        assert node.settings.web_service == "nginx-custom"
        assert node.source == str(node_file)

    def test_load_dna_json(self, tmp_path):
        """dna.json documents load with the same layout."""
        path = tmp_path / "dna.json"
        path.write_text(json.dumps({
            "engineyard": {"environment": {"timezone": "UTC"}},
            "dna": {"instance_role": "util"},
        }))

        node = NodeAttributes.load(str(path))

        assert node.timezone == "UTC"
        assert node.instance_role == "util"

    def test_load_tab_indented_dna_json(self, tmp_path):
        """JSON files are parsed as JSON, so tab indentation is fine."""
        path = tmp_path / "dna.json"
        path.write_text(json.dumps({
            "engineyard": {"environment": {"timezone": "UTC"}},
            "dna": {"instance_role": "app"},
        }, indent="\t"))

        node = NodeAttributes.load(str(path))

        assert node.timezone == "UTC"
        assert node.instance_role == "app"

    def test_invalid_yaml_raises_value_error(self, tmp_path):
        path = tmp_path / "node.yaml"
        path.write_text("engineyard: [unclosed\n")

        with pytest.raises(ValueError) as exc:
            NodeAttributes.load(str(path))

        assert str(path) in str(exc.value)

    def test_invalid_json_raises_value_error(self, tmp_path):
        path = tmp_path / "dna.json"
        path.write_text('{"dna": ')

        with pytest.raises(ValueError):
            NodeAttributes.load(str(path))

    def test_missing_attributes(self):
        node = NodeAttributes({})

        assert node.timezone is None
        assert node.instance_role is None
        assert node.settings == TimezoneSettings()

    def test_get_through_non_mapping(self):
        node = NodeAttributes({"engineyard": "flat"})

        assert node.get("engineyard", "environment", default="x") == "x"

    def test_env_var_path(self, node_file, monkeypatch):
        monkeypatch.setenv("EY_CORE_NODE_FILE", str(node_file))

        assert NodeAttributes.load().timezone == "America/Los_Angeles"

    def test_search_cwd_configs(self, tmp_path, monkeypatch):
        monkeypatch.delenv("EY_CORE_NODE_FILE", raising=False)
        (tmp_path / "configs").mkdir()
        (tmp_path / "configs" / "node.yaml").write_text("dna:\n  instance_role: solo\n")
        monkeypatch.chdir(tmp_path)

        assert NodeAttributes.load().instance_role == "solo"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "node.yaml"
        path.write_text("")

        node = NodeAttributes.load(str(path))

        assert node.timezone is None
        assert node.instance_role is None

    def test_non_mapping_file_raises(self, tmp_path):
        path = tmp_path / "node.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ValueError):
            NodeAttributes.load(str(path))
