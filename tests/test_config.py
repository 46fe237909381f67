"""
Tests for configuration loading.
"""

import json
from datetime import timedelta

import pytest
import yaml

from storekit import StorageManagerOptions
from storekit.util import get_config_value, parse_duration_ms, parse_duration_string


class TestDurations:
    """Test duration parsing"""

    @pytest.mark.parametrize("text,expected", [
        ("250ms", timedelta(milliseconds=250)),
        ("30s", timedelta(seconds=30)),
        ("5m", timedelta(minutes=5)),
        ("2h", timedelta(hours=2)),
        ("1d", timedelta(days=1)),
        (" 1.5S ", timedelta(seconds=1.5)),
    ])
    def test_parse_duration_string(self, text, expected):
        assert parse_duration_string(text) == expected

    @pytest.mark.parametrize("value,expected", [
        (1500, 1500),
        (2.9, 2),
        ("1500", 1500),
        ("5m", 300000),
        (timedelta(seconds=3), 3000),
    ])
    def test_parse_duration_ms(self, value, expected):
        assert parse_duration_ms(value) == expected

    @pytest.mark.parametrize("value", ["soon", "5 weeks", "", True])
    def test_invalid_durations(self, value):
        with pytest.raises(ValueError):
            parse_duration_ms(value)


class TestEnvironment:
    """Test environment-driven configuration"""

    def test_get_config_value_casts(self, monkeypatch):
        monkeypatch.setenv("STOREKIT_FLAG", "yes")
        monkeypatch.setenv("STOREKIT_COUNT", "not-a-number")

        assert get_config_value("flag", False, bool) is True
        assert get_config_value("count", 7, int) == 7
        assert get_config_value("absent", "fallback") == "fallback"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("APP_DEFAULT_ADAPTER", "session")
        monkeypatch.setenv("APP_DEFAULT_EXPIRES", "30s")
        monkeypatch.setenv("APP_DEFAULT_ENCRYPT", "true")
        monkeypatch.setenv("APP_NAMESPACE", "myapp")

        options = StorageManagerOptions.from_env("APP_")

        assert options.default_adapter == "session"
        assert options.default_expires == 30000
        assert options.default_encrypt is True
        assert options.namespace == "myapp"

    def test_from_env_defaults(self, monkeypatch):
        for name in ("DEFAULT_ADAPTER", "DEFAULT_EXPIRES", "DEFAULT_ENCRYPT", "NAMESPACE"):
            monkeypatch.delenv(f"UNSET_{name}", raising=False)

        options = StorageManagerOptions.from_env("UNSET_")

        assert options == StorageManagerOptions()


class TestOptions:
    """Test StorageManagerOptions construction and validation"""

    def test_defaults(self):
        options = StorageManagerOptions()

        assert options.default_adapter is None
        assert options.default_expires == 0
        assert options.default_encrypt is False
        assert options.namespace == ""
        assert options.validate() is True

    def test_from_dict_accepts_camel_case(self):
        options = StorageManagerOptions.from_dict({
            "defaultAdapter": "cookie",
            "defaultExpires": "1h",
            "defaultEncrypt": True,
            "namespace": "ns",
            "somethingElse": 1,
        })

        assert options.default_adapter == "cookie"
        assert options.default_expires == 3600000
        assert options.default_encrypt is True
        assert options.namespace == "ns"

    def test_none_namespace_normalized(self):
        assert StorageManagerOptions(namespace=None).namespace == ""

    def test_none_expires_means_never(self):
        assert StorageManagerOptions(default_expires=None).default_expires == 0

    @pytest.mark.parametrize("kwargs", [
        {"default_expires": -1},
        {"default_adapter": "   "},
        {"namespace": 5},
    ])
    def test_validate_rejects(self, kwargs):
        with pytest.raises(ValueError):
            StorageManagerOptions(**kwargs).validate()


class TestConfigFiles:
    """Test loading options from files"""

    def test_yaml_with_storage_section(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({
            "storage": {"default_adapter": "memory", "default_expires": "10s"},
            "unrelated": {"debug": True},
        }))

        options = StorageManagerOptions.from_file(path)

        assert options.default_adapter == "memory"
        assert options.default_expires == 10000

    def test_json_top_level(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"namespace": "fromjson", "defaultEncrypt": True}))

        options = StorageManagerOptions.from_file(path)

        assert options.namespace == "fromjson"
        assert options.default_encrypt is True

    def test_null_expires_in_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("storage:\n  default_expires: null\n  namespace: app\n")

        options = StorageManagerOptions.from_file(path)

        assert options.default_expires == 0
        assert options.namespace == "app"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            StorageManagerOptions.from_file(tmp_path / "nope.yaml")

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n")

        with pytest.raises(ValueError):
            StorageManagerOptions.from_file(path)
