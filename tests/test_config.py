"""
Configuration Tests
===================

YAML loading, defaults and environment overrides.
"""

import pytest
from pydantic import ValidationError

from safety_scanner.config import Settings, load_config


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "SAFETY_SCAN_CONFIG",
        "SAFETY_SCAN_ACCELERATED",
        "SAFETY_SCAN_INIT_TIMEOUT",
        "SAFETY_SCAN_PORT",
        "SAFETY_SCAN_LOG_LEVEL",
        "SAFETY_SCAN_LOG_FORMAT",
        "PORT",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "scanner:\n"
        "  accelerated_enabled: false\n"
        "  init_timeout_seconds: 2.5\n"
        "server:\n"
        "  port: 9100\n"
    )
    return path


class TestLoadConfig:

    def test_defaults(self):
        settings = Settings()
        assert settings.scanner.accelerated_enabled is True
        assert settings.scanner.init_timeout_seconds == 10.0
        assert settings.server.port == 8002
        assert settings.logging.format == "json"

    def test_yaml_values(self, clean_env, config_file):
        settings = load_config(str(config_file))
        assert settings.scanner.accelerated_enabled is False
        assert settings.scanner.init_timeout_seconds == 2.5
        assert settings.server.port == 9100
        assert settings.service.name == "safety-scanner"

    def test_env_overrides_yaml(self, clean_env, config_file):
        clean_env.setenv("SAFETY_SCAN_ACCELERATED", "yes")
        clean_env.setenv("SAFETY_SCAN_INIT_TIMEOUT", "4")
        clean_env.setenv("SAFETY_SCAN_PORT", "9200")
        clean_env.setenv("SAFETY_SCAN_LOG_LEVEL", "DEBUG")

        settings = load_config(str(config_file))
        assert settings.scanner.accelerated_enabled is True
        assert settings.scanner.init_timeout_seconds == 4.0
        assert settings.server.port == 9200
        assert settings.logging.level == "DEBUG"

    def test_platform_port_wins(self, clean_env, config_file):
        clean_env.setenv("SAFETY_SCAN_PORT", "9200")
        clean_env.setenv("PORT", "8080")
        assert load_config(str(config_file)).server.port == 8080

    @pytest.mark.parametrize("value", ["0", "false", "off", "no"])
    def test_falsy_accelerated_flag(self, clean_env, config_file, value):
        clean_env.setenv("SAFETY_SCAN_ACCELERATED", value)
        assert load_config(str(config_file)).scanner.accelerated_enabled is False

    def test_invalid_timeout_rejected(self, clean_env, config_file):
        clean_env.setenv("SAFETY_SCAN_INIT_TIMEOUT", "0")
        with pytest.raises(ValidationError):
            load_config(str(config_file))

    def test_config_path_from_env(self, clean_env, config_file):
        clean_env.setenv("SAFETY_SCAN_CONFIG", str(config_file))
        assert load_config().server.port == 9100

    def test_missing_file_uses_defaults(self, clean_env, tmp_path):
        settings = load_config(str(tmp_path / "absent.yaml"))
        assert settings.server.port == 8002

