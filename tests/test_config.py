"""Tests for monitor configuration."""

import os
from pathlib import Path

import pytest
from pydantic import ValidationError

import wifiwatch.config as config_module
from wifiwatch.config import Settings, load_config


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    """Point .env at tmp_path and clear WIFIWATCH_* variables."""
    monkeypatch.setattr(config_module, "_ENV_FILE", tmp_path / ".env")
    for key in list(os.environ):
        if key.startswith("WIFIWATCH_"):
            monkeypatch.delenv(key)


class TestDefaults:
    def test_defaults(self):
        s = Settings()
        assert s.log_file == Path("wifi_diagnostics.log")
        assert s.ping_target == "8.8.8.8"
        assert s.router_ip == "192.168.88.1"
        assert s.threshold_signal == -70
        assert s.threshold_loss == 5.0
        assert s.interval == 10
        assert s.traceroute_interval == 300
        assert s.webhook_url is None
        assert s.db_path is None


class TestSources:
    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("WIFIWATCH_INTERVAL", "3")
        monkeypatch.setenv("WIFIWATCH_THRESHOLD_LOSS", "2.5")
        monkeypatch.setenv("WIFIWATCH_ROUTER_IP", "10.0.0.1")
        s = load_config()
        assert s.interval == 3
        assert s.threshold_loss == 2.5
        assert s.router_ip == "10.0.0.1"

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text('WIFIWATCH_PING_TARGET=1.1.1.1\nWIFIWATCH_LOG_FILE="/tmp/w.log"\n')
        s = load_config()
        assert s.ping_target == "1.1.1.1"
        assert s.log_file == Path("/tmp/w.log")

    def test_env_beats_dotenv(self, tmp_path, monkeypatch):
        (tmp_path / ".env").write_text("WIFIWATCH_THRESHOLD_SIGNAL=-60\n")
        monkeypatch.setenv("WIFIWATCH_THRESHOLD_SIGNAL", "-75")
        assert load_config().threshold_signal == -75


class TestValidation:
    def test_log_level_normalized(self):
        assert Settings(log_level="DEBUG").log_level == "debug"

    def test_unknown_log_level(self):
        with pytest.raises(ValidationError):
            Settings(log_level="verbose")

    @pytest.mark.parametrize("field", ["interval", "traceroute_interval", "command_timeout"])
    def test_non_positive_seconds_rejected(self, field):
        with pytest.raises(ValidationError):
            Settings(**{field: 0})

    def test_blank_webhook_is_unset(self):
        assert Settings(webhook_url="  ").webhook_url is None


class TestCommandLine:
    def test_flags_override_env(self, monkeypatch):
        monkeypatch.setenv("WIFIWATCH_INTERVAL", "3")
        monkeypatch.setattr("sys.argv", ["wifiwatch", "--interval", "5", "--router_ip", "10.0.0.1"])
        s = load_config(cli=True)
        assert s.interval == 5
        assert s.router_ip == "10.0.0.1"

    def test_no_flags_keeps_env(self, monkeypatch):
        monkeypatch.setenv("WIFIWATCH_PING_TARGET", "1.1.1.1")
        monkeypatch.setattr("sys.argv", ["wifiwatch"])
        assert load_config(cli=True).ping_target == "1.1.1.1"
