"""Tests for VManageSettings and load_settings in vmanage_tools/config.py."""

import pytest
from pydantic import SecretStr, ValidationError

from vmanage_tools.config import VManageSettings, _parse_bool, load_settings

ENV = {
    "VMANAGE_URL": "https://vmanage.example.com",
    "VMANAGE_USERNAME": "admin",
    "VMANAGE_PASSWORD": "secret",
}


class TestParseBool:
    @pytest.mark.parametrize("value", ["true", "True", "1", "yes", " YES "])
    def test_truthy_values(self, value):
        assert _parse_bool(value) is True

    @pytest.mark.parametrize("value", ["false", "0", "no", "", "maybe"])
    def test_falsy_values(self, value):
        assert _parse_bool(value) is False


class TestLoadSettings:
    def test_from_mapping(self):
        settings = load_settings(ENV)
        assert settings.base_url == "https://vmanage.example.com"
        assert settings.username == "admin"
        assert settings.password.get_secret_value() == "secret"
        assert settings.skip_cert_check is False

    def test_skip_cert_check_flag(self):
        settings = load_settings({**ENV, "VMANAGE_SKIP_CERT_CHECK": "true"})
        assert settings.skip_cert_check is True

    def test_reads_process_environment(self, monkeypatch):
        for key, value in ENV.items():
            monkeypatch.setenv(key, value)
        monkeypatch.delenv("VMANAGE_SKIP_CERT_CHECK", raising=False)
        assert load_settings().username == "admin"

    def test_missing_password(self):
        env = {k: v for k, v in ENV.items() if k != "VMANAGE_PASSWORD"}
        with pytest.raises(ValidationError):
            load_settings(env)

    def test_password_hidden_in_repr(self):
        settings = VManageSettings(base_url="https://x", username="u", password=SecretStr("secret"))
        assert "secret" not in repr(settings)
