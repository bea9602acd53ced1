import pytest
from pydantic import ValidationError

from intranet_core_lib.impl.settings.gemini_settings import GeminiSettings
from intranet_core_lib.impl.settings.plan_settings import PlanSettings
from intranet_core_lib.impl.settings.store_settings import StoreSettings


def test_plan_settings_defaults():
    settings = PlanSettings()
    assert settings.basic_max_users == 50
    assert settings.basic_max_spaces == 5
    assert set(settings.basic_restricted_features) == {"ai", "analytics", "policies", "advanced_branding"}


def test_plan_settings_from_environment(monkeypatch):
    monkeypatch.setenv("INTRANET_PLAN_BASIC_MAX_USERS", "25")
    monkeypatch.setenv("INTRANET_PLAN_BASIC_RESTRICTED_FEATURES", '["ai"]')
    settings = PlanSettings()
    assert settings.basic_max_users == 25
    assert settings.basic_restricted_features == ["ai"]


def test_gemini_settings_from_environment(monkeypatch):
    monkeypatch.setenv("GEMINI_MODEL", "gemini-pro")
    monkeypatch.setenv("GEMINI_TIMEOUT_SECONDS", "5")
    settings = GeminiSettings()
    assert settings.model == "gemini-pro"
    assert settings.timeout_seconds == 5.0


def test_store_prefix_must_not_contain_path_separators(monkeypatch):
    monkeypatch.setenv("INTRANET_STORE_KEY_PREFIX", "../evil/")
    with pytest.raises(ValidationError):
        StoreSettings()


def test_store_settings_accept_custom_prefix(monkeypatch):
    monkeypatch.setenv("INTRANET_STORE_KEY_PREFIX", "tenant42_")
    assert StoreSettings().key_prefix == "tenant42_"
