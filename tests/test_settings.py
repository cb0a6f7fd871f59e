import pytest

from typing import Annotated, get_origin

from mailcollector import ImproperlyConfigured, InMemoryVariableStore
from mailcollector.conf import ENVIRONMENT_VARIABLE, reload_settings, settings
from mailcollector.conf.global_settings import Settings
from tests.settings import TestSettings


@pytest.fixture
def clean_environment(monkeypatch):
    for key in ("ENABLED", "CAPTURE_VARIABLE", "VARIABLE_STORE", "LOGGING_CONFIG"):
        monkeypatch.delenv(f"MAILCOLLECTOR_{key}", raising=False)


def test_defaults(clean_environment):
    setts = Settings()

    assert setts.enabled is None
    assert setts.variable_store is None
    assert setts.mail_system_variable == "mail_system"
    assert setts.capture_variable == "drupal_test_email_collector"
    assert setts.default_mail_system == "DefaultMailSystem"
    assert setts.testing_mail_system == "TestingMailSystem"


@pytest.mark.parametrize(
    "value,expected",
    [("true", True), ("1", True), ("Yes", True), ("false", False), ("0", False)],
)
def test_enabled_from_environment(clean_environment, monkeypatch, value, expected):
    monkeypatch.setenv("MAILCOLLECTOR_ENABLED", value)

    assert Settings().enabled is expected


def test_string_from_environment(clean_environment, monkeypatch):
    monkeypatch.setenv("MAILCOLLECTOR_CAPTURE_VARIABLE", "outbox")

    assert Settings().capture_variable == "outbox"


def test_variable_store_path_from_environment(clean_environment, monkeypatch):
    monkeypatch.setenv("MAILCOLLECTOR_VARIABLE_STORE", "myproject.testing.variables")

    assert Settings().variable_store == "myproject.testing.variables"


def test_keyword_arguments_win_over_environment(clean_environment, monkeypatch):
    monkeypatch.setenv("MAILCOLLECTOR_ENABLED", "false")

    assert Settings(enabled=True).enabled is True


def test_uncastable_environment_value_raises(clean_environment, monkeypatch):
    monkeypatch.setenv("MAILCOLLECTOR_LOGGING_CONFIG", "verbose")

    with pytest.raises(ImproperlyConfigured, match="Cannot cast value 'verbose'"):
        Settings()


def test_type_hints_are_resolved(clean_environment):
    Settings()

    assert get_origin(Settings.__type_hints__["enabled"]) is Annotated
    assert "dict" not in Settings.__type_hints__
    assert "__type_hints__" not in Settings.__type_hints__


def test_every_override_from_environment(clean_environment, monkeypatch):
    monkeypatch.setenv("MAILCOLLECTOR_ENABLED", "true")
    monkeypatch.setenv("MAILCOLLECTOR_VARIABLE_STORE", "hoststore.store")
    monkeypatch.setenv("MAILCOLLECTOR_CAPTURE_VARIABLE", "outbox")

    setts = Settings()

    assert setts.enabled is True
    assert setts.variable_store == "hoststore.store"
    assert setts.capture_variable == "outbox"


def test_subclass_defaults(clean_environment):
    setts = TestSettings()

    assert setts.enabled is True
    assert setts.capture_variable == "outbox"
    assert setts.mail_system_variable == "mail_system"


def test_dict(clean_environment):
    store = InMemoryVariableStore()
    data = Settings(enabled=False, variable_store=store).dict(exclude={"version"})

    assert data["enabled"] is False
    assert data["variable_store"] is store
    assert "version" not in data
    assert "logging_config" not in Settings().dict(exclude_none=True)


def test_settings_module_from_environment(clean_environment, monkeypatch):
    monkeypatch.setenv(ENVIRONMENT_VARIABLE, "tests.settings.TestSettings")
    reload_settings()
    try:
        assert settings.capture_variable == "outbox"
        assert settings.enabled is True
    finally:
        monkeypatch.delenv(ENVIRONMENT_VARIABLE)
        reload_settings()

    assert settings.capture_variable == "drupal_test_email_collector"
