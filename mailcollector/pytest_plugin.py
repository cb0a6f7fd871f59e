"""
pytest integration.

Enable it from a `conftest.py` at the root of the test suite:

```python
pytest_plugins = ["mailcollector.pytest_plugin"]
```

and configure it in the ini file:

```ini
[pytest]
mailcollector_enabled = true
mailcollector_variable_store = myproject.testing.variables
```
"""

from __future__ import annotations

import pytest

from mailcollector.collector import MailCollector
from mailcollector.conf import settings
from mailcollector.conf.global_settings import Settings
from mailcollector.exceptions import ImproperlyConfigured
from mailcollector.logging import setup_logging
from mailcollector.variables.loading import load_variable_store

mail_collector_key = pytest.StashKey[MailCollector]()


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("mailcollector", "capture emails sent by the system under test")
    group.addoption(
        "--mailcollector",
        action="store_true",
        dest="mailcollector_enabled",
        default=None,
        help="Switch the host to the testing mail system for the session.",
    )
    group.addoption(
        "--no-mailcollector",
        action="store_false",
        dest="mailcollector_enabled",
        help="Leave the host's mail system untouched.",
    )
    group.addoption(
        "--mailcollector-store",
        dest="mailcollector_variable_store",
        default=None,
        metavar="DOTTED_PATH",
        help="Dotted path to the host's variable store.",
    )
    parser.addini(
        "mailcollector_enabled",
        "Switch the host to the testing mail system for the session (true/false).",
    )
    parser.addini(
        "mailcollector_variable_store",
        "Dotted path to the host's variable store.",
    )


FALSY = {"false", "0", "no", "off", "n"}


def _to_bool(value: str) -> bool | None:
    value = value.strip().lower()
    if not value:
        return None
    if value in Settings.__truthy__:
        return True
    if value in FALSY:
        return False
    raise ImproperlyConfigured(f"Invalid value for mailcollector_enabled: '{value}'.")


def build_collector(config: pytest.Config) -> MailCollector:
    """
    Create the session's collector from the command line, the ini file and
    the settings, in that order of precedence.

    Raises:
        ImproperlyConfigured: If `enabled` is missing or invalid, or the
            variable store cannot be loaded.
    """
    enabled = config.getoption("mailcollector_enabled")
    if enabled is None:
        enabled = _to_bool(config.getini("mailcollector_enabled"))

    store = (
        config.getoption("mailcollector_variable_store")
        or config.getini("mailcollector_variable_store")
        or settings.variable_store
    )
    return MailCollector.from_settings(
        settings, variables=load_variable_store(store), enabled=enabled
    )


@pytest.hookimpl(tryfirst=True)
def pytest_sessionstart(session: pytest.Session) -> None:
    try:
        if settings.logging_config is not None:
            setup_logging(settings.logging_config)

        collector = build_collector(session.config)
        collector.before_suite()
    except ImproperlyConfigured as exc:
        raise pytest.UsageError(f"mailcollector: {exc}") from exc

    session.config.stash[mail_collector_key] = collector


def pytest_sessionfinish(session: pytest.Session) -> None:
    collector = session.config.stash.get(mail_collector_key, None)
    if collector is not None:
        collector.after_suite()


@pytest.hookimpl(tryfirst=True)
def pytest_runtest_setup(item: pytest.Item) -> None:
    collector = item.config.stash.get(mail_collector_key, None)
    if collector is not None:
        collector.before_test()


@pytest.fixture
def mail_collector(pytestconfig: pytest.Config) -> MailCollector:
    """
    The session's :class:`~mailcollector.collector.MailCollector`.
    """
    return pytestconfig.stash[mail_collector_key]
