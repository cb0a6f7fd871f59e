from __future__ import annotations

import pytest

from mailcollector import InMemoryVariableStore, MailCollector
from mailcollector import logging as collector_logging

pytest_plugins = ["pytester"]


@pytest.fixture(autouse=True)
def clean_logger():
    collector_logging.logger.bind_logger(None)
    yield
    collector_logging.logger.bind_logger(None)


@pytest.fixture(scope="function")
def variables() -> InMemoryVariableStore:
    """Fixture providing a fresh, empty variable store."""
    return InMemoryVariableStore()


@pytest.fixture(scope="function")
def collector(variables: InMemoryVariableStore) -> MailCollector:
    """Fixture providing an enabled collector over the in-memory store."""
    return MailCollector(variables, enabled=True)


@pytest.fixture
def welcome_and_invoice() -> list[dict[str, str]]:
    return [
        {"to": "a@x.com", "from": "site@x.com", "subject": "Welcome", "body": "Hello a"},
        {"to": "b@x.com", "from": "site@x.com", "subject": "Invoice", "body": "Pay up b"},
    ]
