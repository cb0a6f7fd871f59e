import logging
import threading
from typing import Any

import pytest

from mailcollector import InMemoryVariableStore, MailCollector
from mailcollector.logging import LoggingConfig, StandardLoggingConfig, logger, setup_logging


class ListLogger:
    def __init__(self, sink: list[str]):
        self.sink = sink

    def info(self, event: str, *args: Any, **kwargs: Any):
        self.sink.append(event % args if args else event)

    def debug(self, event: str, *args: Any, **kwargs: Any):
        self.sink.append(event % args if args else event)

    def warning(self, event: str, *args: Any, **kwargs: Any):
        self.sink.append(event % args if args else event)

    def error(self, event: str, *args: Any, **kwargs: Any):
        self.sink.append(event % args if args else event)

    def critical(self, event: str, *args: Any, **kwargs: Any):
        self.sink.append(event % args if args else event)


class ListLoggingConfig(LoggingConfig):
    def __init__(self, sink_list, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.sink_list = sink_list
        self.configured = False

    def configure(self) -> None:
        self.configured = True

    def get_logger(self) -> Any:
        return ListLogger(self.sink_list)


def test_custom_logger_receives_collector_messages():
    sink = []
    config = ListLoggingConfig(sink_list=sink)
    setup_logging(config)

    collector = MailCollector(InMemoryVariableStore(), enabled=True)
    collector.before_suite()
    collector.after_suite()

    assert config.configured
    assert "Mail system switched from 'DefaultMailSystem' to 'TestingMailSystem'." in sink
    assert "Mail system restored to 'DefaultMailSystem'." in sink


def test_skip_setup_configure():
    config = ListLoggingConfig(sink_list=[], skip_setup_configure=True)
    setup_logging(config)

    assert not config.configured


def test_invalid_logging_config():
    with pytest.raises(ValueError):
        setup_logging(logging_config="not_a_valid_config")


def test_unbound_proxy_uses_the_mailcollector_logger(caplog):
    caplog.set_level(logging.INFO, logger="mailcollector")

    MailCollector(InMemoryVariableStore(), enabled=True).enable()

    assert "Mail system switched" in caplog.text
    assert caplog.records[0].name == "mailcollector"


def test_standard_logging_config_targets_its_own_logger():
    config = StandardLoggingConfig(level="INFO")

    assert "root" not in config.config
    assert config.config["loggers"]["mailcollector"]["level"] == "INFO"
    assert config.get_logger() is logging.getLogger("mailcollector")


@pytest.mark.parametrize(
    "level", [None, "mailcollector", 1, 2.5, "5-da"], ids=["none", "str", "int", "float", "str-int"]
)
def test_raises_assert_error(level):
    with pytest.raises(AssertionError):

        class CustomLog(LoggingConfig):
            def __init__(self):
                super().__init__(level=level)

            def get_logger(self) -> Any:
                return logging.getLogger(__name__)

        CustomLog()


def test_concurrent_access_binds_a_single_logger():
    seen = []

    def worker():
        seen.append(logger.info)

    threads = [threading.Thread(target=worker) for _ in range(10)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(seen) == 10
    assert all(callable(method) for method in seen)
