from __future__ import annotations

from collections.abc import Sequence

from mailcollector.backends.base import BaseMailBackend
from mailcollector.backends.message import EmailMessage
from mailcollector.exceptions import InvalidMessage
from mailcollector.logging import logger
from mailcollector.protocols.variables import VariableStore


class CollectorBackend(BaseMailBackend):
    """
    The testing mail system: records messages instead of delivering them.

    Every message is flattened to a record and appended to the capture
    variable of the shared variable store, where
    :class:`~mailcollector.collector.MailCollector` reads it back.

    Example:
        ```python
        store = InMemoryVariableStore()
        backend = CollectorBackend(store)

        await backend.send(EmailMessage(subject="Test", to=["a@b.com"], body_text="hi"))

        assert store.get("drupal_test_email_collector")[0]["subject"] == "Test"
        ```
    """

    name = "TestingMailSystem"

    def __init__(
        self, variables: VariableStore, capture_variable: str = "drupal_test_email_collector"
    ) -> None:
        self.variables = variables
        self.capture_variable = capture_variable

    async def send(self, message: EmailMessage) -> None:
        """
        Append a single message to the capture buffer.

        Raises:
            InvalidMessage: If the message has no recipients.
        """
        await self.send_many([message])

    async def send_many(self, messages: Sequence[EmailMessage]) -> None:
        """
        Append several messages to the capture buffer with a single write.
        """
        for message in messages:
            if not message.all_recipients():
                raise InvalidMessage("No recipients specified.")

        records = list(self.variables.get(self.capture_variable) or [])
        records.extend(message.to_record() for message in messages)
        self.variables.set(self.capture_variable, records)

        logger.debug("Captured %d email(s), %d in total.", len(messages), len(records))
