from __future__ import annotations

import abc
from collections.abc import Sequence

from mailcollector.backends.message import EmailMessage


class BaseMailBackend(abc.ABC):
    """
    Abstract base class for the mail backends a host can select.

    A backend defines *how* email messages are delivered. Subclasses must
    implement :meth:`send` at a minimum, and may override :meth:`open`,
    :meth:`close`, or :meth:`send_many`.
    """

    name: str = ""

    async def open(self) -> None:
        """
        Prepare resources required for sending messages.
        """
        return None

    async def close(self) -> None:
        """
        Release resources allocated by the backend.
        """
        return None

    @abc.abstractmethod
    async def send(self, message: EmailMessage) -> None:
        """
        Send a single email message.

        Raises:
            MailError: If the message cannot be sent.
        """
        raise NotImplementedError

    async def send_many(self, messages: Sequence[EmailMessage]) -> None:
        """
        Send multiple email messages in sequence.
        """
        for message in messages:
            await self.send(message)
