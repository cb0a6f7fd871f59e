from __future__ import annotations

from typing import Any


class MailCollectorException(Exception):
    def __init__(self, *args: Any, detail: str = ""):
        self.detail = detail
        super().__init__(*(str(arg) for arg in args if arg), self.detail)

    def __repr__(self) -> str:  # pragma: no cover
        if self.detail:
            return f"{self.__class__.__name__} - {self.detail}"
        return self.__class__.__name__

    def __str__(self) -> str:
        return "".join(self.args).strip()


class ImproperlyConfigured(MailCollectorException):
    """
    Raised when the collector cannot start with the given configuration.

    Typical causes:
        - No variable store was configured.
        - The configured variable store path cannot be imported.
        - The required `enabled` option was never set.

    The pytest plugin turns this into a `pytest.UsageError`, so the session
    aborts before any test runs.
    """

    ...


class MailSystemNotCaptured(MailCollectorException):
    """
    Raised when the mail system is restored before it was ever captured.

    This is an ordering mistake in the caller and is never retried.
    """

    ...


class MailError(MailCollectorException):
    """
    Base exception for errors raised by the mail backends.
    """

    ...


class InvalidMessage(MailError):
    """
    Raised when an `EmailMessage` cannot be captured.

    Example:
        ```python
        msg = EmailMessage(subject="Empty", to=[])
        await backend.send(msg)  # raises InvalidMessage
        ```
    """

    ...
