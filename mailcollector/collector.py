from __future__ import annotations

from typing import Any

from mailcollector.conf.global_settings import Settings
from mailcollector.exceptions import ImproperlyConfigured, MailSystemNotCaptured
from mailcollector.logging import logger
from mailcollector.matching import count_equals, matches_any
from mailcollector.protocols.variables import VariableStore
from mailcollector.types import Criteria, MailSystemSetting, MessageRecord

MAIL_SYSTEM_KEY = "default-system"


class MailCollector:
    """
    Session-scoped access to the emails captured by the host system.

    The collector switches the host's mail system to the testing one for the
    duration of a test session, empties the capture buffer before each test
    and offers assertions over the captured message records.

    It holds the only state of a session: the mail system that was active
    before the switch and the one-shot flag that keeps the captured emails
    around for the next test.

    Example:
        ```python
        store = InMemoryVariableStore()
        collector = MailCollector(store, enabled=True)

        collector.before_suite()
        collector.before_test()
        ...  # exercise the host
        collector.see_sent_email({"to": "user@example.com", "subject": "Welcome"})
        collector.after_suite()
        ```
    """

    def __init__(
        self,
        variables: VariableStore | None,
        *,
        enabled: bool,
        mail_system_variable: str = "mail_system",
        capture_variable: str = "drupal_test_email_collector",
        default_mail_system: str = "DefaultMailSystem",
        testing_mail_system: str = "TestingMailSystem",
    ) -> None:
        """
        Initialize a collector.

        Args:
            variables: The host's variable store. It is only checked when the
                session starts, in `before_suite()`.
            enabled: Whether the lifecycle hooks switch and clear anything.
            mail_system_variable: Variable selecting the host's mail system.
            capture_variable: Variable holding the captured message records.
            default_mail_system: Mail system assumed when none is configured.
            testing_mail_system: Mail system that captures instead of sending.
        """
        self.variables = variables
        self.enabled = enabled
        self.mail_system_variable = mail_system_variable
        self.capture_variable = capture_variable
        self.default_mail_system = default_mail_system
        self.testing_mail_system = testing_mail_system

        self.previous_mail_system: MailSystemSetting | None = None
        self.preserve = False

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        variables: VariableStore | None = None,
        enabled: bool | None = None,
    ) -> MailCollector:
        """
        Build a collector from a `Settings` object.

        Explicit arguments win over the settings. The variable store must
        already be resolved to an instance.

        Raises:
            ImproperlyConfigured: If `enabled` is set nowhere.
        """
        if enabled is None:
            enabled = settings.enabled
        if enabled is None:
            raise ImproperlyConfigured(
                "MailCollector requires the 'enabled' option to be set."
            )

        return cls(
            variables,
            enabled=bool(enabled),
            mail_system_variable=settings.mail_system_variable,
            capture_variable=settings.capture_variable,
            default_mail_system=settings.default_mail_system,
            testing_mail_system=settings.testing_mail_system,
        )

    @property
    def store(self) -> VariableStore:
        if self.variables is None:
            raise ImproperlyConfigured("MailCollector requires a variable store.")
        return self.variables

    def before_suite(self) -> None:
        """
        Switch to the testing mail system and remember the current one.

        Raises:
            ImproperlyConfigured: If no variable store was given.
        """
        if self.variables is None:
            raise ImproperlyConfigured("MailCollector requires a variable store.")

        if self.enabled:
            self.previous_mail_system = self.enable()

    def after_suite(self) -> None:
        """
        Put back the mail system that was active before the session.
        """
        if self.enabled:
            self.restore()

    def before_test(self) -> None:
        """
        Delete all captured emails, unless `preserve_emails()` was called
        during the previous test.
        """
        if self.enabled:
            if not self.preserve:
                self.clear()
            else:
                logger.debug("Keeping %d captured email(s) for this test.", len(self.list()))

        self.preserve = False

    def enable(self) -> MailSystemSetting:
        """
        Activate the testing mail system.

        Returns:
            The mail system that was active before, or the default one when
            the host had none configured.
        """
        system = self.store.get(self.mail_system_variable)
        if not system:
            system = {MAIL_SYSTEM_KEY: self.default_mail_system}

        self.store.set(self.mail_system_variable, {MAIL_SYSTEM_KEY: self.testing_mail_system})
        self.clear()

        logger.info(
            "Mail system switched from %r to %r.",
            system.get(MAIL_SYSTEM_KEY),
            self.testing_mail_system,
        )
        return system

    def restore(self, previous: MailSystemSetting | None = None) -> None:
        """
        Write the previous mail system back.

        Args:
            previous: The mail system to restore. Defaults to the one captured
                by `before_suite()`.

        Raises:
            MailSystemNotCaptured: If there is no previous mail system.
        """
        if previous is None:
            previous = self.previous_mail_system
        if not previous:
            raise MailSystemNotCaptured("previous_mail_system has not been set yet.")

        self.store.set(self.mail_system_variable, previous)
        logger.info("Mail system restored to %r.", previous.get(MAIL_SYSTEM_KEY))

    def clear(self) -> None:
        self.store.unset(self.capture_variable)
        logger.debug("Captured emails cleared.")

    def list(self) -> list[MessageRecord]:
        return list(self.store.get(self.capture_variable) or [])

    def preserve_once(self) -> None:
        self.preserve = True

    def clear_sent_emails(self) -> None:
        """
        Clear any sent emails.

        Useful in preparation for the next step of the same test.
        """
        self.clear()

    def grab_sent_emails(self) -> list[MessageRecord]:
        """
        Return the emails sent so far, oldest first.
        """
        return self.list()

    def preserve_emails(self) -> None:
        """
        Keep the captured emails for the next test.

        They are cleared before the test after that, unless this is called
        again.
        """
        self.preserve_once()

    def see_sent_email(self, criteria: Criteria | None = None, **fields: str) -> None:
        """
        Assert that an email was sent with fields matching all criteria.

        Args:
            criteria: Mapping of record field to the substring to search for,
                e.g. `{"to": "user@example.com", "body": "hello world"}`.
            **fields: Extra criteria, merged over `criteria`.

        Raises:
            AssertionError: If no captured email matches.
        """
        __tracebackhide__ = True
        search = self._criteria(criteria, fields)
        emails = self.list()
        if not matches_any(emails, search):
            raise AssertionError(
                f"No email matching {search!r} was sent. "
                f"Captured ({len(emails)}): {self._summary(emails)}."
            )

    def dont_see_sent_email(self, criteria: Criteria | None = None, **fields: str) -> None:
        """
        Assert that no email was sent with fields matching all criteria.

        Raises:
            AssertionError: If a captured email matches.
        """
        __tracebackhide__ = True
        search = self._criteria(criteria, fields)
        emails = self.list()
        if matches_any(emails, search):
            raise AssertionError(
                f"An email matching {search!r} was sent. "
                f"Captured ({len(emails)}): {self._summary(emails)}."
            )

    def see_number_of_emails_sent(self, count: int) -> None:
        __tracebackhide__ = True
        emails = self.list()
        if not count_equals(emails, count):
            raise AssertionError(f"Expected {count} email(s) to be sent, got {len(emails)}.")

    def dont_see_number_of_emails_sent(self, count: int) -> None:
        __tracebackhide__ = True
        emails = self.list()
        if count_equals(emails, count):
            raise AssertionError(f"Expected anything but {count} email(s) to be sent.")

    @staticmethod
    def _criteria(criteria: Criteria | None, fields: dict[str, str]) -> dict[str, str]:
        search = dict(criteria or {})
        search.update(fields)
        return search

    @staticmethod
    def _summary(emails: list[MessageRecord]) -> list[dict[str, Any]]:
        return [{key: email.get(key) for key in ("to", "subject")} for email in emails]

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(enabled={self.enabled!r}, "
            f"variables={self.variables!r})"
        )
