from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass
class EmailMessage:
    """
    A transport-agnostic representation of an outgoing email.

    Backends receive this object from the host. The capturing backend turns
    it into a message record with :meth:`to_record`.
    """

    subject: str
    to: list[str]
    from_email: str | None = None

    # Primary bodies, the text one is preferred when capturing.
    body_text: str | None = None
    body_html: str | None = None

    cc: list[str] = field(default_factory=list)
    bcc: list[str] = field(default_factory=list)
    reply_to: list[str] = field(default_factory=list)

    # Extra headers (e.g., {"X-Campaign": "welcome"})
    headers: Mapping[str, str] = field(default_factory=dict)

    # Arbitrary metadata (not transmitted), e.g. the host's message id.
    meta: dict[str, Any] = field(default_factory=dict)

    def all_recipients(self) -> list[str]:
        """
        Collect all recipients of the email (To + Cc + Bcc).
        """
        recipients: list[str] = list(self.to)
        if self.cc:
            recipients.extend(self.cc)
        if self.bcc:
            recipients.extend(self.bcc)
        return recipients

    def to_record(self) -> dict[str, Any]:
        """
        Flatten the message into the record stored in the capture buffer.

        Address lists are joined with `", "` so criteria can search them as
        plain strings. Empty optional fields are left out.
        """
        record: dict[str, Any] = {
            "to": ", ".join(self.to),
            "from": self.from_email or "",
            "subject": self.subject,
            "body": self.body_text if self.body_text is not None else (self.body_html or ""),
        }
        if "id" in self.meta:
            record["id"] = str(self.meta["id"])
        if self.cc:
            record["cc"] = ", ".join(self.cc)
        if self.bcc:
            record["bcc"] = ", ".join(self.bcc)
        if self.reply_to:
            record["reply-to"] = ", ".join(self.reply_to)
        if self.headers:
            record["headers"] = dict(self.headers)
        return record
