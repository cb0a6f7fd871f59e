__version__ = "0.1.0"

from .collector import MailCollector  # noqa: E402
from .exceptions import (  # noqa: E402
    ImproperlyConfigured,
    MailCollectorException,
    MailSystemNotCaptured,
)
from .matching import count_equals, matches_any, record_matches  # noqa: E402
from .protocols.variables import VariableStore  # noqa: E402
from .variables import InMemoryVariableStore, JSONFileVariableStore  # noqa: E402

__all__ = [
    "ImproperlyConfigured",
    "InMemoryVariableStore",
    "JSONFileVariableStore",
    "MailCollector",
    "MailCollectorException",
    "MailSystemNotCaptured",
    "VariableStore",
    "count_equals",
    "matches_any",
    "record_matches",
]
