from .base import BaseMailBackend
from .collector import CollectorBackend
from .message import EmailMessage

__all__ = ["BaseMailBackend", "CollectorBackend", "EmailMessage"]
