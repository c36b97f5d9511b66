"""Notifier implementations for broadcasting live alerts."""

from .base import BaseNotifier
from .console import ConsoleNotifier
from .webhook import WebhookNotifier, get_default_notifier

__all__ = ["BaseNotifier", "ConsoleNotifier", "WebhookNotifier", "get_default_notifier"]
