"""Notification backends.

This module provides the Notifier interface and its concrete
implementations (webhook).
"""

from tagwatch.notif.base import (
    DeliveryError,
    DeliveryTimeoutError,
    Notifier,
    NotifierError,
    RenderError,
    RequestBuildError,
)
from tagwatch.notif.registry import NOTIFIERS, build_notifiers
from tagwatch.notif.webhook import WebhookNotifier

__all__ = [
    "NOTIFIERS",
    "DeliveryError",
    "DeliveryTimeoutError",
    "Notifier",
    "NotifierError",
    "RenderError",
    "RequestBuildError",
    "WebhookNotifier",
    "build_notifiers",
]
