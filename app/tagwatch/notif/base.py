"""Abstract base class for notifiers.

This module defines the Notifier interface that every notification
backend implements, along with the errors a delivery can raise.
"""

from abc import ABC, abstractmethod

from tagwatch.models.event import NotificationEvent


class NotifierError(Exception):
    """Base exception for notification errors."""


class RenderError(NotifierError):
    """Raised when an event cannot be rendered to the backend's wire format."""


class RequestBuildError(NotifierError):
    """Raised when the delivery request cannot be built (e.g. malformed endpoint)."""


class DeliveryError(NotifierError):
    """Raised when the transport fails to deliver a notification."""


class DeliveryTimeoutError(DeliveryError):
    """Raised when a delivery does not complete before its deadline."""


class Notifier(ABC):
    """Abstract base class for all notification backends.

    A notifier formats a NotificationEvent into its own wire representation
    and delivers it once. Retries, if any, belong to the caller.

    Example:
        >>> notifier = WebhookNotifier(config, Meta.default())
        >>> try:
        ...     notifier.send(event)
        ... except DeliveryTimeoutError:
        ...     print(f"{notifier.name}: timed out")
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the stable, lowercase identifier of this backend."""

    @abstractmethod
    def send(self, event: NotificationEvent) -> None:
        """Render and deliver a notification.

        Args:
            event: The event to report.

        Raises:
            RenderError: If the event cannot be rendered. Nothing is sent.
            RequestBuildError: If the request cannot be built.
            DeliveryError: If the transport fails.
            DeliveryTimeoutError: If the deadline expires.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
