"""Webhook notifier.

Posts the JSON rendering of an event to a configured endpoint. The
response status is not interpreted: a delivery succeeds as soon as the
request went through and the response head was received.
"""

import asyncio
import logging

import httpx

from tagwatch.models.config import WebhookConfig
from tagwatch.models.event import Meta, NotificationEvent
from tagwatch.notif.base import (
    DeliveryError,
    DeliveryTimeoutError,
    Notifier,
    RequestBuildError,
)
from tagwatch.notif.message import render_json

logger = logging.getLogger(__name__)


class WebhookNotifier(Notifier):
    """Deliver notifications as an HTTP POST with a JSON body.

    Attributes:
        config: Endpoint, custom headers and timeout.
        meta: Producer identity; its user agent is always sent.
    """

    def __init__(
        self,
        config: WebhookConfig,
        meta: Meta,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the notifier.

        Args:
            config: Webhook delivery settings.
            meta: Producer identity added to every request.
            transport: Optional httpx transport, mostly for tests.
        """
        self.config = config
        self.meta = meta
        self._transport = transport

    @property
    def name(self) -> str:
        return "webhook"

    def build_headers(self) -> httpx.Headers:
        """Merge the custom headers with the configured User-Agent.

        Content-Type defaults to JSON unless a custom one is configured.
        The configured User-Agent replaces any custom header of the same
        name, whatever its case.
        """
        headers = httpx.Headers(self.config.headers)
        headers.setdefault("Content-Type", "application/json")
        headers["User-Agent"] = self.meta.user_agent
        return headers

    def send(self, event: NotificationEvent) -> None:
        """Render the event and POST it to the endpoint.

        One request is issued. The whole exchange, from connecting to
        receiving the response head, must finish within ``config.timeout``
        seconds. The response body is discarded and the connection released
        on every path. Blocks the calling thread; must not be called from a
        running event loop.

        Args:
            event: The event to deliver.

        Raises:
            RenderError: If the event cannot be rendered. No request is made.
            RequestBuildError: If the endpoint is malformed.
            DeliveryTimeoutError: If the deadline expires.
            DeliveryError: On any other transport failure.
        """
        body = render_json(event)
        asyncio.run(self._deliver(body, event))

    async def _deliver(self, body: bytes, event: NotificationEvent) -> None:
        """Perform the POST under a single overall deadline.

        Args:
            body: Rendered request body.
            event: The event being delivered, for logging.
        """
        timeout = self.config.timeout
        try:
            async with (
                asyncio.timeout(timeout),
                httpx.AsyncClient(
                    timeout=httpx.Timeout(timeout),
                    transport=self._transport,
                ) as client,
            ):
                request = self._build_request(client, body)
                logger.debug(
                    "Sending webhook notification for %s to %s", event.entry.image, request.url
                )
                response = await client.send(request, stream=True)
                await response.aclose()
        except (TimeoutError, httpx.TimeoutException) as e:
            raise DeliveryTimeoutError(
                f"Webhook delivery to {self.config.endpoint} timed out after {timeout}s"
            ) from e
        except httpx.UnsupportedProtocol as e:
            raise RequestBuildError(
                f"Invalid webhook endpoint {self.config.endpoint!r}: {e}"
            ) from e
        except httpx.TransportError as e:
            raise DeliveryError(f"Webhook delivery to {self.config.endpoint} failed: {e}") from e

        logger.debug("Webhook endpoint answered with HTTP %d", response.status_code)

    def _build_request(self, client: httpx.AsyncClient, body: bytes) -> httpx.Request:
        """Build the POST request.

        Raises:
            RequestBuildError: If the endpoint is malformed.
        """
        try:
            return client.build_request(
                "POST",
                self.config.endpoint,
                content=body,
                headers=self.build_headers(),
            )
        except httpx.InvalidURL as e:
            raise RequestBuildError(
                f"Invalid webhook endpoint {self.config.endpoint!r}: {e}"
            ) from e
