"""Configuration models for the tagwatch client.

This module defines the Pydantic models representing the config.toml
structure: the inventory client target, identity overrides and the
notification backends.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_GRPC_AUTHORITY = "127.0.0.1:42286"
DEFAULT_WEBHOOK_TIMEOUT = 10.0


class ClientConfig(BaseModel):
    """Inventory client section.

    Attributes:
        grpc_authority: Network address (host:port) of the tagwatch server.
    """

    model_config = ConfigDict(extra="forbid")

    grpc_authority: Annotated[
        str,
        Field(min_length=1, description="Address of the tagwatch server (host:port)"),
    ] = DEFAULT_GRPC_AUTHORITY


class MetaConfig(BaseModel):
    """Overrides for the identity sent along with notifications.

    Attributes:
        hostname: Hostname reported in notifications. Defaults to the local hostname.
        user_agent: User-Agent sent by HTTP notifiers. Defaults to tagwatch/<version>.
    """

    model_config = ConfigDict(extra="forbid")

    hostname: Annotated[str | None, Field(description="Reported hostname")] = None
    user_agent: Annotated[str | None, Field(description="HTTP User-Agent")] = None


class WebhookConfig(BaseModel):
    """Delivery settings of the webhook notifier.

    Attributes:
        endpoint: URL receiving the POST request.
        headers: Custom headers added to every request.
        timeout: Delivery deadline in seconds.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    endpoint: Annotated[str, Field(min_length=1, description="Webhook URL")]
    headers: Annotated[
        dict[str, str],
        Field(default_factory=dict, description="Custom request headers"),
    ]
    timeout: Annotated[
        float,
        Field(gt=0, description="Delivery timeout in seconds"),
    ] = DEFAULT_WEBHOOK_TIMEOUT

    @field_validator("endpoint", mode="before")
    @classmethod
    def strip_endpoint(cls, v: object) -> object:
        """Strip surrounding whitespace from the endpoint."""
        if isinstance(v, str):
            return v.strip()
        return v


class NotifConfig(BaseModel):
    """Notification backends section. A backend is enabled by its presence."""

    model_config = ConfigDict(extra="forbid")

    webhook: Annotated[WebhookConfig | None, Field(description="Webhook notifier")] = None


class Config(BaseModel):
    """Complete client configuration.

    Every section is optional; a missing config file yields the defaults.
    """

    model_config = ConfigDict(extra="forbid")

    client: Annotated[ClientConfig, Field(default_factory=ClientConfig)]
    meta: Annotated[MetaConfig, Field(default_factory=MetaConfig)]
    notif: Annotated[NotifConfig, Field(default_factory=NotifConfig)]
