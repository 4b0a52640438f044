"""Notification event models.

A NotificationEvent is produced by the image tracking engine for every
detected change and handed to each notifier. It is immutable during
dispatch and never reused after a delivery attempt.
"""

import socket
from datetime import datetime
from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field

from tagwatch import __version__
from tagwatch.models.config import MetaConfig


class EntryStatus(str, Enum):
    """Kind of change reported by an entry.

    Attributes:
        NEW: Image seen for the first time.
        UPDATE: Known image whose digest changed.
    """

    NEW = "new"
    UPDATE = "update"


class Meta(BaseModel):
    """Identity of the application producing notifications."""

    model_config = ConfigDict(frozen=True)

    id: str = "tagwatch"
    name: str = "Tagwatch"
    desc: str = "Receive notifications when an image is updated on a container registry"
    url: str = "https://github.com/tagwatch/tagwatch"
    logo: str = "https://raw.githubusercontent.com/tagwatch/tagwatch/master/.res/tagwatch.png"
    author: str = "tagwatch"
    version: str = __version__
    user_agent: str = f"tagwatch/{__version__}"
    hostname: str = ""

    @classmethod
    def default(cls, overrides: MetaConfig | None = None) -> "Meta":
        """Build the tagwatch identity for this machine.

        Args:
            overrides: Optional hostname/user agent overrides from the config file.

        Returns:
            Meta with the local hostname unless overridden.
        """
        values: dict[str, str] = {"hostname": socket.gethostname()}
        if overrides is not None:
            if overrides.hostname:
                values["hostname"] = overrides.hostname
            if overrides.user_agent:
                values["user_agent"] = overrides.user_agent
        return cls(**values)


class ImageManifest(BaseModel):
    """Registry manifest details attached to an entry."""

    model_config = ConfigDict(frozen=True)

    mime_type: str = ""
    digest: str
    created: datetime | None = None
    platform: str = ""


class NotifEntry(BaseModel):
    """Domain payload of a notification: what changed and where.

    Attributes:
        status: Whether the image is new or updated.
        provider: Name of the provider that discovered the image.
        image: Full image reference (e.g. docker.io/library/alpine:latest).
        hub_link: Link to the image page on its registry, if known.
        manifest: Manifest that triggered the notification.
        metadata: Free-form key/values attached by the provider.
    """

    model_config = ConfigDict(frozen=True)

    status: EntryStatus
    provider: str
    image: str
    hub_link: str = ""
    manifest: ImageManifest
    metadata: Annotated[dict[str, Any], Field(default_factory=dict)]


class NotificationEvent(BaseModel):
    """A detected change to report: producer metadata plus entry payload."""

    model_config = ConfigDict(frozen=True)

    meta: Meta
    entry: NotifEntry
