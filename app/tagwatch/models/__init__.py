"""Data models for tagwatch.

This module exports the core data structures used throughout the application.
"""

from tagwatch.models.config import (
    ClientConfig,
    Config,
    MetaConfig,
    NotifConfig,
    WebhookConfig,
)
from tagwatch.models.event import (
    EntryStatus,
    ImageManifest,
    Meta,
    NotifEntry,
    NotificationEvent,
)
from tagwatch.models.image import (
    ImageDetail,
    ImageInspectResponse,
    ImageListResponse,
    ImagePruneRequest,
    ImagePruneResponse,
    ImageRecord,
    ImageRemoveResponse,
    ManifestRecord,
)

__all__ = [
    "ClientConfig",
    "Config",
    "EntryStatus",
    "ImageDetail",
    "ImageInspectResponse",
    "ImageListResponse",
    "ImageManifest",
    "ImagePruneRequest",
    "ImagePruneResponse",
    "ImageRecord",
    "ImageRemoveResponse",
    "ManifestRecord",
    "Meta",
    "MetaConfig",
    "NotifConfig",
    "NotifEntry",
    "NotificationEvent",
    "WebhookConfig",
]
