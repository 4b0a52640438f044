"""Inventory models for the manifest database.

These are transient, request-scoped copies of the server state. The
field names on the wire are camelCase, 64-bit integers may arrive as
strings and timestamps are RFC 3339, following the protobuf JSON mapping.
"""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for request/response messages exchanged with the server."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class ManifestRecord(WireModel):
    """One tagged version of an image.

    Attributes:
        tag: Image tag (e.g. "3.19").
        created: Creation time of the manifest.
        digest: Content digest. Several tags may share the same digest.
        platform: Platform of the manifest (e.g. "linux/amd64").
        size: Size in bytes.
    """

    tag: str = ""
    created: datetime
    digest: str = ""
    platform: str = ""
    size: int = 0


class ImageRecord(WireModel):
    """A tracked image with a summary of its manifest history."""

    name: str
    manifests_count: int = 0
    latest: ManifestRecord | None = None


class ImageDetail(WireModel):
    """A tracked image with all of its manifests."""

    name: str = ""
    manifests: Annotated[list[ManifestRecord], Field(default_factory=list)]

    @property
    def total_size(self) -> int:
        """Aggregate size of all manifests in bytes."""
        return sum(manifest.size for manifest in self.manifests)


class ImageListRequest(WireModel):
    """Request for ImageList (no parameters)."""


class ImageListResponse(WireModel):
    """Response of ImageList."""

    images: Annotated[list[ImageRecord], Field(default_factory=list)]


class ImageInspectRequest(WireModel):
    """Request for ImageInspect."""

    name: str


class ImageInspectResponse(WireModel):
    """Response of ImageInspect."""

    image: ImageDetail


class ImageRemoveRequest(WireModel):
    """Request for ImageRemove."""

    name: str


class ImageRemoveResponse(WireModel):
    """Manifests actually deleted by ImageRemove."""

    manifests: Annotated[list[ManifestRecord], Field(default_factory=list)]

    @property
    def total_size(self) -> int:
        """Aggregate size of the removed manifests in bytes."""
        return sum(manifest.size for manifest in self.manifests)


class ImagePruneRequest(WireModel):
    """Request for ImagePrune.

    ``all`` and ``filter`` are reserved for scoped prunes (e.g. until=24h)
    and are always sent with their defaults.
    """

    all: bool = False
    filter: str = ""


class ImagePruneResponse(WireModel):
    """Images, with their manifests, deleted by ImagePrune."""

    images: Annotated[list[ImageDetail], Field(default_factory=list)]

    @property
    def manifests(self) -> list[ManifestRecord]:
        """All removed manifests across every image, in response order."""
        return [manifest for image in self.images for manifest in image.manifests]

    @property
    def total_size(self) -> int:
        """Aggregate size of every removed manifest in bytes."""
        return sum(image.total_size for image in self.images)
