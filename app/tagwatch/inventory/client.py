"""Client for the image inventory service.

The tagwatch server exposes its manifest database through the
``tagwatch.v1.ImageService`` RPC service. Calls are unary and sent as
JSON over plain HTTP (``POST /<service>/<method>``), one connection per
call. Results are sorted locally for display; nothing is cached.
"""

import logging
from typing import Any, TypeVar

import httpx
from pydantic import ValidationError

from tagwatch.models.config import DEFAULT_GRPC_AUTHORITY
from tagwatch.models.image import (
    ImageInspectRequest,
    ImageInspectResponse,
    ImageListRequest,
    ImageListResponse,
    ImagePruneRequest,
    ImagePruneResponse,
    ImageRemoveRequest,
    ImageRemoveResponse,
    WireModel,
)

logger = logging.getLogger(__name__)

SERVICE_NAME = "tagwatch.v1.ImageService"

ResponseT = TypeVar("ResponseT", bound=WireModel)


class InventoryError(Exception):
    """Base exception for inventory client errors."""


class InventoryConnectionError(InventoryError):
    """Raised when the inventory service cannot be reached."""


class InventoryProtocolError(InventoryError):
    """Raised when the service answers with an unexpected payload."""


class InventoryServiceError(InventoryError):
    """Raised when the service reports a failure.

    The code and message are the server's own, unchanged.

    Attributes:
        code: Status code name reported by the service (e.g. "not_found").
        message: Error message reported by the service.
    """

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"{code}: {message}" if message else code)


class InventoryClient:
    """Query and mutate the manifest database of a tagwatch server.

    Every operation opens a connection, performs exactly one exchange and
    closes it before returning, success or not.

    Example:
        >>> client = InventoryClient("127.0.0.1:42286")
        >>> for image in client.list_images().images:
        ...     print(image.name, image.manifests_count)
    """

    def __init__(
        self,
        authority: str = DEFAULT_GRPC_AUTHORITY,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            authority: Address of the server (host:port).
            transport: Optional httpx transport, mostly for tests.
        """
        self.authority = authority
        self._transport = transport

    @property
    def base_url(self) -> str:
        """Base URL of the service."""
        return f"http://{self.authority}/{SERVICE_NAME}"

    def list_images(self) -> ImageListResponse:
        """Fetch all tracked images, sorted case-insensitively by name.

        Returns:
            ImageListResponse with images ordered by upper-cased name.

        Raises:
            InventoryError: If the call fails.
        """
        response = self._call("ImageList", ImageListRequest(), ImageListResponse)
        response.images.sort(key=lambda image: image.name.upper())
        return response

    def inspect_image(self, name: str) -> ImageInspectResponse:
        """Fetch all manifests of an image, most recent first.

        Args:
            name: Image name. Existence is checked by the server.

        Returns:
            ImageInspectResponse with manifests sorted by creation time, descending.

        Raises:
            InventoryServiceError: If the image is unknown or the server fails.
            InventoryError: On any other failure.
        """
        response = self._call(
            "ImageInspect", ImageInspectRequest(name=name), ImageInspectResponse
        )
        response.image.manifests.sort(key=lambda manifest: manifest.created, reverse=True)
        return response

    def remove_image(self, name: str) -> ImageRemoveResponse:
        """Remove an image and all of its manifests.

        Args:
            name: Image name.

        Returns:
            ImageRemoveResponse listing the manifests actually deleted.

        Raises:
            InventoryServiceError: If the image is unknown or the server fails.
            InventoryError: On any other failure.
        """
        return self._call("ImageRemove", ImageRemoveRequest(name=name), ImageRemoveResponse)

    def prune_images(self) -> ImagePruneResponse:
        """Remove every manifest of every image.

        Returns:
            ImagePruneResponse listing the removed images and their manifests.

        Raises:
            InventoryError: If the call fails.
        """
        return self._call("ImagePrune", ImagePruneRequest(), ImagePruneResponse)

    def _call(
        self,
        method: str,
        request: WireModel,
        response_type: type[ResponseT],
    ) -> ResponseT:
        """Perform one unary call and decode its response.

        Args:
            method: RPC method name.
            request: Request message.
            response_type: Model to decode the response into.

        Returns:
            Decoded response message.

        Raises:
            InventoryConnectionError: If the server cannot be reached.
            InventoryServiceError: If the server reports an error.
            InventoryProtocolError: If the response cannot be decoded.
        """
        url = f"{self.base_url}/{method}"
        logger.debug("Calling %s", url)

        try:
            with httpx.Client(transport=self._transport) as client:
                response = client.post(
                    url,
                    json=request.model_dump(mode="json", by_alias=True),
                    headers={"Connect-Protocol-Version": "1"},
                )
        except httpx.InvalidURL as e:
            raise InventoryConnectionError(f"Invalid server address {self.authority!r}: {e}") from e
        except httpx.TransportError as e:
            raise InventoryConnectionError(
                f"Cannot reach tagwatch server at {self.authority}: {e}"
            ) from e

        if response.is_error:
            raise _service_error(response)

        try:
            return response_type.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise InventoryProtocolError(f"Invalid {method} response: {e}") from e


def _service_error(response: httpx.Response) -> InventoryServiceError:
    """Build the error reported by the server in a failed response.

    Args:
        response: Non-2xx HTTP response.

    Returns:
        InventoryServiceError carrying the server's code and message.
    """
    try:
        payload: Any = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict) and "code" in payload:
        return InventoryServiceError(str(payload["code"]), str(payload.get("message", "")))

    logger.debug("Unstructured error response (HTTP %d)", response.status_code)
    return InventoryServiceError(
        f"http_{response.status_code}", response.text.strip() or response.reason_phrase
    )
