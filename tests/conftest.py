"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import httpx
import pytest
from tagwatch.models.event import (
    EntryStatus,
    ImageManifest,
    Meta,
    NotifEntry,
    NotificationEvent,
)


@pytest.fixture(autouse=True)
def isolated_config_home(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Point XDG_CONFIG_HOME at an empty directory and clear tagwatch env vars."""
    config_home = tmp_path_factory.mktemp("xdg-config")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    for var in ("TAGWATCH_CONFIG", "TAGWATCH_GRPC_AUTHORITY"):
        monkeypatch.delenv(var, raising=False)
    return config_home


class FakeInventoryServer:
    """In-memory stand-in for the inventory service.

    Answers unary calls with canned JSON payloads and records every request.
    """

    def __init__(self) -> None:
        self.responses: dict[str, tuple[int, Any]] = {}
        self.requests: list[httpx.Request] = []

    def reply(self, method: str, payload: Any, status_code: int = 200) -> None:
        """Register the payload returned for a method."""
        self.responses[method] = (status_code, payload)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        method = request.url.path.rsplit("/", 1)[-1]
        if method not in self.responses:
            return httpx.Response(
                404, json={"code": "unimplemented", "message": f"unknown method {method}"}
            )
        status_code, payload = self.responses[method]
        return httpx.Response(status_code, json=payload)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def methods(self) -> list[str]:
        """Names of the methods called so far, in order."""
        return [request.url.path.rsplit("/", 1)[-1] for request in self.requests]


@pytest.fixture
def inventory_server() -> FakeInventoryServer:
    """Fake inventory service with no canned responses."""
    return FakeInventoryServer()


@pytest.fixture
def manifest_payload() -> Callable[..., dict[str, Any]]:
    """Factory for manifest messages as sent on the wire."""

    def _make(
        tag: str,
        created: str = "2024-01-02T03:04:05Z",
        digest: str = "sha256:aaa111",
        size: int = 0,
    ) -> dict[str, Any]:
        # int64 values are JSON strings in the protobuf JSON mapping
        return {
            "tag": tag,
            "created": created,
            "digest": digest,
            "platform": "linux/amd64",
            "size": str(size),
        }

    return _make


@pytest.fixture
def meta() -> Meta:
    """Producer identity with fixed hostname and user agent."""
    return Meta(hostname="test-host", user_agent="tagwatch/test", version="0.0.0-test")


@pytest.fixture
def sample_event(meta: Meta) -> NotificationEvent:
    """A renderable notification event."""
    return NotificationEvent(
        meta=meta,
        entry=NotifEntry(
            status=EntryStatus.UPDATE,
            provider="docker",
            image="docker.io/library/alpine:latest",
            hub_link="https://hub.docker.com/_/alpine",
            manifest=ImageManifest(
                mime_type="application/vnd.oci.image.index.v1+json",
                digest="sha256:c5b1261d6d3e43071626931fc004f70149baeba2c8ec672bd4f27761f8e1ad6b",
                created=datetime(2024, 1, 26, 14, 30, tzinfo=UTC),
                platform="linux/amd64",
            ),
            metadata={"ctn_names": "alpine"},
        ),
    )
