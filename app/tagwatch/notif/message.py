"""JSON rendering of notification events.

Produces the document posted by HTTP based notifiers: a flat object
combining the producer identity with the entry payload.
"""

import json
from typing import Any

from tagwatch.models.event import NotificationEvent
from tagwatch.notif.base import RenderError


def event_to_dict(event: NotificationEvent) -> dict[str, Any]:
    """Flatten an event into the JSON document layout.

    Args:
        event: The event to convert.

    Returns:
        Dictionary with the notification fields.
    """
    entry = event.entry
    created = entry.manifest.created
    return {
        "tagwatch_version": event.meta.version,
        "hostname": event.meta.hostname,
        "status": entry.status.value,
        "provider": entry.provider,
        "image": entry.image,
        "hub_link": entry.hub_link,
        "mime_type": entry.manifest.mime_type,
        "digest": entry.manifest.digest,
        "created": created.isoformat() if created is not None else None,
        "platform": entry.manifest.platform,
        "metadata": entry.metadata,
    }


def render_json(event: NotificationEvent) -> bytes:
    """Render an event as a UTF-8 encoded JSON document.

    Args:
        event: The event to render.

    Returns:
        JSON body ready to be transmitted.

    Raises:
        RenderError: If the event holds values that cannot be encoded.
    """
    try:
        return json.dumps(event_to_dict(event), allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise RenderError(f"Cannot render notification for {event.entry.image}: {e}") from e
