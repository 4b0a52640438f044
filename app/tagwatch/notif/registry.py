"""Notifier registry.

Maps a configuration kind to the constructor of its backend so that new
backends only need an entry here.
"""

from collections.abc import Callable
from typing import Any

from tagwatch.models.config import NotifConfig
from tagwatch.models.event import Meta
from tagwatch.notif.base import Notifier
from tagwatch.notif.webhook import WebhookNotifier

# Kind (field name in the [notif] section) -> constructor(config, meta)
NOTIFIERS: dict[str, Callable[[Any, Meta], Notifier]] = {
    "webhook": WebhookNotifier,
}


def build_notifiers(config: NotifConfig, meta: Meta) -> list[Notifier]:
    """Instantiate one notifier per configured backend.

    Args:
        config: The [notif] section of the configuration.
        meta: Producer identity shared by all notifiers.

    Returns:
        Notifiers in registry order; empty if none is configured.
    """
    notifiers: list[Notifier] = []
    for kind, factory in NOTIFIERS.items():
        backend_config = getattr(config, kind, None)
        if backend_config is not None:
            notifiers.append(factory(backend_config, meta))
    return notifiers
