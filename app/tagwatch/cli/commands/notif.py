"""Notification commands.

This module provides the `tagwatch notif test` command, which sends a
sample notification through every configured notifier.
"""

from datetime import UTC, datetime

import typer

from tagwatch.cli.types import get_config
from tagwatch.models.event import (
    EntryStatus,
    ImageManifest,
    Meta,
    NotifEntry,
    NotificationEvent,
)
from tagwatch.notif.base import DeliveryTimeoutError, NotifierError
from tagwatch.notif.registry import build_notifiers
from tagwatch.utils.formatting import print_error, print_success, print_warning

app = typer.Typer(
    help="Manage notifications.",
    no_args_is_help=True,
)


def create_test_event(meta: Meta) -> NotificationEvent:
    """Create the sample event sent by `notif test`.

    Args:
        meta: Producer identity.

    Returns:
        A NotificationEvent describing a fake image update.
    """
    return NotificationEvent(
        meta=meta,
        entry=NotifEntry(
            status=EntryStatus.NEW,
            provider="file",
            image="docker.io/tagwatch/tagwatch:latest",
            hub_link="https://hub.docker.com/r/tagwatch/tagwatch",
            manifest=ImageManifest(
                mime_type="application/vnd.docker.distribution.manifest.list.v2+json",
                digest="sha256:216e3ae7de4ca8b553eb11ef7abda00651e79e537e85c46108284e5e91673e01",
                created=datetime(2020, 3, 26, 12, 23, 56, tzinfo=UTC),
                platform="linux/amd64",
            ),
            metadata={
                "ctn_command": "tagwatch serve",
                "ctn_createdat": "2022-12-29 10:22:15 +0100 CET",
                "ctn_id": "0dbd10e15b31add2c48856fd34451adabf50d276efa466fe19a8ef5fbd87ad7c",
                "ctn_names": "tagwatch",
                "ctn_size": "0B",
                "ctn_state": "running",
                "ctn_status": "Up Less than a second (health: starting)",
            },
        ),
    )


@app.command("test")
def send_test_notification(ctx: typer.Context) -> None:
    """Send a test notification through every configured notifier.

    Examples:
        tagwatch notif test
        tagwatch --config ./config.toml notif test
    """
    config = get_config(ctx)
    meta = Meta.default(config.meta)
    notifiers = build_notifiers(config.notif, meta)

    if not notifiers:
        print_error("No notifier available")
        raise typer.Exit(code=1)

    event = create_test_event(meta)
    failed = False
    for notifier in notifiers:
        try:
            notifier.send(event)
        except DeliveryTimeoutError as e:
            print_warning(f"{notifier.name}: {e}")
            failed = True
        except NotifierError as e:
            print_error(f"{notifier.name}: {e}")
            failed = True
        else:
            print_success(f"Notification sent for {notifier.name} notifier")

    if failed:
        raise typer.Exit(code=1)
