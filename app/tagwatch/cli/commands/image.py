"""Image commands for managing the manifest database.

This module provides the `tagwatch image` commands to list, inspect,
remove and prune the images tracked by a tagwatch server.
"""

from typing import Annotated

import typer

from tagwatch.cli.display import create_images_table, create_manifests_table
from tagwatch.cli.types import GrpcAuthorityOption, resolve_authority
from tagwatch.inventory.client import InventoryClient, InventoryError
from tagwatch.models.image import WireModel
from tagwatch.utils.formatting import console, print_error, print_info

PRUNE_ALL_WARNING = (
    "This will remove all manifests from the database. Are you sure you want to continue?"
)

app = typer.Typer(
    help="Manage the image manifest database.",
    invoke_without_command=True,
)

RawOption = Annotated[
    bool,
    typer.Option(
        "--raw",
        help="JSON output.",
    ),
]


@app.callback(invoke_without_command=True)
def image(ctx: typer.Context) -> None:
    """Manage the image manifest database.

    Without a subcommand, lists the images in the database.
    """
    if ctx.invoked_subcommand is not None:
        return
    ctx.invoke(list_images, ctx=ctx, raw=False, grpc_authority=None)


@app.command("list")
def list_images(
    ctx: typer.Context,
    raw: RawOption = False,
    grpc_authority: GrpcAuthorityOption = None,
) -> None:
    """List images in database.

    Images are sorted by name, case-insensitively.

    Examples:
        tagwatch image list
        tagwatch image list --raw
        tagwatch image list --grpc-authority 10.0.0.5:42286
    """
    client = InventoryClient(resolve_authority(ctx, grpc_authority))
    try:
        response = client.list_images()
    except InventoryError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if raw:
        _print_raw(response)
        return

    if not response.images:
        print_info("No image found in the database")
        return

    console.print(create_images_table(response.images))


@app.command("inspect")
def inspect_image(
    ctx: typer.Context,
    image: Annotated[
        str,
        typer.Option(
            "--image",
            help="Image to inspect.",
        ),
    ],
    raw: RawOption = False,
    grpc_authority: GrpcAuthorityOption = None,
) -> None:
    """Display information of an image in database.

    Manifests are listed most recent first.
    """
    client = InventoryClient(resolve_authority(ctx, grpc_authority))
    try:
        response = client.inspect_image(image)
    except InventoryError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if raw:
        _print_raw(response)
        return

    console.print(create_manifests_table(response.image.manifests))


@app.command("remove")
def remove_image(
    ctx: typer.Context,
    image: Annotated[
        str,
        typer.Option(
            "--image",
            help="Image to remove.",
        ),
    ],
    grpc_authority: GrpcAuthorityOption = None,
) -> None:
    """Remove an image manifest from database.

    All manifests of the named image are removed without confirmation.
    """
    client = InventoryClient(resolve_authority(ctx, grpc_authority))
    try:
        removed = client.remove_image(image)
    except InventoryError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    console.print(create_manifests_table(removed.manifests, show_size=True))


def should_proceed(force: bool, confirmed: bool | None) -> bool:
    """Decide whether a destructive operation may run.

    Args:
        force: Whether confirmation was waived (--force).
        confirmed: The user's answer, or None if not asked or the prompt failed.

    Returns:
        True if forced or explicitly confirmed.
    """
    return force or confirmed is True


def _ask_prune_confirmation() -> bool | None:
    """Ask the user to confirm a full prune.

    Returns:
        The answer, or None if the prompt was aborted (EOF, Ctrl+C).
    """
    try:
        return typer.confirm(PRUNE_ALL_WARNING, default=False)
    except typer.Abort:
        return None


@app.command("prune")
def prune_images(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            help="Do not prompt for confirmation.",
        ),
    ] = False,
    grpc_authority: GrpcAuthorityOption = None,
) -> None:
    """Remove all manifests from the database.

    Asks for confirmation unless --force is given. Declining is not an error.
    """
    confirmed = None if force else _ask_prune_confirmation()
    if not should_proceed(force, confirmed):
        return

    client = InventoryClient(resolve_authority(ctx, grpc_authority))
    try:
        removed = client.prune_images()
    except InventoryError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not removed.images:
        print_info("Nothing to be removed from the database")
        return

    console.print(create_manifests_table(removed.manifests, show_size=True))


def _print_raw(response: WireModel) -> None:
    """Print a response message as pretty JSON.

    Args:
        response: Response message to print.
    """
    console.print_json(data=response.model_dump(mode="json", by_alias=True))
