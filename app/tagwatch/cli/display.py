"""Shared Rich display functions for inventory results.

Provides reusable table builders for the image commands (list, inspect,
remove, prune). Every table carries a footer row with the totals.
"""

from rich.table import Table

from tagwatch.models.image import ImageRecord, ManifestRecord
from tagwatch.utils.formatting import format_timestamp, human_size


def create_images_table(images: list[ImageRecord]) -> Table:
    """Create a Rich table listing images and their latest manifest.

    Rows are rendered in the given order; the footer reports the number
    of images.

    Args:
        images: Images to display.

    Returns:
        Rich Table configured for image display.
    """
    table = Table(
        show_header=True,
        show_footer=True,
        header_style="bold_header",
        footer_style="footer",
        border_style="border",
    )
    table.add_column("Name", style="image_name", no_wrap=True, footer="Total")
    table.add_column("Manifests Count", justify="right", footer=str(len(images)))
    table.add_column("Latest Tag", style="tag")
    table.add_column("Latest Created")
    table.add_column("Latest Digest", style="digest", overflow="fold")

    for image in images:
        latest = image.latest
        table.add_row(
            image.name,
            str(image.manifests_count),
            latest.tag if latest else "",
            format_timestamp(latest.created) if latest else "",
            latest.digest if latest else "",
        )

    return table


def create_manifests_table(manifests: list[ManifestRecord], show_size: bool = False) -> Table:
    """Create a Rich table listing manifests.

    Without sizes, the footer reports the manifest count. With sizes, a
    Size column is added and the footer reports ``<count> (<total size>)``.

    Args:
        manifests: Manifests to display, in display order.
        show_size: Whether to add the Size column and aggregate size.

    Returns:
        Rich Table configured for manifest display.
    """
    if show_size:
        total_size = sum(manifest.size for manifest in manifests)
        total = f"{len(manifests)} ({human_size(total_size)})"
    else:
        total = str(len(manifests))

    table = Table(
        show_header=True,
        show_footer=True,
        header_style="bold_header",
        footer_style="footer",
        border_style="border",
    )
    table.add_column("Tag", style="tag", no_wrap=True, footer="Total")
    table.add_column("Created", footer=total)
    table.add_column("Digest", style="digest", overflow="fold")
    if show_size:
        table.add_column("Size", style="size", justify="right")

    for manifest in manifests:
        row = [manifest.tag, format_timestamp(manifest.created), manifest.digest]
        if show_size:
            row.append(human_size(manifest.size))
        table.add_row(*row)

    return table
