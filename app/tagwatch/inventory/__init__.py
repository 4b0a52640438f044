"""Inventory client for the manifest database of a tagwatch server."""

from tagwatch.inventory.client import (
    SERVICE_NAME,
    InventoryClient,
    InventoryConnectionError,
    InventoryError,
    InventoryProtocolError,
    InventoryServiceError,
)

__all__ = [
    "SERVICE_NAME",
    "InventoryClient",
    "InventoryConnectionError",
    "InventoryError",
    "InventoryProtocolError",
    "InventoryServiceError",
]
