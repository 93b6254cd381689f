"""Cross-domain event contracts for Catalogue domain events.

These classes define the event shape the Inventory domain consumes to keep
one stock ledger per catalogued product. They are registered as external
events via domain.register_external_event() with matching __type__ strings
so Protean's stream deserialization works correctly.
"""

from protean.core.event import BaseEvent
from protean.fields import DateTime, Identifier, Integer, String


class ProductCreated(BaseEvent):
    """A new product was added to the catalogue."""

    __version__ = 1

    product_id = Identifier(required=True)
    sku = String()
    title = String(required=True)
    reorder_level = Integer()
    max_stock_level = Integer()
    created_at = DateTime(required=True)


class ProductRemoved(BaseEvent):
    """A product was deleted from the catalogue."""

    __version__ = 1

    product_id = Identifier(required=True)
    sku = String()
    removed_at = DateTime(required=True)
