"""Domain events for the StockLedger aggregate.

Counter and threshold events carry the ledger's resulting snapshot
(on_hand, reserved, available, reorder_level, max_stock_level), so read
models can be rebuilt from any single event without consulting the ledger.
"""

from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from inventory.domain import inventory


@inventory.event(part_of="StockLedger")
class LedgerCreated:
    """A ledger was opened for a newly catalogued good."""

    __version__ = 1

    ledger_id = Identifier(required=True)
    product_id = Identifier(required=True)
    sku = String()
    storage_location = String()
    on_hand = Integer(required=True)
    reserved = Integer(required=True)
    available = Integer(required=True)
    reorder_level = Integer(required=True)
    max_stock_level = Integer(required=True)
    created_at = DateTime(required=True)


@inventory.event(part_of="StockLedger")
class StockReserved:
    """Units were held for a pending order, decreasing available quantity."""

    __version__ = 1

    ledger_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    on_hand = Integer(required=True)
    reserved = Integer(required=True)
    available = Integer(required=True)
    reorder_level = Integer(required=True)
    max_stock_level = Integer(required=True)
    reserved_at = DateTime(required=True)


@inventory.event(part_of="StockLedger")
class StockReleased:
    """A hold was released (order cancelled), returning units to available."""

    __version__ = 1

    ledger_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    on_hand = Integer(required=True)
    reserved = Integer(required=True)
    available = Integer(required=True)
    reorder_level = Integer(required=True)
    max_stock_level = Integer(required=True)
    released_at = DateTime(required=True)


@inventory.event(part_of="StockLedger")
class StockAdded:
    """New inventory was received, increasing on-hand quantity."""

    __version__ = 1

    ledger_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_on_hand = Integer(required=True)
    on_hand = Integer(required=True)
    reserved = Integer(required=True)
    available = Integer(required=True)
    reorder_level = Integer(required=True)
    max_stock_level = Integer(required=True)
    added_at = DateTime(required=True)


@inventory.event(part_of="StockLedger")
class StockRemoved:
    """Units left the warehouse (shipped or written off)."""

    __version__ = 1

    ledger_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    reduce_reserved = Boolean(default=True)
    previous_on_hand = Integer(required=True)
    previous_reserved = Integer(required=True)
    on_hand = Integer(required=True)
    reserved = Integer(required=True)
    available = Integer(required=True)
    reorder_level = Integer(required=True)
    max_stock_level = Integer(required=True)
    removed_at = DateTime(required=True)


@inventory.event(part_of="StockLedger")
class OnHandSet:
    """On-hand quantity was replaced outright, typically after a stock count."""

    __version__ = 1

    ledger_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_on_hand = Integer(required=True)
    on_hand = Integer(required=True)
    reserved = Integer(required=True)
    available = Integer(required=True)
    reorder_level = Integer(required=True)
    max_stock_level = Integer(required=True)
    set_at = DateTime(required=True)


@inventory.event(part_of="StockLedger")
class ReorderLevelChanged:
    __version__ = 1

    ledger_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_reorder_level = Integer(required=True)
    on_hand = Integer(required=True)
    reserved = Integer(required=True)
    available = Integer(required=True)
    reorder_level = Integer(required=True)
    max_stock_level = Integer(required=True)
    changed_at = DateTime(required=True)


@inventory.event(part_of="StockLedger")
class MaxStockLevelChanged:
    __version__ = 1

    ledger_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_max_stock_level = Integer(required=True)
    on_hand = Integer(required=True)
    reserved = Integer(required=True)
    available = Integer(required=True)
    reorder_level = Integer(required=True)
    max_stock_level = Integer(required=True)
    changed_at = DateTime(required=True)


@inventory.event(part_of="StockLedger")
class ThresholdsChanged:
    """Reorder level and max stock level were replaced together."""

    __version__ = 1

    ledger_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_reorder_level = Integer(required=True)
    previous_max_stock_level = Integer(required=True)
    on_hand = Integer(required=True)
    reserved = Integer(required=True)
    available = Integer(required=True)
    reorder_level = Integer(required=True)
    max_stock_level = Integer(required=True)
    changed_at = DateTime(required=True)


@inventory.event(part_of="StockLedger")
class ReorderLevelReached:
    """On-hand stock is at or below the reorder level; replenishment is due."""

    __version__ = 1

    ledger_id = Identifier(required=True)
    product_id = Identifier(required=True)
    sku = String()
    on_hand = Integer(required=True)
    available = Integer(required=True)
    reorder_level = Integer(required=True)
    max_stock_level = Integer(required=True)
    detected_at = DateTime(required=True)


@inventory.event(part_of="StockLedger")
class LedgerDetailsUpdated:
    """Descriptive attributes (SKU, storage location, notes) were edited."""

    __version__ = 1

    ledger_id = Identifier(required=True)
    product_id = Identifier(required=True)
    sku = String()
    storage_location = String()
    notes = Text()
    updated_at = DateTime(required=True)
