"""Stock availability: per-ledger availability for catalogue display.

Every counter and threshold event carries the ledger's resulting snapshot,
so each handler simply overwrites the row with it.
"""

from protean.core.projector import on
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, DateTime, Identifier, Integer, String
from protean.utils.globals import current_domain

from inventory.domain import inventory
from inventory.ledger.events import (
    LedgerCreated,
    LedgerDetailsUpdated,
    MaxStockLevelChanged,
    OnHandSet,
    ReorderLevelChanged,
    StockAdded,
    StockReleased,
    StockRemoved,
    StockReserved,
    ThresholdsChanged,
)
from inventory.ledger.ledger import StockLedger


@inventory.projection
class StockAvailability:
    ledger_id = Identifier(identifier=True, required=True)
    product_id = Identifier(required=True)
    sku = String(max_length=50)
    on_hand = Integer(default=0)
    reserved = Integer(default=0)
    available = Integer(default=0)
    is_in_stock = Boolean(default=False)
    needs_reorder = Boolean(default=False)
    updated_at = DateTime()


def _apply_snapshot(event, timestamp):
    repo = current_domain.repository_for(StockAvailability)
    try:
        view = repo.get(event.ledger_id)
    except ObjectNotFoundError:
        view = StockAvailability(ledger_id=event.ledger_id, product_id=event.product_id)

    view.on_hand = event.on_hand
    view.reserved = event.reserved
    view.available = event.available
    view.is_in_stock = event.available > 0
    view.needs_reorder = event.on_hand <= event.reorder_level
    view.updated_at = timestamp
    repo.add(view)


@inventory.projector(projector_for=StockAvailability, aggregates=[StockLedger])
class StockAvailabilityProjector:
    @on(LedgerCreated)
    def on_ledger_created(self, event):
        current_domain.repository_for(StockAvailability).add(
            StockAvailability(
                ledger_id=event.ledger_id,
                product_id=event.product_id,
                sku=event.sku,
                on_hand=event.on_hand,
                reserved=event.reserved,
                available=event.available,
                is_in_stock=event.available > 0,
                needs_reorder=event.on_hand <= event.reorder_level,
                updated_at=event.created_at,
            )
        )

    @on(StockReserved)
    def on_stock_reserved(self, event):
        _apply_snapshot(event, event.reserved_at)

    @on(StockReleased)
    def on_stock_released(self, event):
        _apply_snapshot(event, event.released_at)

    @on(StockAdded)
    def on_stock_added(self, event):
        _apply_snapshot(event, event.added_at)

    @on(StockRemoved)
    def on_stock_removed(self, event):
        _apply_snapshot(event, event.removed_at)

    @on(OnHandSet)
    def on_on_hand_set(self, event):
        _apply_snapshot(event, event.set_at)

    @on(ReorderLevelChanged)
    def on_reorder_level_changed(self, event):
        _apply_snapshot(event, event.changed_at)

    @on(MaxStockLevelChanged)
    def on_max_stock_level_changed(self, event):
        _apply_snapshot(event, event.changed_at)

    @on(ThresholdsChanged)
    def on_thresholds_changed(self, event):
        _apply_snapshot(event, event.changed_at)

    @on(LedgerDetailsUpdated)
    def on_details_updated(self, event):
        repo = current_domain.repository_for(StockAvailability)
        try:
            view = repo.get(event.ledger_id)
        except ObjectNotFoundError:
            return
        view.sku = event.sku
        view.updated_at = event.updated_at
        repo.add(view)
