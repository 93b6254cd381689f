"""Reorder report: ledgers at or below their reorder level, for purchasing.

Rows are opened by ReorderLevelReached and dropped once on-hand climbs
back above the reorder level.
"""

from protean.core.projector import on
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, DateTime, Identifier, Integer, String
from protean.utils.globals import current_domain

from inventory.domain import inventory
from inventory.ledger.events import (
    LedgerDetailsUpdated,
    MaxStockLevelChanged,
    OnHandSet,
    ReorderLevelChanged,
    ReorderLevelReached,
    StockAdded,
    StockReleased,
    StockRemoved,
    StockReserved,
    ThresholdsChanged,
)
from inventory.ledger.ledger import StockLedger


@inventory.projection
class ReorderReport:
    ledger_id = Identifier(identifier=True, required=True)
    product_id = Identifier(required=True)
    sku = String(max_length=50)
    on_hand = Integer(default=0)
    available = Integer(default=0)
    reorder_level = Integer(default=0)
    max_stock_level = Integer(default=0)
    suggested_quantity = Integer(default=0)  # Units to order to reach max stock level
    is_out_of_stock = Boolean(default=False)
    detected_at = DateTime()


def _suggested_quantity(on_hand, max_stock_level):
    return max(0, max_stock_level - on_hand)


def _refresh(event):
    """Update or drop an existing row from a snapshot event."""
    repo = current_domain.repository_for(ReorderReport)
    try:
        report = repo.get(event.ledger_id)
    except ObjectNotFoundError:
        return  # Not in the report

    if event.on_hand > event.reorder_level:
        repo._dao.delete(report)
        return

    report.on_hand = event.on_hand
    report.available = event.available
    report.reorder_level = event.reorder_level
    report.max_stock_level = event.max_stock_level
    report.suggested_quantity = _suggested_quantity(event.on_hand, event.max_stock_level)
    report.is_out_of_stock = event.on_hand == 0
    repo.add(report)


@inventory.projector(projector_for=ReorderReport, aggregates=[StockLedger])
class ReorderReportProjector:
    @on(ReorderLevelReached)
    def on_reorder_level_reached(self, event):
        repo = current_domain.repository_for(ReorderReport)
        try:
            report = repo.get(event.ledger_id)
        except ObjectNotFoundError:
            report = ReorderReport(ledger_id=event.ledger_id, product_id=event.product_id)

        report.sku = event.sku
        report.on_hand = event.on_hand
        report.available = event.available
        report.reorder_level = event.reorder_level
        report.max_stock_level = event.max_stock_level
        report.suggested_quantity = _suggested_quantity(event.on_hand, event.max_stock_level)
        report.is_out_of_stock = event.on_hand == 0
        report.detected_at = event.detected_at
        repo.add(report)

    @on(StockAdded)
    def on_stock_added(self, event):
        _refresh(event)

    @on(StockRemoved)
    def on_stock_removed(self, event):
        _refresh(event)

    @on(StockReserved)
    def on_stock_reserved(self, event):
        _refresh(event)

    @on(StockReleased)
    def on_stock_released(self, event):
        _refresh(event)

    @on(OnHandSet)
    def on_on_hand_set(self, event):
        _refresh(event)

    @on(ReorderLevelChanged)
    def on_reorder_level_changed(self, event):
        _refresh(event)

    @on(MaxStockLevelChanged)
    def on_max_stock_level_changed(self, event):
        _refresh(event)

    @on(ThresholdsChanged)
    def on_thresholds_changed(self, event):
        _refresh(event)

    @on(LedgerDetailsUpdated)
    def on_details_updated(self, event):
        repo = current_domain.repository_for(ReorderReport)
        try:
            report = repo.get(event.ledger_id)
        except ObjectNotFoundError:
            return
        report.sku = event.sku
        repo.add(report)
