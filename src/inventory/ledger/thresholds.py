"""Reorder thresholds: commands and handler (catalog management).

SetThresholds changes both levels in one checked step and is the
preferred way to move them. SetReorderLevel is kept for callers that
adjust the reorder level on its own.
"""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from inventory.domain import inventory
from inventory.ledger.ledger import StockLedger
from inventory.ledger.locking import serialized


@inventory.command(part_of="StockLedger")
class SetReorderLevel:
    ledger_id = Identifier(required=True)
    reorder_level = Integer(required=True)


@inventory.command(part_of="StockLedger")
class SetMaxStockLevel:
    ledger_id = Identifier(required=True)
    max_stock_level = Integer(required=True)


@inventory.command(part_of="StockLedger")
class SetThresholds:
    """Replace reorder level and max stock level together."""

    ledger_id = Identifier(required=True)
    reorder_level = Integer(required=True)
    max_stock_level = Integer(required=True)


@inventory.command_handler(part_of=StockLedger)
class ThresholdsHandler:
    @serialized
    @handle(SetReorderLevel)
    def set_reorder_level(self, command):
        repo = current_domain.repository_for(StockLedger)
        ledger = repo.get(command.ledger_id)
        ledger.set_reorder_level(command.reorder_level)
        repo.add(ledger)

    @serialized
    @handle(SetMaxStockLevel)
    def set_max_stock_level(self, command):
        repo = current_domain.repository_for(StockLedger)
        ledger = repo.get(command.ledger_id)
        ledger.set_max_stock_level(command.max_stock_level)
        repo.add(ledger)

    @serialized
    @handle(SetThresholds)
    def set_thresholds(self, command):
        repo = current_domain.repository_for(StockLedger)
        ledger = repo.get(command.ledger_id)
        ledger.set_thresholds(command.reorder_level, command.max_stock_level)
        repo.add(ledger)
