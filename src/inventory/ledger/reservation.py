"""Stock reservation: commands and handler.

Used by the fulfillment workflow: ReserveStock when an order is placed,
ReleaseStock when it is cancelled.
"""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from inventory.domain import inventory
from inventory.ledger.ledger import StockLedger
from inventory.ledger.locking import serialized


@inventory.command(part_of="StockLedger")
class ReserveStock:
    """Hold stock for a pending order."""

    ledger_id = Identifier(required=True)
    quantity = Integer(required=True)


@inventory.command(part_of="StockLedger")
class ReleaseStock:
    """Release held stock back to available."""

    ledger_id = Identifier(required=True)
    quantity = Integer(required=True)


@inventory.command_handler(part_of=StockLedger)
class ReservationHandler:
    @serialized
    @handle(ReserveStock)
    def reserve_stock(self, command):
        repo = current_domain.repository_for(StockLedger)
        ledger = repo.get(command.ledger_id)
        ledger.reserve_stock(command.quantity)
        repo.add(ledger)

    @serialized
    @handle(ReleaseStock)
    def release_stock(self, command):
        repo = current_domain.repository_for(StockLedger)
        ledger = repo.get(command.ledger_id)
        ledger.release_stock(command.quantity)
        repo.add(ledger)
