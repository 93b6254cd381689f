"""Stock removal: command and handler.

The fulfillment workflow sends RemoveStock with reduce_reserved=True when an
order ships; write-offs of unreserved stock send reduce_reserved=False.
"""

from protean import handle
from protean.fields import Boolean, Identifier, Integer
from protean.utils.globals import current_domain

from inventory.domain import inventory
from inventory.ledger.ledger import StockLedger
from inventory.ledger.locking import serialized


@inventory.command(part_of="StockLedger")
class RemoveStock:
    """Take units out of stock."""

    ledger_id = Identifier(required=True)
    quantity = Integer(required=True)
    reduce_reserved = Boolean(default=True)


@inventory.command_handler(part_of=StockLedger)
class ShippingHandler:
    @serialized
    @handle(RemoveStock)
    def remove_stock(self, command):
        repo = current_domain.repository_for(StockLedger)
        ledger = repo.get(command.ledger_id)
        reduce_reserved = True if command.reduce_reserved is None else command.reduce_reserved
        ledger.remove_stock(command.quantity, reduce_reserved=reduce_reserved)
        repo.add(ledger)
