"""Stock count: command and handler for replacing on-hand outright."""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from inventory.domain import inventory
from inventory.ledger.ledger import StockLedger
from inventory.ledger.locking import serialized


@inventory.command(part_of="StockLedger")
class SetOnHand:
    """Record the counted on-hand quantity."""

    ledger_id = Identifier(required=True)
    quantity = Integer(required=True)


@inventory.command_handler(part_of=StockLedger)
class CountingHandler:
    @serialized
    @handle(SetOnHand)
    def set_on_hand(self, command):
        repo = current_domain.repository_for(StockLedger)
        ledger = repo.get(command.ledger_id)
        ledger.set_on_hand(command.quantity)
        repo.add(ledger)
