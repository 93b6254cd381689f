"""Stock receiving: command and handler (replenishment workflow)."""

import structlog
from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from inventory.domain import inventory
from inventory.ledger.ledger import StockLedger
from inventory.ledger.locking import serialized

logger = structlog.get_logger(__name__)


@inventory.command(part_of="StockLedger")
class AddStock:
    """Receive new units into stock."""

    ledger_id = Identifier(required=True)
    quantity = Integer(required=True)
    reference = String()  # Receiving document number


@inventory.command_handler(part_of=StockLedger)
class ReceivingHandler:
    @serialized
    @handle(AddStock)
    def add_stock(self, command):
        repo = current_domain.repository_for(StockLedger)
        ledger = repo.get(command.ledger_id)
        ledger.add_stock(command.quantity)
        repo.add(ledger)

        if ledger.on_hand > ledger.max_stock_level:
            logger.warning(
                "Stock received above max stock level",
                ledger_id=str(ledger.id),
                on_hand=ledger.on_hand,
                max_stock_level=ledger.max_stock_level,
                reference=command.reference,
            )
