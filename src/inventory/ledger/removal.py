"""Ledger removal: command and handler.

A ledger lives exactly as long as the good it tracks. Removing it also
clears its read models and forgets its lock.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from inventory.domain import inventory
from inventory.ledger.ledger import StockLedger
from inventory.ledger.locking import discard_ledger_lock, serialized

logger = structlog.get_logger(__name__)


@inventory.command(part_of="StockLedger")
class RemoveLedger:
    """Delete the ledger of a product that left the catalogue."""

    ledger_id = Identifier(required=True)


@inventory.command_handler(part_of=StockLedger)
class LedgerRemovalHandler:
    @serialized
    @handle(RemoveLedger)
    def remove_ledger(self, command):
        from inventory.projections.reorder_report import ReorderReport
        from inventory.projections.stock_availability import StockAvailability

        repo = current_domain.repository_for(StockLedger)
        ledger = repo.get(command.ledger_id)
        repo.delete_ledger(ledger)

        for projection in (StockAvailability, ReorderReport):
            view_repo = current_domain.repository_for(projection)
            for record in view_repo._dao.query.filter(ledger_id=str(ledger.id)).all().items:
                view_repo._dao.delete(record)

        discard_ledger_lock(ledger.id)
        logger.info("Stock ledger removed", ledger_id=str(ledger.id), product_id=str(ledger.product_id))
