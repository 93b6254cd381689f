"""Ledger creation: command and handler.

A ledger is opened alongside the good it tracks: one ledger per product,
and, unless disabled in settings, one ledger per SKU.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from inventory.domain import inventory
from inventory.ledger.ledger import StockLedger
from inventory.utils.settings import settings

logger = structlog.get_logger(__name__)


@inventory.command(part_of="StockLedger")
class CreateLedger:
    """Open an empty stock ledger for a product."""

    product_id = Identifier(required=True)
    sku = String(max_length=50)
    reorder_level = Integer()  # Optional; configured default when omitted
    max_stock_level = Integer()  # Optional; configured default when omitted
    storage_location = String(max_length=100)
    notes = String(max_length=500)


@inventory.command_handler(part_of=StockLedger)
class CreateLedgerHandler:
    @handle(CreateLedger)
    def create_ledger(self, command):
        repo = current_domain.repository_for(StockLedger)

        if repo.find_by_product(command.product_id) is not None:
            raise ValidationError({"product_id": [f"Product {command.product_id} already has a stock ledger"]})

        if command.sku and settings.enforce_unique_sku and repo.find_by_sku(command.sku) is not None:
            raise ValidationError({"sku": [f"SKU {command.sku} is already tracked by another ledger"]})

        ledger = StockLedger.create(
            product_id=command.product_id,
            sku=command.sku,
            reorder_level=command.reorder_level,
            max_stock_level=command.max_stock_level,
            storage_location=command.storage_location,
            notes=command.notes,
        )
        repo.add(ledger)

        logger.info("Stock ledger created", ledger_id=str(ledger.id), product_id=str(command.product_id))
        return str(ledger.id)
