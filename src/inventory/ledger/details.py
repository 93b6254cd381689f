"""Ledger details: command and handler for SKU, storage location and notes."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from inventory.domain import inventory
from inventory.ledger.ledger import StockLedger
from inventory.ledger.locking import serialized
from inventory.utils.settings import settings


@inventory.command(part_of="StockLedger")
class UpdateLedgerDetails:
    """Edit descriptive attributes. Omitted fields are left unchanged."""

    ledger_id = Identifier(required=True)
    sku = String(max_length=50)
    storage_location = String(max_length=100)
    notes = String(max_length=500)


@inventory.command_handler(part_of=StockLedger)
class LedgerDetailsHandler:
    @serialized
    @handle(UpdateLedgerDetails)
    def update_details(self, command):
        repo = current_domain.repository_for(StockLedger)
        ledger = repo.get(command.ledger_id)

        details = {
            field: getattr(command, field)
            for field in ("sku", "storage_location", "notes")
            if getattr(command, field) is not None
        }

        new_sku = details.get("sku")
        if new_sku and new_sku != ledger.sku and settings.enforce_unique_sku:
            existing = repo.find_by_sku(new_sku)
            if existing is not None and str(existing.id) != str(ledger.id):
                raise ValidationError({"sku": [f"SKU {new_sku} is already tracked by another ledger"]})

        ledger.update_details(**details)
        repo.add(ledger)
