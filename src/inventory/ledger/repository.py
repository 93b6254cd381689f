"""Repository for the StockLedger aggregate."""

from inventory.domain import inventory
from inventory.ledger.ledger import StockLedger


@inventory.repository(part_of=StockLedger)
class StockLedgerRepository:
    """Lookups by the ledger's natural keys, on top of the standard CRUD operations."""

    def find_by_product(self, product_id) -> StockLedger | None:
        results = self._dao.query.filter(product_id=str(product_id)).all().items
        return results[0] if results else None

    def find_by_sku(self, sku: str) -> StockLedger | None:
        results = self._dao.query.filter(sku=sku).all().items
        return results[0] if results else None

    def delete_ledger(self, ledger: StockLedger) -> None:
        self._dao.delete(ledger)
