"""Inbound cross-domain event handler: Inventory reacts to Catalogue events.

Opens a stock ledger when a product is created and deletes it when the
product is removed, so no ledger outlives its good.
"""

import structlog
from protean.utils.globals import current_domain
from protean.utils.mixins import handle
from shared.events.catalogue import ProductCreated, ProductRemoved

from inventory.domain import inventory
from inventory.ledger.ledger import StockLedger

logger = structlog.get_logger(__name__)

# Register external events so Protean can deserialize them
inventory.register_external_event(ProductCreated, "Catalogue.ProductCreated.v1")
inventory.register_external_event(ProductRemoved, "Catalogue.ProductRemoved.v1")


@inventory.event_handler(part_of=StockLedger, stream_category="catalogue::product")
class CatalogueLedgerEventHandler:
    """Keeps the set of ledgers in step with the catalogue."""

    @handle(ProductCreated)
    def on_product_created(self, event: ProductCreated) -> None:
        from inventory.ledger.creation import CreateLedger

        repo = current_domain.repository_for(StockLedger)
        if repo.find_by_product(event.product_id) is not None:
            logger.info("Ledger already exists for product", product_id=str(event.product_id))
            return

        ledger_id = current_domain.process(
            CreateLedger(
                product_id=event.product_id,
                sku=event.sku,
                reorder_level=event.reorder_level,
                max_stock_level=event.max_stock_level,
            ),
            asynchronous=False,
        )
        logger.info(
            "Ledger opened for new product",
            product_id=str(event.product_id),
            ledger_id=ledger_id,
            sku=event.sku,
        )

    @handle(ProductRemoved)
    def on_product_removed(self, event: ProductRemoved) -> None:
        from inventory.ledger.removal import RemoveLedger

        ledger = current_domain.repository_for(StockLedger).find_by_product(event.product_id)
        if ledger is None:
            logger.info("No ledger to remove for product", product_id=str(event.product_id))
            return

        current_domain.process(RemoveLedger(ledger_id=str(ledger.id)), asynchronous=False)
        logger.info(
            "Ledger removed with product",
            product_id=str(event.product_id),
            ledger_id=str(ledger.id),
        )
