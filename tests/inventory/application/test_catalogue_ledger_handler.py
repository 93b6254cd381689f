"""Application tests for CatalogueLedgerEventHandler: ledgers follow the catalogue."""

from datetime import UTC, datetime

from inventory.ledger.catalogue_events import CatalogueLedgerEventHandler
from inventory.ledger.ledger import StockLedger
from protean import current_domain
from shared.events.catalogue import ProductCreated, ProductRemoved


def _product_created(product_id="prod-cat-001", sku="SCARF-WOOL", **extra):
    return ProductCreated(
        product_id=product_id,
        sku=sku,
        title="Wool Scarf",
        created_at=datetime.now(UTC),
        **extra,
    )


def _find(product_id):
    return current_domain.repository_for(StockLedger).find_by_product(product_id)


class TestProductCreatedHandler:
    def test_product_created_opens_a_ledger(self):
        CatalogueLedgerEventHandler().on_product_created(_product_created())

        ledger = _find("prod-cat-001")
        assert ledger is not None
        assert ledger.sku == "SCARF-WOOL"
        assert (ledger.on_hand, ledger.reserved) == (0, 0)
        assert (ledger.reorder_level, ledger.max_stock_level) == (5, 100)

    def test_thresholds_from_the_catalogue_are_used(self):
        CatalogueLedgerEventHandler().on_product_created(_product_created(reorder_level=3, max_stock_level=30))

        ledger = _find("prod-cat-001")
        assert (ledger.reorder_level, ledger.max_stock_level) == (3, 30)

    def test_redelivery_does_not_open_a_second_ledger(self):
        handler = CatalogueLedgerEventHandler()
        handler.on_product_created(_product_created())
        handler.on_product_created(_product_created())

        ledgers = current_domain.repository_for(StockLedger)._dao.query.filter(product_id="prod-cat-001").all().items
        assert len(ledgers) == 1


class TestProductRemovedHandler:
    def test_product_removed_deletes_the_ledger(self):
        handler = CatalogueLedgerEventHandler()
        handler.on_product_created(_product_created())
        assert _find("prod-cat-001") is not None

        handler.on_product_removed(
            ProductRemoved(product_id="prod-cat-001", sku="SCARF-WOOL", removed_at=datetime.now(UTC))
        )
        assert _find("prod-cat-001") is None

    def test_removing_an_untracked_product_is_a_no_op(self):
        CatalogueLedgerEventHandler().on_product_removed(
            ProductRemoved(product_id="prod-unknown", removed_at=datetime.now(UTC))
        )
        assert _find("prod-unknown") is None
