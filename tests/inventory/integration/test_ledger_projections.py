"""Integration tests for the stock ledger read models, driven through commands."""

import pytest
from inventory.ledger.counting import SetOnHand
from inventory.ledger.creation import CreateLedger
from inventory.ledger.details import UpdateLedgerDetails
from inventory.ledger.receiving import AddStock
from inventory.ledger.reservation import ReleaseStock, ReserveStock
from inventory.ledger.shipping import RemoveStock
from inventory.ledger.thresholds import SetReorderLevel, SetThresholds
from inventory.projections.reorder_report import ReorderReport
from inventory.projections.stock_availability import StockAvailability
from protean import current_domain
from protean.exceptions import ObjectNotFoundError


def _process(command):
    return current_domain.process(command, asynchronous=False)


def _create_ledger(**overrides):
    defaults = {"product_id": "prod-001", "sku": "BOWL-GLAZE"}
    defaults.update(overrides)
    return _process(CreateLedger(**defaults))


def _availability(ledger_id):
    return current_domain.repository_for(StockAvailability).get(ledger_id)


def _report(ledger_id):
    return current_domain.repository_for(ReorderReport).get(ledger_id)


class TestStockAvailabilityProjection:
    def test_created_with_the_ledger(self):
        ledger_id = _create_ledger()
        view = _availability(ledger_id)
        assert str(view.product_id) == "prod-001"
        assert view.sku == "BOWL-GLAZE"
        assert (view.on_hand, view.reserved, view.available) == (0, 0, 0)
        assert view.is_in_stock is False
        assert view.needs_reorder is True

    def test_follows_counter_changes(self):
        ledger_id = _create_ledger()
        _process(AddStock(ledger_id=ledger_id, quantity=60))
        _process(ReserveStock(ledger_id=ledger_id, quantity=25))

        view = _availability(ledger_id)
        assert (view.on_hand, view.reserved, view.available) == (60, 25, 35)
        assert view.is_in_stock is True
        assert view.needs_reorder is False

        _process(ReleaseStock(ledger_id=ledger_id, quantity=5))
        _process(RemoveStock(ledger_id=ledger_id, quantity=20))

        view = _availability(ledger_id)
        assert (view.on_hand, view.reserved, view.available) == (40, 0, 40)

    def test_fully_reserved_is_out_of_stock(self):
        ledger_id = _create_ledger()
        _process(SetOnHand(ledger_id=ledger_id, quantity=10))
        _process(ReserveStock(ledger_id=ledger_id, quantity=10))

        view = _availability(ledger_id)
        assert view.available == 0
        assert view.is_in_stock is False

    def test_threshold_change_recomputes_needs_reorder(self):
        ledger_id = _create_ledger()
        _process(SetOnHand(ledger_id=ledger_id, quantity=20))
        assert _availability(ledger_id).needs_reorder is False

        _process(SetReorderLevel(ledger_id=ledger_id, reorder_level=20))
        assert _availability(ledger_id).needs_reorder is True

    def test_sku_change_is_reflected(self):
        ledger_id = _create_ledger()
        _process(UpdateLedgerDetails(ledger_id=ledger_id, sku="BOWL-GLAZE-2"))
        assert _availability(ledger_id).sku == "BOWL-GLAZE-2"


class TestReorderReportProjection:
    def test_new_empty_ledger_is_reported(self):
        ledger_id = _create_ledger()
        report = _report(ledger_id)
        assert report.on_hand == 0
        assert report.is_out_of_stock is True
        assert report.suggested_quantity == 100

    def test_dropped_once_restocked_above_reorder_level(self):
        ledger_id = _create_ledger()
        _process(AddStock(ledger_id=ledger_id, quantity=30))
        with pytest.raises(ObjectNotFoundError):
            _report(ledger_id)

    def test_reported_again_when_stock_runs_low(self):
        ledger_id = _create_ledger()
        _process(AddStock(ledger_id=ledger_id, quantity=30))
        _process(RemoveStock(ledger_id=ledger_id, quantity=26))

        report = _report(ledger_id)
        assert report.on_hand == 4
        assert report.reorder_level == 5
        assert report.suggested_quantity == 96
        assert report.is_out_of_stock is False

    def test_reservations_do_not_affect_the_report(self):
        ledger_id = _create_ledger()
        _process(AddStock(ledger_id=ledger_id, quantity=30))
        _process(ReserveStock(ledger_id=ledger_id, quantity=28))
        with pytest.raises(ObjectNotFoundError):
            _report(ledger_id)

    def test_reported_available_follows_reservations(self):
        ledger_id = _create_ledger()
        _process(SetOnHand(ledger_id=ledger_id, quantity=3))
        _process(ReserveStock(ledger_id=ledger_id, quantity=2))

        report = _report(ledger_id)
        assert report.on_hand == 3
        assert report.available == 1

        _process(ReleaseStock(ledger_id=ledger_id, quantity=2))
        assert _report(ledger_id).available == 3

    def test_lowering_reorder_level_clears_the_entry(self):
        ledger_id = _create_ledger()
        _process(SetOnHand(ledger_id=ledger_id, quantity=4))
        assert _report(ledger_id).on_hand == 4

        _process(SetThresholds(ledger_id=ledger_id, reorder_level=2, max_stock_level=50))
        with pytest.raises(ObjectNotFoundError):
            _report(ledger_id)

    def test_threshold_change_updates_suggestion(self):
        ledger_id = _create_ledger()
        _process(SetOnHand(ledger_id=ledger_id, quantity=4))
        _process(SetThresholds(ledger_id=ledger_id, reorder_level=10, max_stock_level=40))

        report = _report(ledger_id)
        assert report.reorder_level == 10
        assert report.suggested_quantity == 36
