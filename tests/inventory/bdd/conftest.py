"""Shared BDD fixtures and step definitions for stock ledgers."""

from datetime import UTC, datetime

import pytest
from inventory.ledger.catalogue_events import CatalogueLedgerEventHandler
from inventory.ledger.counting import SetOnHand
from inventory.ledger.creation import CreateLedger
from inventory.ledger.exceptions import InsufficientStock, InvalidArgument, InvalidState
from inventory.ledger.ledger import StockLedger
from inventory.ledger.reservation import ReleaseStock, ReserveStock
from inventory.ledger.thresholds import SetReorderLevel
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then
from shared.events.catalogue import ProductCreated

# Map error names used in feature files to exception classes
_LEDGER_ERROR_CLASSES = {
    "InvalidArgument": InvalidArgument,
    "InsufficientStock": InsufficientStock,
    "InvalidState": InvalidState,
}


def process(command):
    return current_domain.process(command, asynchronous=False)


def load_ledger(ledger_id):
    return current_domain.repository_for(StockLedger).get(ledger_id)


# ---------------------------------------------------------------------------
# Outcome of the When step
# ---------------------------------------------------------------------------
@pytest.fixture()
def outcome():
    return {"error": None}


@pytest.fixture()
def attempt(outcome):
    """Process a command, recording a rejection instead of raising it."""

    def _attempt(command):
        try:
            process(command)
        except ValidationError as exc:
            outcome["error"] = exc

    return _attempt


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse("a ledger with {qty:d} units on hand"), target_fixture="ledger_id")
def _(qty):
    ledger_id = process(CreateLedger(product_id="prod-001", sku="CUP-ENAMEL"))
    if qty:
        process(SetOnHand(ledger_id=ledger_id, quantity=qty))
    return ledger_id


@given(
    parsers.cfparse("a ledger with reorder level {reorder_level:d} and max stock level {max_stock_level:d}"),
    target_fixture="ledger_id",
)
def _(reorder_level, max_stock_level):
    return process(
        CreateLedger(
            product_id="prod-001",
            sku="CUP-ENAMEL",
            reorder_level=reorder_level,
            max_stock_level=max_stock_level,
        )
    )


@given(parsers.cfparse("{qty:d} units were reserved"))
def _(ledger_id, qty):
    process(ReserveStock(ledger_id=ledger_id, quantity=qty))


@given(parsers.cfparse("{qty:d} units were released"))
def _(ledger_id, qty):
    process(ReleaseStock(ledger_id=ledger_id, quantity=qty))


@given(parsers.cfparse("the reorder level was set to {level:d}"))
def _(ledger_id, level):
    process(SetReorderLevel(ledger_id=ledger_id, reorder_level=level))


@given(
    parsers.cfparse('the catalogue created product "{product_id}" with SKU "{sku}"'),
    target_fixture="ledger_id",
)
def _(product_id, sku):
    CatalogueLedgerEventHandler().on_product_created(
        ProductCreated(product_id=product_id, sku=sku, title=sku.title(), created_at=datetime.now(UTC))
    )
    return str(current_domain.repository_for(StockLedger).find_by_product(product_id).id)


# ---------------------------------------------------------------------------
# Then steps: shared assertions
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the on-hand quantity is {qty:d}"))
def _(ledger_id, qty):
    assert load_ledger(ledger_id).on_hand == qty


@then(parsers.cfparse("the reserved quantity is {qty:d}"))
def _(ledger_id, qty):
    assert load_ledger(ledger_id).reserved == qty


@then(parsers.cfparse("the available quantity is {qty:d}"))
def _(ledger_id, qty):
    assert load_ledger(ledger_id).available == qty


@then(parsers.cfparse("the reorder level is {level:d}"))
def _(ledger_id, level):
    assert load_ledger(ledger_id).reorder_level == level


@then(parsers.cfparse("the max stock level is {level:d}"))
def _(ledger_id, level):
    assert load_ledger(ledger_id).max_stock_level == level


@then("the ledger is valid")
def _(ledger_id):
    assert load_ledger(ledger_id).validate() is True


@then("the ledger is not valid")
def _(ledger_id):
    assert load_ledger(ledger_id).validate() is False


@then(parsers.cfparse("the action fails with an {error_type} error"))
def _(outcome, error_type):
    assert isinstance(outcome["error"], _LEDGER_ERROR_CLASSES[error_type])
