"""FastAPI routes for the Inventory domain: stock ledgers."""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from inventory.api.schemas import (
    AddStockRequest,
    CreateLedgerRequest,
    LedgerIdResponse,
    LedgerResponse,
    QuantityRequest,
    RemoveStockRequest,
    ReorderReportEntry,
    SetMaxStockLevelRequest,
    SetReorderLevelRequest,
    SetThresholdsRequest,
    StatusResponse,
    UpdateLedgerDetailsRequest,
    ValidationResponse,
)
from inventory.ledger.counting import SetOnHand
from inventory.ledger.creation import CreateLedger
from inventory.ledger.details import UpdateLedgerDetails
from inventory.ledger.ledger import StockLedger
from inventory.ledger.receiving import AddStock
from inventory.ledger.removal import RemoveLedger
from inventory.ledger.reservation import ReleaseStock, ReserveStock
from inventory.ledger.shipping import RemoveStock
from inventory.ledger.thresholds import SetMaxStockLevel, SetReorderLevel, SetThresholds
from inventory.projections.reorder_report import ReorderReport

ledger_router = APIRouter(prefix="/ledgers", tags=["ledgers"])


def _to_response(ledger: StockLedger) -> LedgerResponse:
    return LedgerResponse(
        ledger_id=str(ledger.id),
        product_id=str(ledger.product_id),
        sku=ledger.sku,
        storage_location=ledger.storage_location,
        notes=ledger.notes,
        on_hand=ledger.on_hand,
        reserved=ledger.reserved,
        available=ledger.available,
        in_stock=ledger.in_stock,
        needs_reorder=ledger.needs_reorder,
        reorder_level=ledger.reorder_level,
        max_stock_level=ledger.max_stock_level,
        last_updated=ledger.last_updated,
    )


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------
@ledger_router.post("", status_code=201, response_model=LedgerIdResponse)
async def create_ledger(body: CreateLedgerRequest) -> LedgerIdResponse:
    command = CreateLedger(
        product_id=body.product_id,
        sku=body.sku,
        reorder_level=body.reorder_level,
        max_stock_level=body.max_stock_level,
        storage_location=body.storage_location,
        notes=body.notes,
    )
    result = current_domain.process(command, asynchronous=False)
    return LedgerIdResponse(ledger_id=result)


@ledger_router.delete("/{ledger_id}", response_model=StatusResponse)
async def remove_ledger(ledger_id: str) -> StatusResponse:
    current_domain.process(RemoveLedger(ledger_id=ledger_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------
@ledger_router.get("/reorder-report", response_model=list[ReorderReportEntry])
async def reorder_report() -> list[ReorderReportEntry]:
    rows = current_domain.repository_for(ReorderReport)._dao.query.all().items
    return [
        ReorderReportEntry(
            ledger_id=str(row.ledger_id),
            product_id=str(row.product_id),
            sku=row.sku,
            on_hand=row.on_hand,
            available=row.available,
            reorder_level=row.reorder_level,
            max_stock_level=row.max_stock_level,
            suggested_quantity=row.suggested_quantity,
            is_out_of_stock=row.is_out_of_stock,
        )
        for row in rows
    ]


@ledger_router.get("/{ledger_id}", response_model=LedgerResponse)
async def get_ledger(ledger_id: str) -> LedgerResponse:
    ledger = current_domain.repository_for(StockLedger).get(ledger_id)
    return _to_response(ledger)


@ledger_router.get("/{ledger_id}/validate", response_model=ValidationResponse)
async def validate_ledger(ledger_id: str) -> ValidationResponse:
    ledger = current_domain.repository_for(StockLedger).get(ledger_id)
    return ValidationResponse(ledger_id=str(ledger.id), valid=ledger.validate())


# ---------------------------------------------------------------------------
# Fulfillment
# ---------------------------------------------------------------------------
@ledger_router.post("/{ledger_id}/reserve", status_code=201, response_model=StatusResponse)
async def reserve_stock(ledger_id: str, body: QuantityRequest) -> StatusResponse:
    current_domain.process(ReserveStock(ledger_id=ledger_id, quantity=body.quantity), asynchronous=False)
    return StatusResponse()


@ledger_router.put("/{ledger_id}/release", response_model=StatusResponse)
async def release_stock(ledger_id: str, body: QuantityRequest) -> StatusResponse:
    current_domain.process(ReleaseStock(ledger_id=ledger_id, quantity=body.quantity), asynchronous=False)
    return StatusResponse()


@ledger_router.put("/{ledger_id}/remove", response_model=StatusResponse)
async def remove_stock(ledger_id: str, body: RemoveStockRequest) -> StatusResponse:
    command = RemoveStock(
        ledger_id=ledger_id,
        quantity=body.quantity,
        reduce_reserved=body.reduce_reserved,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Replenishment and counts
# ---------------------------------------------------------------------------
@ledger_router.put("/{ledger_id}/add", response_model=StatusResponse)
async def add_stock(ledger_id: str, body: AddStockRequest) -> StatusResponse:
    command = AddStock(ledger_id=ledger_id, quantity=body.quantity, reference=body.reference)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@ledger_router.put("/{ledger_id}/on-hand", response_model=StatusResponse)
async def set_on_hand(ledger_id: str, body: QuantityRequest) -> StatusResponse:
    current_domain.process(SetOnHand(ledger_id=ledger_id, quantity=body.quantity), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Catalog management
# ---------------------------------------------------------------------------
@ledger_router.put("/{ledger_id}/reorder-level", response_model=StatusResponse)
async def set_reorder_level(ledger_id: str, body: SetReorderLevelRequest) -> StatusResponse:
    command = SetReorderLevel(ledger_id=ledger_id, reorder_level=body.reorder_level)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@ledger_router.put("/{ledger_id}/max-stock-level", response_model=StatusResponse)
async def set_max_stock_level(ledger_id: str, body: SetMaxStockLevelRequest) -> StatusResponse:
    command = SetMaxStockLevel(ledger_id=ledger_id, max_stock_level=body.max_stock_level)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@ledger_router.put("/{ledger_id}/thresholds", response_model=StatusResponse)
async def set_thresholds(ledger_id: str, body: SetThresholdsRequest) -> StatusResponse:
    command = SetThresholds(
        ledger_id=ledger_id,
        reorder_level=body.reorder_level,
        max_stock_level=body.max_stock_level,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@ledger_router.put("/{ledger_id}/details", response_model=StatusResponse)
async def update_details(ledger_id: str, body: UpdateLedgerDetailsRequest) -> StatusResponse:
    command = UpdateLedgerDetails(
        ledger_id=ledger_id,
        sku=body.sku,
        storage_location=body.storage_location,
        notes=body.notes,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()
