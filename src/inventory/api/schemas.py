"""Pydantic request/response schemas for the Stock Ledger API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class CreateLedgerRequest(BaseModel):
    product_id: str
    sku: str | None = Field(default=None, max_length=50)
    reorder_level: int | None = None
    max_stock_level: int | None = None
    storage_location: str | None = Field(default=None, max_length=100)
    notes: str | None = Field(default=None, max_length=500)


class QuantityRequest(BaseModel):
    quantity: int


class AddStockRequest(BaseModel):
    quantity: int
    reference: str | None = None


class RemoveStockRequest(BaseModel):
    quantity: int
    reduce_reserved: bool = True


class SetReorderLevelRequest(BaseModel):
    reorder_level: int


class SetMaxStockLevelRequest(BaseModel):
    max_stock_level: int


class SetThresholdsRequest(BaseModel):
    reorder_level: int
    max_stock_level: int


class UpdateLedgerDetailsRequest(BaseModel):
    sku: str | None = Field(default=None, max_length=50)
    storage_location: str | None = Field(default=None, max_length=100)
    notes: str | None = Field(default=None, max_length=500)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class LedgerIdResponse(BaseModel):
    ledger_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class LedgerResponse(BaseModel):
    ledger_id: str
    product_id: str
    sku: str | None = None
    storage_location: str | None = None
    notes: str | None = None
    on_hand: int
    reserved: int
    available: int
    in_stock: bool
    needs_reorder: bool
    reorder_level: int
    max_stock_level: int
    last_updated: datetime | None = None


class ValidationResponse(BaseModel):
    ledger_id: str
    valid: bool


class ReorderReportEntry(BaseModel):
    ledger_id: str
    product_id: str
    sku: str | None = None
    on_hand: int
    available: int
    reorder_level: int
    max_stock_level: int
    suggested_quantity: int
    is_out_of_stock: bool
