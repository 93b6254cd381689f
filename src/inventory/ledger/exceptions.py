"""Errors raised by StockLedger operations.

All three kinds are Protean ValidationErrors, so command handlers and the
HTTP layer treat them like any other domain rejection. None of them is
retried by the ledger; a failed operation never leaves the ledger modified.
"""

from protean.exceptions import ValidationError


class StockLedgerError(ValidationError):
    """Base class for ledger rejections."""


class InvalidArgument(StockLedgerError):
    """A quantity or threshold violates its own precondition."""


class InsufficientStock(StockLedgerError):
    """A reservation or removal asks for more stock than the ledger holds."""


class InvalidState(StockLedgerError):
    """The operation would break a cross-field invariant of the ledger."""
