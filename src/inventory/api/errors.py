"""HTTP mapping for stock ledger rejections.

InvalidArgument keeps the generic 400 that Protean's handlers give every
ValidationError; stock shortages and invariant conflicts become 409 and
unknown ledgers 404.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError

from inventory.ledger.exceptions import InsufficientStock, InvalidState


async def _conflict(request: Request, exc) -> JSONResponse:  # noqa: ARG001
    return JSONResponse(status_code=409, content={"error": exc.messages})


async def _not_found(request: Request, exc) -> JSONResponse:  # noqa: ARG001
    return JSONResponse(status_code=404, content={"error": str(exc)})


def register_ledger_exception_handlers(app: FastAPI) -> None:
    """Register after Protean's own handlers so these take precedence."""
    app.add_exception_handler(InsufficientStock, _conflict)
    app.add_exception_handler(InvalidState, _conflict)
    app.add_exception_handler(ObjectNotFoundError, _not_found)
