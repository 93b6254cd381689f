"""Stock ledger FastAPI application.

Processes inventory commands synchronously via HTTP, each request wrapped
in the inventory domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied:
#   - unset        → event_processing = "sync"  (projectors fire in UoW)
#   - "production" → event_processing = "async" (projectors fire via Engine)
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from inventory.domain import inventory  # noqa: E402
from inventory.utils.logging import add_context, clear_context
from protean.integrations.fastapi import register_exception_handlers

inventory.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Stock Ledger API",
    description="Stock reservation ledgers for catalogue goods",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the inventory domain context for ledger requests."""
    if request.url.path.startswith("/ledgers"):
        add_context(method=request.method, path=request.url.path)
        try:
            with inventory.domain_context():
                response = await call_next(request)
        finally:
            clear_context()
        return response
    # Health check, docs, etc.
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers and error handling
# ---------------------------------------------------------------------------
from inventory.api import ledger_router, register_ledger_exception_handlers  # noqa: E402

app.include_router(ledger_router)
register_exception_handlers(app)
register_ledger_exception_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": inventory.name})
