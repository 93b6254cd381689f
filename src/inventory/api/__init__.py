from inventory.api.errors import register_ledger_exception_handlers
from inventory.api.routes import ledger_router

__all__ = ["ledger_router", "register_ledger_exception_handlers"]
