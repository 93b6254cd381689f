"""Inventory bounded context: the stock-reservation ledger.

Tracks on-hand and reserved stock for every good in the catalogue and keeps
the two counters consistent under concurrent order placement, fulfillment
and replenishment.
"""

from protean.domain import Domain

from inventory.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
inventory = Domain(name="inventory")
