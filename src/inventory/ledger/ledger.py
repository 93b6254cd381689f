"""StockLedger aggregate: the stock-reservation ledger for one good.

Stock Level Model:
    on_hand:   Physical units currently held
    reserved:  Units held for pending orders (not yet shipped)
    available: on_hand - reserved (what can still be reserved), never stored

Invariants after every successful operation:
    on_hand >= 0, reserved >= 0, reserved <= on_hand,
    reorder_level >= 0, max_stock_level >= reorder_level

The last one is enforced when max_stock_level changes and when both
thresholds change together, but not by set_reorder_level, which existing
callers rely on to raise the reorder level ahead of the ceiling. validate()
reports whether all five hold.

Every operation evaluates its preconditions and applies its writes while
holding the ledger's own lock, so concurrent callers see one total order of
operations. A rejected operation raises before touching any field.
"""

from datetime import UTC, datetime

import structlog
from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String

from inventory.domain import inventory
from inventory.ledger.events import (
    LedgerCreated,
    LedgerDetailsUpdated,
    MaxStockLevelChanged,
    OnHandSet,
    ReorderLevelChanged,
    ReorderLevelReached,
    StockAdded,
    StockReleased,
    StockRemoved,
    StockReserved,
    ThresholdsChanged,
)
from inventory.ledger.exceptions import InsufficientStock, InvalidArgument, InvalidState
from inventory.ledger.locking import ledger_lock
from inventory.utils.settings import settings

logger = structlog.get_logger(__name__)

DEFAULT_REORDER_LEVEL = 5
DEFAULT_MAX_STOCK_LEVEL = 100

_DETAIL_MAX_LENGTHS = {"sku": 50, "storage_location": 100, "notes": 500}


def _utcnow():
    return datetime.now(UTC)


def _require_whole_number(field, value, label):
    # bool is an int subclass; True is not a quantity
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument({field: [f"{label} must be a whole number"]})


def _require_positive(field, value):
    _require_whole_number(field, value, "Quantity")
    if value <= 0:
        raise InvalidArgument({field: ["Quantity must be positive"]})


def _require_non_negative(field, value, label):
    _require_whole_number(field, value, label)
    if value < 0:
        raise InvalidArgument({field: [f"{label} cannot be negative"]})


def _check_thresholds(reorder_level, max_stock_level):
    _require_non_negative("reorder_level", reorder_level, "Reorder level")
    _require_non_negative("max_stock_level", max_stock_level, "Max stock level")
    if max_stock_level < reorder_level:
        raise InvalidState(
            {"max_stock_level": [f"Max stock level ({max_stock_level}) cannot be less than reorder level ({reorder_level})"]}
        )


@inventory.aggregate
class StockLedger:
    """On-hand and reserved stock for a single good, with reorder thresholds."""

    product_id = Identifier(required=True)
    sku = String(max_length=50)
    storage_location = String(max_length=100)
    notes = String(max_length=500)
    on_hand = Integer(default=0, min_value=0)
    reserved = Integer(default=0, min_value=0)
    reorder_level = Integer(default=DEFAULT_REORDER_LEVEL, min_value=0)
    max_stock_level = Integer(default=DEFAULT_MAX_STOCK_LEVEL, min_value=0)
    last_updated = DateTime(default=_utcnow)

    @invariant.post
    def reserved_cannot_exceed_on_hand(self):
        if self.reserved is not None and self.on_hand is not None and self.reserved > self.on_hand:
            raise ValidationError({"reserved": ["Reserved quantity cannot exceed quantity on hand"]})

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        product_id,
        sku=None,
        reorder_level=None,
        max_stock_level=None,
        storage_location=None,
        notes=None,
    ):
        """Open an empty ledger for a good.

        Thresholds not supplied fall back to the configured defaults and are
        validated together.
        """
        if reorder_level is None:
            reorder_level = settings.default_reorder_level
        if max_stock_level is None:
            max_stock_level = settings.default_max_stock_level
        _check_thresholds(reorder_level, max_stock_level)

        now = _utcnow()
        ledger = cls(
            product_id=product_id,
            sku=sku,
            storage_location=storage_location,
            notes=notes,
            on_hand=0,
            reserved=0,
            reorder_level=reorder_level,
            max_stock_level=max_stock_level,
            last_updated=now,
        )
        ledger.raise_(
            LedgerCreated(
                ledger_id=str(ledger.id),
                product_id=str(product_id),
                sku=sku,
                storage_location=storage_location,
                created_at=now,
                **ledger._snapshot(),
            )
        )
        ledger._signal_reorder(now)
        return ledger

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    @property
    def available(self) -> int:
        return self.on_hand - self.reserved

    @property
    def in_stock(self) -> bool:
        return self.available > 0

    @property
    def needs_reorder(self) -> bool:
        return self.on_hand <= self.reorder_level

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    def _snapshot(self):
        return {
            "on_hand": self.on_hand,
            "reserved": self.reserved,
            "available": self.available,
            "reorder_level": self.reorder_level,
            "max_stock_level": self.max_stock_level,
        }

    def _signal_reorder(self, now):
        """Raise ReorderLevelReached if on-hand is at or below the reorder level."""
        if self.needs_reorder:
            self.raise_(
                ReorderLevelReached(
                    ledger_id=str(self.id),
                    product_id=str(self.product_id),
                    sku=self.sku,
                    on_hand=self.on_hand,
                    available=self.available,
                    reorder_level=self.reorder_level,
                    max_stock_level=self.max_stock_level,
                    detected_at=now,
                )
            )

    # -------------------------------------------------------------------
    # Counters
    # -------------------------------------------------------------------
    def set_on_hand(self, value):
        """Replace the on-hand quantity, e.g. after a physical count."""
        _require_non_negative("on_hand", value, "Quantity on hand")

        with ledger_lock(self.id):
            if value < self.reserved:
                raise InvalidState(
                    {"on_hand": [f"Quantity on hand cannot be less than reserved quantity ({self.reserved})"]}
                )

            previous_on_hand = self.on_hand
            now = _utcnow()
            self.on_hand = value
            self.last_updated = now

            self.raise_(
                OnHandSet(
                    ledger_id=str(self.id),
                    product_id=str(self.product_id),
                    previous_on_hand=previous_on_hand,
                    set_at=now,
                    **self._snapshot(),
                )
            )
            self._signal_reorder(now)
            logger.debug("On-hand quantity set", ledger_id=str(self.id), on_hand=value)

    def reserve_stock(self, quantity):
        """Hold `quantity` units for a pending order."""
        _require_positive("quantity", quantity)

        with ledger_lock(self.id):
            available = self.available
            if available < quantity:
                logger.info(
                    "Reservation rejected",
                    ledger_id=str(self.id),
                    available=available,
                    requested=quantity,
                )
                raise InsufficientStock(
                    {"quantity": [f"Insufficient stock. Available: {available}, requested: {quantity}"]}
                )

            now = _utcnow()
            self.reserved = self.reserved + quantity
            self.last_updated = now

            self.raise_(
                StockReserved(
                    ledger_id=str(self.id),
                    product_id=str(self.product_id),
                    quantity=quantity,
                    reserved_at=now,
                    **self._snapshot(),
                )
            )
            logger.debug("Stock reserved", ledger_id=str(self.id), quantity=quantity, reserved=self.reserved)

    def release_stock(self, quantity):
        """Give back `quantity` previously reserved units (order cancelled)."""
        _require_positive("quantity", quantity)

        with ledger_lock(self.id):
            if self.reserved < quantity:
                raise InvalidState(
                    {"quantity": [f"Cannot release more than reserved. Reserved: {self.reserved}, requested: {quantity}"]}
                )

            now = _utcnow()
            self.reserved = self.reserved - quantity
            self.last_updated = now

            self.raise_(
                StockReleased(
                    ledger_id=str(self.id),
                    product_id=str(self.product_id),
                    quantity=quantity,
                    released_at=now,
                    **self._snapshot(),
                )
            )
            logger.debug("Stock released", ledger_id=str(self.id), quantity=quantity, reserved=self.reserved)

    def add_stock(self, quantity):
        """Receive `quantity` new units. The max stock level is advisory and not enforced."""
        _require_positive("quantity", quantity)

        with ledger_lock(self.id):
            previous_on_hand = self.on_hand
            now = _utcnow()
            self.on_hand = previous_on_hand + quantity
            self.last_updated = now

            self.raise_(
                StockAdded(
                    ledger_id=str(self.id),
                    product_id=str(self.product_id),
                    quantity=quantity,
                    previous_on_hand=previous_on_hand,
                    added_at=now,
                    **self._snapshot(),
                )
            )
            self._signal_reorder(now)
            logger.debug("Stock added", ledger_id=str(self.id), quantity=quantity, on_hand=self.on_hand)

    def remove_stock(self, quantity, reduce_reserved=True):
        """Take `quantity` units out of the warehouse (order shipped, write-off).

        With `reduce_reserved`, the reservation shrinks by the same amount,
        floored at zero. On-hand and reserved change in one transition, so
        the invariants are checked against the final state only.
        """
        _require_positive("quantity", quantity)

        with ledger_lock(self.id):
            previous_on_hand = self.on_hand
            previous_reserved = self.reserved

            if previous_on_hand < quantity:
                logger.info(
                    "Removal rejected",
                    ledger_id=str(self.id),
                    on_hand=previous_on_hand,
                    requested=quantity,
                )
                raise InsufficientStock(
                    {"quantity": [f"Insufficient stock. On hand: {previous_on_hand}, requested: {quantity}"]}
                )

            new_on_hand = previous_on_hand - quantity
            new_reserved = max(0, previous_reserved - quantity) if reduce_reserved else previous_reserved
            if new_reserved > new_on_hand:
                raise InvalidState(
                    {"quantity": [f"Quantity on hand ({new_on_hand}) cannot be less than reserved quantity ({new_reserved})"]}
                )

            now = _utcnow()
            with atomic_change(self):
                self.on_hand = new_on_hand
                self.reserved = new_reserved
                self.last_updated = now

            self.raise_(
                StockRemoved(
                    ledger_id=str(self.id),
                    product_id=str(self.product_id),
                    quantity=quantity,
                    reduce_reserved=reduce_reserved,
                    previous_on_hand=previous_on_hand,
                    previous_reserved=previous_reserved,
                    removed_at=now,
                    **self._snapshot(),
                )
            )
            self._signal_reorder(now)
            logger.debug(
                "Stock removed",
                ledger_id=str(self.id),
                quantity=quantity,
                on_hand=new_on_hand,
                reserved=new_reserved,
            )

    # -------------------------------------------------------------------
    # Thresholds
    # -------------------------------------------------------------------
    def set_reorder_level(self, value):
        """Replace the reorder level. Not checked against max_stock_level."""
        _require_non_negative("reorder_level", value, "Reorder level")

        with ledger_lock(self.id):
            previous_reorder_level = self.reorder_level
            now = _utcnow()
            self.reorder_level = value
            self.last_updated = now

            if self.max_stock_level < value:
                logger.warning(
                    "Reorder level now exceeds max stock level",
                    ledger_id=str(self.id),
                    reorder_level=value,
                    max_stock_level=self.max_stock_level,
                )

            self.raise_(
                ReorderLevelChanged(
                    ledger_id=str(self.id),
                    product_id=str(self.product_id),
                    previous_reorder_level=previous_reorder_level,
                    changed_at=now,
                    **self._snapshot(),
                )
            )
            self._signal_reorder(now)

    def set_max_stock_level(self, value):
        _require_non_negative("max_stock_level", value, "Max stock level")

        with ledger_lock(self.id):
            if value < self.reorder_level:
                raise InvalidState(
                    {"max_stock_level": [f"Max stock level cannot be less than reorder level ({self.reorder_level})"]}
                )

            previous_max_stock_level = self.max_stock_level
            now = _utcnow()
            self.max_stock_level = value
            self.last_updated = now

            self.raise_(
                MaxStockLevelChanged(
                    ledger_id=str(self.id),
                    product_id=str(self.product_id),
                    previous_max_stock_level=previous_max_stock_level,
                    changed_at=now,
                    **self._snapshot(),
                )
            )

    def set_thresholds(self, reorder_level, max_stock_level):
        """Replace both thresholds at once, checking them against each other."""
        _check_thresholds(reorder_level, max_stock_level)

        with ledger_lock(self.id):
            previous_reorder_level = self.reorder_level
            previous_max_stock_level = self.max_stock_level
            now = _utcnow()
            with atomic_change(self):
                self.reorder_level = reorder_level
                self.max_stock_level = max_stock_level
                self.last_updated = now

            self.raise_(
                ThresholdsChanged(
                    ledger_id=str(self.id),
                    product_id=str(self.product_id),
                    previous_reorder_level=previous_reorder_level,
                    previous_max_stock_level=previous_max_stock_level,
                    changed_at=now,
                    **self._snapshot(),
                )
            )
            self._signal_reorder(now)

    # -------------------------------------------------------------------
    # Descriptive attributes
    # -------------------------------------------------------------------
    def update_details(self, **details):
        """Edit SKU, storage location or notes. Leaves last_updated alone."""
        unknown = sorted(set(details) - set(_DETAIL_MAX_LENGTHS))
        if unknown:
            raise InvalidArgument({field: ["Not an editable ledger detail"] for field in unknown})
        too_long = {
            field: [f"Must be at most {_DETAIL_MAX_LENGTHS[field]} characters"]
            for field, value in details.items()
            if value is not None and len(str(value)) > _DETAIL_MAX_LENGTHS[field]
        }
        if too_long:
            raise InvalidArgument(too_long)
        if not details:
            return

        with ledger_lock(self.id):
            for field, value in details.items():
                setattr(self, field, value)

            self.raise_(
                LedgerDetailsUpdated(
                    ledger_id=str(self.id),
                    product_id=str(self.product_id),
                    sku=self.sku,
                    storage_location=self.storage_location,
                    notes=self.notes,
                    updated_at=_utcnow(),
                )
            )

    # -------------------------------------------------------------------
    # Diagnostics
    # -------------------------------------------------------------------
    def validate(self) -> bool:
        """True if every ledger invariant holds. Never raises."""
        with ledger_lock(self.id):
            counters = (self.on_hand, self.reserved, self.reorder_level, self.max_stock_level)
            if any(value is None for value in counters):
                return False
            return (
                self.on_hand >= 0
                and self.reserved >= 0
                and self.reserved <= self.on_hand
                and self.reorder_level >= 0
                and self.max_stock_level >= self.reorder_level
            )
