"""Ledger settings read from the environment.

Protean settings (databases, brokers, processing mode) live in domain.toml;
the values here are the inventory domain's own defaults.
"""

import os
from dataclasses import dataclass

_TRUTHY = {"1", "true", "yes", "on"}


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class LedgerSettings:
    default_reorder_level: int = 5
    default_max_stock_level: int = 100
    enforce_unique_sku: bool = True

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        return cls(
            default_reorder_level=_int_env("INVENTORY_DEFAULT_REORDER_LEVEL", cls.default_reorder_level),
            default_max_stock_level=_int_env("INVENTORY_DEFAULT_MAX_STOCK_LEVEL", cls.default_max_stock_level),
            enforce_unique_sku=_bool_env("INVENTORY_ENFORCE_UNIQUE_SKU", cls.enforce_unique_sku),
        )


settings = LedgerSettings.from_env()
