"""Store keys of the budget module."""

from __future__ import annotations

MODULE_NAME = "budget"
ROUTER_KEY = MODULE_NAME
STORE_KEY = MODULE_NAME
QUERIER_ROUTE = MODULE_NAME

TOTAL_COLLECTED_COINS_KEY_PREFIX = b"\x11"


def get_total_collected_coins_key(budget_name: str) -> bytes:
    """Return the store key of the total collected coins of a budget."""
    return TOTAL_COLLECTED_COINS_KEY_PREFIX + budget_name.encode()


def parse_total_collected_coins_key(key: bytes) -> str:
    """Return the budget name held in a total collected coins key."""
    if not key.startswith(TOTAL_COLLECTED_COINS_KEY_PREFIX):
        raise ValueError("key does not have proper prefix")
    return key[len(TOTAL_COLLECTED_COINS_KEY_PREFIX):].decode()