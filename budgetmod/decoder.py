"""Human-readable decoding of budget store entries."""

from __future__ import annotations

from budgetmod.keeper import _decode_total_collected_coins
from budgetmod.keys import TOTAL_COLLECTED_COINS_KEY_PREFIX


def decode_store(kv_a: tuple[bytes, bytes], kv_b: tuple[bytes, bytes]) -> str:
    """Describe a pair of store entries; raise ValueError on an unknown key prefix."""
    key_a, value_a = kv_a
    if key_a[:1] == TOTAL_COLLECTED_COINS_KEY_PREFIX:
        coins_a = _decode_total_collected_coins(value_a)
        coins_b = _decode_total_collected_coins(value_a)
        return f"{coins_a}\n{coins_b}"
    raise ValueError(f"invalid budget key prefix {key_a[:1].hex().upper()}")