"""Fixed-point decimals and coin collections."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator

PRECISION = 18
_SCALE = 10**PRECISION
_DENOM_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9/:._-]{2,127}$")
_DEC_RE = re.compile(r"^(-?)(\d+)(?:\.(\d+))?$")
_COIN_RE = re.compile(r"^([0-9]+(?:\.[0-9]+)?)\s*([a-zA-Z][a-zA-Z0-9/:._-]{2,127})$")


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


@dataclass(frozen=True, order=True)
class Dec:
    """Decimal with 18 digits of precision, held as a scaled integer."""

    raw: int = 0

    @classmethod
    def from_string(cls, text: str) -> "Dec":
        match = _DEC_RE.match(text.strip())
        if not match:
            raise ValueError(f"invalid decimal string: {text!r}")
        sign, whole, frac = match.groups()
        frac = frac or ""
        if len(frac) > PRECISION:
            raise ValueError(f"value '{text}' exceeds max precision by {len(frac) - PRECISION} decimal places")
        raw = int(whole) * _SCALE + int(frac.ljust(PRECISION, "0") or 0)
        return cls(-raw if sign else raw)

    @classmethod
    def from_int(cls, value: int, prec: int = 0) -> "Dec":
        return cls(value * 10 ** (PRECISION - prec))

    @classmethod
    def one(cls) -> "Dec":
        return cls(_SCALE)

    @classmethod
    def zero(cls) -> "Dec":
        return cls(0)

    def is_zero(self) -> bool:
        return self.raw == 0

    def is_positive(self) -> bool:
        return self.raw > 0

    def is_negative(self) -> bool:
        return self.raw < 0

    def mul_truncate(self, other: "Dec") -> "Dec":
        """Multiply, truncating the result toward zero."""
        return Dec(_trunc_div(self.raw * other.raw, _SCALE))

    def truncate(self) -> int:
        return _trunc_div(self.raw, _SCALE)

    def __add__(self, other: "Dec") -> "Dec":
        return Dec(self.raw + other.raw)

    def __sub__(self, other: "Dec") -> "Dec":
        return Dec(self.raw - other.raw)

    def __str__(self) -> str:
        whole, frac = divmod(abs(self.raw), _SCALE)
        sign = "-" if self.raw < 0 else ""
        return f"{sign}{whole}.{frac:0{PRECISION}d}"


def validate_denom(denom: str) -> None:
    if not _DENOM_RE.match(denom):
        raise ValueError(f"invalid denom: {denom}")


@dataclass(frozen=True)
class Coin:
    denom: str
    amount: int

    def validate(self) -> None:
        validate_denom(self.denom)
        if self.amount < 0:
            raise ValueError(f"negative coin amount: {self.amount}")

    def is_positive(self) -> bool:
        return self.amount > 0

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"


def _merge(pairs: Iterable[tuple[str, object]], zero) -> dict:
    totals: dict = {}
    for denom, amount in pairs:
        totals[denom] = totals.get(denom, zero) + amount
    return totals


class Coins:
    """An ordered collection of coins."""

    def __init__(self, coins: Iterable[Coin] = ()) -> None:
        self._coins = tuple(coins)

    @classmethod
    def new(cls, *coins: Coin) -> "Coins":
        """Build a sorted collection without zero coins; duplicates are an error."""
        seen = set()
        for coin in coins:
            coin.validate()
            if coin.denom in seen:
                raise ValueError(f"duplicate denomination {coin.denom}")
            seen.add(coin.denom)
        return cls(sorted((c for c in coins if c.amount), key=lambda c: c.denom))

    @classmethod
    def parse(cls, text: str) -> "Coins":
        """Parse a comma separated list such as ``10stake,5denom1``."""
        text = text.strip()
        if not text:
            return cls()
        coins = []
        for part in text.split(","):
            match = _COIN_RE.match(part.strip())
            if not match:
                raise ValueError(f"invalid decimal coin expression: {part}")
            amount, denom = match.groups()
            coins.append(Coin(denom, Dec.from_string(amount).truncate()))
        return cls.new(*coins)

    def add(self, *args: Coin) -> "Coins":
        totals = _merge(((c.denom, c.amount) for c in (*self._coins, *args)), 0)
        return Coins(Coin(d, a) for d, a in sorted(totals.items()) if a)

    def validate(self) -> None:
        if not self._coins:
            return
        seen: set[str] = set()
        low = None
        for coin in self._coins:
            if coin.denom in seen:
                raise ValueError(f"duplicate denomination {coin.denom}")
            validate_denom(coin.denom)
            if low is not None and coin.denom <= low:
                raise ValueError(f"denomination {coin.denom} is not sorted")
            if not coin.is_positive():
                raise ValueError(f"coin {coin} amount is not positive")
            seen.add(coin.denom)
            low = coin.denom

    def is_valid(self) -> bool:
        try:
            self.validate()
        except ValueError:
            return False
        return True

    def is_empty(self) -> bool:
        return not self._coins

    def amount_of(self, denom: str) -> int:
        return next((c.amount for c in self._coins if c.denom == denom), 0)

    def __iter__(self) -> Iterator[Coin]:
        return iter(self._coins)

    def __len__(self) -> int:
        return len(self._coins)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Coins):
            return NotImplemented
        return self._coins == other._coins

    def __hash__(self) -> int:
        return hash(self._coins)

    def __str__(self) -> str:
        return ",".join(str(c) for c in self._coins)

    def __repr__(self) -> str:
        return f"Coins({str(self)!r})"


@dataclass(frozen=True)
class DecCoin:
    denom: str
    amount: Dec

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"


class DecCoins:
    """An ordered collection of decimal coins."""

    def __init__(self, coins: Iterable[DecCoin] = ()) -> None:
        self._coins = tuple(coins)

    @classmethod
    def from_coins(cls, coins: Iterable[Coin]) -> "DecCoins":
        totals = _merge(((c.denom, c.amount) for c in coins), 0)
        return cls(DecCoin(d, Dec.from_int(a)) for d, a in sorted(totals.items()) if a)

    def is_zero(self) -> bool:
        return all(c.amount.is_zero() for c in self._coins)

    def mul_dec_truncate(self, rate: Dec) -> "DecCoins":
        products = (DecCoin(c.denom, c.amount.mul_truncate(rate)) for c in self._coins)
        return DecCoins(c for c in products if not c.amount.is_zero())

    def truncate_decimal(self) -> tuple[Coins, "DecCoins"]:
        """Split into whole coins and the remaining fractional change."""
        whole, change = [], []
        for c in self._coins:
            amount = c.amount.truncate()
            rest = c.amount - Dec.from_int(amount)
            if amount:
                whole.append(Coin(c.denom, amount))
            if not rest.is_zero():
                change.append(DecCoin(c.denom, rest))
        return Coins(whole), DecCoins(change)

    def __iter__(self) -> Iterator[DecCoin]:
        return iter(self._coins)

    def __len__(self) -> int:
        return len(self._coins)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DecCoins):
            return NotImplemented
        return self._coins == other._coins

    def __hash__(self) -> int:
        return hash(self._coins)

    def __str__(self) -> str:
        return ",".join(str(c) for c in self._coins)