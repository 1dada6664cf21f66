"""Budgets and their validation."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable

import yaml

from budgetmod.address import acc_address_from_bech32
from budgetmod.coins import Coins, Dec
from budgetmod.errors import (
    InvalidAddressError,
    InvalidBudgetNameError,
    InvalidBudgetRateError,
    InvalidStartEndTimeError,
)
from budgetmod.timeutil import Timestamp, parse_rfc3339

MAX_BUDGET_NAME_LENGTH = 50

_BUDGET_NAME_RE = re.compile(rf"[a-zA-Z][a-zA-Z0-9-]{{0,{MAX_BUDGET_NAME_LENGTH - 1}}}")


@dataclass(frozen=True)
class Budget:
    """A rate of a source account's balance sent to a destination for a time."""

    name: str
    rate: Dec
    source_address: str
    destination_address: str
    start_time: Timestamp
    end_time: Timestamp

    def validate(self) -> None:
        """Raise a budget error if any field is invalid."""
        validate_name(self.name)
        try:
            acc_address_from_bech32(self.destination_address)
        except ValueError as exc:
            raise InvalidAddressError().wrap(
                f"invalid destination address {self.destination_address}: {exc}"
            ) from exc
        try:
            acc_address_from_bech32(self.source_address)
        except ValueError as exc:
            raise InvalidAddressError().wrap(
                f"invalid source address {self.source_address}: {exc}"
            ) from exc
        if not self.end_time > self.start_time:
            raise InvalidStartEndTimeError()
        if not self.rate.is_positive():
            raise InvalidBudgetRateError().wrap(
                f"budget rate must not be positive: {self.rate}"
            )
        if self.rate > Dec.one():
            raise InvalidBudgetRateError().wrap(
                f"budget rate must not exceed 1: {self.rate}"
            )

    def collectible(self, block_time: Timestamp) -> bool:
        """Tell whether the budget has started and not yet ended at ``block_time``."""
        return self.start_time <= block_time < self.end_time

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "rate": str(self.rate),
            "source_address": self.source_address,
            "destination_address": self.destination_address,
            "start_time": str(self.start_time),
            "end_time": str(self.end_time),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Budget":
        return cls(
            name=data["name"],
            rate=Dec.from_string(data["rate"]),
            source_address=data["source_address"],
            destination_address=data["destination_address"],
            start_time=parse_rfc3339(data["start_time"]),
            end_time=parse_rfc3339(data["end_time"]),
        )

    def __str__(self) -> str:
        return yaml.safe_dump(self.to_dict(), sort_keys=False)


def collectible_budgets(budgets: Iterable[Budget], block_time: Timestamp) -> list[Budget]:
    """Return the budgets that are collectible at ``block_time``."""
    return [budget for budget in budgets if budget.collectible(block_time)]


def validate_name(name: str) -> None:
    """Check a budget name: letters, digits and dashes, starting with a letter."""
    if not _BUDGET_NAME_RE.fullmatch(name):
        raise InvalidBudgetNameError().wrap(name)


@dataclass
class BudgetsBySource:
    """The budgets sharing one source address and their total rate."""

    budgets: list[Budget] = field(default_factory=list)
    total_rate: Dec = Dec()
    collection_coins: list[Coins] = field(default_factory=list)


def budgets_by_source(budgets: Iterable[Budget]) -> dict[str, BudgetsBySource]:
    """Group budgets by source address, in order of first appearance."""
    groups: dict[str, BudgetsBySource] = {}
    for budget in budgets:
        group = groups.get(budget.source_address)
        if group is None:
            groups[budget.source_address] = BudgetsBySource([budget], budget.rate)
        else:
            group.budgets.append(budget)
            group.total_rate = group.total_rate + budget.rate
    return groups