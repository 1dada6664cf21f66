"""Parameters of the budget module."""

from __future__ import annotations

from dataclasses import dataclass, field

import yaml

from budgetmod.budget import Budget, budgets_by_source
from budgetmod.coins import Dec
from budgetmod.errors import DuplicateBudgetNameError, InvalidTotalBudgetRateError
from budgetmod.timeutil import date_ranges_overlap

DEFAULT_EPOCH_BLOCKS = 1
KEY_BUDGETS = b"Budgets"
KEY_EPOCH_BLOCKS = b"EpochBlocks"

_MAX_UINT32 = 2**32 - 1


@dataclass
class Params:
    """The epoch length in blocks and the list of budgets."""

    epoch_blocks: int = DEFAULT_EPOCH_BLOCKS
    budgets: list[Budget] = field(default_factory=list)

    def validate(self) -> None:
        validate_budgets(self.budgets)

    def to_dict(self) -> dict:
        return {
            "epoch_blocks": self.epoch_blocks,
            "budgets": [budget.to_dict() for budget in self.budgets],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Params":
        return cls(
            epoch_blocks=data.get("epoch_blocks", 0),
            budgets=[Budget.from_dict(item) for item in data.get("budgets") or []],
        )

    def __str__(self) -> str:
        return yaml.safe_dump(self.to_dict(), sort_keys=False)


def default_params() -> Params:
    """Return the default parameters."""
    return Params(epoch_blocks=DEFAULT_EPOCH_BLOCKS, budgets=[])


def validate_budgets(value) -> None:
    """Validate each budget, name uniqueness and total rates per source.

    Budgets sharing a source may sum above 1 only where their time ranges
    do not overlap.
    """
    if not isinstance(value, (list, tuple)) or not all(
        isinstance(item, Budget) for item in value
    ):
        raise TypeError(f"invalid parameter type: {type(value).__name__}")
    names: set[str] = set()
    for budget in value:
        budget.validate()
        if budget.name in names:
            raise DuplicateBudgetNameError().wrap(budget.name)
        names.add(budget.name)
    one = Dec.one()
    for addr, group in budgets_by_source(value).items():
        if group.total_rate <= one:
            continue
        for budget in group.budgets:
            total = Dec.zero()
            for other in group.budgets:
                if date_ranges_overlap(
                    budget.start_time, budget.end_time, other.start_time, other.end_time
                ):
                    total = total + other.rate
            if total > one:
                raise InvalidTotalBudgetRateError().wrap(
                    f"total rate for source address {addr} must not exceed 1: {total}"
                )


def validate_epoch_blocks(value) -> None:
    """Check that ``value`` is an unsigned 32-bit integer."""
    if (
        not isinstance(value, int)
        or isinstance(value, bool)
        or not 0 <= value <= _MAX_UINT32
    ):
        raise TypeError(f"invalid parameter type: {type(value).__name__}")