"""Genesis state of the budget module."""

from __future__ import annotations

from dataclasses import dataclass, field

from budgetmod.budget import validate_name
from budgetmod.coins import Coin, Coins
from budgetmod.errors import InvalidCoinsError
from budgetmod.params import Params, default_params


@dataclass
class BudgetRecord:
    """The total coins collected so far by one budget."""

    name: str
    total_collected_coins: Coins = field(default_factory=Coins)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "total_collected_coins": [
                {"denom": coin.denom, "amount": str(coin.amount)}
                for coin in self.total_collected_coins
            ],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BudgetRecord":
        coins = Coins(
            Coin(item["denom"], int(item["amount"]))
            for item in data.get("total_collected_coins") or []
        )
        return cls(name=data["name"], total_collected_coins=coins)


@dataclass
class GenesisState:
    """Parameters plus collected-coin records."""

    params: Params = field(default_factory=default_params)
    budget_records: list[BudgetRecord] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "params": self.params.to_dict(),
            "budget_records": [record.to_dict() for record in self.budget_records],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GenesisState":
        return cls(
            params=Params.from_dict(data.get("params") or {}),
            budget_records=[
                BudgetRecord.from_dict(item) for item in data.get("budget_records") or []
            ],
        )


def default_genesis_state() -> GenesisState:
    """Return the default genesis state."""
    return GenesisState(params=default_params(), budget_records=[])


def validate_genesis(state: GenesisState) -> None:
    """Raise a budget error if the genesis state is invalid."""
    state.params.validate()
    for record in state.budget_records:
        try:
            record.total_collected_coins.validate()
        except ValueError as exc:
            raise InvalidCoinsError().wrap(
                f"invalid total collected coins {record.total_collected_coins}: {exc}"
            ) from exc
        validate_name(record.name)