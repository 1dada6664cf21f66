"""Queries over the budget module's state."""

from __future__ import annotations

from dataclasses import dataclass

from budgetmod.address import (
    AddressType,
    acc_address_from_bech32,
    acc_address_to_bech32,
    derive_address,
)
from budgetmod.budget import Budget
from budgetmod.coins import Coins
from budgetmod.errors import InvalidRequestError
from budgetmod.keeper import Context, Keeper
from budgetmod.keys import MODULE_NAME
from budgetmod.params import Params


@dataclass(frozen=True)
class BudgetResponse:
    budget: Budget
    total_collected_coins: Coins | None


class Querier:
    """Answers parameter, budget and address queries."""

    def __init__(self, keeper: Keeper) -> None:
        self.keeper = keeper

    def params(self, ctx: Context) -> Params:
        return self.keeper.get_params(ctx)

    def budgets(self, ctx: Context, request: dict | None) -> list[BudgetResponse]:
        """List budgets filtered by ``name``, ``source_address`` and ``destination_address``."""
        if request is None:
            raise InvalidRequestError()
        name = request.get("name", "")
        source = request.get("source_address", "")
        destination = request.get("destination_address", "")
        if source:
            acc_address_from_bech32(source)
        if destination:
            acc_address_from_bech32(destination)
        return [
            BudgetResponse(b, self.keeper.get_total_collected_coins(ctx, b.name))
            for b in self.keeper.get_params(ctx).budgets
            if (not name or b.name == name)
            and (not source or b.source_address == source)
            and (not destination or b.destination_address == destination)
        ]

    def addresses(self, request: dict | None) -> str:
        """Derive an address from ``name``, ``module_name`` and ``type``."""
        if request is None:
            raise InvalidRequestError()
        name = request.get("name", "")
        module_name = request.get("module_name", "")
        address_type = request.get("type", AddressType.TYPE_32_BYTES)
        if not name and not module_name:
            raise ValueError("at least one input of name or module name is required")
        if not module_name and address_type == AddressType.TYPE_32_BYTES:
            module_name = MODULE_NAME
        addr = derive_address(address_type, module_name, name)
        if not addr:
            raise ValueError("invalid names with address type")
        return acc_address_to_bech32(addr)