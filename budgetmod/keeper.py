"""State keeper of the budget module, with in-memory bank and account keepers."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from typing import Iterable, Iterator

from budgetmod.address import acc_address_from_bech32
from budgetmod.budget import collectible_budgets, budgets_by_source
from budgetmod.coins import Coin, Coins, DecCoins
from budgetmod.errors import (
    ATTRIBUTE_VALUE_AMOUNT,
    ATTRIBUTE_VALUE_DESTINATION_ADDRESS,
    ATTRIBUTE_VALUE_NAME,
    ATTRIBUTE_VALUE_RATE,
    ATTRIBUTE_VALUE_SOURCE_ADDRESS,
    EVENT_TYPE_BUDGET_COLLECTED,
    InvalidCoinsError,
)
from budgetmod.genesis import BudgetRecord, GenesisState, validate_genesis
from budgetmod.keys import (
    MODULE_NAME,
    TOTAL_COLLECTED_COINS_KEY_PREFIX,
    get_total_collected_coins_key,
    parse_total_collected_coins_key,
)
from budgetmod.params import Params, validate_budgets, validate_epoch_blocks
from budgetmod.timeutil import Timestamp, parse_rfc3339


def _encode_total_collected_coins(coins: Coins) -> bytes:
    payload = {
        "total_collected_coins": [
            {"denom": c.denom, "amount": str(c.amount)} for c in coins
        ]
    }
    return json.dumps(payload, separators=(",", ":")).encode()


def _decode_total_collected_coins(data: bytes) -> Coins:
    payload = json.loads(data.decode())
    return Coins(
        Coin(item["denom"], int(item["amount"]))
        for item in payload.get("total_collected_coins") or []
    )


@dataclass(frozen=True)
class Event:
    """An event emitted while processing a block."""

    type: str
    attributes: tuple[tuple[str, str], ...] = ()

    def attribute(self, key: str) -> str | None:
        return next((v for k, v in self.attributes if k == key), None)


@dataclass
class Context:
    """Block information plus the shared key-value and parameter stores."""

    block_height: int = 0
    block_time: Timestamp = field(
        default_factory=lambda: parse_rfc3339("0001-01-01T00:00:00Z")
    )
    store: dict[bytes, bytes] = field(default_factory=dict)
    param_store: dict[str, Params] = field(default_factory=dict)
    events: list[Event] = field(default_factory=list)

    def with_block_height(self, height: int) -> "Context":
        return replace(self, block_height=height)

    def with_block_time(self, time: Timestamp) -> "Context":
        return replace(self, block_time=time)


class BankKeeper:
    """Account balances kept in memory."""

    def __init__(self) -> None:
        self._balances: dict[bytes, dict[str, int]] = {}

    def fund(self, addr: bytes, coins: Coins) -> None:
        balance = self._balances.setdefault(addr, {})
        for coin in coins:
            balance[coin.denom] = balance.get(coin.denom, 0) + coin.amount

    def get_all_balances(self, ctx: Context, addr: bytes) -> Coins:
        balance = self._balances.get(addr, {})
        return Coins(Coin(d, a) for d, a in sorted(balance.items()) if a)

    def input_output_coins(
        self,
        ctx: Context,
        inputs: Iterable[tuple[bytes, Coins]],
        outputs: Iterable[tuple[bytes, Coins]],
    ) -> None:
        """Move coins from inputs to outputs; the two sides must sum equally."""
        inputs, outputs = list(inputs), list(outputs)
        total_in = Coins().add(*(c for _, coins in inputs for c in coins))
        total_out = Coins().add(*(c for _, coins in outputs for c in coins))
        if total_in != total_out:
            raise InvalidCoinsError().wrap("sum inputs != sum outputs")
        for addr, coins in inputs:
            balance = self._balances.get(addr, {})
            for coin in coins:
                if balance.get(coin.denom, 0) < coin.amount:
                    raise InvalidCoinsError().wrap(
                        f"insufficient funds: {balance.get(coin.denom, 0)}{coin.denom} "
                        f"is smaller than {coin}"
                    )
        for addr, coins in inputs:
            balance = self._balances[addr]
            for coin in coins:
                balance[coin.denom] -= coin.amount
        for addr, coins in outputs:
            self.fund(addr, coins)


class AccountKeeper:
    """Module accounts known by name."""

    def __init__(self, module_accounts: dict[str, bytes] | None = None) -> None:
        self._modules = dict(module_accounts or {})

    def get_module_address(self, name: str) -> bytes | None:
        return self._modules.get(name)

    def get_module_account(self, ctx: Context, module_name: str) -> bytes | None:
        return self._modules.get(module_name)

    def set_module_account(self, ctx: Context, module_name: str, address: bytes) -> None:
        self._modules[module_name] = address


class Keeper:
    """Reads and writes the budget module's state."""

    def __init__(self, account_keeper: AccountKeeper, bank_keeper: BankKeeper) -> None:
        if account_keeper.get_module_address(MODULE_NAME) is None:
            raise RuntimeError(f"{MODULE_NAME} module account has not been set")
        self.account_keeper = account_keeper
        self.bank_keeper = bank_keeper

    def get_params(self, ctx: Context) -> Params:
        params = ctx.param_store.get(MODULE_NAME)
        if params is None:
            return Params(epoch_blocks=0, budgets=[])
        return Params(epoch_blocks=params.epoch_blocks, budgets=list(params.budgets))

    def set_params(self, ctx: Context, params: Params) -> None:
        validate_budgets(params.budgets)
        validate_epoch_blocks(params.epoch_blocks)
        ctx.param_store[MODULE_NAME] = Params(
            epoch_blocks=params.epoch_blocks, budgets=list(params.budgets)
        )

    def collect_budgets(self, ctx: Context) -> None:
        """Send each collectible budget's share of its source balance to its destination."""
        params = self.get_params(ctx)
        budgets = []
        if params.epoch_blocks > 0 and ctx.block_height % params.epoch_blocks == 0:
            budgets = collectible_budgets(params.budgets, ctx.block_time)
        if not budgets:
            return
        for source, group in budgets_by_source(budgets).items():
            source_acc = acc_address_from_bech32(source)
            balances = DecCoins.from_coins(
                self.bank_keeper.get_all_balances(ctx, source_acc)
            )
            if balances.is_zero():
                continue
            inputs, outputs = [], []
            group.collection_coins = [Coins() for _ in group.budgets]
            for i, budget in enumerate(group.budgets):
                destination_acc = acc_address_from_bech32(budget.destination_address)
                coins, _ = balances.mul_dec_truncate(budget.rate).truncate_decimal()
                if coins.is_empty() or not coins.is_valid():
                    continue
                inputs.append((source_acc, coins))
                outputs.append((destination_acc, coins))
                group.collection_coins[i] = coins
            self.bank_keeper.input_output_coins(ctx, inputs, outputs)
            for budget, coins in zip(group.budgets, group.collection_coins):
                self.add_total_collected_coins(ctx, budget.name, coins)
                ctx.events.append(
                    Event(
                        EVENT_TYPE_BUDGET_COLLECTED,
                        (
                            (ATTRIBUTE_VALUE_NAME, budget.name),
                            (ATTRIBUTE_VALUE_DESTINATION_ADDRESS, budget.destination_address),
                            (ATTRIBUTE_VALUE_SOURCE_ADDRESS, budget.source_address),
                            (ATTRIBUTE_VALUE_RATE, str(budget.rate)),
                            (ATTRIBUTE_VALUE_AMOUNT, str(coins)),
                        ),
                    )
                )

    def get_total_collected_coins(self, ctx: Context, budget_name: str) -> Coins | None:
        data = ctx.store.get(get_total_collected_coins_key(budget_name))
        if data is None:
            return None
        return _decode_total_collected_coins(data)

    def set_total_collected_coins(self, ctx: Context, budget_name: str, amount: Coins) -> None:
        ctx.store[get_total_collected_coins_key(budget_name)] = (
            _encode_total_collected_coins(amount)
        )

    def add_total_collected_coins(self, ctx: Context, budget_name: str, amount: Coins) -> None:
        current = self.get_total_collected_coins(ctx, budget_name) or Coins()
        self.set_total_collected_coins(ctx, budget_name, current.add(*amount))

    def iter_total_collected_coins(self, ctx: Context) -> Iterator[BudgetRecord]:
        """Yield every stored record in key order."""
        for key in sorted(ctx.store):
            if key.startswith(TOTAL_COLLECTED_COINS_KEY_PREFIX):
                yield BudgetRecord(
                    name=parse_total_collected_coins_key(key),
                    total_collected_coins=_decode_total_collected_coins(ctx.store[key]),
                )

    def init_genesis(self, ctx: Context, state: GenesisState) -> None:
        validate_genesis(state)
        self.set_params(ctx, state.params)
        if self.account_keeper.get_module_account(ctx, MODULE_NAME) is None:
            raise RuntimeError(f"{MODULE_NAME} module account has not been set")
        for record in state.budget_records:
            self.set_total_collected_coins(ctx, record.name, record.total_collected_coins)

    def export_genesis(self, ctx: Context) -> GenesisState:
        return GenesisState(
            params=self.get_params(ctx),
            budget_records=list(self.iter_total_collected_coins(ctx)),
        )