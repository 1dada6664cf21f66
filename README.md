# budgetmod

`budgetmod` manages *budgets*: standing rules that, at every epoch, move a
fixed share (the rate) of a source account's balance to a destination
account, for as long as the budget's time window is open. It keeps a running
total of what each budget has collected and can export and re-import its
whole state as a genesis document.

## Install

```
pip install budgetmod
```

For running the tests:

```
pip install "budgetmod[test]"
pytest
```

## Modules

- `budgetmod.budget`: `Budget` has a name, a `Dec` rate in (0, 1], bech32
  source and destination addresses, and a start and end `Timestamp` (start
  inclusive, end exclusive). `Budget.validate()` raises a subclass of
  `BudgetError` when a field is wrong; `Budget.collectible(block_time)`
  tells whether the window is open. `collectible_budgets`, `validate_name`
  and `budgets_by_source` work on lists of budgets.
- `budgetmod.params`: `Params` holds `epoch_blocks` and the list of
  budgets. `validate_budgets` rejects invalid budgets, duplicate names, and
  any source whose budgets with overlapping time ranges add up to more than
  1. `validate_epoch_blocks` checks for an unsigned 32-bit integer.
  `default_params()` gives `epoch_blocks=1` and no budgets.
- `budgetmod.genesis`: `GenesisState`, `BudgetRecord`,
  `default_genesis_state()` and `validate_genesis()`.
- `budgetmod.coins`: `Dec` (a decimal with 18 places held as an integer),
  `Coin`, `Coins` and `DecCoins`, with parsing such as
  `Coins.parse("10stake,5denom1")`.
- `budgetmod.timeutil`: `Timestamp`, `parse_rfc3339()` (years 0000 to 9999)
  and `date_ranges_overlap()`.
- `budgetmod.address`: bech32 encoding and decoding, `acc_address_from_bech32`,
  `acc_address_to_bech32`, `module_address`, `address_hash`, and
  `derive_address` with `AddressType.TYPE_32_BYTES` or
  `AddressType.TYPE_20_BYTES`. Account addresses use the `cosmos` prefix.
- `budgetmod.keeper`: `Keeper` stores params and collected totals in a
  `Context` and runs `collect_budgets`, which moves coins through a
  `BankKeeper` and appends a `budget_collected` `Event` for each budget.
  Collection only happens at block heights divisible by `epoch_blocks`, and
  never when `epoch_blocks` is 0. `init_genesis` and `export_genesis` load
  and dump the state.
- `budgetmod.querier`: `Querier.params`, `Querier.budgets` (filtered by
  `name`, `source_address` and `destination_address`) and
  `Querier.addresses` (derives an address from `name`, `module_name` and
  `type`; with type 0 and no module name, `budget` is used).
- `budgetmod.decoder`: `decode_store` renders stored collected-coin entries
  as text.
- `budgetmod.module`: `AppModule` gives default genesis JSON, validates and
  loads genesis JSON, exports it, and runs `begin_block`, which calls
  `begin_blocker`.

Errors are raised as exceptions derived from `budgetmod.errors.BudgetError`
(for example `InvalidTotalBudgetRateError` or `DuplicateBudgetNameError`),
so callers can catch one kind of failure or all of them. Malformed addresses
and times raise `ValueError`.

## Example

```python
from budgetmod.address import (
    AddressType,
    acc_address_to_bech32,
    derive_address,
    module_address,
)
from budgetmod.budget import Budget
from budgetmod.coins import Coins, Dec
from budgetmod.keeper import AccountKeeper, BankKeeper, Context, Keeper
from budgetmod.timeutil import parse_rfc3339

source_acc = module_address("budget", b"sourceAddr1")
destination_acc = module_address("budget", b"destinationAddr1")

budget = Budget(
    name="budget1",
    rate=Dec.from_string("0.5"),
    source_address=acc_address_to_bech32(source_acc),
    destination_address=acc_address_to_bech32(destination_acc),
    start_time=parse_rfc3339("0000-01-01T00:00:00Z"),
    end_time=parse_rfc3339("9999-12-31T00:00:00Z"),
)
budget.validate()

bank = BankKeeper()
bank.fund(source_acc, Coins.parse("1000stake"))
accounts = AccountKeeper({"budget": module_address("budget", b"")})
keeper = Keeper(accounts, bank)
ctx = Context(block_height=1, block_time=parse_rfc3339("2021-08-31T00:00:00Z"))

params = keeper.get_params(ctx)
params.epoch_blocks = 1
params.budgets = [budget]
keeper.set_params(ctx, params)

keeper.collect_budgets(ctx)
print(keeper.get_total_collected_coins(ctx, "budget1"))   # Coins('500stake')
print(bank.get_all_balances(ctx, destination_acc))        # Coins('500stake')

fee_collector = derive_address(AddressType.TYPE_20_BYTES, "", "fee_collector")
print(acc_address_to_bech32(fee_collector))
```

`Keeper` refuses to start unless the `AccountKeeper` knows a `budget` module
account.

## What it does not do

- There is no command-line tool; everything is used from Python.
- There is no network service: `Querier` answers calls made in-process.
- State lives in memory: `Context.store`, `Context.param_store` and
  `BankKeeper` balances are plain dictionaries and are not saved anywhere.
  Use `Keeper.export_genesis` or `AppModule.export_genesis` to keep a copy.
- Parameters are changed only by calling `Keeper.set_params`; there is no
  governance or transaction handling, and no randomized genesis generation
  for simulations.