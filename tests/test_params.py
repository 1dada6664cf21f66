import pytest

from budgetmod.address import acc_address_to_bech32, module_address
from budgetmod.budget import Budget
from budgetmod.coins import Dec
from budgetmod.errors import (
    DuplicateBudgetNameError,
    InvalidBudgetNameError,
    InvalidTotalBudgetRateError,
)
from budgetmod.keys import MODULE_NAME
from budgetmod.params import (
    DEFAULT_EPOCH_BLOCKS,
    Params,
    default_params,
    validate_budgets,
    validate_epoch_blocks,
)
from budgetmod.timeutil import parse_rfc3339


def _addr(key):
    return acc_address_to_bech32(module_address(MODULE_NAME, key))


D1 = _addr(b"destinationAddr1")
D2 = _addr(b"destinationAddr2")
S1 = _addr(b"sourceAddr1")
S2 = _addr(b"sourceAddr2")


def _budget(name, rate, source, dest, start, end):
    return Budget(
        name=name,
        rate=Dec.from_string(rate),
        source_address=source,
        destination_address=dest,
        start_time=parse_rfc3339(start),
        end_time=parse_rfc3339(end),
    )


BUDGETS = [
    _budget("test", "1", S1, D1, "2021-08-01T00:00:00Z", "2021-08-03T00:00:00Z"),
    _budget("test1", "1", S2, D2, "2021-07-01T00:00:00Z", "2021-07-10T00:00:00Z"),
    _budget("test2", "0.1", S2, D2, "2021-07-01T00:00:00Z", "2021-07-10T00:00:00Z"),
    _budget("test3", "0.1", S2, D2, "2021-08-01T00:00:00Z", "2021-08-10T00:00:00Z"),
    _budget("test4", "1", S2, D2, "2021-08-01T00:00:00Z", "2021-08-20T00:00:00Z"),
    _budget("test5", "0.1", S2, D2, "2021-08-19T00:00:00Z", "2021-08-25T00:00:00Z"),
]


def test_default_params_string():
    assert str(default_params()) == "epoch_blocks: 1\nbudgets: []\n"


def test_default_params_values():
    params = default_params()
    assert params.epoch_blocks == DEFAULT_EPOCH_BLOCKS == 1
    assert params.budgets == []


def test_validate_budgets_ok():
    assert validate_budgets([BUDGETS[0], BUDGETS[1]]) is None


def test_validate_budgets_total_rate_exceeded():
    with pytest.raises(InvalidTotalBudgetRateError):
        validate_budgets([BUDGETS[0], BUDGETS[1], BUDGETS[2]])


def test_validate_budgets_non_overlapping_ranges():
    assert validate_budgets([BUDGETS[1], BUDGETS[4]]) is None


def test_validate_budgets_overlap_message():
    with pytest.raises(InvalidTotalBudgetRateError) as info:
        validate_budgets([BUDGETS[4], BUDGETS[5]])
    assert str(info.value) == (
        f"total rate for source address {S2} must not exceed 1: 1.100000000000000000: "
        "invalid total rate of the budgets with the same source address"
    )


def test_validate_budgets_duplicate_name():
    with pytest.raises(DuplicateBudgetNameError) as info:
        validate_budgets([BUDGETS[3], BUDGETS[3]])
    assert str(info.value) == "test3: duplicate budget name"


def test_validate_budgets_wrong_type():
    with pytest.raises(TypeError) as info:
        validate_budgets("budgets")
    assert str(info.value) == "invalid parameter type: str"


def test_validate_epoch_blocks_accepts_uint32():
    assert validate_epoch_blocks(0) is None
    assert validate_epoch_blocks(DEFAULT_EPOCH_BLOCKS) is None


def test_validate_epoch_blocks_none():
    with pytest.raises(TypeError) as info:
        validate_epoch_blocks(None)
    assert str(info.value) == "invalid parameter type: NoneType"


def test_validate_epoch_blocks_too_large():
    with pytest.raises(TypeError) as info:
        validate_epoch_blocks(10000000000000000)
    assert str(info.value) == "invalid parameter type: int"


def test_params_validate_rejects_bad_budget():
    bad = Budget(
        name="bad name",
        rate=Dec.one(),
        source_address=S1,
        destination_address=D1,
        start_time=parse_rfc3339("2021-08-01T00:00:00Z"),
        end_time=parse_rfc3339("2021-08-03T00:00:00Z"),
    )
    with pytest.raises(InvalidBudgetNameError):
        Params(budgets=[bad]).validate()


def test_params_dict_round_trip():
    params = Params(epoch_blocks=7, budgets=[BUDGETS[0], BUDGETS[3]])
    data = params.to_dict()
    assert data["epoch_blocks"] == 7
    assert [b["name"] for b in data["budgets"]] == ["test", "test3"]
    assert Params.from_dict(data) == params