import pytest

from budgetmod.address import (
    AddressType,
    acc_address_from_bech32,
    acc_address_to_bech32,
    bech32_decode,
    bech32_encode,
    derive_address,
    module_address,
)

CASES = [
    (AddressType.TYPE_20_BYTES, "", "fee_collector", "cosmos17xpfvakm2amg962yls6f84z3kell8c5lserqta"),
    (AddressType.TYPE_32_BYTES, "farming", "GravityDEXFarmingBudget",
     "cosmos1228ryjucdpdv3t87rxle0ew76a56ulvnfst0hq0sscd3nafgjpqqkcxcky"),
    (AddressType.TYPE_20_BYTES, "budget", "", "cosmos1ptuk4rkky23ef69j5gujsnhyd6d857cwr02kz6"),
    (AddressType.TYPE_20_BYTES, "budget", "test1", "cosmos1j6y8plh9yyurax3srcw87z7vu3gr3uluhmsk96"),
    (AddressType.TYPE_32_BYTES, "budget", "test1",
     "cosmos1tfpll5msf3nz3ud2ey29hk9wczhtg7fg0cttp9q3082qrtkurvdsyh32gh"),
    (AddressType.TYPE_32_BYTES, "test2", "",
     "cosmos1v9ejakp386det8xftkvvazvqud43v3p5mmjdpnuzy3gw84h4dwxsfn6dly"),
    (AddressType.TYPE_32_BYTES, "test2", "test2",
     "cosmos1qmsgyd6yu06uryqtw7t6lg7ua5ll7s3ej828fcqfakrphppug4xqcx7w45"),
    (AddressType.TYPE_20_BYTES, "", "test2", "cosmos1vqcr4c3tnxyxr08rk28n8mkphe6c5gfuk5eh34"),
    (AddressType.TYPE_20_BYTES, "test2", "", "cosmos1vqcr4c3tnxyxr08rk28n8mkphe6c5gfuk5eh34"),
    (AddressType.TYPE_20_BYTES, "test2", "test2", "cosmos15642je7gk5lxugnqx3evj3jgfjdjv3q0nx6wn7"),
    (3, "test2", "invalidAddressType", ""),
]


@pytest.mark.parametrize("address_type,module_name,name,expected", CASES)
def test_derive_address(address_type, module_name, name, expected):
    assert acc_address_to_bech32(derive_address(address_type, module_name, name)) == expected


def test_module_address_matches_derivation():
    addr = module_address("farming", b"GravityDEXFarmingBudget")
    assert len(addr) == 32
    assert acc_address_to_bech32(addr) == (
        "cosmos1228ryjucdpdv3t87rxle0ew76a56ulvnfst0hq0sscd3nafgjpqqkcxcky"
    )


@pytest.mark.parametrize("_, module_name, name, expected", CASES[:-1])
def test_parse_round_trip(_, module_name, name, expected):
    addr = acc_address_from_bech32(expected)
    assert acc_address_to_bech32(addr) == expected


def test_bech32_round_trip():
    data = bytes(range(20))
    hrp, decoded = bech32_decode(bech32_encode("abc", data))
    assert (hrp, decoded) == ("abc", data)


def test_invalid_charset_message():
    with pytest.raises(ValueError) as info:
        acc_address_from_bech32("cosmos1invalidaddress")
    assert str(info.value) == (
        "decoding bech32 failed: failed converting data to bytes: "
        "invalid character not part of charset: 105"
    )


def test_wrong_prefix():
    other = bech32_encode("osmo", bytes(20))
    with pytest.raises(ValueError, match="invalid Bech32 prefix"):
        acc_address_from_bech32(other)


def test_empty_address():
    with pytest.raises(ValueError, match="empty address"):
        acc_address_from_bech32("")


def test_bad_checksum():
    good = "cosmos17xpfvakm2amg962yls6f84z3kell8c5lserqta"
    bad = good[:-1] + ("q" if good[-1] != "q" else "p")
    with pytest.raises(ValueError, match="checksum"):
        acc_address_from_bech32(bad)