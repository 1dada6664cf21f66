"""Bech32 account addresses and address derivation."""

from __future__ import annotations

import hashlib
from enum import IntEnum

BECH32_PREFIX = "cosmos"
_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
_GENERATOR = (0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3)
_MAX_LENGTH = 1023
_MAX_ADDR_LEN = 255


class AddressType(IntEnum):
    TYPE_32_BYTES = 0
    TYPE_20_BYTES = 1


def _polymod(values) -> int:
    chk = 1
    for value in values:
        top = chk >> 25
        chk = (chk & 0x1FFFFFF) << 5 ^ value
        for i, gen in enumerate(_GENERATOR):
            if (top >> i) & 1:
                chk ^= gen
    return chk


def _hrp_expand(hrp: str) -> list[int]:
    return [ord(c) >> 5 for c in hrp] + [0] + [ord(c) & 31 for c in hrp]


def _convert_bits(data, from_bits: int, to_bits: int, pad: bool) -> list[int]:
    acc = 0
    bits = 0
    out = []
    maxv = (1 << to_bits) - 1
    for value in data:
        acc = (acc << from_bits) | value
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            out.append((acc >> bits) & maxv)
    if pad:
        if bits:
            out.append((acc << (to_bits - bits)) & maxv)
    elif bits >= from_bits or (acc << (to_bits - bits)) & maxv:
        raise ValueError("invalid padding")
    return out


def bech32_encode(hrp: str, data: bytes) -> str:
    """Encode bytes as a bech32 string with the given human readable part."""
    words = _convert_bits(data, 8, 5, True)
    polymod = _polymod(_hrp_expand(hrp) + words + [0] * 6) ^ 1
    checksum = [(polymod >> 5 * (5 - i)) & 31 for i in range(6)]
    return hrp + "1" + "".join(_CHARSET[w] for w in words + checksum)


def bech32_decode(text: str) -> tuple[str, bytes]:
    """Decode a bech32 string into its human readable part and bytes."""
    if len(text) < 8 or len(text) > _MAX_LENGTH:
        raise ValueError(f"invalid bech32 string length {len(text)}")
    for ch in text:
        if not 33 <= ord(ch) <= 126:
            raise ValueError(f"invalid character in string: '{ch}'")
    if text.lower() != text and text.upper() != text:
        raise ValueError("string not all lowercase or all uppercase")
    text = text.lower()
    sep = text.rfind("1")
    if sep < 1 or sep + 7 > len(text):
        raise ValueError(f"invalid separator index {sep}")
    hrp, data_part = text[:sep], text[sep + 1:]
    words = []
    for ch in data_part:
        index = _CHARSET.find(ch)
        if index < 0:
            raise ValueError(
                "failed converting data to bytes: "
                f"invalid character not part of charset: {ord(ch)}"
            )
        words.append(index)
    if _polymod(_hrp_expand(hrp) + words) != 1:
        raise ValueError("checksum failed")
    return hrp, bytes(_convert_bits(words[:-6], 5, 8, False))


def acc_address_from_bech32(address: str) -> bytes:
    """Parse and check a bech32 account address."""
    if not address.strip():
        raise ValueError("empty address string is not allowed")
    try:
        hrp, data = bech32_decode(address)
    except ValueError as exc:
        raise ValueError(f"decoding bech32 failed: {exc}") from exc
    if hrp != BECH32_PREFIX:
        raise ValueError(f"invalid Bech32 prefix; expected {BECH32_PREFIX}, got {hrp}")
    if not data:
        raise ValueError("addresses cannot be empty")
    if len(data) > _MAX_ADDR_LEN:
        raise ValueError(f"address max length is {_MAX_ADDR_LEN}, got {len(data)}")
    return data


def acc_address_to_bech32(addr: bytes) -> str:
    """Format an account address; an empty address gives an empty string."""
    if not addr:
        return ""
    return bech32_encode(BECH32_PREFIX, addr)


def module_address(module_name: str, key: bytes) -> bytes:
    """Derive a 32-byte module address from a module name and key."""
    type_hash = hashlib.sha256(b"module").digest()
    return hashlib.sha256(type_hash + module_name.encode() + b"\x00" + key).digest()


def address_hash(data: bytes) -> bytes:
    """Return the 20-byte truncated SHA-256 hash of ``data``."""
    return hashlib.sha256(data).digest()[:20]


def derive_address(address_type, module_name: str, name: str) -> bytes:
    """Derive an address; an unknown address type gives an empty address."""
    try:
        kind = AddressType(address_type)
    except ValueError:
        return b""
    if kind is AddressType.TYPE_32_BYTES:
        return module_address(module_name, name.encode())
    return address_hash((module_name + name).encode())