"""
ECDSA / secp256k1 signer and address helpers.

The signer is a single eth-account ``LocalAccount`` built from the
configured PRIVATE_KEY.  It signs every outgoing transaction and is
never written back to disk.
"""

from __future__ import annotations

import re

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_hash.auto import keccak

from ..errors import AddressParseError, SigningError

_ADDRESS_RE = re.compile(r"^(0x|0X)?[0-9a-fA-F]{40}$")
_PRIVATE_KEY_RE = re.compile(r"^(0x|0X)?[0-9a-fA-F]{64}$")

# secp256k1 group order
_SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141


def keccak256(data: bytes) -> bytes:
    # NOTE: Keccak-256 != SHA3-256 (NIST). Never use hashlib.sha3_256 here.
    return keccak(data)


def to_checksum_address(address: str) -> str:
    """Convert a 40-hex-digit address to EIP-55 checksummed format.

    eth-account requires checksummed addresses in transaction fields.
    """
    addr = address.lower().replace("0x", "")
    addr_hash = keccak256(addr.encode("utf-8")).hex()
    result = "0x"
    for i, c in enumerate(addr):
        if c in "abcdef":
            result += c.upper() if int(addr_hash[i], 16) >= 8 else c
        else:
            result += c
    return result


def parse_address(value: str) -> str:
    """
    Validate a hex address and return it checksummed.

    Mixed-case input must already carry a valid EIP-55 checksum;
    all-lowercase and all-uppercase input is accepted as-is.

    Raises:
        AddressParseError: If the value is not a 20-byte hex address
    """
    candidate = value.strip()
    if not _ADDRESS_RE.match(candidate):
        raise AddressParseError(f"Invalid address: {value!r}")

    digits = candidate[2:] if candidate[:2].lower() == "0x" else candidate
    checksummed = to_checksum_address(digits)
    is_mixed = digits != digits.lower() and digits != digits.upper()
    if is_mixed and checksummed[2:] != digits:
        raise AddressParseError(f"Address checksum mismatch: {value!r}")
    return checksummed


def normalize_private_key(private_key: str) -> str:
    """Return the key 0x-prefixed, rejecting anything but 32 hex bytes."""
    key = private_key.strip()
    if not _PRIVATE_KEY_RE.match(key):
        raise SigningError("PRIVATE_KEY must be 32 bytes of hex (64 hex digits)")
    if key.startswith(("0x", "0X")):
        key = key[2:]
    if not 0 < int(key, 16) < _SECP256K1_N:
        raise SigningError("PRIVATE_KEY is outside the secp256k1 key range")
    return "0x" + key


def get_account(private_key: str) -> LocalAccount:
    """
    Get an eth-account LocalAccount from a private key.

    Args:
        private_key: hex private key, with or without 0x prefix

    Returns:
        LocalAccount instance for signing transactions

    Raises:
        SigningError: If the key is malformed or outside the curve order
    """
    key = normalize_private_key(private_key)
    try:
        return Account.from_key(key)
    except ValueError as exc:
        raise SigningError(f"Invalid private key: {exc}") from exc


def get_address(private_key: str) -> str:
    """Get the checksummed address for a private key."""
    return get_account(private_key).address
