"""
ABI Loader - Loads contract ABIs and encodes/decodes contract calls.

ABIs ship with the package under ``pneuma/abis/<Contract>.json``.  Set
DONORFLOW_ABI_DIR to load them from another directory instead (e.g. a
fresh compilation output with the same file names).
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from eth_abi import decode, encode

from ..errors import ConfigurationError
from ..sigil.eth import keccak256

BUNDLED_ABI_DIR = Path(__file__).resolve().parent / "abis"


def abi_dir() -> Path:
    """Directory ABIs are read from."""
    override = os.environ.get("DONORFLOW_ABI_DIR")
    return Path(override).expanduser() if override else BUNDLED_ABI_DIR


def load_abi(contract_name: str) -> list[dict[str, Any]]:
    """
    Load the ABI for a contract.

    Args:
        contract_name: Contract name (e.g., "DepositToken", "Campaign")

    Returns:
        ABI as a list of dicts

    Raises:
        ConfigurationError: If the ABI file is missing or malformed
    """
    return _load_abi_file(abi_dir() / f"{contract_name}.json")


@lru_cache(maxsize=16)
def _load_abi_file(abi_path: Path) -> list[dict[str, Any]]:
    if not abi_path.is_file():
        raise ConfigurationError(f"ABI not found: {abi_path}")

    try:
        with abi_path.open("r", encoding="utf-8") as f:
            artifact = json.load(f)
    except (OSError, ValueError) as exc:
        raise ConfigurationError(f"Cannot read ABI {abi_path}: {exc}") from exc

    # Accept both a bare ABI list and a compiler artifact with an "abi" key
    if isinstance(artifact, dict):
        artifact = artifact.get("abi")
    if not isinstance(artifact, list):
        raise ConfigurationError(f"ABI {abi_path} is not a list of entries")
    return artifact


def find_function(abi: list, function_name: str) -> dict[str, Any]:
    for entry in abi:
        if entry.get("type") == "function" and entry.get("name") == function_name:
            return entry
    raise ConfigurationError(f"Function {function_name} not found in ABI")


def abi_type(param: dict[str, Any]) -> str:
    """Canonical type string for an ABI parameter, expanding tuples.

    ``{"type": "tuple[]", "components": [...]}`` becomes ``(t1,t2)[]``.
    """
    kind = param["type"]
    if not kind.startswith("tuple"):
        return kind
    inner = ",".join(abi_type(c) for c in param.get("components", []))
    return f"({inner}){kind[len('tuple'):]}"


def function_signature(func: dict[str, Any]) -> str:
    input_types = [abi_type(inp) for inp in func.get("inputs", [])]
    return f"{func['name']}({','.join(input_types)})"


def function_selector(func: dict[str, Any]) -> bytes:
    return keccak256(function_signature(func).encode("utf-8"))[:4]


def encode_call(abi: list, function_name: str, args: list) -> str:
    """
    ABI-encode a function call.

    Args:
        abi: Contract ABI
        function_name: Function name to call
        args: Function arguments (tuples for struct parameters)

    Returns:
        0x-prefixed hex encoded calldata
    """
    func = find_function(abi, function_name)
    input_types = [abi_type(inp) for inp in func.get("inputs", [])]

    if len(args) != len(input_types):
        raise ValueError(
            f"{function_name} takes {len(input_types)} arguments, got {len(args)}"
        )

    encoded_args = encode(input_types, args) if args else b""
    return "0x" + function_selector(func).hex() + encoded_args.hex()


def decode_result(abi: list, function_name: str, data: str) -> Any:
    """
    ABI-decode a function call result.

    Args:
        abi: Contract ABI
        function_name: Function name
        data: 0x-prefixed hex encoded return data

    Returns:
        Decoded result (single value or tuple)
    """
    func = find_function(abi, function_name)

    output_types = [abi_type(out) for out in func.get("outputs", [])]
    if not output_types:
        return None

    raw = bytes.fromhex(data[2:]) if data.startswith("0x") else bytes.fromhex(data)
    decoded = decode(output_types, raw)

    if len(decoded) == 1:
        return decoded[0]
    return decoded


def deposit_token_abi() -> list[dict[str, Any]]:
    """Load DepositToken ABI."""
    return load_abi("DepositToken")


def campaign_factory_abi() -> list[dict[str, Any]]:
    """Load CampaignFactory ABI."""
    return load_abi("CampaignFactory")


def campaign_abi() -> list[dict[str, Any]]:
    """Load Campaign ABI."""
    return load_abi("Campaign")
