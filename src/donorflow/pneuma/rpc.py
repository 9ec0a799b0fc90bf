"""
JSON-RPC client for EVM networks.

Lightweight alternative to web3.py: uses httpx for HTTP + eth-abi for encoding.
Supports read-only contract calls, nonce / gas queries, raw transaction
submission and transaction receipt polling.
"""

from __future__ import annotations

import time
from typing import Any, Optional

import httpx

from ..errors import ConfigurationError, NetworkError
from .abi import decode_result, encode_call

DEFAULT_POLL_INTERVAL = 2.0


def _rpc_call(method: str, params: list, rpc_url: str) -> Any:
    """
    Make a JSON-RPC call.

    Args:
        method: RPC method name (e.g., "eth_call")
        params: RPC parameters
        rpc_url: RPC endpoint URL

    Returns:
        Result field from the RPC response

    Raises:
        NetworkError: On transport failure or an RPC error object
    """
    payload = {
        "jsonrpc": "2.0",
        "method": method,
        "params": params,
        "id": 1,
    }

    try:
        with httpx.Client(timeout=30) as client:
            response = client.post(rpc_url, json=payload)
            response.raise_for_status()
            data = response.json()
    except httpx.InvalidURL as exc:
        raise ConfigurationError(f"Invalid RPC_URL {rpc_url!r}: {exc}") from exc
    except httpx.HTTPError as exc:
        raise NetworkError(f"{method} failed: {exc}") from exc
    except ValueError as exc:
        raise NetworkError(f"{method} returned a non-JSON response") from exc

    if "error" in data:
        raise NetworkError(f"RPC error from {method}: {data['error']}")

    return data.get("result")


def read_contract(
    contract_address: str,
    function_name: str,
    rpc_url: str,
    abi: list,
    args: Optional[list] = None,
) -> Any:
    """
    Read from a smart contract (eth_call).

    Args:
        contract_address: 0x-prefixed contract address
        function_name: Function to call
        rpc_url: RPC endpoint URL
        abi: Contract ABI
        args: Function arguments (default: [])

    Returns:
        Decoded return value(s)
    """
    calldata = encode_call(abi, function_name, args or [])

    result = _rpc_call(
        "eth_call",
        [{"to": contract_address, "data": calldata}, "latest"],
        rpc_url,
    )

    if result is None or result == "0x":
        return None

    return decode_result(abi, function_name, result)


def _rpc_quantity(method: str, params: list, rpc_url: str) -> int:
    """Call a method whose result is a hex quantity."""
    result = _rpc_call(method, params, rpc_url)
    if not isinstance(result, str):
        raise NetworkError(f"{method} returned no quantity (got {result!r})")
    try:
        return int(result, 16)
    except ValueError as exc:
        raise NetworkError(f"{method} returned a malformed quantity {result!r}") from exc


def get_chain_id(rpc_url: str) -> int:
    """Get the chain ID reported by the node."""
    return _rpc_quantity("eth_chainId", [], rpc_url)


def get_nonce(address: str, rpc_url: str) -> int:
    """
    Get the next transaction nonce for an address.

    Uses the "pending" tag so transactions already in the mempool count.
    """
    return _rpc_quantity("eth_getTransactionCount", [address, "pending"], rpc_url)


def get_gas_price(rpc_url: str) -> int:
    """Get current gas price in wei."""
    return _rpc_quantity("eth_gasPrice", [], rpc_url)


def estimate_gas(tx: dict, rpc_url: str) -> int:
    """
    Estimate gas for a call.

    A call that would revert fails here with the node's revert reason,
    before anything is signed or broadcast.
    """
    call = {k: v for k, v in tx.items() if k in ("from", "to", "data")}
    call["value"] = hex(tx.get("value", 0))
    return _rpc_quantity("eth_estimateGas", [call], rpc_url)


def send_raw_transaction(raw_tx: str, rpc_url: str) -> str:
    """
    Send a signed raw transaction.

    Args:
        raw_tx: 0x-prefixed hex encoded signed transaction

    Returns:
        Transaction hash (0x-prefixed hex)
    """
    return _rpc_call("eth_sendRawTransaction", [raw_tx], rpc_url)


def wait_for_receipt(
    tx_hash: str,
    rpc_url: str,
    timeout: Optional[float] = None,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
) -> dict:
    """
    Wait for a transaction receipt.

    Args:
        tx_hash: Transaction hash
        rpc_url: RPC endpoint URL
        timeout: Maximum wait time in seconds; None waits indefinitely
        poll_interval: Polling interval in seconds

    Returns:
        Transaction receipt dict

    Raises:
        NetworkError: If receipt not found within timeout
    """
    start = time.monotonic()
    while True:
        receipt = _rpc_call("eth_getTransactionReceipt", [tx_hash], rpc_url)
        if receipt is not None:
            return receipt
        if timeout is not None and time.monotonic() - start >= timeout:
            raise NetworkError(
                f"Transaction {tx_hash} not confirmed within {timeout}s"
            )
        time.sleep(poll_interval)
