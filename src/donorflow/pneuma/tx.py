"""
Transaction Builder - Build, sign, and send contract call transactions.

Uses eth-account for signing and httpx-based JSON-RPC for sending.
All gas is paid by the signer EOA.
"""

from __future__ import annotations

from typing import Any, Optional

from eth_account.signers.local import LocalAccount

from ..errors import NetworkError, SigningError
from ..sigil.eth import to_checksum_address
from .abi import encode_call
from .rpc import (
    DEFAULT_POLL_INTERVAL,
    estimate_gas,
    get_gas_price,
    get_nonce,
    send_raw_transaction,
    wait_for_receipt,
)


def build_contract_tx(
    account: LocalAccount,
    contract_address: str,
    function_name: str,
    args: list,
    abi: list,
    rpc_url: str,
    chain_id: int,
    value: int = 0,
    gas_limit: Optional[int] = None,
) -> dict:
    """
    Build a contract call transaction (unsigned).

    Args:
        account: Signer; its address is the sender and nonce owner
        contract_address: 0x-prefixed contract address
        function_name: Function to call
        args: Function arguments
        abi: Contract ABI
        rpc_url: RPC endpoint URL
        chain_id: Chain ID for EIP-155 replay protection
        value: Native value in wei (default: 0)
        gas_limit: Gas limit (default: node estimate)

    Returns:
        Unsigned legacy transaction dict
    """
    calldata = encode_call(abi, function_name, args)

    tx: dict[str, Any] = {
        "from": account.address,
        "to": to_checksum_address(contract_address),
        "data": calldata,
        "value": value,
    }
    tx["gas"] = gas_limit or estimate_gas(tx, rpc_url)
    tx["nonce"] = get_nonce(account.address, rpc_url)
    tx["gasPrice"] = get_gas_price(rpc_url)
    tx["chainId"] = chain_id

    return tx


def sign_and_send(
    tx: dict,
    account: LocalAccount,
    rpc_url: str,
    timeout: Optional[float] = None,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
) -> dict:
    """
    Sign a transaction, send it and wait until it is mined.

    Args:
        tx: Unsigned transaction dict
        account: Signer
        rpc_url: RPC endpoint URL
        timeout: Receipt wait timeout; None waits indefinitely
        poll_interval: Receipt polling interval in seconds

    Returns:
        Transaction receipt dict

    Raises:
        SigningError: If eth-account refuses the transaction
        NetworkError: On RPC failure or if the transaction reverted
    """
    unsigned = {k: v for k, v in tx.items() if k != "from"}
    try:
        signed = account.sign_transaction(unsigned)
    except (TypeError, ValueError) as exc:
        raise SigningError(f"Could not sign transaction: {exc}") from exc
    raw_tx = "0x" + bytes(signed.raw_transaction).hex()

    tx_hash = send_raw_transaction(raw_tx, rpc_url)
    if not tx_hash:
        raise NetworkError("eth_sendRawTransaction returned no transaction hash")
    receipt = wait_for_receipt(
        tx_hash, rpc_url, timeout=timeout, poll_interval=poll_interval
    )

    status = receipt.get("status")
    if not isinstance(status, str):
        raise NetworkError(f"Receipt for {tx_hash} carries no status")
    if int(status, 16) != 1:
        raise NetworkError(f"Transaction {tx_hash} reverted")

    return receipt
