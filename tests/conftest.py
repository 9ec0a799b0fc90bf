"""Shared fixtures: a fake JSON-RPC node and a throwaway signer."""

from __future__ import annotations

from typing import Any, Optional
from unittest.mock import patch

import pytest
from eth_abi import encode

from donorflow.errors import NetworkError
from donorflow.sigil.eth import keccak256

TEST_PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"

TOKEN = "0x7b4e9b59dc4280de59ec64a90ba666a887967279"
FACTORY = "0x1111111111111111111111111111111111111111"
CAMPAIGN = "0xfa4be5cbb918e92939171919d6dbbf5349813598"


class FakeNode:
    """Stands in for ``donorflow.pneuma.rpc._rpc_call``.

    Records every request.  Contract writes are tracked through
    eth_estimateGas (which sees the calldata) and eth_sendRawTransaction.
    """

    def __init__(self, chain_id: int = 97, receipt_status: Optional[str] = "0x1") -> None:
        self.chain_id = chain_id
        self.receipt_status = receipt_status
        self.calls: list[tuple[str, list]] = []
        self.raw_transactions: list[str] = []
        self.call_results: dict[str, str] = {}
        self.reverting: set[str] = set()

    def set_accepted_tokens(self, factory: str, tokens: list[str]) -> None:
        self.call_results[factory.lower()] = "0x" + encode(["address[]"], [tokens]).hex()

    def estimates(self) -> list[dict[str, Any]]:
        """eth_estimateGas payloads, i.e. one per attempted write."""
        return [params[0] for method, params in self.calls if method == "eth_estimateGas"]

    @staticmethod
    def selector(signature: str) -> str:
        return "0x" + keccak256(signature.encode("utf-8"))[:4].hex()

    def find_write(self, signature: str) -> Optional[dict[str, Any]]:
        """First attempted write whose calldata calls ``signature``."""
        sel = self.selector(signature)
        for payload in self.estimates():
            if payload["data"].startswith(sel):
                return payload
        return None

    def __call__(self, method: str, params: list, rpc_url: str) -> Any:
        self.calls.append((method, params))

        if method == "eth_chainId":
            return hex(self.chain_id)
        if method == "eth_getTransactionCount":
            return hex(len(self.raw_transactions))
        if method == "eth_gasPrice":
            return hex(1_000_000_000)
        if method == "eth_estimateGas":
            if params[0]["to"].lower() in self.reverting:
                raise NetworkError("RPC error from eth_estimateGas: execution reverted")
            return hex(120_000)
        if method == "eth_sendRawTransaction":
            self.raw_transactions.append(params[0])
            return "0x" + keccak256(bytes.fromhex(params[0][2:])).hex()
        if method == "eth_getTransactionReceipt":
            return {
                "transactionHash": params[0],
                "status": self.receipt_status,
                "blockNumber": hex(100 + len(self.raw_transactions)),
                "gasUsed": hex(50_000),
                "logs": [],
            }
        if method == "eth_call":
            return self.call_results.get(params[0]["to"].lower(), "0x")
        raise AssertionError(f"Unexpected RPC method {method}")


@pytest.fixture()
def node() -> FakeNode:
    fake = FakeNode()
    with patch("donorflow.pneuma.rpc._rpc_call", fake):
        yield fake


@pytest.fixture()
def base_env() -> dict[str, str]:
    return {
        "RPC_URL": "http://localhost:8545",
        "PRIVATE_KEY": TEST_PRIVATE_KEY,
        "FACTORY_ADDRESS": FACTORY,
        "DEPOSIT_TOKEN_ADDRESS": TOKEN,
        "CAMPAIGN_ADDRESS": CAMPAIGN,
        "AMOUNT": "10000000000000000",
    }
