"""
Chain client handle.

Couples an RPC endpoint with the signing account.  Built once by the
driver and shared by every contract interaction; it holds no state that
changes between calls (nonces are fetched from the node per transaction).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from eth_account.signers.local import LocalAccount

from ..sigil.eth import get_account
from .rpc import DEFAULT_POLL_INTERVAL, get_chain_id, read_contract
from .tx import build_contract_tx, sign_and_send


@dataclass(frozen=True)
class ChainClient:
    rpc_url: str
    account: LocalAccount
    chain_id: int
    receipt_timeout: Optional[float] = None
    poll_interval: float = DEFAULT_POLL_INTERVAL

    @classmethod
    def connect(
        cls,
        rpc_url: str,
        private_key: str,
        receipt_timeout: Optional[float] = None,
    ) -> "ChainClient":
        """Build a client, asking the node for its chain ID."""
        account = get_account(private_key)
        return cls(
            rpc_url=rpc_url,
            account=account,
            chain_id=get_chain_id(rpc_url),
            receipt_timeout=receipt_timeout,
        )

    @property
    def address(self) -> str:
        return self.account.address

    def call(
        self, contract_address: str, abi: list, function_name: str, args: Optional[list] = None
    ) -> Any:
        """Read-only contract call."""
        return read_contract(
            contract_address, function_name, self.rpc_url, abi, args=args
        )

    def transact(
        self,
        contract_address: str,
        abi: list,
        function_name: str,
        args: list,
        value: int = 0,
        gas_limit: Optional[int] = None,
    ) -> dict:
        """Build, sign and send a contract call; return its receipt."""
        tx = build_contract_tx(
            self.account,
            contract_address,
            function_name,
            args,
            abi,
            self.rpc_url,
            self.chain_id,
            value=value,
            gas_limit=gas_limit,
        )
        return sign_and_send(
            tx,
            self.account,
            self.rpc_url,
            timeout=self.receipt_timeout,
            poll_interval=self.poll_interval,
        )
