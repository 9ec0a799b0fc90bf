"""
Contract interactions: approve (optionally mint first), create a
campaign, donate.

Every write is submitted and awaited before the next one starts.  No
operation retries; any failure propagates to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from .campaign import (
    DEFAULT_TARGET_AMOUNT,
    UINT256_MAX,
    CampaignParams,
    build_campaign_params,
)
from .errors import ConfigurationError
from .pneuma.abi import campaign_abi, campaign_factory_abi, deposit_token_abi
from .pneuma.client import ChainClient


def _check_amount(amount: int) -> int:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ConfigurationError(f"Amount must be an integer, got {amount!r}")
    if not 0 <= amount <= UINT256_MAX:
        raise ConfigurationError(f"Amount must fit in uint256, got {amount}")
    return amount


@dataclass
class CampaignCreation:
    """Outcome of :meth:`ContractInteraction.create_campaign`."""

    accepted_tokens: list[str]
    params: CampaignParams
    receipt: dict


@dataclass
class ContractInteraction:
    client: ChainClient
    deposit_token: str
    mint_before_approve: bool = False
    _abis: dict[str, list] = field(default_factory=dict, init=False, repr=False)

    def _abi(self, name: str) -> list:
        if name not in self._abis:
            loader = {
                "DepositToken": deposit_token_abi,
                "CampaignFactory": campaign_factory_abi,
                "Campaign": campaign_abi,
            }[name]
            self._abis[name] = loader()
        return self._abis[name]

    def approve(self, spender: str, amount: int) -> list[dict]:
        """
        Let ``spender`` transfer up to ``amount`` deposit tokens.

        With ``mint_before_approve`` the same amount is first minted to
        the signer, so a fresh test account can donate.

        Returns:
            Receipts in submission order (mint first, if any)
        """
        amount = _check_amount(amount)
        token_abi = self._abi("DepositToken")
        receipts = []

        if self.mint_before_approve:
            receipts.append(
                self.client.transact(
                    self.deposit_token, token_abi, "mint", [self.client.address, amount]
                )
            )

        receipts.append(
            self.client.transact(self.deposit_token, token_abi, "approve", [spender, amount])
        )
        return receipts

    def accepted_tokens(self, factory: str) -> list[str]:
        tokens = self.client.call(factory, self._abi("CampaignFactory"), "acceptedTokenAddresses")
        return list(tokens or [])

    def create_campaign(
        self,
        factory: str,
        asset: Optional[str] = None,
        target_amount: int = DEFAULT_TARGET_AMOUNT,
        metadata: bytes = b"",
        now: Optional[datetime] = None,
    ) -> CampaignCreation:
        """
        Create a campaign through the factory.

        The campaign starts 10 seconds from now, lasts a year and pays
        the signer out in two halves at 30 and 60 days.  ``asset``
        defaults to the deposit token.

        Raises:
            CampaignParamsError: If the parameters fail validation
        """
        accepted = self.accepted_tokens(factory)

        params = build_campaign_params(
            beneficiary=self.client.address,
            asset=asset or self.deposit_token,
            target_amount=_check_amount(target_amount),
            metadata=metadata,
            now=now,
        )

        receipt = self.client.transact(
            factory, self._abi("CampaignFactory"), "createCampaign", [params.as_abi()]
        )
        return CampaignCreation(accepted_tokens=accepted, params=params, receipt=receipt)

    def donate(self, campaign: str, amount: int) -> dict:
        """
        Donate ``amount`` of the campaign's asset.

        Requires a prior approval of at least ``amount``; the campaign
        reverts otherwise, and also before its start or after its end.
        """
        amount = _check_amount(amount)
        return self.client.transact(campaign, self._abi("Campaign"), "donate", [amount])
