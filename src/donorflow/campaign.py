"""
Campaign creation parameters.

Mirrors the factory's ``CreateCampaignParams`` struct.  Payouts are split
into segments released at increasing milestones; percentages are in
basis points and must add up to exactly 100%.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional

from .errors import CampaignParamsError

BPS_TOTAL = 10_000
UINT64_MAX = 2**64 - 1
UINT256_MAX = 2**256 - 1

START_DELAY = timedelta(seconds=10)
CAMPAIGN_DURATION = timedelta(days=365)
MILESTONE_OFFSETS = (timedelta(days=30), timedelta(days=60))
DEFAULT_TARGET_AMOUNT = 20 * 10**18


@dataclass(frozen=True)
class Segment:
    percentage_bps: int
    milestone: int

    def as_abi(self) -> tuple[int, int]:
        return (self.percentage_bps, self.milestone)


@dataclass(frozen=True)
class CampaignParams:
    start_time: int
    end_time: int
    cliff_duration: int
    beneficiary: str
    target_amount: int
    asset: str
    metadata: bytes = b""
    segments: tuple[Segment, ...] = field(default_factory=tuple)

    def validate(self) -> None:
        """
        Check the struct invariants before anything is submitted.

        Raises:
            CampaignParamsError: On the first violated invariant
        """
        for name in ("start_time", "end_time", "cliff_duration"):
            value = getattr(self, name)
            if not 0 <= value <= UINT64_MAX:
                raise CampaignParamsError(f"{name} out of uint64 range: {value}")
        if self.start_time >= self.end_time:
            raise CampaignParamsError("start_time must be before end_time")
        if not 0 <= self.target_amount <= UINT256_MAX:
            raise CampaignParamsError("target_amount out of uint256 range")
        if not self.segments:
            raise CampaignParamsError("At least one segment is required")

        previous: Optional[int] = None
        for segment in self.segments:
            if not 0 <= segment.percentage_bps <= BPS_TOTAL:
                raise CampaignParamsError(
                    f"Segment percentage out of range: {segment.percentage_bps} bps"
                )
            if not self.start_time <= segment.milestone <= self.end_time:
                raise CampaignParamsError(
                    f"Milestone {segment.milestone} outside campaign window "
                    f"[{self.start_time}, {self.end_time}]"
                )
            if previous is not None and segment.milestone <= previous:
                raise CampaignParamsError("Milestones must be strictly increasing")
            previous = segment.milestone

        total = sum(s.percentage_bps for s in self.segments)
        if total != BPS_TOTAL:
            raise CampaignParamsError(
                f"Segment percentages sum to {total} bps, expected {BPS_TOTAL}"
            )

    def as_abi(self) -> tuple:
        """Tuple in CreateCampaignParams field order, for eth-abi."""
        return (
            self.start_time,
            self.end_time,
            self.cliff_duration,
            self.beneficiary,
            self.target_amount,
            self.asset,
            self.metadata,
            [s.as_abi() for s in self.segments],
        )


def build_campaign_params(
    beneficiary: str,
    asset: str,
    target_amount: int = DEFAULT_TARGET_AMOUNT,
    metadata: bytes = b"",
    now: Optional[datetime] = None,
) -> CampaignParams:
    """
    Build the fixed-schedule campaign.

    Starts 10 seconds from ``now`` and runs for 365 days.  Payouts are two
    equal halves released 30 and 60 days after the start, with no cliff.
    """
    now = now or datetime.now(timezone.utc)
    start = now + START_DELAY
    end = start + CAMPAIGN_DURATION
    share = BPS_TOTAL // len(MILESTONE_OFFSETS)

    params = CampaignParams(
        start_time=int(start.timestamp()),
        end_time=int(end.timestamp()),
        cliff_duration=0,
        beneficiary=beneficiary,
        target_amount=target_amount,
        asset=asset,
        metadata=metadata,
        segments=tuple(
            Segment(percentage_bps=share, milestone=int((start + offset).timestamp()))
            for offset in MILESTONE_OFFSETS
        ),
    )
    params.validate()
    return params
