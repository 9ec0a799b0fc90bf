"""Tests for campaign parameter construction and validation."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone

import pytest

from donorflow.campaign import (
    BPS_TOTAL,
    DEFAULT_TARGET_AMOUNT,
    CampaignParams,
    Segment,
    build_campaign_params,
)
from donorflow.errors import CampaignParamsError, ConfigurationError

BENEFICIARY = "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"
ASSET = "0x7b4e9b59dc4280de59ec64a90ba666a887967279"
NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)
DAY = 86_400


@pytest.fixture()
def params() -> CampaignParams:
    return build_campaign_params(BENEFICIARY, ASSET, now=NOW)


class TestFixedSchedule:
    def test_timestamps(self, params: CampaignParams) -> None:
        start = int(NOW.timestamp()) + 10
        assert params.start_time == start
        assert params.end_time == start + 365 * DAY
        assert [s.milestone for s in params.segments] == [start + 30 * DAY, start + 60 * DAY]

    def test_segments_split_evenly(self, params: CampaignParams) -> None:
        assert [s.percentage_bps for s in params.segments] == [5000, 5000]
        assert sum(s.percentage_bps for s in params.segments) == BPS_TOTAL

    def test_milestones_increase_within_window(self, params: CampaignParams) -> None:
        milestones = [s.milestone for s in params.segments]
        assert milestones == sorted(set(milestones))
        assert all(params.start_time <= m <= params.end_time for m in milestones)

    def test_defaults(self, params: CampaignParams) -> None:
        assert params.cliff_duration == 0
        assert params.beneficiary == BENEFICIARY
        assert params.asset == ASSET
        assert params.target_amount == DEFAULT_TARGET_AMOUNT == 20 * 10**18
        assert params.metadata == b""

    def test_uses_current_time_by_default(self) -> None:
        before = int(datetime.now(timezone.utc).timestamp())
        built = build_campaign_params(BENEFICIARY, ASSET)
        assert before + 10 <= built.start_time <= before + 12

    def test_abi_tuple_order(self, params: CampaignParams) -> None:
        encoded = params.as_abi()
        assert encoded[:6] == (
            params.start_time,
            params.end_time,
            0,
            BENEFICIARY,
            DEFAULT_TARGET_AMOUNT,
            ASSET,
        )
        assert encoded[6] == b""
        assert encoded[7] == [(5000, params.segments[0].milestone), (5000, params.segments[1].milestone)]


class TestValidation:
    def test_valid_params_pass(self, params: CampaignParams) -> None:
        params.validate()

    def test_empty_segments(self, params: CampaignParams) -> None:
        with pytest.raises(CampaignParamsError, match="segment"):
            replace(params, segments=()).validate()

    def test_sum_not_10000(self, params: CampaignParams) -> None:
        segments = (
            Segment(5000, params.segments[0].milestone),
            Segment(4000, params.segments[1].milestone),
        )
        with pytest.raises(CampaignParamsError, match="9000"):
            replace(params, segments=segments).validate()

    def test_percentage_out_of_range(self, params: CampaignParams) -> None:
        segments = (
            Segment(12000, params.segments[0].milestone),
            Segment(-2000, params.segments[1].milestone),
        )
        with pytest.raises(CampaignParamsError, match="out of range"):
            replace(params, segments=segments).validate()

    def test_non_increasing_milestones(self, params: CampaignParams) -> None:
        m = params.segments[0].milestone
        with pytest.raises(CampaignParamsError, match="increasing"):
            replace(params, segments=(Segment(5000, m), Segment(5000, m))).validate()

    def test_milestone_after_end(self, params: CampaignParams) -> None:
        segments = (Segment(10000, params.end_time + 1),)
        with pytest.raises(CampaignParamsError, match="outside"):
            replace(params, segments=segments).validate()

    def test_milestone_before_start(self, params: CampaignParams) -> None:
        segments = (Segment(10000, params.start_time - 1),)
        with pytest.raises(CampaignParamsError, match="outside"):
            replace(params, segments=segments).validate()

    def test_single_full_segment_is_valid(self, params: CampaignParams) -> None:
        replace(params, segments=(Segment(10000, params.end_time),)).validate()

    def test_end_before_start(self, params: CampaignParams) -> None:
        with pytest.raises(CampaignParamsError):
            replace(params, end_time=params.start_time).validate()

    def test_target_amount_overflow(self) -> None:
        with pytest.raises(CampaignParamsError):
            build_campaign_params(BENEFICIARY, ASSET, target_amount=2**256, now=NOW)

    def test_is_a_configuration_error(self) -> None:
        assert issubclass(CampaignParamsError, ConfigurationError)
