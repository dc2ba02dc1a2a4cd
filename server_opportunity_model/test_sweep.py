"""
Tests for the phone-time sensitivity sweep.
"""

import pytest

from .model import BusinessParameters, CheckSizeTable, OpportunityCostModel, ServerProfile
from .sweep import PhoneTimeSweeper, SweepResult, default_scan_range


@pytest.fixture
def model():
    servers = [
        ServerProfile(name='A', wage=4.74, phone_time_pct=10, tip_pct=18,
                      hours=((5, 5),) * 7),
        ServerProfile(name='B', wage=7.25, phone_time_pct=22, tip_pct=20,
                      hours=((0, 6),) * 5 + ((4, 8),) * 2),
    ]
    return OpportunityCostModel(servers, CheckSizeTable(), BusinessParameters())


class TestScanRange:
    def test_default_range_is_5_to_25_inclusive(self):
        values = default_scan_range()
        assert values[0] == 5
        assert values[-1] == 25
        assert len(values) == 21


class TestPhoneTimeSweeper:
    """Tests for sensitivity-curve generation."""

    def test_one_point_per_percent(self, model):
        curve = PhoneTimeSweeper(model).sweep()
        assert curve.phone_time_values == list(range(5, 26))

    def test_custom_values(self, model):
        curve = PhoneTimeSweeper(model).sweep([10, 20])
        assert len(curve.points) == 2

    def test_curve_is_monotonic(self, model):
        curve = PhoneTimeSweeper(model).sweep()
        assert curve.is_monotonic()
        costs = [p.cost_without_automation for p in curve.points]
        assert all(b >= a for a, b in zip(costs, costs[1:]))

    def test_savings_consistent(self, model):
        for p in PhoneTimeSweeper(model).sweep().points:
            assert p.savings == pytest.approx(
                p.cost_without_automation - p.cost_with_automation
            )
            assert p.cost_without_automation == pytest.approx(
                p.labor_cost + p.lost_upsell_profit + p.lost_tips, abs=1e-9
            )

    def test_zero_hours_curve_is_flat_subscription(self):
        empty = OpportunityCostModel([ServerProfile()], CheckSizeTable(),
                                     BusinessParameters(plan_price=599))
        curve = PhoneTimeSweeper(empty).sweep()
        assert curve.is_monotonic()
        assert all(p.cost_without_automation == 0 for p in curve.points)
        assert all(p.cost_with_automation == 599 for p in curve.points)
        assert all(p.savings == -599 for p in curve.points)


class TestOperatingPoint:
    """Tests for locating the current point on the curve."""

    def test_find_within_tolerance(self, model):
        curve = PhoneTimeSweeper(model).sweep()
        assert curve.find(15).phone_time_pct == 15
        assert curve.find(15.005).phone_time_pct == 15

    def test_find_misses_off_grid(self, model):
        curve = PhoneTimeSweeper(model).sweep()
        assert curve.find(15.5) is None
        assert curve.find(40) is None

    def test_operating_point_on_curve_is_same_object(self, model):
        sweeper = PhoneTimeSweeper(model)
        curve = sweeper.sweep()
        assert sweeper.operating_point(12, curve) is curve.find(12)

    def test_operating_point_off_curve_is_evaluated(self, model):
        sweeper = PhoneTimeSweeper(model)
        curve = sweeper.sweep()
        point = sweeper.operating_point(30, curve)
        assert point.phone_time_pct == 30
        assert point.cost_without_automation > curve.points[-1].cost_without_automation

    def test_to_arrays(self, model):
        arrays = PhoneTimeSweeper(model).sweep().to_arrays()
        assert arrays['phone_time_pct'].shape == (21,)
        assert arrays['savings'][0] == pytest.approx(
            arrays['cost_without_automation'][0] - arrays['cost_with_automation'][0]
        )

    def test_empty_result(self):
        assert SweepResult(points=[]).find(15) is None
