"""
Tests for summary metrics, the impact breakdown and evaluate().
"""

import json
import pytest

from .analysis import (
    build_impact_breakdown, evaluate, payback_months, roi_pct, summarize,
)
from .formatter import format_payback
from .model import (
    BusinessParameters, CalculatorConfig, SensitivityPoint, ServerProfile,
)


@pytest.fixture
def example_config():
    """Worked example: one server, 70h/week, $25 lunch / $35 dinner checks."""
    server = ServerProfile(name='Server 1', wage=4.74, phone_time_pct=15,
                           tip_pct=18, hours=((5, 5),) * 7)
    return CalculatorConfig(
        servers=(server,),
        business=BusinessParameters(
            tables_per_hour=3, upsell_value=10, upsell_margin_pct=50,
            automation_coverage_pct=70, plan_price=399,
        ),
    )


def _point(without: float, with_: float, pct: float = 15) -> SensitivityPoint:
    return SensitivityPoint(
        phone_time_pct=pct,
        cost_without_automation=without,
        cost_with_automation=with_,
        savings=without - with_,
        labor_cost=without,
        lost_upsell_profit=0.0,
        lost_tips=0.0,
    )


class TestPaybackAndRoi:
    def test_payback_not_applicable_without_savings(self):
        assert payback_months(399, 0) is None
        assert payback_months(399, -50) is None

    def test_payback_is_plan_over_savings(self):
        assert payback_months(399, 798) == pytest.approx(0.5)
        assert payback_months(599, 200) == pytest.approx(2.995)

    def test_payback_free_plan_is_immediate(self):
        assert format_payback(payback_months(0, 100)) == 'Immediate'

    def test_payback_labels(self):
        assert format_payback(None) == 'N/A'
        assert format_payback(0.6) == '< 1 month'
        assert format_payback(1.0) == '< 1 month'
        assert format_payback(2.995) == '3.0 months'

    def test_roi(self):
        assert roi_pct(399, 399) == pytest.approx(100.0)
        assert roi_pct(-100, 399) < 0

    def test_roi_zero_without_subscription(self):
        assert roi_pct(500, 0) == 0.0


class TestSummarize:
    def test_example_summary(self, example_config):
        model_point = evaluate(example_config).summary
        savings = model_point.current_without - model_point.current_with
        assert model_point.phone_time_pct == 15
        assert model_point.phone_hours_per_month == pytest.approx(45.15)
        assert model_point.hours_reclaimed == pytest.approx(45.15 * 0.7)
        assert model_point.annual_savings == pytest.approx(savings * 12)
        assert model_point.annual_subscription_cost == pytest.approx(399 * 12)
        assert model_point.roi_pct == pytest.approx(savings * 12 / (399 * 12) * 100)
        assert model_point.payback_months == pytest.approx(399 / savings)

    def test_negative_savings(self, example_config):
        summary = summarize(_point(100.0, 500.0), example_config)
        assert summary.current_savings == -400
        assert summary.payback_months is None
        assert summary.roi_pct < 0


class TestImpactBreakdown:
    def test_items_in_order(self, example_config):
        items = build_impact_breakdown(_point(1000.0, 600.0), example_config)
        assert [i.name for i in items] == [
            'Direct Labor Cost',
            'Lost Upsell Profit',
            'Lost Server Tips',
            'Lost Customer Time Value',
            'Phone Revenue Profit',
            'Customer Retention',
            'Automation Net Impact',
        ]
        assert [i.kind for i in items] == ['cost'] * 4 + ['gain'] * 3

    def test_values(self, example_config):
        items = {i.name: i.value
                 for i in build_impact_breakdown(_point(1000.0, 600.0), example_config)}
        phone_hours = 45.15
        revenue = phone_hours * 0.7 * 120 * 0.4
        assert items['Lost Customer Time Value'] == pytest.approx(phone_hours * 15)
        assert items['Phone Revenue Profit'] == pytest.approx(revenue * 0.15)
        assert items['Customer Retention'] == pytest.approx(revenue * 0.2)
        assert items['Automation Net Impact'] == pytest.approx(400.0)


class TestEvaluate:
    """Tests for the top-level evaluation entry point."""

    def test_example_scenario(self, example_config):
        result = evaluate(example_config)
        s = result.summary
        labor = next(i for i in result.impact_breakdown if i.name == 'Direct Labor Cost')
        assert labor.value == pytest.approx(214.011)
        assert s.current_without > labor.value
        assert s.current_with < s.current_without
        assert s.roi_pct == pytest.approx((s.current_without - s.current_with) * 12
                                          / (399 * 12) * 100)

    def test_result_shapes(self, example_config):
        result = evaluate(example_config)
        assert len(result.server_impacts) == 1
        assert len(result.sensitivity) == 21
        assert len(result.day_impacts) == 7
        assert len(result.impact_breakdown) == 7

    def test_uses_weighted_estimate_by_default(self):
        servers = (
            ServerProfile(name='A', phone_time_pct=10, hours=((5, 5),) * 7),
            ServerProfile(name='B', phone_time_pct=30, hours=((5, 5),) * 7),
        )
        result = evaluate(CalculatorConfig(servers=servers))
        assert result.estimated_phone_time_pct == 20
        assert result.summary.phone_time_pct == 20

    def test_config_override(self, example_config):
        config = CalculatorConfig(
            servers=example_config.servers,
            business=example_config.business,
            phone_time_pct=22,
        )
        result = evaluate(config)
        assert result.summary.phone_time_pct == 22
        assert result.estimated_phone_time_pct == 15

    def test_off_grid_override_is_finite(self, example_config):
        result = evaluate(example_config, phone_time_pct=37.5)
        assert result.summary.phone_time_pct == 37.5
        assert result.summary.current_without > 0

    def test_zero_coverage_costs_subscription(self, example_config):
        config = CalculatorConfig(
            servers=example_config.servers,
            business=BusinessParameters(automation_coverage_pct=0, plan_price=599),
        )
        s = evaluate(config).summary
        assert s.current_with == pytest.approx(s.current_without + 599)
        assert s.payback_months is None
        assert s.hours_reclaimed == 0

    def test_full_coverage_leaves_subscription(self, example_config):
        config = CalculatorConfig(
            servers=example_config.servers,
            business=BusinessParameters(automation_coverage_pct=100, plan_price=399),
        )
        assert evaluate(config).summary.current_with == pytest.approx(399)

    def test_no_subscription(self, example_config):
        config = CalculatorConfig(
            servers=example_config.servers,
            business=BusinessParameters(plan_price=0),
        )
        s = evaluate(config).summary
        assert s.roi_pct == 0
        assert format_payback(s.payback_months) == 'Immediate'

    def test_zero_hours_is_finite(self):
        s = evaluate(CalculatorConfig(servers=(ServerProfile(),))).summary
        assert s.phone_time_pct == 15
        assert s.current_without == 0
        assert s.payback_months is None

    def test_does_not_mutate_input(self, example_config):
        before = repr(example_config)
        evaluate(example_config)
        assert repr(example_config) == before

    def test_deterministic(self, example_config):
        assert evaluate(example_config) == evaluate(example_config)

    def test_to_dict_is_json_serializable(self, example_config):
        data = evaluate(example_config).to_dict()
        text = json.dumps(data)
        assert json.loads(text)['summary']['phone_time_pct'] == 15
