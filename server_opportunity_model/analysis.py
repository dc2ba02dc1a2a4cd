"""
Summary metrics and impact breakdown for a calculator configuration.

This module assembles everything a caller displays from one evaluation:
per-server and per-day impacts, the sensitivity curve, the operating point
read from that curve, and the derived ROI / payback / hours-reclaimed figures.

Example:
    from server_opportunity_model import CalculatorConfig, evaluate
    from server_opportunity_model.formatter import format_payback

    result = evaluate(CalculatorConfig())
    print(f"Monthly savings: {result.summary.current_savings:.2f}")
    print(f"Payback: {format_payback(result.summary.payback_months)}")
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional

from .model import (
    CalculatorConfig, DayImpact, OpportunityCostModel, SensitivityPoint,
    ServerImpact, phone_hours_per_month, weighted_phone_time,
)
from .sweep import PhoneTimeSweeper, SweepResult


# Assumed constants for the gain side of the breakdown
RESERVATIONS_PER_PHONE_HOUR = 0.7
AVG_RESERVATION_VALUE = 120.0
RESERVATION_CONVERSION_RATE = 0.4
CUSTOMER_RETENTION_RATE = 0.2
CUSTOMER_TIME_VALUE_PER_HOUR = 15.0

MONTHS_PER_YEAR = 12


@dataclass
class ImpactItem:
    """One named cost or gain line in the impact breakdown."""
    name: str
    value: float
    kind: str  # 'cost' or 'gain'


@dataclass
class SummaryMetrics:
    """Scalar metrics at the current operating point."""
    phone_time_pct: float
    current_without: float
    current_with: float
    current_savings: float
    annual_savings: float
    annual_subscription_cost: float
    roi_pct: float
    payback_months: Optional[float]  # None = not applicable (no savings)
    phone_hours_per_month: float
    hours_reclaimed: float


@dataclass
class CalculatorResult:
    """Everything derived from one configuration snapshot."""
    estimated_phone_time_pct: float
    server_impacts: List[ServerImpact]
    sensitivity: List[SensitivityPoint]
    day_impacts: List[DayImpact]
    impact_breakdown: List[ImpactItem]
    summary: SummaryMetrics

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return asdict(self)


def payback_months(plan_price: float, monthly_savings: float) -> Optional[float]:
    """Months for savings to cover one month's plan, None if never."""
    if monthly_savings <= 0:
        return None
    return plan_price / monthly_savings


def roi_pct(monthly_savings: float, plan_price: float) -> float:
    annual_cost = plan_price * MONTHS_PER_YEAR
    if annual_cost <= 0:
        return 0.0
    return (monthly_savings * MONTHS_PER_YEAR) / annual_cost * 100


def summarize(
    point: SensitivityPoint,
    config: CalculatorConfig,
) -> SummaryMetrics:
    """Derive annual, ROI, payback and reclaimed-hours metrics from a point."""
    business = config.business
    phone_hours = phone_hours_per_month(config.total_weekly_hours, point.phone_time_pct)
    return SummaryMetrics(
        phone_time_pct=point.phone_time_pct,
        current_without=point.cost_without_automation,
        current_with=point.cost_with_automation,
        current_savings=point.savings,
        annual_savings=point.savings * MONTHS_PER_YEAR,
        annual_subscription_cost=business.plan_price * MONTHS_PER_YEAR,
        roi_pct=roi_pct(point.savings, business.plan_price),
        payback_months=payback_months(business.plan_price, point.savings),
        phone_hours_per_month=phone_hours,
        hours_reclaimed=phone_hours * business.coverage,
    )


def build_impact_breakdown(
    point: SensitivityPoint,
    config: CalculatorConfig,
) -> List[ImpactItem]:
    """
    Named cost and gain lines at the operating point.

    Costs are the three opportunity-cost components plus the value of
    customer face time lost to the phone. Gains are the profit on revenue
    the phone brings in, the retention value of answered calls, and the net
    effect of automation (cost without minus cost with).
    """
    phone_hours = phone_hours_per_month(config.total_weekly_hours, point.phone_time_pct)
    phone_revenue = (
        phone_hours
        * RESERVATIONS_PER_PHONE_HOUR
        * AVG_RESERVATION_VALUE
        * RESERVATION_CONVERSION_RATE
    )
    return [
        ImpactItem('Direct Labor Cost', point.labor_cost, 'cost'),
        ImpactItem('Lost Upsell Profit', point.lost_upsell_profit, 'cost'),
        ImpactItem('Lost Server Tips', point.lost_tips, 'cost'),
        ImpactItem(
            'Lost Customer Time Value',
            phone_hours * CUSTOMER_TIME_VALUE_PER_HOUR,
            'cost',
        ),
        ImpactItem(
            'Phone Revenue Profit',
            phone_revenue * (config.business.net_profit_pct / 100),
            'gain',
        ),
        ImpactItem(
            'Customer Retention',
            phone_revenue * CUSTOMER_RETENTION_RATE,
            'gain',
        ),
        ImpactItem(
            'Automation Net Impact',
            point.cost_without_automation - point.cost_with_automation,
            'gain',
        ),
    ]


def evaluate(
    config: CalculatorConfig,
    phone_time_pct: Optional[float] = None,
) -> CalculatorResult:
    """
    Evaluate a configuration snapshot.

    Args:
        config: Input snapshot (not modified)
        phone_time_pct: Operating point; defaults to config.phone_time_pct,
            then to the schedule-weighted estimate

    Returns:
        CalculatorResult
    """
    estimate = weighted_phone_time(config.servers)
    if phone_time_pct is None:
        phone_time_pct = config.phone_time_pct
    if phone_time_pct is None:
        phone_time_pct = estimate

    model = OpportunityCostModel.from_config(config)
    sweeper = PhoneTimeSweeper(model)
    curve: SweepResult = sweeper.sweep()
    point = sweeper.operating_point(phone_time_pct, curve)

    return CalculatorResult(
        estimated_phone_time_pct=estimate,
        server_impacts=model.server_impacts(),
        sensitivity=curve.points,
        day_impacts=model.day_impacts(),
        impact_breakdown=build_impact_breakdown(point, config),
        summary=summarize(point, config),
    )
