"""
Server Phone-Time Opportunity Cost Model

This module provides a first-order framework for estimating what it costs a
restaurant when servers spend part of their shift answering the phone:
- Direct labor cost of the phone hours
- Upsell profit lost while a server is away from tables
- Tips lost on tables that are not served

and how much of that is recovered by an automated phone-answering service
that absorbs a fraction of the calls for a fixed monthly subscription.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple
import math


WEEKS_PER_MONTH = 4.3
MISSED_UPSELLS_PER_HOUR = 3
MULTITASKING_FACTOR = 0.7  # Share of phone time that fully blocks table service
DEFAULT_PHONE_TIME_PCT = 15.0

DAYS_OF_WEEK = (
    'Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday',
)
MEAL_PERIODS = ('lunch', 'dinner')

PLAN_PRICES = {
    'none': 0.0,
    'core': 399.0,
    'premium': 599.0,
}


def _empty_week() -> Tuple[Tuple[float, float], ...]:
    return tuple((0.0, 0.0) for _ in DAYS_OF_WEEK)


@dataclass(frozen=True)
class ServerProfile:
    """
    A server's wage, phone habits and weekly schedule.

    hours[day][meal] holds scheduled hours, day 0 = Monday,
    meal 0 = lunch, meal 1 = dinner.
    """
    name: str = 'Server 1'
    wage: float = 4.74
    phone_time_pct: float = DEFAULT_PHONE_TIME_PCT
    tip_pct: float = 18.0
    hours: Tuple[Tuple[float, float], ...] = field(default_factory=_empty_week)

    @property
    def weekly_hours(self) -> float:
        """Total scheduled hours across all days and meal periods."""
        return sum(lunch + dinner for lunch, dinner in self.hours)

    def day_hours(self, day: int) -> float:
        lunch, dinner = self.hours[day]
        return lunch + dinner


@dataclass(frozen=True)
class CheckSizeTable:
    """Average check per day of week, one sequence per meal period."""
    lunch: Tuple[float, ...] = (25.0,) * 7
    dinner: Tuple[float, ...] = (35.0,) * 7

    def check_size(self, day: int, meal: int) -> float:
        return (self.lunch if meal == 0 else self.dinner)[day]


@dataclass(frozen=True)
class BusinessParameters:
    """Restaurant-wide service, revenue and automation parameters."""
    tables_per_hour: float = 3.0
    upsell_value: float = 10.0
    upsell_margin_pct: float = 50.0
    net_profit_pct: float = 15.0
    automation_coverage_pct: float = 70.0  # Share of calls absorbed by automation
    plan_price: float = PLAN_PRICES['core']

    @property
    def coverage(self) -> float:
        """Automation coverage as a fraction [0, 1]."""
        return self.automation_coverage_pct / 100


@dataclass(frozen=True)
class CalculatorConfig:
    """Complete input snapshot for one evaluation."""
    servers: Tuple[ServerProfile, ...] = (ServerProfile(),)
    check_sizes: CheckSizeTable = field(default_factory=CheckSizeTable)
    business: BusinessParameters = field(default_factory=BusinessParameters)
    phone_time_pct: Optional[float] = None  # None = use weighted estimate

    @property
    def total_weekly_hours(self) -> float:
        return sum(s.weekly_hours for s in self.servers)


@dataclass(frozen=True)
class CostComponents:
    """The three monthly cost components of phone time."""
    labor_cost: float = 0.0
    lost_upsell_profit: float = 0.0
    lost_tips: float = 0.0

    @property
    def total(self) -> float:
        """Total opportunity cost."""
        return self.labor_cost + self.lost_upsell_profit + self.lost_tips

    def scaled(self, factor: float) -> 'CostComponents':
        return CostComponents(
            labor_cost=self.labor_cost * factor,
            lost_upsell_profit=self.lost_upsell_profit * factor,
            lost_tips=self.lost_tips * factor,
        )

    def __add__(self, other: 'CostComponents') -> 'CostComponents':
        return CostComponents(
            labor_cost=self.labor_cost + other.labor_cost,
            lost_upsell_profit=self.lost_upsell_profit + other.lost_upsell_profit,
            lost_tips=self.lost_tips + other.lost_tips,
        )


@dataclass
class ServerImpact:
    """Monthly impact for one server."""
    name: str
    wage: float
    weekly_hours: float
    monthly_hours: float
    cost_without_automation: float
    cost_with_automation: float
    subscription_share: float
    savings: float


@dataclass
class SensitivityPoint:
    """Monthly totals with every server at the same phone-time share."""
    phone_time_pct: float
    cost_without_automation: float
    cost_with_automation: float
    savings: float
    labor_cost: float
    lost_upsell_profit: float
    lost_tips: float


@dataclass
class DayImpact:
    """Monthly opportunity cost attributed to one day of the week."""
    name: str
    value: float
    labor_cost: float
    lost_upsell_profit: float
    lost_tips: float


# --- Cost-formula primitives ---

def phone_hours_per_month(hours: float, phone_time_pct: float) -> float:
    """Monthly phone hours for a weekly schedule quantity."""
    return hours * (phone_time_pct / 100) * WEEKS_PER_MONTH


def labor_cost(phone_hours: float, wage: float) -> float:
    return phone_hours * wage


def lost_upsell_profit(phone_hours: float, business: BusinessParameters) -> float:
    missed_upsells = phone_hours * MISSED_UPSELLS_PER_HOUR
    return missed_upsells * business.upsell_value * (business.upsell_margin_pct / 100)


def lost_tips(
    phone_hours: float,
    check_size: float,
    tip_pct: float,
    business: BusinessParameters,
) -> float:
    tables_not_served = phone_hours * business.tables_per_hour * MULTITASKING_FACTOR
    return tables_not_served * check_size * (tip_pct / 100)


def meal_costs(
    hours: float,
    wage: float,
    phone_time_pct: float,
    tip_pct: float,
    check_size: float,
    business: BusinessParameters,
) -> CostComponents:
    """
    Cost components for one schedule cell (a day/meal slot).

    Args:
        hours: Weekly scheduled hours in the slot
        wage: Hourly wage
        phone_time_pct: Share of the shift spent on the phone (0-100)
        tip_pct: Tip rate on the check (0-100)
        check_size: Average check for the slot
        business: Restaurant-wide parameters

    Returns:
        CostComponents per month
    """
    phone_hours = phone_hours_per_month(hours, phone_time_pct)
    return CostComponents(
        labor_cost=labor_cost(phone_hours, wage),
        lost_upsell_profit=lost_upsell_profit(phone_hours, business),
        lost_tips=lost_tips(phone_hours, check_size, tip_pct, business),
    )


def with_automation(
    components: CostComponents,
    coverage_pct: float,
    subscription: float,
) -> float:
    """Remaining monthly cost once automation absorbs coverage_pct of calls."""
    return components.scaled(1 - coverage_pct / 100).total + subscription


def _round_half_up(value: float) -> float:
    return float(math.floor(value + 0.5))


def weighted_phone_time(servers: Sequence[ServerProfile]) -> float:
    """
    Schedule-weighted average phone-time share, rounded to a whole percent.

    Falls back to DEFAULT_PHONE_TIME_PCT when there are no servers or no
    scheduled hours.
    """
    if not servers:
        return DEFAULT_PHONE_TIME_PCT
    total_hours = sum(s.weekly_hours for s in servers)
    if total_hours <= 0:
        return DEFAULT_PHONE_TIME_PCT
    weighted_sum = sum(s.phone_time_pct * s.weekly_hours for s in servers)
    return _round_half_up(weighted_sum / total_hours)


@dataclass(frozen=True)
class PhoneTimeSelection:
    """
    The phone-time percentage at which the sensitivity curve is read.

    Either derived from the server schedule or overridden by the user.
    A new estimate replaces the current value only when it moves by more
    than HYSTERESIS_PCT, in either state.
    """
    value: float
    overridden: bool = False

    HYSTERESIS_PCT = 1.0

    @classmethod
    def derived(cls, value: float) -> 'PhoneTimeSelection':
        return cls(value=value, overridden=False)

    @classmethod
    def override(cls, value: float) -> 'PhoneTimeSelection':
        return cls(value=value, overridden=True)

    def reconcile(self, estimate: float) -> 'PhoneTimeSelection':
        if abs(estimate - self.value) > self.HYSTERESIS_PCT:
            return PhoneTimeSelection.derived(estimate)
        return self


class OpportunityCostModel:
    """
    Core model for phone-time opportunity cost with and without automation.

    All aggregations share _server_costs(); they differ only in how schedule
    cells are grouped and whether phone time is overridden.
    """

    def __init__(
        self,
        servers: Sequence[ServerProfile],
        check_sizes: CheckSizeTable,
        business: BusinessParameters,
    ):
        self.servers = tuple(servers)
        self.check_sizes = check_sizes
        self.business = business

    @classmethod
    def from_config(cls, config: CalculatorConfig) -> 'OpportunityCostModel':
        return cls(config.servers, config.check_sizes, config.business)

    @property
    def total_weekly_hours(self) -> float:
        return sum(s.weekly_hours for s in self.servers)

    def _server_costs(
        self,
        server: ServerProfile,
        days: Optional[Sequence[int]] = None,
        phone_time_pct: Optional[float] = None,
    ) -> CostComponents:
        """Sum cost components over a server's schedule cells."""
        pct = server.phone_time_pct if phone_time_pct is None else phone_time_pct
        if days is None:
            days = range(len(DAYS_OF_WEEK))
        total = CostComponents()
        for day in days:
            for meal, hours in enumerate(server.hours[day]):
                if hours <= 0:
                    continue
                total = total + meal_costs(
                    hours,
                    server.wage,
                    pct,
                    server.tip_pct,
                    self.check_sizes.check_size(day, meal),
                    self.business,
                )
        return total

    def server_impacts(self) -> List[ServerImpact]:
        """Per-server impact, each server at its own phone-time share."""
        total_hours = max(self.total_weekly_hours, 1)
        coverage_pct = self.business.automation_coverage_pct
        impacts = []
        for server in self.servers:
            costs = self._server_costs(server)
            share = (server.weekly_hours / total_hours) * self.business.plan_price
            with_cost = with_automation(costs, coverage_pct, share)
            impacts.append(ServerImpact(
                name=server.name or 'Server',
                wage=server.wage,
                weekly_hours=server.weekly_hours,
                monthly_hours=server.weekly_hours * WEEKS_PER_MONTH,
                cost_without_automation=costs.total,
                cost_with_automation=with_cost,
                subscription_share=share,
                savings=costs.total - with_cost,
            ))
        return impacts

    def evaluate_at_phone_time(self, phone_time_pct: float) -> SensitivityPoint:
        """Restaurant totals with every server at phone_time_pct."""
        costs = CostComponents()
        for server in self.servers:
            costs = costs + self._server_costs(server, phone_time_pct=phone_time_pct)
        with_cost = with_automation(
            costs, self.business.automation_coverage_pct, self.business.plan_price
        )
        return SensitivityPoint(
            phone_time_pct=phone_time_pct,
            cost_without_automation=costs.total,
            cost_with_automation=with_cost,
            savings=costs.total - with_cost,
            labor_cost=costs.labor_cost,
            lost_upsell_profit=costs.lost_upsell_profit,
            lost_tips=costs.lost_tips,
        )

    def day_impacts(self) -> List[DayImpact]:
        """Per-day opportunity cost, each server at its own phone-time share."""
        impacts = []
        for day, name in enumerate(DAYS_OF_WEEK):
            costs = CostComponents()
            if sum(s.day_hours(day) for s in self.servers) > 0:
                for server in self.servers:
                    costs = costs + self._server_costs(server, days=(day,))
            impacts.append(DayImpact(
                name=name,
                value=costs.total,
                labor_cost=costs.labor_cost,
                lost_upsell_profit=costs.lost_upsell_profit,
                lost_tips=costs.lost_tips,
            ))
        return impacts
