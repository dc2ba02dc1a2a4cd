"""
Phone-time sweep utilities for the opportunity cost model.

Provides the sensitivity curve: monthly cost with and without automation as
a function of the average phone-time share.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional
import numpy as np

from .model import OpportunityCostModel, SensitivityPoint


PHONE_TIME_SCAN_MIN = 5
PHONE_TIME_SCAN_MAX = 25
MATCH_TOLERANCE = 0.01


def default_scan_range() -> List[int]:
    """Integer phone-time percentages in the realistic range, inclusive."""
    return list(range(PHONE_TIME_SCAN_MIN, PHONE_TIME_SCAN_MAX + 1))


@dataclass
class SweepResult:
    """Result of a phone-time sweep."""
    points: List[SensitivityPoint]

    @property
    def phone_time_values(self) -> List[float]:
        return [p.phone_time_pct for p in self.points]

    def find(
        self,
        phone_time_pct: float,
        tolerance: float = MATCH_TOLERANCE,
    ) -> Optional[SensitivityPoint]:
        """Return the point at phone_time_pct (within tolerance), or None."""
        for point in self.points:
            if abs(point.phone_time_pct - phone_time_pct) < tolerance:
                return point
        return None

    def to_arrays(self) -> Dict[str, np.ndarray]:
        """Column arrays keyed by SensitivityPoint field name."""
        return {
            'phone_time_pct': np.array([p.phone_time_pct for p in self.points]),
            'cost_without_automation': np.array(
                [p.cost_without_automation for p in self.points]),
            'cost_with_automation': np.array(
                [p.cost_with_automation for p in self.points]),
            'savings': np.array([p.savings for p in self.points]),
            'labor_cost': np.array([p.labor_cost for p in self.points]),
            'lost_upsell_profit': np.array([p.lost_upsell_profit for p in self.points]),
            'lost_tips': np.array([p.lost_tips for p in self.points]),
        }

    def is_monotonic(self) -> bool:
        """True if opportunity cost never decreases as phone time increases."""
        costs = self.to_arrays()['cost_without_automation']
        return bool(np.all(np.diff(costs) >= 0))


class PhoneTimeSweeper:
    """
    Sweeps the average phone-time share across all servers.

    Wages, tip rates and schedules stay per-server; only the phone-time share
    is overridden at each point.
    """

    def __init__(self, model: OpportunityCostModel):
        self.model = model

    def sweep(self, values: Optional[Iterable[float]] = None) -> SweepResult:
        if values is None:
            values = default_scan_range()
        return SweepResult(
            points=[self.model.evaluate_at_phone_time(v) for v in values]
        )

    def operating_point(
        self,
        phone_time_pct: float,
        curve: Optional[SweepResult] = None,
    ) -> SensitivityPoint:
        """
        Metrics at the selected phone-time share.

        Read from the curve when the value lies on it, otherwise evaluated
        directly so off-grid overrides still yield finite numbers.
        """
        if curve is not None:
            point = curve.find(phone_time_pct)
            if point is not None:
                return point
        return self.model.evaluate_at_phone_time(phone_time_pct)
