"""
Configuration loading and serialization for calculator scenarios.

Provides JSON-serializable config structures, input coercion and conversion
to the model's immutable value types.

Numeric fields follow an ignore-and-substitute policy: missing or
non-numeric values take the field's fallback and out-of-range values are
clamped to the field's bounds. Each substitution is logged as a warning.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import json
import logging
import math
from pathlib import Path

try:
    import json5
    _HAS_JSON5 = True
except ImportError:
    _HAS_JSON5 = False

from .model import (
    BusinessParameters, CalculatorConfig, CheckSizeTable, DAYS_OF_WEEK,
    MEAL_PERIODS, PLAN_PRICES, ServerProfile,
)


logger = logging.getLogger(__name__)


# --- Field bounds ---

WAGE_BOUNDS = (2.13, 15.0)
PHONE_TIME_BOUNDS = (0.0, 50.0)
TIP_BOUNDS = (0.0, 30.0)
SHIFT_HOURS_BOUNDS = (0.0, 12.0)
UPSELL_MARGIN_BOUNDS = (0.0, 100.0)
NET_PROFIT_BOUNDS = (0.0, 50.0)
COVERAGE_BOUNDS = (0.0, 100.0)
NON_NEGATIVE = (0.0, None)

DEFAULT_WAGE = 4.74
DEFAULT_PHONE_TIME = 15.0
DEFAULT_TIP = 18.0
DEFAULT_LUNCH_CHECK = 25.0
DEFAULT_DINNER_CHECK = 35.0


def coerce_number(
    value: Any,
    default: float,
    bounds: tuple = NON_NEGATIVE,
    label: str = "value",
) -> float:
    """
    Convert raw input to a float within bounds.

    Args:
        value: Raw input (number, numeric string, None, ...)
        default: Fallback for missing or non-numeric input
        bounds: (low, high) clamp range; either end may be None
        label: Field name used in log messages

    Returns:
        A finite float
    """
    if value is None or value == "" or isinstance(value, bool):
        if value not in (None, ""):
            logger.warning("%s: non-numeric %r, using %s", label, value, default)
        return float(default)
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.warning("%s: non-numeric %r, using %s", label, value, default)
        return float(default)
    if not math.isfinite(number):
        logger.warning("%s: %s is not finite, using %s", label, number, default)
        return float(default)

    low, high = bounds
    if low is not None and number < low:
        logger.warning("%s: %s below %s, clamped", label, number, low)
        number = low
    if high is not None and number > high:
        logger.warning("%s: %s above %s, clamped", label, number, high)
        number = high
    return float(number)


def coerce_plan_price(value: Any) -> Any:
    """Accept a plan name ('none', 'core', 'premium') or a price.

    Unrecognized names are returned unchanged so validate_config reports them.
    """
    if isinstance(value, str) and value.strip():
        name = value.strip().lower()
        if name in PLAN_PRICES:
            return PLAN_PRICES[name]
        try:
            float(name)
        except ValueError:
            return value
    return coerce_number(value, PLAN_PRICES['core'], NON_NEGATIVE, "plan_price")


def _expect(value: Any, kind: type, label: str) -> Any:
    """Raise ValueError unless a config section has the expected JSON type."""
    if not isinstance(value, kind):
        expected = "an object" if kind is dict else "a list"
        raise ValueError(f"{label} must be {expected}, got {type(value).__name__}")
    return value


def _section(data: dict, key: str) -> dict:
    value = data.get(key)
    return {} if value is None else value


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _coerce_hours_row(row: Any, label: str) -> Dict[str, float]:
    """Normalize one day of hours to {'lunch': x, 'dinner': y}."""
    if isinstance(row, dict):
        raw = [row.get(meal) for meal in MEAL_PERIODS]
    elif isinstance(row, (list, tuple)):
        raw = list(row) + [None] * (len(MEAL_PERIODS) - len(row))
    else:
        raw = [None] * len(MEAL_PERIODS)
    return {
        meal: coerce_number(raw[i], 0.0, SHIFT_HOURS_BOUNDS, f"{label}.{meal}")
        for i, meal in enumerate(MEAL_PERIODS)
    }


# --- Config Dataclasses ---

@dataclass
class ServerSpec:
    """Specification for one server.

    Args:
        name: Display name
        wage: Hourly base wage in dollars
        phone_time_pct: Share of shift spent on the phone (0-50)
        tip_pct: Tip rate on checks (0-30)
        hours: One {'lunch': h, 'dinner': h} entry per day, Monday first
    """
    name: str = "Server 1"
    wage: float = DEFAULT_WAGE
    phone_time_pct: float = DEFAULT_PHONE_TIME
    tip_pct: float = DEFAULT_TIP
    hours: List[Dict[str, float]] = field(
        default_factory=lambda: [{"lunch": 0.0, "dinner": 0.0} for _ in DAYS_OF_WEEK]
    )

    @property
    def weekly_hours(self) -> float:
        return sum(day.get("lunch", 0.0) + day.get("dinner", 0.0) for day in self.hours)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "wage": self.wage,
            "phone_time_pct": self.phone_time_pct,
            "tip_pct": self.tip_pct,
            "hours": [dict(day) for day in self.hours],
        }

    @classmethod
    def from_dict(cls, data: dict, default_name: str = "Server 1") -> "ServerSpec":
        _expect(data, dict, default_name)
        name = str(data.get("name") or default_name)
        raw_hours = data.get("hours")
        if raw_hours is None:
            raw_hours = [{} for _ in DAYS_OF_WEEK]
        _expect(raw_hours, list, f"{name}.hours")
        return cls(
            name=name,
            wage=coerce_number(data.get("wage"), DEFAULT_WAGE, WAGE_BOUNDS,
                               f"{name}.wage"),
            phone_time_pct=coerce_number(data.get("phone_time_pct"), DEFAULT_PHONE_TIME,
                                         PHONE_TIME_BOUNDS, f"{name}.phone_time_pct"),
            tip_pct=coerce_number(data.get("tip_pct"), DEFAULT_TIP, TIP_BOUNDS,
                                  f"{name}.tip_pct"),
            hours=[
                _coerce_hours_row(row, f"{name}.{DAYS_OF_WEEK[i % 7].lower()}")
                for i, row in enumerate(raw_hours)
            ],
        )

    def to_model(self) -> ServerProfile:
        rows = [
            (day.get("lunch", 0.0), day.get("dinner", 0.0))
            for day in self.hours[:len(DAYS_OF_WEEK)]
        ]
        rows += [(0.0, 0.0)] * (len(DAYS_OF_WEEK) - len(rows))
        return ServerProfile(
            name=self.name,
            wage=self.wage,
            phone_time_pct=self.phone_time_pct,
            tip_pct=self.tip_pct,
            hours=tuple(rows),
        )


@dataclass
class CheckSizeSpec:
    """Average check per day, Monday first."""
    lunch: List[float] = field(default_factory=lambda: [DEFAULT_LUNCH_CHECK] * 7)
    dinner: List[float] = field(default_factory=lambda: [DEFAULT_DINNER_CHECK] * 7)

    def to_dict(self) -> dict:
        return {"lunch": list(self.lunch), "dinner": list(self.dinner)}

    @classmethod
    def from_dict(cls, data: dict) -> "CheckSizeSpec":
        _expect(data, dict, "check_sizes")

        def _meal(meal: str, default: float) -> List[float]:
            raw = data.get(meal)
            if raw is None:
                return [default] * len(DAYS_OF_WEEK)
            _expect(raw, list, f"check_sizes.{meal}")
            return [
                coerce_number(v, 0.0, NON_NEGATIVE, f"check_sizes.{meal}[{i}]")
                for i, v in enumerate(raw)
            ]
        return cls(
            lunch=_meal("lunch", DEFAULT_LUNCH_CHECK),
            dinner=_meal("dinner", DEFAULT_DINNER_CHECK),
        )

    def to_model(self) -> CheckSizeTable:
        def _week(values: List[float]) -> tuple:
            values = list(values[:len(DAYS_OF_WEEK)])
            return tuple(values + [0.0] * (len(DAYS_OF_WEEK) - len(values)))
        return CheckSizeTable(lunch=_week(self.lunch), dinner=_week(self.dinner))


@dataclass
class BusinessSpec:
    """Service, revenue and automation parameters."""
    tables_per_hour: float = 3.0
    upsell_value: float = 10.0
    upsell_margin_pct: float = 50.0
    net_profit_pct: float = 15.0
    automation_coverage_pct: float = 70.0
    plan_price: float = PLAN_PRICES['core']

    def to_dict(self) -> dict:
        return {
            "tables_per_hour": self.tables_per_hour,
            "upsell_value": self.upsell_value,
            "upsell_margin_pct": self.upsell_margin_pct,
            "net_profit_pct": self.net_profit_pct,
            "automation_coverage_pct": self.automation_coverage_pct,
            "plan_price": self.plan_price,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BusinessSpec":
        _expect(data, dict, "business")
        return cls(
            tables_per_hour=coerce_number(data.get("tables_per_hour"), 3.0,
                                          NON_NEGATIVE, "tables_per_hour"),
            upsell_value=coerce_number(data.get("upsell_value"), 10.0,
                                       NON_NEGATIVE, "upsell_value"),
            upsell_margin_pct=coerce_number(data.get("upsell_margin_pct"), 50.0,
                                            UPSELL_MARGIN_BOUNDS, "upsell_margin_pct"),
            net_profit_pct=coerce_number(data.get("net_profit_pct"), 15.0,
                                         NET_PROFIT_BOUNDS, "net_profit_pct"),
            automation_coverage_pct=coerce_number(
                data.get("automation_coverage_pct"), 70.0,
                COVERAGE_BOUNDS, "automation_coverage_pct"),
            plan_price=coerce_plan_price(data.get("plan_price", PLAN_PRICES['core'])),
        )

    def to_model(self) -> BusinessParameters:
        return BusinessParameters(
            tables_per_hour=self.tables_per_hour,
            upsell_value=self.upsell_value,
            upsell_margin_pct=self.upsell_margin_pct,
            net_profit_pct=self.net_profit_pct,
            automation_coverage_pct=self.automation_coverage_pct,
            plan_price=self.plan_price,
        )


@dataclass
class CalculatorSpec:
    """
    Complete scenario configuration.

    This is the top-level config that gets serialized to/from JSON.
    """
    name: str
    description: str = ""
    servers: List[ServerSpec] = field(default_factory=lambda: [ServerSpec()])
    check_sizes: CheckSizeSpec = field(default_factory=CheckSizeSpec)
    business: BusinessSpec = field(default_factory=BusinessSpec)
    phone_time_pct: Optional[float] = None  # None = weighted estimate

    def to_dict(self) -> dict:
        """Convert config to JSON-serializable dict."""
        return {
            "name": self.name,
            "description": self.description,
            "servers": [s.to_dict() for s in self.servers],
            "check_sizes": self.check_sizes.to_dict(),
            "business": self.business.to_dict(),
            "phone_time_pct": self.phone_time_pct,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CalculatorSpec":
        """Create config from dict (e.g., from JSON).

        Raises:
            ValueError: If a section or server entry has the wrong JSON type
        """
        _expect(data, dict, "config")
        servers = [
            ServerSpec.from_dict(s, default_name=f"Server {i + 1}")
            for i, s in enumerate(_expect(data.get("servers", [{}]), list, "servers"))
        ]
        phone_time = data.get("phone_time_pct")
        if phone_time is not None:
            phone_time = coerce_number(phone_time, DEFAULT_PHONE_TIME,
                                       PHONE_TIME_BOUNDS, "phone_time_pct")
        return cls(
            name=_text(data.get("name", "unnamed")),
            description=_text(data.get("description")),
            servers=servers,
            check_sizes=CheckSizeSpec.from_dict(_section(data, "check_sizes")),
            business=BusinessSpec.from_dict(_section(data, "business")),
            phone_time_pct=phone_time,
        )

    def to_model(self) -> CalculatorConfig:
        """Build the immutable model config."""
        return CalculatorConfig(
            servers=tuple(s.to_model() for s in self.servers),
            check_sizes=self.check_sizes.to_model(),
            business=self.business.to_model(),
            phone_time_pct=self.phone_time_pct,
        )


def load_config(path: str | Path) -> CalculatorSpec:
    """
    Load a scenario configuration from a JSON file.

    Supports JSON with comments (JSONC) if json5 is installed.

    Args:
        path: Path to JSON config file

    Returns:
        CalculatorSpec instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If JSON is invalid (json.JSONDecodeError is a subclass)
    """
    path = Path(path)
    with open(path, 'r') as f:
        if _HAS_JSON5:
            data = json5.load(f)
        else:
            data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Config root must be an object, got {type(data).__name__}")
    return CalculatorSpec.from_dict(data)


def validate_config(config: CalculatorSpec) -> List[str]:
    """
    Validate a configuration and return list of error messages.

    Returns empty list if config is valid. Numeric ranges are not checked
    here; from_dict already clamps them.
    """
    errors = []

    if not config.name or not config.name.strip():
        errors.append("Config must have a non-empty 'name'")

    if not config.servers:
        errors.append("Config must define at least one server")

    for server in config.servers:
        if len(server.hours) != len(DAYS_OF_WEEK):
            errors.append(
                f"Server '{server.name}' hours must have {len(DAYS_OF_WEEK)} days, "
                f"got {len(server.hours)}"
            )

    for meal in MEAL_PERIODS:
        values = getattr(config.check_sizes, meal)
        if len(values) != len(DAYS_OF_WEEK):
            errors.append(
                f"check_sizes.{meal} must have {len(DAYS_OF_WEEK)} values, got {len(values)}"
            )

    if config.business.plan_price not in PLAN_PRICES.values():
        errors.append(
            f"Unknown plan_price: {config.business.plan_price}. "
            f"Valid: {sorted(PLAN_PRICES.values())}"
        )

    if config.phone_time_pct is not None:
        low, high = PHONE_TIME_BOUNDS
        if not low <= config.phone_time_pct <= high:
            errors.append(
                f"phone_time_pct must be in [{low}, {high}], got {config.phone_time_pct}"
            )

    return errors
