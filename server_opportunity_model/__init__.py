"""
Server Phone-Time Opportunity Cost Model

Estimates what a restaurant loses each month when servers spend part of
their shift on the phone (labor, missed upsells, lost tips) and how much
an automated phone-answering service recovers.

Example usage (programmatic):
    from server_opportunity_model import CalculatorConfig, ServerProfile, evaluate

    server = ServerProfile(name="Ana", hours=((5, 5),) * 7)
    result = evaluate(CalculatorConfig(servers=(server,)))
    print(f"Monthly savings: {result.summary.current_savings:.2f}")

Example usage (JSON config):
    from server_opportunity_model import load_config, Runner, save_result

    config = load_config("configs/default.json")
    result = Runner(config).run()
    save_result(result, "results/default.json")

CLI usage:
    python -m server_opportunity_model configs/default.json
"""

from .model import (
    ServerProfile,
    CheckSizeTable,
    BusinessParameters,
    CalculatorConfig,
    CostComponents,
    ServerImpact,
    SensitivityPoint,
    DayImpact,
    PhoneTimeSelection,
    OpportunityCostModel,
    meal_costs,
    with_automation,
    weighted_phone_time,
    PLAN_PRICES,
)

from .sweep import (
    PhoneTimeSweeper,
    SweepResult,
    default_scan_range,
)

from .analysis import (
    ImpactItem,
    SummaryMetrics,
    CalculatorResult,
    build_impact_breakdown,
    summarize,
    evaluate,
)

from .config import (
    CalculatorSpec,
    ServerSpec,
    CheckSizeSpec,
    BusinessSpec,
    load_config,
    validate_config,
)

from .session import CalculatorSession

from .runner import (
    Runner,
    RunResult,
    save_result,
    load_result,
)

# Plotting (optional, requires matplotlib)
try:
    from .plot import (
        plot_result,
        plot_sensitivity_curve,
        plot_server_impacts,
        plot_day_impacts,
        plot_impact_breakdown,
    )
    _HAS_PLOT = True
except ImportError:
    _HAS_PLOT = False
    plot_result = None
    plot_sensitivity_curve = None
    plot_server_impacts = None
    plot_day_impacts = None
    plot_impact_breakdown = None

__all__ = [
    # Core model
    'ServerProfile',
    'CheckSizeTable',
    'BusinessParameters',
    'CalculatorConfig',
    'CostComponents',
    'ServerImpact',
    'SensitivityPoint',
    'DayImpact',
    'PhoneTimeSelection',
    'OpportunityCostModel',
    'meal_costs',
    'with_automation',
    'weighted_phone_time',
    'PLAN_PRICES',
    # Sweep
    'PhoneTimeSweeper',
    'SweepResult',
    'default_scan_range',
    # Analysis
    'ImpactItem',
    'SummaryMetrics',
    'CalculatorResult',
    'build_impact_breakdown',
    'summarize',
    'evaluate',
    # Config
    'CalculatorSpec',
    'ServerSpec',
    'CheckSizeSpec',
    'BusinessSpec',
    'load_config',
    'validate_config',
    # Session
    'CalculatorSession',
    # Runner
    'Runner',
    'RunResult',
    'save_result',
    'load_result',
    # Plotting (optional)
    'plot_result',
    'plot_sensitivity_curve',
    'plot_server_impacts',
    'plot_day_impacts',
    'plot_impact_breakdown',
]

__version__ = '0.1.0'
