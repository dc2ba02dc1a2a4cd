"""
Plotting utilities for visualizing opportunity cost results.

Requires the 'plot' optional dependency: pip install -e ".[plot]"

Usage:
    from server_opportunity_model import Runner, load_config
    from server_opportunity_model.plot import plot_result, plot_sensitivity_curve

    result = Runner(load_config("configs/default.json")).run()

    # Four-panel dashboard
    plot_result(result, save_path="dashboard.png", show=False)

    # Or a single chart
    plot_sensitivity_curve(result.results)
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union
from pathlib import Path

try:
    import matplotlib.pyplot as plt
    from matplotlib.ticker import FuncFormatter
    import numpy as np
    HAS_MATPLOTLIB = True
except ImportError:
    HAS_MATPLOTLIB = False


COLORS = {
    'without': '#3b82f6',   # Blue: cost without automation
    'with': '#10b981',      # Green: cost with automation
    'savings': '#8b5cf6',   # Purple: savings
    'cost': '#ef4444',      # Red: cost line items
    'gain': '#4ade80',      # Light green: gain line items
    'day': '#82ca9d',
    'neutral': '#7f8c8d',
}


@dataclass
class PlotStyle:
    """Centralized style configuration for all plots."""
    bar_alpha: float = 0.85
    bar_edgecolor: str = 'black'
    bar_linewidth: float = 0.5
    line_width: float = 2.0
    marker_size: int = 5
    grid_alpha: float = 0.3
    grid_linestyle: str = '--'
    dpi: int = 200
    facecolor: str = 'white'
    title_fontsize: int = 12
    axis_label_fontsize: int = 10
    legend_fontsize: int = 9


DEFAULT_STYLE = PlotStyle()


def _check_matplotlib():
    """Raise helpful error if matplotlib is not installed."""
    if not HAS_MATPLOTLIB:
        raise ImportError(
            "Plotting requires matplotlib. Install with: pip install -e '.[plot]'"
        )


def _results_dict(result) -> Dict[str, Any]:
    """Accept a RunResult, CalculatorResult, or their dict forms."""
    if hasattr(result, 'results') and hasattr(result, 'meta'):
        result = result.results
    if hasattr(result, 'to_dict'):
        return result.to_dict()
    if isinstance(result, dict):
        return result.get('results', result)
    raise ValueError("Expected RunResult, CalculatorResult or dict")


def _dollar_format(x, pos):
    return f"${x:,.0f}"


def _apply_common_style(ax, style: PlotStyle, grid_axis: str = 'y'):
    ax.set_facecolor(style.facecolor)
    ax.grid(True, axis=grid_axis, alpha=style.grid_alpha, linestyle=style.grid_linestyle)
    ax.set_axisbelow(True)
    ax.spines['top'].set_visible(False)
    ax.spines['right'].set_visible(False)


def _finish(fig, save_path, show, style: PlotStyle):
    fig.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=style.dpi, bbox_inches='tight',
                    facecolor=style.facecolor)
    if show:
        plt.show()
    return fig


def _draw_sensitivity(ax, data: dict, style: PlotStyle):
    points = data['sensitivity']
    x = np.array([p['phone_time_pct'] for p in points])
    without = np.array([p['cost_without_automation'] for p in points])
    with_ = np.array([p['cost_with_automation'] for p in points])
    savings = np.array([p['savings'] for p in points])

    ax.plot(x, without, 'o-', color=COLORS['without'], linewidth=style.line_width,
            markersize=style.marker_size, label='Without automation')
    ax.plot(x, with_, 'o-', color=COLORS['with'], linewidth=style.line_width,
            markersize=style.marker_size, label='With automation')
    ax.plot(x, savings, '--', color=COLORS['savings'], linewidth=style.line_width,
            label='Monthly savings')

    current = data['summary']['phone_time_pct']
    ax.axvline(current, color=COLORS['neutral'], linestyle=':', linewidth=1.5)
    ax.plot([current], [data['summary']['current_without']], 'o',
            color=COLORS['without'], markersize=style.marker_size * 2)
    ax.annotate(f"Current: {current:g}%", xy=(current, ax.get_ylim()[1]),
                xytext=(4, -12), textcoords='offset points',
                fontsize=style.legend_fontsize, color=COLORS['neutral'])

    ax.set_xlabel('Average Phone Time (%)', fontsize=style.axis_label_fontsize)
    ax.set_ylabel('Monthly Cost ($)', fontsize=style.axis_label_fontsize)
    ax.yaxis.set_major_formatter(FuncFormatter(_dollar_format))
    ax.set_title('Average Phone Time Impact', fontsize=style.title_fontsize,
                 fontweight='bold')
    ax.legend(loc='upper left', fontsize=style.legend_fontsize)
    _apply_common_style(ax, style)


def _draw_servers(ax, data: dict, style: PlotStyle):
    servers = data['server_impacts']
    names = [s['name'] for s in servers]
    y = np.arange(len(names))
    height = 0.38
    ax.barh(y - height / 2, [s['cost_without_automation'] for s in servers], height,
            color=COLORS['without'], alpha=style.bar_alpha,
            edgecolor=style.bar_edgecolor, linewidth=style.bar_linewidth,
            label='Without automation')
    ax.barh(y + height / 2, [s['cost_with_automation'] for s in servers], height,
            color=COLORS['with'], alpha=style.bar_alpha,
            edgecolor=style.bar_edgecolor, linewidth=style.bar_linewidth,
            label='With automation')
    ax.set_yticks(y)
    ax.set_yticklabels(names)
    ax.invert_yaxis()
    ax.xaxis.set_major_formatter(FuncFormatter(_dollar_format))
    ax.set_title('Monthly Cost per Server', fontsize=style.title_fontsize,
                 fontweight='bold')
    ax.legend(loc='lower right', fontsize=style.legend_fontsize)
    _apply_common_style(ax, style, grid_axis='x')


def _draw_days(ax, data: dict, style: PlotStyle):
    days = data['day_impacts']
    ax.bar([d['name'][:3] for d in days], [d['value'] for d in days],
           color=COLORS['day'], alpha=style.bar_alpha,
           edgecolor=style.bar_edgecolor, linewidth=style.bar_linewidth)
    ax.yaxis.set_major_formatter(FuncFormatter(_dollar_format))
    ax.set_ylabel('Opportunity Cost ($)', fontsize=style.axis_label_fontsize)
    ax.set_title('Day of Week Impact', fontsize=style.title_fontsize,
                 fontweight='bold')
    _apply_common_style(ax, style)


def _draw_breakdown(ax, data: dict, style: PlotStyle):
    items = data['impact_breakdown']
    # Costs extend left, gains right
    values = [-abs(i['value']) if i['kind'] == 'cost' else abs(i['value']) for i in items]
    colors = [COLORS[i['kind']] for i in items]
    y = np.arange(len(items))
    ax.barh(y, values, color=colors, alpha=style.bar_alpha,
            edgecolor=style.bar_edgecolor, linewidth=style.bar_linewidth)
    ax.set_yticks(y)
    ax.set_yticklabels([i['name'] for i in items])
    ax.invert_yaxis()
    ax.axvline(0, color='black', linewidth=0.8)
    ax.xaxis.set_major_formatter(FuncFormatter(lambda x, pos: f"${abs(x):,.0f}"))
    ax.set_title('Cost vs. Benefit Analysis', fontsize=style.title_fontsize,
                 fontweight='bold')
    _apply_common_style(ax, style, grid_axis='x')


def _single_plot(draw, result, save_path, figsize, show, style):
    _check_matplotlib()
    style = style or DEFAULT_STYLE
    data = _results_dict(result)
    fig, ax = plt.subplots(figsize=figsize)
    fig.patch.set_facecolor(style.facecolor)
    draw(ax, data, style)
    return _finish(fig, save_path, show, style)


def plot_sensitivity_curve(
    result,
    save_path: Optional[Union[str, Path]] = None,
    figsize: Tuple[float, float] = (10, 6),
    show: bool = True,
    style: Optional[PlotStyle] = None,
) -> Optional[Any]:
    """
    Plot monthly cost with/without automation across phone-time share.

    The current operating point is marked with a vertical line.

    Returns:
        matplotlib Figure object
    """
    return _single_plot(_draw_sensitivity, result, save_path, figsize, show, style)


def plot_server_impacts(
    result,
    save_path: Optional[Union[str, Path]] = None,
    figsize: Tuple[float, float] = (10, 6),
    show: bool = True,
    style: Optional[PlotStyle] = None,
) -> Optional[Any]:
    """Plot per-server monthly cost with and without automation."""
    return _single_plot(_draw_servers, result, save_path, figsize, show, style)


def plot_day_impacts(
    result,
    save_path: Optional[Union[str, Path]] = None,
    figsize: Tuple[float, float] = (10, 5),
    show: bool = True,
    style: Optional[PlotStyle] = None,
) -> Optional[Any]:
    """Plot opportunity cost per day of week."""
    return _single_plot(_draw_days, result, save_path, figsize, show, style)


def plot_impact_breakdown(
    result,
    save_path: Optional[Union[str, Path]] = None,
    figsize: Tuple[float, float] = (10, 5),
    show: bool = True,
    style: Optional[PlotStyle] = None,
) -> Optional[Any]:
    """Plot cost line items (left) against gain line items (right)."""
    return _single_plot(_draw_breakdown, result, save_path, figsize, show, style)


def plot_result(
    result,
    save_path: Optional[Union[str, Path]] = None,
    show: bool = True,
    figsize: Tuple[float, float] = (16, 11),
    style: Optional[PlotStyle] = None,
) -> Optional[Any]:
    """
    Four-panel dashboard: sensitivity curve, per-server, per-day, breakdown.

    Args:
        result: RunResult, CalculatorResult, or dict (e.g. from load_result)
        save_path: Optional path to save the figure
        show: Whether to display the plot
        figsize: Figure size (width, height) in inches
        style: Optional PlotStyle

    Returns:
        matplotlib Figure object
    """
    _check_matplotlib()
    style = style or DEFAULT_STYLE
    data = _results_dict(result)

    fig, axes = plt.subplots(2, 2, figsize=figsize)
    fig.patch.set_facecolor(style.facecolor)
    _draw_sensitivity(axes[0][0], data, style)
    _draw_servers(axes[0][1], data, style)
    _draw_days(axes[1][0], data, style)
    _draw_breakdown(axes[1][1], data, style)
    return _finish(fig, save_path, show, style)
