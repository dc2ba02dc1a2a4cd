"""
Plain-text formatting for terminal output.

Display helpers turn model floats into currency, percent and payback strings;
layout helpers build titled sections, dot-leader key/value blocks and
box-drawn tables. Color is applied separately via colorize() as a
post-processing step for terminal display.
"""

import math
import os
import re
import sys
from typing import Any, Optional, Sequence, Tuple


def supports_color() -> bool:
    """Detect whether the terminal supports ANSI color output.

    Respects NO_COLOR (https://no-color.org/) and FORCE_COLOR env vars.
    """
    if os.environ.get('NO_COLOR') is not None:
        return False
    if os.environ.get('FORCE_COLOR') is not None:
        return True
    if not hasattr(sys.stdout, 'isatty'):
        return False
    return sys.stdout.isatty()


# ── Value display ───────────────────────────────────────────────────

def format_currency(value: float, signed: bool = False) -> str:
    """Two-decimal dollars, e.g. $214.01 or -$12.50 (+$3.00 if signed)."""
    sign = '-' if value < 0 else ('+' if signed and value > 0 else '')
    return f"{sign}${abs(value):,.2f}"


def format_pct(value: float, decimals: int = 0) -> str:
    return f"{value:.{decimals}f}%"


def format_hours(value: float) -> str:
    return f"{value:,.1f} h"


def format_payback(months: Optional[float]) -> str:
    """Payback period for display; None means savings never cover the plan."""
    if months is None or math.isinf(months):
        return 'N/A'
    if months <= 0:
        return 'Immediate'
    if months <= 1:
        return '< 1 month'
    return f"{months:.1f} months"


# ── Layout ──────────────────────────────────────────────────────────

_HEAVY_H = '═'
_LIGHT_H = '─'
_VL = '│'
_CORNERS = {
    'top': ('┌', '┬', '┐'),
    'mid': ('├', '┼', '┤'),
    'bottom': ('└', '┴', '┘'),
}


def title(text: str, width: int = 60) -> str:
    """Title centered in a heavy rule: ═════ Title ═════"""
    padding = max(width - len(text) - 2, 4)
    left = padding // 2
    return f"{_HEAVY_H * left} {text} {_HEAVY_H * (padding - left)}"


def heading(text: str) -> str:
    """Section heading with light-line underline."""
    return f"  {text}\n  {_LIGHT_H * len(text)}"


def kv_block(items: Sequence[Tuple[str, str]], indent: int = 2) -> str:
    """Aligned key-value pairs with dot leaders.

    Example::

        Monthly cost without ·· $1,180.42
        Monthly cost with ····· $753.13
    """
    if not items:
        return ""
    max_key = max(len(k) for k, _ in items)
    prefix = ' ' * indent
    return "\n".join(
        f"{prefix}{key} {'·' * (max_key - len(key) + 2)} {value}"
        for key, value in items
    )


def table(
    headers: Sequence[str],
    rows: Sequence[Sequence[Any]],
    aligns: Optional[Sequence[str]] = None,
) -> str:
    """Box-drawing bordered table.

    Args:
        headers: Column header strings.
        rows: List of row data (each row is a sequence of values).
        aligns: Per-column alignment, 'l' or 'r'. Defaults to left.
    """
    if not headers:
        return ""
    n_cols = len(headers)
    aligns = aligns or ['l'] * n_cols

    widths = [len(str(h)) for h in headers]
    for row in rows:
        for i, cell in enumerate(row[:n_cols]):
            widths[i] = max(widths[i], len(str(cell)))

    def _row(cells: Sequence[Any]) -> str:
        out = []
        for i in range(n_cols):
            text = str(cells[i]) if i < len(cells) else ''
            text = text.rjust(widths[i]) if aligns[i] == 'r' else text.ljust(widths[i])
            out.append(f" {text} ")
        return _VL + _VL.join(out) + _VL

    def _rule(kind: str) -> str:
        left, mid, right = _CORNERS[kind]
        return left + mid.join(_LIGHT_H * (w + 2) for w in widths) + right

    lines = [_rule('top'), _row(headers), _rule('mid')]
    lines.extend(_row(row) for row in rows)
    lines.append(_rule('bottom'))
    return "\n".join(lines)


def badge(label: str, value: str, indent: int = 2) -> str:
    """Highlighted key result: ▸ Label: value"""
    return f"{' ' * indent}▸ {label}: {value}"


def note_block(lines_list: Sequence[str], indent: int = 2) -> str:
    prefix = ' ' * indent
    return "\n".join(f"{prefix}· {line}" for line in lines_list)


# ── ANSI Color Post-Processing ─────────────────────────────────────

_RESET = '\033[0m'
_BOLD = '\033[1m'
_DIM = '\033[2m'
_GREEN = '\033[32m'
_RED = '\033[31m'
_YELLOW = '\033[33m'
_CYAN = '\033[36m'

_SIGNED_MONEY = re.compile(r'[+-]\$[\d,]+\.\d{2}')


def colorize(text: str) -> str:
    """Apply ANSI colors to formatted text.

    - Title lines (═══) → bold cyan
    - Rules, table borders, notes → dim
    - Signed amounts: +$ → green (savings), -$ → red (loss)
    - ▸ markers → yellow, N/A → dim yellow
    """
    return '\n'.join(_colorize_line(line) for line in text.split('\n'))


def _colorize_line(line: str) -> str:
    stripped = line.strip()
    if not stripped:
        return line
    if _HEAVY_H in line:
        return f"{_BOLD}{_CYAN}{line}{_RESET}"
    if all(c == _LIGHT_H for c in stripped) or stripped[0] in '┌├└':
        return f"{_DIM}{line}{_RESET}"
    if stripped.startswith('·'):
        return f"{_DIM}{line}{_RESET}"
    if _VL in line:
        line = line.replace(_VL, f"{_DIM}{_VL}{_RESET}")
    line = line.replace('▸', f"{_YELLOW}▸{_RESET}")
    line = line.replace('N/A', f"{_DIM}{_YELLOW}N/A{_RESET}")
    return _SIGNED_MONEY.sub(_color_money, line)


def _color_money(m: re.Match) -> str:
    s = m.group(0)
    color = _GREEN if s.startswith('+') else _RED
    return f"{color}{s}{_RESET}"
