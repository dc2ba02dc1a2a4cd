"""
Caller-side state for an interactive calculator.

A CalculatorSession owns one immutable CalculatorConfig and one
PhoneTimeSelection. Every edit replaces the config record; the phone-time
selection is reconciled against the weighted estimate whenever the server
list changes.

Example:
    session = CalculatorSession()
    session.add_server()
    session.update_server(1, wage=6.0, phone_time_pct=20)
    session.override_phone_time(18)
    print(session.result.summary.roi_pct)
"""

from dataclasses import replace
from typing import Optional, Sequence
import logging

from .analysis import CalculatorResult, evaluate
from .config import DEFAULT_PHONE_TIME, PHONE_TIME_BOUNDS, coerce_number
from .model import (
    BusinessParameters, CalculatorConfig, CheckSizeTable, PhoneTimeSelection,
    ServerProfile, weighted_phone_time,
)


logger = logging.getLogger(__name__)


class CalculatorSession:
    """
    Holds the current configuration and re-evaluates it on demand.

    The config is never mutated in place; each update swaps in a new record
    built with dataclasses.replace().
    """

    def __init__(self, config: Optional[CalculatorConfig] = None):
        if config is None:
            config = CalculatorConfig()
        estimate = weighted_phone_time(config.servers)
        if config.phone_time_pct is None:
            self._selection = PhoneTimeSelection.derived(estimate)
        else:
            self._selection = PhoneTimeSelection.override(config.phone_time_pct)
        self._config = replace(config, phone_time_pct=self._selection.value)

    @property
    def config(self) -> CalculatorConfig:
        return self._config

    @property
    def selection(self) -> PhoneTimeSelection:
        return self._selection

    @property
    def result(self) -> CalculatorResult:
        return evaluate(self._config)

    def _set_selection(self, selection: PhoneTimeSelection) -> None:
        if selection != self._selection:
            logger.debug("Phone time %s -> %s (overridden=%s)",
                         self._selection.value, selection.value, selection.overridden)
        self._selection = selection
        self._config = replace(self._config, phone_time_pct=selection.value)

    def update_servers(self, servers: Sequence[ServerProfile]) -> None:
        """Replace the server list and reconcile the phone-time selection."""
        self._config = replace(self._config, servers=tuple(servers))
        estimate = weighted_phone_time(self._config.servers)
        self._set_selection(self._selection.reconcile(estimate))

    def update_server(self, index: int, **changes) -> None:
        """Replace fields of one server, e.g. update_server(0, wage=5.5)."""
        servers = list(self._config.servers)
        servers[index] = replace(servers[index], **changes)
        self.update_servers(servers)

    def set_hours(self, index: int, day: int, meal: int, hours: float) -> None:
        rows = [list(row) for row in self._config.servers[index].hours]
        rows[day][meal] = hours
        self.update_server(index, hours=tuple(tuple(row) for row in rows))

    def add_server(self) -> None:
        """Append a default server named after its position."""
        name = f"Server {len(self._config.servers) + 1}"
        self.update_servers(self._config.servers + (ServerProfile(name=name),))

    def remove_server(self, index: int = -1) -> None:
        """Remove a server; the last remaining server is kept."""
        if len(self._config.servers) <= 1:
            return
        servers = list(self._config.servers)
        del servers[index]
        self.update_servers(servers)

    def update_check_sizes(self, check_sizes: CheckSizeTable) -> None:
        self._config = replace(self._config, check_sizes=check_sizes)

    def update_business(self, **changes) -> None:
        """Replace business parameters, e.g. update_business(plan_price=599)."""
        business: BusinessParameters = replace(self._config.business, **changes)
        self._config = replace(self._config, business=business)

    def override_phone_time(self, pct: float) -> None:
        pct = coerce_number(pct, DEFAULT_PHONE_TIME, PHONE_TIME_BOUNDS, "phone_time_pct")
        self._set_selection(PhoneTimeSelection.override(pct))
