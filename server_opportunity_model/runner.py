"""
Scenario runner for executing configs and producing results.

Orchestrates config -> model evaluation -> structured output.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Dict, Any
import json
import logging

from .analysis import CalculatorResult, evaluate
from .config import (
    DEFAULT_PHONE_TIME, PHONE_TIME_BOUNDS, CalculatorSpec, coerce_number,
    validate_config,
)


VERSION = "1.0.0"

logger = logging.getLogger(__name__)


def _format_timestamp() -> str:
    """Return ISO 8601 timestamp in UTC."""
    return datetime.now(timezone.utc).isoformat()


@dataclass
class RunResult:
    """
    Complete result from running a scenario.

    Contains metadata, echoed config, and results.
    """
    meta: Dict[str, Any]
    config: dict
    results: CalculatorResult

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "meta": self.meta,
            "config": self.config,
            "results": self.results.to_dict(),
        }


class Runner:
    """
    Scenario runner that executes configs and produces structured results.

    Example:
        config = load_config("configs/default.json")
        runner = Runner(config)
        result = runner.run()
        save_result(result, "results/default_2026-10-18.json")
    """

    def __init__(
        self,
        config: CalculatorSpec,
        config_path: Optional[str] = None,
        phone_time_pct: Optional[float] = None,
    ):
        """
        Initialize runner with scenario config.

        Args:
            config: Scenario configuration
            config_path: Optional path to config file (for metadata)
            phone_time_pct: Optional operating-point override, clamped to 0-50
        """
        self.config = config
        self.config_path = config_path
        if phone_time_pct is not None:
            phone_time_pct = coerce_number(phone_time_pct, DEFAULT_PHONE_TIME,
                                           PHONE_TIME_BOUNDS, "phone_time_pct")
        self.phone_time_pct = phone_time_pct

        errors = validate_config(config)
        if errors:
            raise ValueError(f"Invalid config: {'; '.join(errors)}")

    def run(self) -> RunResult:
        """
        Evaluate the scenario and return results.

        Returns:
            RunResult containing metadata, config echo, and results
        """
        meta = {
            "timestamp": _format_timestamp(),
            "version": VERSION,
            "config_file": self.config_path,
            "scenario_name": self.config.name,
        }

        model_config = self.config.to_model()
        logger.debug("Evaluating '%s' with %d server(s)",
                     self.config.name, len(model_config.servers))
        results = evaluate(model_config, phone_time_pct=self.phone_time_pct)

        return RunResult(
            meta=meta,
            config=self.config.to_dict(),
            results=results,
        )


def save_result(result: RunResult, path: str | Path) -> None:
    """
    Save a run result to JSON file.

    Args:
        result: RunResult to save
        path: Output file path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        json.dump(result.to_dict(), f, indent=2)


def load_result(path: str | Path) -> dict:
    """
    Load a previous run result from JSON file.

    Args:
        path: Path to result file

    Returns:
        Dict containing the result data
    """
    path = Path(path)
    with open(path, 'r') as f:
        return json.load(f)


def generate_output_filename(config: CalculatorSpec, timestamp: Optional[str] = None) -> str:
    """
    Generate a default output filename for a config.

    Format: {name}_{timestamp}.json
    """
    if timestamp is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    else:
        # Clean up ISO timestamp for filename
        timestamp = timestamp.replace(":", "").replace("-", "")[:15]

    safe_name = config.name.replace(" ", "_").replace("/", "_")
    return f"{safe_name}_{timestamp}.json"
