"""Run a complete herd simulation: herd growth followed by revenue accrual.

Usage:
    python -m src.herd_simulation.run_simulation [units] [years] [start_year] [start_month]

Examples:
    python -m src.herd_simulation.run_simulation
    python -m src.herd_simulation.run_simulation 2 15 2026 3
"""

import logging
import sys
from dataclasses import dataclass
from typing import Any, Dict, Optional

from src.herd_simulation.config import (
    DEFAULT_START_MONTH,
    DEFAULT_START_YEAR,
    DEFAULT_UNITS,
    DEFAULT_YEARS,
)
from src.herd_simulation.herd_generator import (
    HerdGenerator,
    reject_input,
    validate_simulation_inputs,
)
from src.herd_simulation.models import RevenueConfig, SimulationResult
from src.herd_simulation.reporting import (
    format_currency,
    generation_summary,
    revenue_to_frame,
)
from src.herd_simulation.revenue_model import RevenueAccrualModel
from src.logging_config import setup_logging

logger = logging.getLogger(__name__)

RUN_SIMULATION_MESSAGE = "RUN_SIMULATION"

# Payload keys as sent by the embedding shell -> our parameter names
_PAYLOAD_KEYS = {
    "units": "units",
    "years": "years",
    "startYear": "start_year",
    "startMonth": "start_month",
}


def _as_int(name: str, value: Any) -> int:
    """Coerce a payload value to int, rejecting anything lossy."""
    if isinstance(value, bool):
        reject_input(f"{name} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    reject_input(f"{name} must be an integer, got {value!r}")


@dataclass(frozen=True)
class SimulationRequest:
    """The four parameters that fully determine a run."""

    units: int = DEFAULT_UNITS
    years: int = DEFAULT_YEARS
    start_year: int = DEFAULT_START_YEAR
    start_month: int = DEFAULT_START_MONTH

    def __post_init__(self):
        validate_simulation_inputs(
            self.units, self.years, self.start_year, self.start_month
        )

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "SimulationRequest":
        """Build a request from ``{units, years, startYear, startMonth}``."""
        if not isinstance(payload, dict):
            reject_input(
                f"Simulation payload must be a mapping, got {type(payload).__name__}"
            )
        missing = set(_PAYLOAD_KEYS) - set(payload)
        if missing:
            reject_input(
                f"Simulation payload missing keys: {sorted(missing)}"
            )
        return cls(**{
            param: _as_int(key, payload[key])
            for key, param in _PAYLOAD_KEYS.items()
        })

    @classmethod
    def from_message(cls, message: Dict[str, Any]) -> "SimulationRequest":
        """Build a request from a ``{"type": "RUN_SIMULATION", "payload": ...}`` message."""
        if not isinstance(message, dict) or message.get("type") != RUN_SIMULATION_MESSAGE:
            reject_input(
                f"Expected a {RUN_SIMULATION_MESSAGE} message, got {message!r}"
            )
        return cls.from_payload(message.get("payload"))


def run_simulation(
    units: int = DEFAULT_UNITS,
    years: int = DEFAULT_YEARS,
    start_year: int = DEFAULT_START_YEAR,
    start_month: int = DEFAULT_START_MONTH,
    revenue_config: Optional[RevenueConfig] = None,
    age_newborns: bool = True,
) -> SimulationResult:
    """Generate the herd and accrue its revenue.

    Args:
        units: Number of starting units (two founders each), >= 1.
        years: Number of simulated years, >= 1.
        start_year: Calendar year of the first simulated year.
        start_month: Founder acquisition month, 0 (January) to 11.
        revenue_config: Production cycle; defaults to :class:`RevenueConfig`.
        age_newborns: See :class:`HerdGenerator`.

    Returns:
        Immutable :class:`SimulationResult`.

    Raises:
        InvalidArgumentError: If any parameter is out of range.
    """
    logger.info(
        "Running simulation: units=%s, years=%s, start=%s/%s",
        units, years, start_month, start_year,
    )
    herd = HerdGenerator(age_newborns=age_newborns).generate(
        units, years, start_year, start_month
    )
    revenue = RevenueAccrualModel(revenue_config).accrue(
        herd, start_year, start_month, years
    )
    return SimulationResult(
        units=units,
        years=years,
        start_year=start_year,
        start_month=start_month,
        herd=herd,
        revenue=revenue,
    )


def run_request(request: SimulationRequest) -> SimulationResult:
    """Run a simulation for an already validated request."""
    return run_simulation(
        request.units, request.years, request.start_year, request.start_month
    )


def format_report(result: SimulationResult) -> str:
    """Plain-text summary of a run for the console."""
    yearly = revenue_to_frame(result.revenue)[
        ["total_buffaloes", "producing_buffaloes", "active_units", "revenue"]
    ].copy()
    yearly["revenue"] = yearly["revenue"].map(format_currency)

    lines = [
        f"Buffalo herd: {result.units} unit(s), {result.years} year(s) "
        f"from {result.start_year}",
        "",
        yearly.to_string(),
        "",
        generation_summary(result.herd).to_string(),
        "",
        f"Total buffaloes:        {result.total_buffaloes}",
        f"Total revenue:          {format_currency(result.revenue.total_revenue)}",
        f"Average annual revenue: "
        f"{format_currency(result.revenue.average_annual_revenue)}",
    ]
    return "\n".join(lines)


if __name__ == "__main__":
    setup_logging()

    try:
        request = SimulationRequest.from_payload({
            "units": sys.argv[1] if len(sys.argv) > 1 else DEFAULT_UNITS,
            "years": sys.argv[2] if len(sys.argv) > 2 else DEFAULT_YEARS,
            "startYear": sys.argv[3] if len(sys.argv) > 3 else DEFAULT_START_YEAR,
            "startMonth": sys.argv[4] if len(sys.argv) > 4 else DEFAULT_START_MONTH,
        })
        print(format_report(run_request(request)))
    except Exception:
        logger.exception("Simulation failed")
        sys.exit(1)
