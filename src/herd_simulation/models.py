"""Data models for the herd simulation."""

from dataclasses import dataclass, field, replace
from functools import cached_property
from typing import Optional, Tuple

from src.herd_simulation.config import (
    HIGH_REVENUE_PHASE,
    LANDING_PERIOD_MONTHS,
    MATURITY_AGE,
    MEDIUM_REVENUE_PHASE,
    REST_PERIOD,
)


@dataclass(frozen=True)
class Animal:
    """A single buffalo in the herd.

    Lineage is a back-reference only: children are found through
    :class:`~src.herd_simulation.lineage.LineageIndex`, never stored here.
    """

    id: int
    age: int
    mature: bool
    parent_id: Optional[int]
    generation: int
    birth_year: int
    acquisition_month: int
    unit: int

    @property
    def is_founder(self) -> bool:
        return self.parent_id is None

    @property
    def display_name(self) -> str:
        """Short label used by the tree view, e.g. ``B7``."""
        return f"B{self.id}"

    def aged(self) -> "Animal":
        """Return a copy one year older, with ``mature`` recomputed."""
        age = self.age + 1
        return replace(self, age=age, mature=age >= MATURITY_AGE)


@dataclass(frozen=True)
class RevenuePhase:
    """One segment of the production cycle."""

    months: int
    revenue: float  # Per animal per month


@dataclass(frozen=True)
class RevenueConfig:
    """Staggered lactation cycle parameters.

    After ``landing_period`` idle months the animal cycles through the high,
    medium and rest phases in that order, forever.
    """

    landing_period: int = LANDING_PERIOD_MONTHS
    high_phase: RevenuePhase = field(
        default_factory=lambda: RevenuePhase(**HIGH_REVENUE_PHASE)
    )
    medium_phase: RevenuePhase = field(
        default_factory=lambda: RevenuePhase(**MEDIUM_REVENUE_PHASE)
    )
    rest_period: RevenuePhase = field(
        default_factory=lambda: RevenuePhase(**REST_PERIOD)
    )

    def __post_init__(self):
        if self.landing_period < 0:
            raise ValueError(
                f"landing_period must be non-negative, got {self.landing_period}"
            )
        for name in ("high_phase", "medium_phase", "rest_period"):
            phase = getattr(self, name)
            if phase.months < 0 or phase.revenue < 0:
                raise ValueError(f"{name} months and revenue must be non-negative")
        if self.cycle_length == 0:
            raise ValueError("Production cycle must span at least one month")

    @property
    def cycle_length(self) -> int:
        return self.high_phase.months + self.medium_phase.months + self.rest_period.months

    @property
    def annual_revenue_per_animal(self) -> float:
        """Revenue of one full cycle (equals a calendar year for a 12-month cycle)."""
        return sum(
            p.months * p.revenue
            for p in (self.high_phase, self.medium_phase, self.rest_period)
        )


@dataclass(frozen=True)
class YearlyRevenue:
    """Revenue and headcount for one simulated calendar year."""

    year: int
    active_units: int
    monthly_revenue: float  # Average per producing animal per month
    revenue: float
    total_buffaloes: int
    producing_buffaloes: int
    non_producing_buffaloes: int
    start_month: str
    start_year: int


@dataclass(frozen=True)
class RevenueSummary:
    """Yearly revenue series plus run-level totals."""

    yearly_records: Tuple[YearlyRevenue, ...]
    total_revenue: float
    average_annual_revenue: float
    total_units: float
    total_mature_buffalo_years: int
    revenue_config: RevenueConfig


@dataclass(frozen=True)
class SimulationResult:
    """Immutable output of one simulation run."""

    units: int
    years: int
    start_year: int
    start_month: int
    herd: Tuple[Animal, ...]
    revenue: RevenueSummary

    @property
    def total_buffaloes(self) -> int:
        return len(self.herd)

    @cached_property
    def lineage(self):
        """Parent -> children index over :attr:`herd`, built on first access."""
        from src.herd_simulation.lineage import LineageIndex

        return LineageIndex(self.herd)
