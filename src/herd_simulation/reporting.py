"""Tabular views of a simulation run for display and export.

Turns the immutable herd and revenue series into pandas DataFrames so the
presentation layer (or the CLI) can sort, group and print them.
"""

import logging
from dataclasses import asdict, fields
from typing import Sequence

import pandas as pd

from src.herd_simulation.models import Animal, RevenueSummary, YearlyRevenue

logger = logging.getLogger(__name__)

_ANIMAL_COLUMNS = [f.name for f in fields(Animal)]
_YEARLY_COLUMNS = [f.name for f in fields(YearlyRevenue)]


def herd_to_frame(herd: Sequence[Animal]) -> pd.DataFrame:
    """One row per animal, in herd order."""
    df = pd.DataFrame([asdict(a) for a in herd], columns=_ANIMAL_COLUMNS)
    # parent_id is None for founders; keep it as a nullable integer column.
    df["parent_id"] = df["parent_id"].astype("Int64")
    return df


def revenue_to_frame(summary: RevenueSummary) -> pd.DataFrame:
    """One row per simulated year, indexed by calendar year."""
    df = pd.DataFrame(
        [asdict(r) for r in summary.yearly_records], columns=_YEARLY_COLUMNS
    )
    return df.set_index("year")


def generation_summary(herd: Sequence[Animal]) -> pd.DataFrame:
    """Headcount and birth-year range for each generation."""
    df = herd_to_frame(herd)
    out = df.groupby("generation").agg(
        count=("id", "size"),
        first_birth_year=("birth_year", "min"),
        last_birth_year=("birth_year", "max"),
    )
    logger.debug("Generation summary: %d generations", len(out))
    return out


def population_by_year(
    herd: Sequence[Animal], start_year: int, years: int
) -> pd.Series:
    """Number of animals born on or before each simulated year."""
    birth_years = herd_to_frame(herd)["birth_year"]
    calendar = range(start_year, start_year + years)
    return pd.Series(
        [int((birth_years <= year).sum()) for year in calendar],
        index=pd.Index(list(calendar), name="year"),
        name="total_buffaloes",
    )


def format_currency(amount: float) -> str:
    """Format *amount* as whole rupees with Indian digit grouping.

    Example: ``1234567`` -> ``"₹12,34,567"``.
    """
    value = int(abs(amount) + 0.5)
    sign = "-" if amount < 0 and value else ""
    digits = str(value)
    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        digits = ",".join(groups + [tail])
    return f"{sign}₹{digits}"
