"""Herd generator - expands founder units into a multi-generation herd.

Each simulated year is a pure step over an immutable snapshot: every mature
animal (as of the start of the year) contributes one offspring, then the whole
herd, newborns included, ages by one year.
"""

import logging
from typing import List, NoReturn, Tuple

from src.herd_simulation.config import (
    FOUNDER_MONTH_STAGGER,
    FOUNDERS_PER_UNIT,
    MATURITY_AGE,
    MONTHS_PER_YEAR,
)
from src.herd_simulation.models import Animal

logger = logging.getLogger(__name__)

Herd = Tuple[Animal, ...]


class InvalidArgumentError(ValueError):
    """Raised when simulation inputs are out of range."""

    pass


def reject_input(message: str) -> NoReturn:
    """Log *message* as a rejected input and raise :class:`InvalidArgumentError`."""
    logger.warning("Rejected simulation input: %s", message)
    raise InvalidArgumentError(message)


def require_int(name: str, value) -> None:
    """Reject anything that is not a plain ``int`` (bools included)."""
    if isinstance(value, bool) or not isinstance(value, int):
        reject_input(f"{name} must be an integer, got {value!r}")


def validate_period(years: int, start_month: int) -> None:
    """Check the simulated span shared by herd growth and revenue accrual."""
    require_int("years", years)
    require_int("start_month", start_month)

    if years < 1:
        reject_input(f"years must be at least 1, got {years}")
    if not 0 <= start_month < MONTHS_PER_YEAR:
        reject_input(
            f"start_month must be between 0 and {MONTHS_PER_YEAR - 1}, "
            f"got {start_month}"
        )


def validate_simulation_inputs(
    units: int, years: int, start_year: int, start_month: int
) -> None:
    """Reject bad parameters before any herd state is built."""
    require_int("units", units)
    require_int("start_year", start_year)

    if units < 1:
        reject_input(f"units must be at least 1, got {units}")
    validate_period(years, start_month)


def expected_herd_size(units: int, years: int) -> int:
    """Herd size after *years* steps, from the breeding recurrence.

    Animals present at the end of year ``y - 3`` are exactly the breeders of
    year ``y`` (founders breed from year 1), so::

        T(0) = 2 * units
        T(y) = T(y - 1) + T(max(y - 3, 0))
    """
    totals = [FOUNDERS_PER_UNIT * units]
    for year in range(1, years + 1):
        breeders = totals[max(year - MATURITY_AGE, 0)]
        totals.append(totals[-1] + breeders)
    return totals[years]


class HerdGenerator:
    """Deterministic herd growth simulation.

    Args:
        age_newborns: When True (the default) a newborn takes part in the
            aging pass of its own birth year and ends that year at age 1.
            Pass False to keep newborns at age 0 until the following year;
            this changes how soon they breed and therefore the herd size.
    """

    def __init__(self, age_newborns: bool = True):
        self.age_newborns = age_newborns

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def generate(
        self,
        units: int,
        years: int,
        start_year: int,
        start_month: int = 0,
    ) -> Herd:
        """Simulate herd growth.

        Args:
            units: Number of starting units (two founders each).
            years: Number of simulated years.
            start_year: Calendar year of the first simulated year.
            start_month: Acquisition month of the first founder (0 = January).

        Returns:
            Tuple of :class:`Animal`: founders grouped by unit, then each
            year's offspring in the order their parent appears in the herd.

        Raises:
            InvalidArgumentError: If any parameter is out of range.
        """
        validate_simulation_inputs(units, years, start_year, start_month)

        herd = self.create_founders(units, start_year, start_month)
        next_id = len(herd) + 1

        for year in range(1, years + 1):
            calendar_year = start_year + year - 1
            herd, next_id = self.advance_year(herd, calendar_year, next_id)
            logger.debug(
                "Year %d (%d): herd size %d", year, calendar_year, len(herd)
            )

        logger.info(
            "Generated herd: %d unit(s) over %d year(s) from %d -> %d buffaloes",
            units, years, start_year, len(herd),
        )
        return herd

    @staticmethod
    def create_founders(units: int, start_year: int, start_month: int) -> Herd:
        """Two mature founders per unit, acquired six months apart."""
        founders: List[Animal] = []
        months = (start_month, (start_month + FOUNDER_MONTH_STAGGER) % MONTHS_PER_YEAR)
        for unit in range(1, units + 1):
            for acquisition_month in months:
                founders.append(Animal(
                    id=len(founders) + 1,
                    age=MATURITY_AGE,
                    mature=True,
                    parent_id=None,
                    generation=0,
                    birth_year=start_year - MATURITY_AGE,
                    acquisition_month=acquisition_month,
                    unit=unit,
                ))
        return tuple(founders)

    def advance_year(
        self, herd: Herd, calendar_year: int, next_id: int
    ) -> Tuple[Herd, int]:
        """Produce the next snapshot from *herd*.

        Returns:
            ``(new_herd, next_id)``. The input snapshot is left untouched.
        """
        breeders = [animal for animal in herd if animal.age >= MATURITY_AGE]

        offspring: List[Animal] = []
        for parent in breeders:
            offspring.append(Animal(
                id=next_id,
                age=0,
                mature=False,
                parent_id=parent.id,
                generation=parent.generation + 1,
                birth_year=calendar_year,
                acquisition_month=parent.acquisition_month,
                unit=parent.unit,
            ))
            next_id += 1

        aged = [animal.aged() for animal in herd]
        if self.age_newborns:
            aged.extend(child.aged() for child in offspring)
        else:
            aged.extend(offspring)

        return tuple(aged), next_id
