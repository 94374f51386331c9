"""Revenue accrual over a generated herd.

Every producing animal follows the same staggered lactation cycle, offset by
its acquisition month::

    landing (idle) -> high phase -> medium phase -> rest -> high phase -> ...

An animal produces in a calendar year once it is at least three years past
its birth year. Revenue never feeds back into herd growth.
"""

import logging
import math
from typing import Optional, Sequence, Tuple

from src.herd_simulation.config import (
    FOUNDERS_PER_UNIT,
    MATURITY_AGE,
    MONTH_NAMES,
    MONTHS_PER_YEAR,
)
from src.herd_simulation.herd_generator import validate_period
from src.herd_simulation.models import (
    Animal,
    RevenueConfig,
    RevenueSummary,
    YearlyRevenue,
)

logger = logging.getLogger(__name__)


class RevenueAccrualModel:
    """Compute monthly, annual and run-level revenue for a herd.

    The model is stateless apart from its cycle configuration.
    """

    def __init__(self, config: Optional[RevenueConfig] = None):
        self.config = config or RevenueConfig()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def monthly_revenue(
        self,
        acquisition_month: int,
        year: int,
        month: int,
        start_year: int,
    ) -> float:
        """Revenue from one animal in a single calendar month.

        Formula::

            months_since = (year - start_year) * 12 + (month - acquisition_month)
            position     = (months_since - landing_period) % cycle_length

        Months before the landing period has elapsed (including months before
        acquisition) earn nothing.
        """
        cfg = self.config
        months_since = (year - start_year) * MONTHS_PER_YEAR + (month - acquisition_month)
        if months_since < cfg.landing_period:
            return 0

        position = (months_since - cfg.landing_period) % cfg.cycle_length
        if position < cfg.high_phase.months:
            return cfg.high_phase.revenue
        if position < cfg.high_phase.months + cfg.medium_phase.months:
            return cfg.medium_phase.revenue
        return cfg.rest_period.revenue

    def annual_revenue(
        self,
        herd: Sequence[Animal],
        year: int,
        start_year: int,
    ) -> Tuple[float, int, int]:
        """Revenue for the whole herd over one calendar year.

        Returns:
            ``(revenue, mature_count, total_count)`` where *total_count*
            counts animals born on or before *year*.
        """
        revenue = 0
        mature_count = 0
        total_count = 0
        for animal in herd:
            if animal.birth_year <= year:
                total_count += 1
            if year - animal.birth_year < MATURITY_AGE:
                continue
            mature_count += 1
            revenue += sum(
                self.monthly_revenue(animal.acquisition_month, year, month, start_year)
                for month in range(MONTHS_PER_YEAR)
            )
        return revenue, mature_count, total_count

    def accrue(
        self,
        herd: Sequence[Animal],
        start_year: int,
        start_month: int,
        years: int,
    ) -> RevenueSummary:
        """Build the yearly revenue series for ``start_year`` onwards.

        Args:
            herd: Generated herd (read only).
            start_year: First simulated calendar year.
            start_month: Acquisition start month, reported on every record.
            years: Number of years to report.

        Returns:
            :class:`RevenueSummary` with one :class:`YearlyRevenue` per year.

        Raises:
            InvalidArgumentError: If *years* or *start_month* is not an integer
                in range.
        """
        validate_period(years, start_month)

        records = []
        total_revenue = 0
        total_mature_years = 0

        for offset in range(years):
            year = start_year + offset
            revenue, mature, total = self.annual_revenue(herd, year, start_year)

            total_revenue += revenue
            total_mature_years += mature

            # No producing animals means no average, not a division error.
            monthly = revenue / (mature * MONTHS_PER_YEAR) if mature > 0 else 0

            records.append(YearlyRevenue(
                year=year,
                active_units=math.ceil(total / FOUNDERS_PER_UNIT),
                monthly_revenue=monthly,
                revenue=revenue,
                total_buffaloes=total,
                producing_buffaloes=mature,
                non_producing_buffaloes=total - mature,
                start_month=MONTH_NAMES[start_month],
                start_year=start_year,
            ))
            logger.debug(
                "Revenue %d: %.0f from %d/%d producing", year, revenue, mature, total
            )

        summary = RevenueSummary(
            yearly_records=tuple(records),
            total_revenue=total_revenue,
            average_annual_revenue=total_revenue / years,
            total_units=total_mature_years / years,
            total_mature_buffalo_years=total_mature_years,
            revenue_config=self.config,
        )
        logger.info(
            "Accrued revenue over %d year(s): total %.0f, average %.0f/year",
            years, summary.total_revenue, summary.average_annual_revenue,
        )
        return summary
