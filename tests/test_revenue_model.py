"""Tests for src.herd_simulation.revenue_model."""

import pytest

from src.herd_simulation.herd_generator import HerdGenerator, InvalidArgumentError
from src.herd_simulation.models import Animal, RevenueConfig, RevenuePhase
from src.herd_simulation.revenue_model import RevenueAccrualModel

# One full production cycle: 5 months at 9000 + 3 months at 6000
STEADY_ANNUAL = 63000


# ── Helpers ──────────────────────────────────────────────────────────


def _make_animal(animal_id=1, birth_year=2023, acquisition_month=0, parent_id=None):
    return Animal(
        id=animal_id,
        age=3,
        mature=True,
        parent_id=parent_id,
        generation=0 if parent_id is None else 1,
        birth_year=birth_year,
        acquisition_month=acquisition_month,
        unit=1,
    )


def _monthly_series(model, acquisition_month, year, start_year=2026):
    return [
        model.monthly_revenue(acquisition_month, year, month, start_year)
        for month in range(12)
    ]


# ── Monthly cycle ────────────────────────────────────────────────────


class TestMonthlyRevenue:
    def test_first_year_from_january(self, revenue_model):
        """Landing (2) -> high (5) -> medium (3) -> rest."""
        assert _monthly_series(revenue_model, 0, 2026) == [
            0, 0,
            9000, 9000, 9000, 9000, 9000,
            6000, 6000, 6000,
            0, 0,
        ]

    def test_second_year_continues_cycle(self, revenue_model):
        assert _monthly_series(revenue_model, 0, 2027) == [
            0, 0,
            9000, 9000, 9000, 9000, 9000,
            6000, 6000, 6000,
            0, 0,
        ]

    def test_months_before_acquisition_earn_nothing(self, revenue_model):
        series = _monthly_series(revenue_model, 6, 2026)
        assert series[:8] == [0] * 8
        assert series[8:] == [9000] * 4

    def test_before_start_year_earns_nothing(self, revenue_model):
        assert sum(_monthly_series(revenue_model, 0, 2025)) == 0

    def test_cycle_is_periodic(self, revenue_model):
        for acquisition_month in range(12):
            for year in (2028, 2031):
                assert _monthly_series(revenue_model, acquisition_month, year) == (
                    _monthly_series(revenue_model, acquisition_month, year + 1)
                )

    def test_never_negative(self, revenue_model):
        for acquisition_month in range(12):
            for year in range(2024, 2030):
                assert min(_monthly_series(revenue_model, acquisition_month, year)) >= 0

    def test_steady_state_annual_total(self, revenue_model):
        for acquisition_month in range(12):
            assert sum(_monthly_series(revenue_model, acquisition_month, 2028)) == (
                STEADY_ANNUAL
            )

    def test_custom_config(self):
        config = RevenueConfig(
            landing_period=0,
            high_phase=RevenuePhase(months=6, revenue=100),
            medium_phase=RevenuePhase(months=6, revenue=50),
            rest_period=RevenuePhase(months=0, revenue=0),
        )
        model = RevenueAccrualModel(config)
        assert _monthly_series(model, 0, 2026) == [100] * 6 + [50] * 6


# ── Annual aggregation ───────────────────────────────────────────────


class TestAnnualRevenue:
    def test_staggered_founders_first_year(self, revenue_model):
        herd = [_make_animal(1, acquisition_month=0), _make_animal(2, acquisition_month=6)]
        revenue, mature, total = revenue_model.annual_revenue(herd, 2026, 2026)
        assert revenue == 63000 + 36000
        assert mature == 2
        assert total == 2

    def test_young_animals_do_not_produce(self, revenue_model):
        herd = [_make_animal(1), _make_animal(2, birth_year=2025, parent_id=1)]
        revenue, mature, total = revenue_model.annual_revenue(herd, 2027, 2026)
        assert mature == 1
        assert total == 2
        assert revenue == STEADY_ANNUAL

    def test_maturity_from_birth_year(self, revenue_model):
        """An animal produces once year - birth_year >= 3."""
        herd = [_make_animal(2, birth_year=2026, parent_id=1)]
        assert revenue_model.annual_revenue(herd, 2028, 2026)[1] == 0
        assert revenue_model.annual_revenue(herd, 2029, 2026)[1] == 1

    def test_unborn_animals_not_counted(self, revenue_model):
        herd = [_make_animal(1), _make_animal(2, birth_year=2030, parent_id=1)]
        _, _, total = revenue_model.annual_revenue(herd, 2027, 2026)
        assert total == 1


# ── Yearly series ────────────────────────────────────────────────────


class TestAccrue:
    @pytest.fixture(scope="class")
    def summary(self):
        herd = HerdGenerator().generate(1, 4, 2026, 0)
        return RevenueAccrualModel().accrue(herd, 2026, 0, 4)

    def test_one_record_per_year(self, summary):
        assert [r.year for r in summary.yearly_records] == [2026, 2027, 2028, 2029]

    def test_yearly_revenue(self, summary):
        assert [r.revenue for r in summary.yearly_records] == [
            99000, 126000, 126000, 252000,
        ]

    def test_headcounts(self, summary):
        assert [r.total_buffaloes for r in summary.yearly_records] == [4, 6, 8, 12]
        assert [r.producing_buffaloes for r in summary.yearly_records] == [2, 2, 2, 4]
        assert [r.non_producing_buffaloes for r in summary.yearly_records] == [2, 4, 6, 8]

    def test_active_units_rounds_up(self, summary):
        assert [r.active_units for r in summary.yearly_records] == [2, 3, 4, 6]

    def test_monthly_revenue_is_per_animal_average(self, summary):
        first = summary.yearly_records[0]
        assert first.monthly_revenue == pytest.approx(99000 / 24)
        assert summary.yearly_records[1].monthly_revenue == pytest.approx(5250)

    def test_start_context_on_every_record(self, summary):
        for record in summary.yearly_records:
            assert record.start_month == "January"
            assert record.start_year == 2026

    def test_totals(self, summary):
        assert summary.total_revenue == 603000
        assert summary.average_annual_revenue == summary.total_revenue / 4
        assert summary.total_mature_buffalo_years == 10
        assert summary.total_units == pytest.approx(2.5)

    def test_config_recorded(self, summary):
        assert summary.revenue_config == RevenueConfig()

    def test_december_start(self, revenue_model):
        herd = HerdGenerator().generate(1, 1, 2026, 11)
        summary = revenue_model.accrue(herd, 2026, 11, 1)
        record = summary.yearly_records[0]
        # Founder acquired in December lands in February of the next year;
        # the June founder produces August..December at the high rate.
        assert record.revenue == 45000
        assert record.start_month == "December"

    def test_average_is_total_over_years(self, revenue_model, ten_year_herd):
        summary = revenue_model.accrue(ten_year_herd, 2026, 0, 10)
        assert summary.average_annual_revenue == summary.total_revenue / 10


class TestZeroProducers:
    def test_no_mature_animals_yields_zero_average(self, revenue_model):
        herd = [_make_animal(5, birth_year=2026, parent_id=1)]
        summary = revenue_model.accrue(herd, 2026, 0, 2)
        for record in summary.yearly_records:
            assert record.producing_buffaloes == 0
            assert record.revenue == 0
            assert record.monthly_revenue == 0


class TestAccrueValidation:
    def test_zero_years(self, revenue_model, one_year_herd):
        with pytest.raises(InvalidArgumentError, match="years must be at least 1"):
            revenue_model.accrue(one_year_herd, 2026, 0, 0)

    def test_bad_start_month(self, revenue_model, one_year_herd):
        with pytest.raises(InvalidArgumentError, match="start_month"):
            revenue_model.accrue(one_year_herd, 2026, 12, 1)

    def test_fractional_years_rejected(self, revenue_model, one_year_herd):
        with pytest.raises(InvalidArgumentError, match="years must be an integer"):
            revenue_model.accrue(one_year_herd, 2026, 0, 2.5)

    def test_bool_start_month_rejected(self, revenue_model, one_year_herd):
        """True is an int subclass but must not be read as February."""
        with pytest.raises(InvalidArgumentError, match="start_month must be an integer"):
            revenue_model.accrue(one_year_herd, 2026, True, 1)

    def test_rejection_logged_as_warning(self, revenue_model, one_year_herd, caplog):
        with pytest.raises(InvalidArgumentError):
            revenue_model.accrue(one_year_herd, 2026, 0, 0)
        assert any(
            r.levelname == "WARNING" and "years must be at least 1" in r.getMessage()
            for r in caplog.records
        )
