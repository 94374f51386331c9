"""Shared fixtures for the herd simulation test suite."""

import pytest

from src.herd_simulation.herd_generator import HerdGenerator
from src.herd_simulation.lineage import LineageIndex
from src.herd_simulation.revenue_model import RevenueAccrualModel

START_YEAR = 2026


# ------------------------------------------------------------------
# Lightweight factories – cheap to construct, no I/O
# ------------------------------------------------------------------

@pytest.fixture(scope="module")
def generator():
    return HerdGenerator()


@pytest.fixture(scope="module")
def revenue_model():
    return RevenueAccrualModel()


# ------------------------------------------------------------------
# Generated herds – deterministic, reused across a module
# ------------------------------------------------------------------

@pytest.fixture(scope="module")
def one_year_herd(generator):
    """units=1, years=1: two founders plus one offspring each."""
    return generator.generate(units=1, years=1, start_year=START_YEAR, start_month=0)


@pytest.fixture(scope="module")
def four_year_herd(generator):
    """units=1, years=4: the first year in which offspring breed (12 animals)."""
    return generator.generate(units=1, years=4, start_year=START_YEAR, start_month=0)


@pytest.fixture(scope="module")
def ten_year_herd(generator):
    return generator.generate(units=1, years=10, start_year=START_YEAR, start_month=0)


@pytest.fixture(scope="module")
def four_year_lineage(four_year_herd):
    return LineageIndex(four_year_herd)
