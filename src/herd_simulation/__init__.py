from src.herd_simulation.herd_generator import HerdGenerator, InvalidArgumentError
from src.herd_simulation.lineage import LineageIndex
from src.herd_simulation.models import (
    Animal,
    RevenueConfig,
    RevenuePhase,
    RevenueSummary,
    SimulationResult,
    YearlyRevenue,
)
from src.herd_simulation.revenue_model import RevenueAccrualModel

__all__ = [
    "Animal",
    "HerdGenerator",
    "InvalidArgumentError",
    "LineageIndex",
    "RevenueAccrualModel",
    "RevenueConfig",
    "RevenuePhase",
    "RevenueSummary",
    "SimulationResult",
    "YearlyRevenue",
]
