"""Simulation helpers."""

from prop_sim.simulator.aggregator import (
    RunTally,
    aggregate,
    expectancy,
    normalize_curve,
    risk_percentage,
    risk_reward_ratio,
)
from prop_sim.simulator.batch import BatchRunner, run_seeds, summarize
from prop_sim.simulator.engine import simulate
from prop_sim.simulator.models import BatchResult, PropFirmStats, SimulationResult
from prop_sim.simulator.runner import DEFAULT_MAX_TOTAL_TRADES, check_workload, run
from prop_sim.simulator.sampler import OutcomeSampler

__all__ = [
    "BatchResult",
    "BatchRunner",
    "DEFAULT_MAX_TOTAL_TRADES",
    "OutcomeSampler",
    "PropFirmStats",
    "RunTally",
    "SimulationResult",
    "aggregate",
    "check_workload",
    "expectancy",
    "normalize_curve",
    "risk_percentage",
    "risk_reward_ratio",
    "run",
    "run_seeds",
    "simulate",
    "summarize",
]
