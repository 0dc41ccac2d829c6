"""Prop-firm account survival simulator."""

from prop_sim.rule_engine import DrawdownType, ParameterSet, ValidationError
from prop_sim.simulator import BatchResult, SimulationResult, run, simulate

__all__ = [
    "BatchResult",
    "DrawdownType",
    "ParameterSet",
    "SimulationResult",
    "ValidationError",
    "run",
    "simulate",
]
