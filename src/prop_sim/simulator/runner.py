"""Entry point choosing between a single run and a batch."""

from __future__ import annotations

import random
import threading
from typing import Optional, Union

from prop_sim.monitoring.audit import AuditLog
from prop_sim.monitoring.monitor import Monitor
from prop_sim.rule_engine.models import ParameterSet, ValidationError, validate_parameters
from prop_sim.simulator.batch import BatchRunner
from prop_sim.simulator.engine import simulate
from prop_sim.simulator.models import BatchResult, SimulationResult

DEFAULT_MAX_TOTAL_TRADES = 50_000_000


def check_workload(params: ParameterSet, max_total_trades: int = DEFAULT_MAX_TOTAL_TRADES) -> None:
    runs = params.simulation_runs if params.is_batch() else 1
    total = runs * params.number_of_trades
    if max_total_trades > 0 and total > max_total_trades:
        raise ValidationError(
            f"Workload of {total} trades exceeds limit of {max_total_trades}"
        )


def run(
    params: ParameterSet,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    max_workers: int = 1,
    max_total_trades: int = DEFAULT_MAX_TOTAL_TRADES,
    cancel_event: Optional[threading.Event] = None,
    monitor: Optional[Monitor] = None,
    audit_log: Optional[AuditLog] = None,
) -> Union[SimulationResult, BatchResult]:
    """Validate ``params`` and simulate.

    Returns a ``BatchResult`` when prop-firm rules apply and more than one run
    was requested, otherwise a single ``SimulationResult``. ``rng`` takes
    precedence over ``seed`` for a single run and is ignored for batches.
    """
    validate_parameters(params)
    check_workload(params, max_total_trades)

    if params.is_batch():
        runner = BatchRunner(max_workers=max_workers, monitor=monitor, audit_log=audit_log)
        return runner.run(params, seed=seed, cancel_event=cancel_event)

    if rng is None:
        rng = random.Random(seed)
    result = simulate(params, rng)
    if audit_log is not None:
        audit_log.log(
            "simulation_complete",
            {
                "final_balance": result.final_balance,
                "actual_trades_taken": result.actual_trades_taken,
                "is_account_blown": result.is_account_blown,
                "seed": seed,
            },
        )
    if monitor is not None and result.is_account_blown:
        monitor.account_blown(1, result.actual_trades_taken)
    return result
