"""Repeated independent runs for prop-firm failure rates."""

from __future__ import annotations

import random
import threading
from collections import deque
from concurrent.futures import ProcessPoolExecutor
from typing import Optional

from prop_sim.monitoring.audit import AuditLog
from prop_sim.monitoring.monitor import Monitor
from prop_sim.rule_engine.models import ParameterSet
from prop_sim.simulator.engine import simulate
from prop_sim.simulator.models import BatchResult


def run_seeds(runs: int, seed: Optional[int] = None) -> list[int]:
    """Derive one independent seed per run from a single master seed."""
    master = random.Random(seed)
    return [master.getrandbits(64) for _ in range(runs)]


def summarize(requested: int, completed: int, failures: int, cancelled: bool = False) -> BatchResult:
    fail_rate = failures / completed * 100 if completed > 0 else 0.0
    return BatchResult(
        requested_runs=requested,
        simulation_runs=completed,
        failure_count=failures,
        fail_rate_percent=fail_rate,
        cancelled=cancelled,
    )


class BatchRunner:
    """Runs ``params.simulation_runs`` fresh simulations and counts blown accounts.

    Each run gets its own ``random.Random`` seeded from a master seed drawn up
    front, so the outcome does not depend on ``max_workers``. Only the
    blown/not-blown flag of each run is kept.
    """

    def __init__(
        self,
        max_workers: int = 1,
        monitor: Optional[Monitor] = None,
        audit_log: Optional[AuditLog] = None,
    ) -> None:
        self.max_workers = max(1, max_workers)
        self.monitor = monitor
        self._audit_log = audit_log

    def _log(self, event: str, payload: dict) -> None:
        if self._audit_log is None:
            return
        self._audit_log.log(event, payload)

    @staticmethod
    def _run_one(
        params: ParameterSet,
        seed: int,
        cancel_event: Optional[threading.Event],
    ) -> Optional[bool]:
        if cancel_event is not None and cancel_event.is_set():
            return None
        return simulate(params, random.Random(seed)).is_account_blown

    def _run_pooled(
        self,
        params: ParameterSet,
        seeds: list[int],
        cancel_event: Optional[threading.Event],
    ) -> list[bool]:
        """Spread runs over worker processes, submitting a bounded window at a time.

        The event cannot cross a process boundary, so it is checked here before
        each submission. Runs already in flight finish and are kept, which keeps
        the completed runs a prefix of ``seeds``.
        """
        outcomes: list[bool] = []
        window = self.max_workers * 2
        pending = deque()
        with ProcessPoolExecutor(max_workers=self.max_workers) as executor:
            for run_seed in seeds:
                if cancel_event is not None and cancel_event.is_set():
                    break
                if len(pending) >= window:
                    outcomes.append(pending.popleft().result())
                pending.append(executor.submit(BatchRunner._run_one, params, run_seed, None))
            while pending:
                outcomes.append(pending.popleft().result())
        return outcomes

    def run(
        self,
        params: ParameterSet,
        seed: Optional[int] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> BatchResult:
        requested = params.simulation_runs
        seeds = run_seeds(requested, seed)
        self._log(
            "batch_start",
            {"runs": requested, "seed": seed, "max_workers": self.max_workers},
        )

        if self.max_workers == 1:
            outcomes = []
            for run_seed in seeds:
                blown = self._run_one(params, run_seed, cancel_event)
                if blown is None:
                    break
                outcomes.append(blown)
        else:
            outcomes = self._run_pooled(params, seeds, cancel_event)

        completed = len(outcomes)
        failures = sum(1 for blown in outcomes if blown)
        cancelled = completed < requested
        result = summarize(requested, completed, failures, cancelled)

        self._log(
            "batch_complete",
            {
                "requested_runs": result.requested_runs,
                "simulation_runs": result.simulation_runs,
                "failure_count": result.failure_count,
                "fail_rate_percent": result.fail_rate_percent,
                "cancelled": result.cancelled,
            },
        )
        if self.monitor is not None:
            if cancelled:
                self.monitor.batch_cancelled(completed, requested)
            self.monitor.batch_complete(completed, failures, result.fail_rate_percent)
        return result
