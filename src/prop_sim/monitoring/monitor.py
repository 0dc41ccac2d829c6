"""Monitoring and alert routing."""

from __future__ import annotations

from dataclasses import dataclass

from prop_sim.monitoring.notifier import Notifier


@dataclass
class Monitor:
    notifier: Notifier

    def account_blown(self, run_index: int, trades_taken: int) -> None:
        self.notifier.notify("ACCOUNT_BLOWN", f"run {run_index} blown after {trades_taken} trades")

    def batch_complete(self, completed: int, failures: int, fail_rate_percent: float) -> None:
        self.notifier.notify(
            "BATCH_COMPLETE",
            f"{completed} runs, {failures} failed ({fail_rate_percent:.2f}%)",
        )

    def batch_cancelled(self, completed: int, requested: int) -> None:
        self.notifier.notify("BATCH_CANCELLED", f"stopped after {completed} of {requested} runs")
