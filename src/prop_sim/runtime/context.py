"""Run identity for simulation reports and audit records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from prop_sim.config.loader import compute_config_hash
from prop_sim.rule_engine.models import DrawdownType, ParameterSet


@dataclass(frozen=True)
class RunContext:
    run_id: str
    config_path: Path
    config_hash: str
    started_at: datetime
    drawdown_type: Optional[DrawdownType]
    requested_runs: int
    is_batch: bool
    seed: Optional[int] = None

    def describe(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "config_path": str(self.config_path),
            "drawdown_type": self.drawdown_type.value if self.drawdown_type else None,
            "requested_runs": self.requested_runs,
            "mode": "batch" if self.is_batch else "single",
            "seed": self.seed,
        }


def create_run_context(
    config_path: str | Path,
    run_id_prefix: str,
    parameters: ParameterSet,
    seed: Optional[int] = None,
    run_id: Optional[str] = None,
) -> RunContext:
    """Tag a run with its config hash and the rule set it is judged against.

    Prop-firm runs carry the drawdown rule in the run id so audit logs from
    different rules stay distinguishable; plain runs are tagged ``free``.
    """
    path = Path(config_path)
    config_hash = compute_config_hash(path)
    started_at = datetime.now(timezone.utc)
    drawdown_type = parameters.drawdown_type if parameters.is_prop_firm else None
    requested_runs = parameters.simulation_runs if parameters.is_batch() else 1
    if run_id is None:
        rule = drawdown_type.value if drawdown_type else "free"
        stamp = started_at.strftime("%Y%m%dT%H%M%SZ")
        run_id = f"{run_id_prefix}-{rule}-x{requested_runs}-{stamp}-{config_hash[:8]}"
    return RunContext(
        run_id=run_id,
        config_path=path,
        config_hash=config_hash,
        started_at=started_at,
        drawdown_type=drawdown_type,
        requested_runs=requested_runs,
        is_batch=parameters.is_batch(),
        seed=seed,
    )
