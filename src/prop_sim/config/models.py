"""Configuration models for reproducible runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from prop_sim.rule_engine.models import ParameterSet


@dataclass(frozen=True)
class BatchConfig:
    seed: Optional[int] = None
    max_workers: int = 1
    max_total_trades: int = 50_000_000


@dataclass(frozen=True)
class MonitoringConfig:
    audit_log_path: str = "runtime/audit.log"


@dataclass(frozen=True)
class SimConfig:
    name: str
    version: str
    run_id_prefix: str
    parameters: ParameterSet
    batch: BatchConfig = field(default_factory=BatchConfig)
    monitoring: MonitoringConfig = field(default_factory=MonitoringConfig)
