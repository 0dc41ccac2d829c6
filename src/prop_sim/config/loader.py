"""Load and freeze configuration files."""

from __future__ import annotations

import hashlib
import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import yaml

from prop_sim.config.models import BatchConfig, MonitoringConfig, SimConfig
from prop_sim.rule_engine.models import DrawdownType, ParameterSet, validate_parameters


def load_config(path: str | Path) -> SimConfig:
    path = Path(path)
    data = _load_yaml(path)

    name = _require(data, "name")
    version = str(_require(data, "version"))
    run_id_prefix = data.get("run_id_prefix", name)

    parameters = _parse_parameters(_require(data, "parameters"))
    validate_parameters(parameters)
    batch = _parse_batch(data.get("batch", {}))
    monitoring = _parse_monitoring(data.get("monitoring", {}))

    return SimConfig(
        name=name,
        version=version,
        run_id_prefix=run_id_prefix,
        parameters=parameters,
        batch=batch,
        monitoring=monitoring,
    )


def compute_config_hash(path: str | Path) -> str:
    path = Path(path)
    content = path.read_bytes()
    return hashlib.sha256(content).hexdigest()


def freeze_config(path: str | Path, lock_path: Optional[str | Path] = None) -> Path:
    path = Path(path)
    config_hash = compute_config_hash(path)
    if lock_path is None:
        lock_path = path.with_suffix(path.suffix + ".lock.json")
    lock_path = Path(lock_path)

    payload = {
        "config_path": str(path),
        "config_hash": config_hash,
        "frozen_at_utc": datetime.now(timezone.utc).isoformat(),
    }
    lock_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return lock_path


def verify_config_lock(path: str | Path, lock_path: Optional[str | Path] = None) -> bool:
    path = Path(path)
    if lock_path is None:
        lock_path = path.with_suffix(path.suffix + ".lock.json")
    lock_path = Path(lock_path)
    if not lock_path.exists():
        return False
    payload = json.loads(lock_path.read_text(encoding="utf-8"))
    expected = payload.get("config_hash")
    return expected == compute_config_hash(path)


def _load_yaml(path: Path) -> dict[str, Any]:
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Config must be a mapping")
    return data


def _require(data: dict[str, Any], key: str) -> Any:
    if key not in data:
        raise ValueError(f"Missing required config key: {key}")
    return data[key]


def _parse_parameters(data: dict[str, Any]) -> ParameterSet:
    try:
        drawdown_type = DrawdownType(data.get("drawdown_type", "trailing"))
    except ValueError as exc:
        raise ValueError(f"Invalid drawdown_type: {data.get('drawdown_type')}") from exc

    return ParameterSet(
        avg_win=float(_require(data, "avg_win")),
        avg_loss=float(_require(data, "avg_loss")),
        win_rate=float(_require(data, "win_rate")),
        account_size=float(_require(data, "account_size")),
        number_of_trades=int(_require(data, "number_of_trades")),
        is_prop_firm=bool(data.get("is_prop_firm", False)),
        max_drawdown_percent=float(data.get("max_drawdown_percent", 10.0)),
        max_daily_loss_percent=float(data.get("max_daily_loss_percent", 2.0)),
        trades_per_day=int(data.get("trades_per_day", 5)),
        drawdown_type=drawdown_type,
        fixed_drawdown_limit=float(data.get("fixed_drawdown_limit", 1000.0)),
        simulation_runs=int(data.get("simulation_runs", 1)),
    )


def _parse_batch(data: dict[str, Any]) -> BatchConfig:
    seed = data.get("seed")
    return BatchConfig(
        seed=None if seed is None else int(seed),
        max_workers=int(data.get("max_workers", 1)),
        max_total_trades=int(data.get("max_total_trades", 50_000_000)),
    )


def _parse_monitoring(data: dict[str, Any]) -> MonitoringConfig:
    return MonitoringConfig(
        audit_log_path=str(data.get("audit_log_path", "runtime/audit.log")),
    )


def serialize_config(config: SimConfig) -> dict[str, Any]:
    payload = asdict(config)
    payload["parameters"]["drawdown_type"] = config.parameters.drawdown_type.value
    return payload
