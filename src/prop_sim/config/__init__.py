"""Config loading and freezing."""

from prop_sim.config.loader import (
    compute_config_hash,
    freeze_config,
    load_config,
    serialize_config,
    verify_config_lock,
)
from prop_sim.config.models import BatchConfig, MonitoringConfig, SimConfig

__all__ = [
    "BatchConfig",
    "MonitoringConfig",
    "SimConfig",
    "compute_config_hash",
    "freeze_config",
    "load_config",
    "serialize_config",
    "verify_config_lock",
]
