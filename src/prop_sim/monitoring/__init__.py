"""Monitoring exports."""

from prop_sim.monitoring.audit import AuditLog
from prop_sim.monitoring.monitor import Monitor
from prop_sim.monitoring.notifier import LogNotifier, MemoryNotifier, Notifier

__all__ = [
    "AuditLog",
    "LogNotifier",
    "MemoryNotifier",
    "Monitor",
    "Notifier",
]
