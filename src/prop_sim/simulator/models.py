"""Simulation data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from prop_sim.rule_engine.models import DayLog, DrawdownType


@dataclass(frozen=True)
class PropFirmStats:
    max_daily_loss_percent: float
    trades_per_day_target: int
    daily_loss_breaches: int
    max_consecutive_loss_days: int
    actual_trade_count: int
    day_count: int
    average_trades_per_day: float
    day_logs: list[DayLog]
    breach_day: Optional[DayLog]
    drawdown_type: DrawdownType
    fixed_drawdown_limit: Optional[float]
    allowed_minimum_curve: list[float] = field(default_factory=list)


@dataclass(frozen=True)
class SimulationResult:
    final_balance: float
    max_drawdown_percent: float
    expectancy: float
    risk_reward_ratio: float
    risk_percentage: float
    average_trade_amount: float
    average_trade_percent: float
    total_return_percent: float
    net_profit: float
    equity_curve: list[float]
    drawdown_curve: list[float]
    win_count: int
    loss_count: int
    fixed_risk_amount: float
    break_even_trade_index: Optional[int]
    actual_trades_taken: int
    is_account_blown: bool
    prop_firm_stats: Optional[PropFirmStats] = None


@dataclass(frozen=True)
class BatchResult:
    requested_runs: int
    simulation_runs: int
    failure_count: int
    fail_rate_percent: float
    cancelled: bool = False

    @property
    def pass_count(self) -> int:
        return self.simulation_runs - self.failure_count

    @property
    def pass_rate_percent(self) -> float:
        if self.simulation_runs == 0:
            return 0.0
        return 100.0 - self.fail_rate_percent
