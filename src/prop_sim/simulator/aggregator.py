"""Summary statistics for a single simulation run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from prop_sim.rule_engine.ledger import DailyLedger
from prop_sim.rule_engine.models import DrawdownType, ParameterSet
from prop_sim.simulator.models import PropFirmStats, SimulationResult


@dataclass
class RunTally:
    """Working state of one run, owned by a single ``simulate`` call."""

    balance: float
    peak_balance: float
    equity_curve: list[float]
    drawdown_curve: list[float] = field(default_factory=list)
    allowed_minimum_curve: list[float] = field(default_factory=list)
    gross_profit: float = 0.0
    gross_loss: float = 0.0
    win_count: int = 0
    loss_count: int = 0
    max_drawdown_percent: float = 0.0
    break_even_trade_index: Optional[int] = None
    actual_trades_taken: int = 0
    is_account_blown: bool = False

    @classmethod
    def start(cls, initial_balance: float) -> "RunTally":
        return cls(
            balance=initial_balance,
            peak_balance=initial_balance,
            equity_curve=[initial_balance],
        )


def risk_reward_ratio(avg_win: float, avg_loss: float) -> float:
    return avg_win / avg_loss


def risk_percentage(avg_loss: float, account_size: float) -> float:
    return avg_loss / account_size * 100


def expectancy(win_rate: float, avg_win: float, avg_loss: float) -> float:
    prob_win = win_rate / 100
    return prob_win * avg_win - (1 - prob_win) * avg_loss


def normalize_curve(values: Sequence[float]) -> list[float]:
    """Scale a curve to [0, 1] for plotting; a flat curve maps to zeros."""
    if not values:
        return []
    low = min(values)
    high = max(values)
    span = high - low
    if span == 0:
        span = 1
    return [(value - low) / span for value in values]


def aggregate(
    params: ParameterSet,
    tally: RunTally,
    ledger: Optional[DailyLedger] = None,
) -> SimulationResult:
    account_size = params.account_size
    if tally.actual_trades_taken > 0:
        average_trade_amount = (tally.gross_profit - tally.gross_loss) / tally.actual_trades_taken
    else:
        average_trade_amount = 0.0

    prop_firm_stats = None
    if params.is_prop_firm and ledger is not None:
        prop_firm_stats = _prop_firm_stats(params, tally, ledger)

    return SimulationResult(
        final_balance=tally.balance,
        max_drawdown_percent=tally.max_drawdown_percent,
        expectancy=expectancy(params.win_rate, params.avg_win, params.avg_loss),
        risk_reward_ratio=risk_reward_ratio(params.avg_win, params.avg_loss),
        risk_percentage=risk_percentage(params.avg_loss, account_size),
        average_trade_amount=average_trade_amount,
        average_trade_percent=average_trade_amount / account_size * 100,
        total_return_percent=(tally.balance - account_size) / account_size * 100,
        net_profit=tally.balance - account_size,
        equity_curve=tally.equity_curve,
        drawdown_curve=tally.drawdown_curve,
        win_count=tally.win_count,
        loss_count=tally.loss_count,
        fixed_risk_amount=params.fixed_risk_amount(),
        break_even_trade_index=tally.break_even_trade_index,
        actual_trades_taken=tally.actual_trades_taken,
        is_account_blown=tally.is_account_blown,
        prop_firm_stats=prop_firm_stats,
    )


def _prop_firm_stats(params: ParameterSet, tally: RunTally, ledger: DailyLedger) -> PropFirmStats:
    day_logs = list(ledger.day_logs)
    day_count = len(day_logs)
    average_trades_per_day = tally.actual_trades_taken / day_count if day_count > 0 else 0.0
    fixed_limit = None
    if params.drawdown_type == DrawdownType.FIXED:
        fixed_limit = params.fixed_drawdown_limit
    return PropFirmStats(
        max_daily_loss_percent=params.max_daily_loss_percent,
        trades_per_day_target=params.trades_per_day,
        daily_loss_breaches=ledger.daily_loss_breaches,
        max_consecutive_loss_days=ledger.max_consecutive_loss_days,
        actual_trade_count=tally.actual_trades_taken,
        day_count=day_count,
        average_trades_per_day=average_trades_per_day,
        day_logs=day_logs,
        breach_day=ledger.breach_day(),
        drawdown_type=params.drawdown_type,
        fixed_drawdown_limit=fixed_limit,
        allowed_minimum_curve=list(tally.allowed_minimum_curve),
    )
