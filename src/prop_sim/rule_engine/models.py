"""Data models for prop-firm rule evaluation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ValidationError(ValueError):
    """Raised when a parameter set cannot be simulated."""


class DrawdownType(str, Enum):
    TRAILING = "trailing"
    TRAILING_UNTIL_INITIAL = "trailingUntilInitial"
    FIXED = "fixed"

    @property
    def is_trailing(self) -> bool:
        return self in {DrawdownType.TRAILING, DrawdownType.TRAILING_UNTIL_INITIAL}


@dataclass(frozen=True)
class ParameterSet:
    avg_win: float = 200.0
    avg_loss: float = 100.0
    win_rate: float = 50.0
    account_size: float = 10000.0
    number_of_trades: int = 100
    is_prop_firm: bool = False
    max_drawdown_percent: float = 10.0
    max_daily_loss_percent: float = 2.0
    trades_per_day: int = 5
    drawdown_type: DrawdownType = DrawdownType.TRAILING
    fixed_drawdown_limit: float = 1000.0
    simulation_runs: int = 1

    def risk_reward_ratio(self) -> float:
        return self.avg_win / self.avg_loss

    def risk_percentage(self) -> float:
        return self.avg_loss / self.account_size * 100

    def fixed_risk_amount(self) -> float:
        # Non-compounding: risk is sized off the initial account, i.e. avg_loss.
        return self.account_size * (self.avg_loss / self.account_size)

    def is_batch(self) -> bool:
        return self.is_prop_firm and self.simulation_runs > 1

    def validate(self) -> "ParameterSet":
        validate_parameters(self)
        return self


@dataclass(frozen=True)
class TradeRecord:
    trade_number: int
    is_win: bool
    amount: float
    balance_after: float


@dataclass(frozen=True)
class DayLog:
    day: int
    trades: tuple[TradeRecord, ...]
    start_balance: float
    end_balance: float
    daily_pnl: float
    daily_pnl_percent: float
    daily_loss_breach: bool = False
    drawdown_breach: bool = False
    allowed_minimum: Optional[float] = None

    @property
    def trade_count(self) -> int:
        return len(self.trades)


def _is_positive(value: float) -> bool:
    return math.isfinite(value) and value > 0


def _is_positive_int(value: float) -> bool:
    return _is_positive(value) and int(value) == value


def validate_parameters(params: ParameterSet) -> None:
    """Reject parameter sets the engine cannot simulate.

    Checks run in a fixed order and the first failure is raised, so the
    message always names a single offending field. NaN and infinite values
    fail every numeric check.
    """
    if not _is_positive(params.avg_win):
        raise ValidationError(f"avg_win must be positive, got {params.avg_win}")
    if not _is_positive(params.avg_loss):
        raise ValidationError(f"avg_loss must be positive, got {params.avg_loss}")
    if not 0 < params.win_rate < 100:
        raise ValidationError(f"win_rate must be between 0 and 100 exclusive, got {params.win_rate}")
    if not _is_positive(params.account_size):
        raise ValidationError(f"account_size must be positive, got {params.account_size}")
    if not _is_positive_int(params.number_of_trades):
        raise ValidationError(f"number_of_trades must be a positive integer, got {params.number_of_trades}")
    if not _is_positive_int(params.simulation_runs):
        raise ValidationError(f"simulation_runs must be at least 1, got {params.simulation_runs}")
    if not isinstance(params.drawdown_type, DrawdownType):
        raise ValidationError(f"Invalid drawdown_type: {params.drawdown_type}")

    if not params.is_prop_firm:
        return

    if not _is_positive_int(params.trades_per_day):
        raise ValidationError(f"trades_per_day must be a positive integer, got {params.trades_per_day}")
    if not _is_positive(params.max_daily_loss_percent):
        raise ValidationError(
            f"max_daily_loss_percent must be positive, got {params.max_daily_loss_percent}"
        )
    if params.drawdown_type == DrawdownType.FIXED:
        if not _is_positive(params.fixed_drawdown_limit):
            raise ValidationError(
                f"fixed_drawdown_limit must be positive, got {params.fixed_drawdown_limit}"
            )
    elif not 0 < params.max_drawdown_percent <= 100:
        raise ValidationError(
            f"max_drawdown_percent must be in (0, 100], got {params.max_drawdown_percent}"
        )
