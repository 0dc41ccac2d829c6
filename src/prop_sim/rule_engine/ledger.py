"""Day bucketing and daily loss limit tracking."""

from __future__ import annotations

from typing import Optional

from prop_sim.rule_engine.models import DayLog, TradeRecord


class DailyLedger:
    """Groups executed trades into trading days.

    A day closes after ``trades_per_day`` trades or as soon as its loss
    exceeds ``max_daily_loss_percent`` of the day's start balance. Closed days
    are frozen ``DayLog`` values; only the open day is mutable.
    """

    def __init__(
        self,
        max_daily_loss_percent: float,
        trades_per_day: int,
        start_balance: float,
    ) -> None:
        self.max_daily_loss_percent = max_daily_loss_percent
        self.trades_per_day = trades_per_day
        self.day_logs: list[DayLog] = []
        self.daily_loss_breaches = 0
        self.consecutive_loss_days = 0
        self.max_consecutive_loss_days = 0
        self._open_day(1, start_balance)

    def _open_day(self, day: int, start_balance: float) -> None:
        self._day = day
        self._start_balance = start_balance
        self._balance = start_balance
        self._daily_pnl = 0.0
        self._trades: list[TradeRecord] = []
        self._daily_loss_breach = False
        self._drawdown_breach = False
        self._allowed_minimum: Optional[float] = None

    @property
    def current_day(self) -> int:
        return self._day

    @property
    def daily_pnl(self) -> float:
        return self._daily_pnl

    @property
    def day_start_balance(self) -> float:
        return self._start_balance

    @staticmethod
    def daily_loss_percent(daily_pnl: float, start_balance: float) -> float:
        if daily_pnl >= 0 or start_balance == 0:
            return 0.0
        return abs(daily_pnl) / start_balance * 100

    def record(
        self,
        trade: TradeRecord,
        allowed_minimum: Optional[float] = None,
        drawdown_breach: bool = False,
    ) -> Optional[DayLog]:
        """Add a trade to the open day, returning the day's log if it closed."""
        self._trades.append(trade)
        self._daily_pnl += trade.amount
        self._balance = trade.balance_after
        if allowed_minimum is not None:
            self._allowed_minimum = allowed_minimum
        if drawdown_breach:
            self._drawdown_breach = True

        loss_pct = self.daily_loss_percent(self._daily_pnl, self._start_balance)
        if loss_pct > self.max_daily_loss_percent:
            self.daily_loss_breaches += 1
            self._daily_loss_breach = True
            return self._close_day()

        if len(self._trades) >= self.trades_per_day:
            return self._close_day()
        return None

    def flush(self) -> Optional[DayLog]:
        if not self._trades:
            return None
        return self._close_day()

    def _close_day(self) -> DayLog:
        if self._daily_pnl < 0:
            self.consecutive_loss_days += 1
            self.max_consecutive_loss_days = max(
                self.max_consecutive_loss_days, self.consecutive_loss_days
            )
        else:
            self.consecutive_loss_days = 0

        if self._start_balance == 0:
            pnl_pct = 0.0
        else:
            pnl_pct = self._daily_pnl / self._start_balance * 100

        log = DayLog(
            day=self._day,
            trades=tuple(self._trades),
            start_balance=self._start_balance,
            end_balance=self._balance,
            daily_pnl=self._daily_pnl,
            daily_pnl_percent=pnl_pct,
            daily_loss_breach=self._daily_loss_breach,
            drawdown_breach=self._drawdown_breach,
            allowed_minimum=self._allowed_minimum,
        )
        self.day_logs.append(log)
        self._open_day(self._day + 1, self._balance)
        return log

    def breach_day(self) -> Optional[DayLog]:
        return next((log for log in self.day_logs if log.drawdown_breach), None)
