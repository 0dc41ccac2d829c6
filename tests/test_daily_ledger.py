from dataclasses import FrozenInstanceError

import pytest

from prop_sim.rule_engine import DailyLedger, TradeRecord


def _trades(amounts, start_balance=10000.0):
    balance = start_balance
    records = []
    for number, amount in enumerate(amounts, start=1):
        balance += amount
        records.append(TradeRecord(number, amount > 0, amount, balance))
    return records


def test_day_closes_after_trades_per_day():
    ledger = DailyLedger(max_daily_loss_percent=2, trades_per_day=3, start_balance=10000)
    trades = _trades([100, 100, 100, 100])

    assert ledger.record(trades[0]) is None
    assert ledger.record(trades[1]) is None
    closed = ledger.record(trades[2])

    assert closed is not None
    assert closed.day == 1
    assert closed.trade_count == 3
    assert closed.start_balance == 10000
    assert closed.end_balance == 10300
    assert closed.daily_pnl == 300
    assert closed.daily_pnl_percent == pytest.approx(3.0)
    assert ledger.current_day == 2
    assert ledger.day_start_balance == 10300

    ledger.record(trades[3])
    assert ledger.daily_pnl == 100


def test_daily_loss_breach_forces_early_close():
    ledger = DailyLedger(max_daily_loss_percent=2, trades_per_day=5, start_balance=10000)
    trades = _trades([-100, -100, -100])

    assert ledger.record(trades[0]) is None
    # exactly at the limit is not a breach
    assert ledger.record(trades[1]) is None
    closed = ledger.record(trades[2])

    assert closed is not None
    assert closed.daily_loss_breach is True
    assert closed.trade_count == 3
    assert ledger.daily_loss_breaches == 1
    assert ledger.consecutive_loss_days == 1
    assert ledger.max_consecutive_loss_days == 1


def test_consecutive_loss_days_reset_on_green_day():
    ledger = DailyLedger(max_daily_loss_percent=50, trades_per_day=1, start_balance=10000)
    for trade in _trades([-100, -100, 200, -100]):
        ledger.record(trade)

    assert [log.daily_pnl for log in ledger.day_logs] == [-100, -100, 200, -100]
    assert ledger.max_consecutive_loss_days == 2
    assert ledger.consecutive_loss_days == 1
    assert ledger.daily_loss_breaches == 0


def test_flush_closes_partial_day_only_when_trades_exist():
    ledger = DailyLedger(max_daily_loss_percent=2, trades_per_day=5, start_balance=10000)
    assert ledger.flush() is None

    ledger.record(_trades([150])[0], allowed_minimum=9000.0)
    closed = ledger.flush()
    assert closed is not None
    assert closed.trade_count == 1
    assert closed.allowed_minimum == 9000.0
    assert ledger.flush() is None
    assert len(ledger.day_logs) == 1


def test_drawdown_breach_marks_day_and_breach_day():
    ledger = DailyLedger(max_daily_loss_percent=50, trades_per_day=2, start_balance=10000)
    trades = _trades([100, 100, -300])
    ledger.record(trades[0])
    ledger.record(trades[1])
    ledger.record(trades[2], allowed_minimum=9900.0, drawdown_breach=True)
    ledger.flush()

    assert ledger.day_logs[0].drawdown_breach is False
    assert ledger.day_logs[1].drawdown_breach is True
    assert ledger.breach_day() is ledger.day_logs[1]


def test_zero_start_balance_counts_as_no_loss():
    assert DailyLedger.daily_loss_percent(-50, 0) == 0.0
    ledger = DailyLedger(max_daily_loss_percent=1, trades_per_day=5, start_balance=0)
    assert ledger.record(TradeRecord(1, False, -50, -50)) is None
    assert ledger.flush().daily_pnl_percent == 0.0


def test_closed_day_log_is_frozen():
    ledger = DailyLedger(max_daily_loss_percent=2, trades_per_day=1, start_balance=10000)
    closed = ledger.record(_trades([100])[0])
    with pytest.raises(FrozenInstanceError):
        closed.end_balance = 0
    assert isinstance(closed.trades, tuple)
