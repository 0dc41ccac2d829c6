"""Single-run prop-firm account simulator."""

from __future__ import annotations

import random
from typing import Iterable, Optional

from prop_sim.rule_engine.ledger import DailyLedger
from prop_sim.rule_engine.models import ParameterSet, TradeRecord
from prop_sim.rule_engine.policy import build_policy
from prop_sim.simulator.aggregator import RunTally, aggregate
from prop_sim.simulator.models import SimulationResult
from prop_sim.simulator.sampler import OutcomeSampler


def simulate(
    params: ParameterSet,
    rng: Optional[random.Random] = None,
    outcomes: Optional[Iterable[bool]] = None,
) -> SimulationResult:
    """Run one account through ``params.number_of_trades`` trade slots.

    ``params`` is expected to be validated already. ``outcomes`` replaces the
    random sampler with a fixed win/loss sequence; the run ends early if that
    sequence runs out. In prop-firm mode a blown account skips its remaining
    slots, so ``actual_trades_taken`` can be lower than the horizon.
    """
    if outcomes is None:
        outcomes = OutcomeSampler(params.win_rate, rng)
    stream = iter(outcomes)

    initial_balance = params.account_size
    risk_amount = params.fixed_risk_amount()
    win_amount = risk_amount * params.risk_reward_ratio()
    tally = RunTally.start(initial_balance)

    policy = None
    ledger = None
    allowed_minimum = None
    if params.is_prop_firm:
        policy = build_policy(params)
        allowed_minimum = policy.initial_floor(initial_balance)
        ledger = DailyLedger(
            max_daily_loss_percent=params.max_daily_loss_percent,
            trades_per_day=params.trades_per_day,
            start_balance=initial_balance,
        )

    for index in range(params.number_of_trades):
        if params.is_prop_firm and tally.is_account_blown:
            continue

        is_win = next(stream, None)
        if is_win is None:
            break
        tally.actual_trades_taken += 1

        previous_balance = tally.balance
        if is_win:
            amount = win_amount
            tally.gross_profit += amount
            tally.win_count += 1
        else:
            amount = -risk_amount
            tally.gross_loss += risk_amount
            tally.loss_count += 1
        tally.balance += amount

        trade = TradeRecord(
            trade_number=tally.actual_trades_taken,
            is_win=bool(is_win),
            amount=amount,
            balance_after=tally.balance,
        )
        tally.equity_curve.append(tally.balance)

        if (
            tally.break_even_trade_index is None
            and previous_balance < initial_balance <= tally.balance
        ):
            tally.break_even_trade_index = index

        if tally.balance > tally.peak_balance:
            tally.peak_balance = tally.balance
            current_drawdown = 0.0
        else:
            current_drawdown = (tally.peak_balance - tally.balance) / tally.peak_balance * 100
            tally.max_drawdown_percent = max(tally.max_drawdown_percent, current_drawdown)
        tally.drawdown_curve.append(current_drawdown)

        if policy is None or ledger is None:
            continue

        allowed_minimum = policy.allowed_minimum(tally.peak_balance, initial_balance, allowed_minimum)
        tally.allowed_minimum_curve.append(allowed_minimum)
        breached = policy.is_breached(tally.balance, allowed_minimum)
        if breached:
            tally.is_account_blown = True
        ledger.record(trade, allowed_minimum=allowed_minimum, drawdown_breach=breached)

    if ledger is not None:
        ledger.flush()

    return aggregate(params, tally, ledger)
