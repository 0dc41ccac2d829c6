"""Drawdown floors for the three prop-firm drawdown rules."""

from __future__ import annotations

from abc import ABC, abstractmethod

from prop_sim.rule_engine.models import DrawdownType, ParameterSet


class DrawdownPolicy(ABC):
    drawdown_type: DrawdownType

    def initial_floor(self, initial_balance: float) -> float:
        return self.allowed_minimum(initial_balance, initial_balance, None)

    @abstractmethod
    def allowed_minimum(
        self,
        peak_balance: float,
        initial_balance: float,
        prior_allowed_minimum: float | None = None,
    ) -> float:
        raise NotImplementedError

    @staticmethod
    def is_breached(balance: float, allowed_minimum: float) -> bool:
        return balance < allowed_minimum


class FixedDrawdown(DrawdownPolicy):
    drawdown_type = DrawdownType.FIXED

    def __init__(self, fixed_drawdown_limit: float) -> None:
        self.fixed_drawdown_limit = fixed_drawdown_limit

    def allowed_minimum(
        self,
        peak_balance: float,
        initial_balance: float,
        prior_allowed_minimum: float | None = None,
    ) -> float:
        return initial_balance - self.fixed_drawdown_limit


class TrailingDrawdown(DrawdownPolicy):
    drawdown_type = DrawdownType.TRAILING

    def __init__(self, max_drawdown_percent: float) -> None:
        self.max_drawdown_percent = max_drawdown_percent

    def allowed_minimum(
        self,
        peak_balance: float,
        initial_balance: float,
        prior_allowed_minimum: float | None = None,
    ) -> float:
        return peak_balance * (1 - self.max_drawdown_percent / 100)


class TrailingUntilInitialDrawdown(DrawdownPolicy):
    """Fixed loss from the initial balance that trails the peak once it can rise.

    The floor never drops: each candidate is capped at the initial balance and
    only replaces the prior floor when it is higher.
    """

    drawdown_type = DrawdownType.TRAILING_UNTIL_INITIAL

    def __init__(self, max_drawdown_percent: float) -> None:
        self.max_drawdown_percent = max_drawdown_percent

    def fixed_loss(self, initial_balance: float) -> float:
        return initial_balance * self.max_drawdown_percent / 100

    def initial_floor(self, initial_balance: float) -> float:
        return initial_balance - self.fixed_loss(initial_balance)

    def allowed_minimum(
        self,
        peak_balance: float,
        initial_balance: float,
        prior_allowed_minimum: float | None = None,
    ) -> float:
        if prior_allowed_minimum is None:
            prior_allowed_minimum = self.initial_floor(initial_balance)
        candidate = min(peak_balance - self.fixed_loss(initial_balance), initial_balance)
        return max(prior_allowed_minimum, candidate)


def build_policy(params: ParameterSet) -> DrawdownPolicy:
    if params.drawdown_type == DrawdownType.FIXED:
        return FixedDrawdown(params.fixed_drawdown_limit)
    if params.drawdown_type == DrawdownType.TRAILING_UNTIL_INITIAL:
        return TrailingUntilInitialDrawdown(params.max_drawdown_percent)
    if params.drawdown_type == DrawdownType.TRAILING:
        return TrailingDrawdown(params.max_drawdown_percent)
    raise ValueError(f"Unknown drawdown type: {params.drawdown_type}")
