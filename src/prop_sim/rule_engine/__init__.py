"""Rule engine enforcing prop-firm drawdown and daily loss constraints."""

from prop_sim.rule_engine.ledger import DailyLedger
from prop_sim.rule_engine.models import (
    DayLog,
    DrawdownType,
    ParameterSet,
    TradeRecord,
    ValidationError,
    validate_parameters,
)
from prop_sim.rule_engine.policy import (
    DrawdownPolicy,
    FixedDrawdown,
    TrailingDrawdown,
    TrailingUntilInitialDrawdown,
    build_policy,
)

__all__ = [
    "DailyLedger",
    "DayLog",
    "DrawdownPolicy",
    "DrawdownType",
    "FixedDrawdown",
    "ParameterSet",
    "TradeRecord",
    "TrailingDrawdown",
    "TrailingUntilInitialDrawdown",
    "ValidationError",
    "build_policy",
    "validate_parameters",
]
