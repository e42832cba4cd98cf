"""
Prop firm rule values.

Profit targets and drawdown limits are entered either as a percentage of
initial capital or as a fixed currency amount. Both resolve to an amount.
"""

from engine.trade import ValueType


def resolve_value(value: float, value_type: ValueType, initial_capital: float) -> float:
    """Return the rule as a currency amount."""
    if value_type == ValueType.FIXED:
        return value
    return initial_capital * (value / 100)


def profit_target_amount(account) -> float:
    return resolve_value(account.profit_target, account.profit_target_type,
                         account.initial_capital)


def drawdown_limit_amount(account) -> float:
    return resolve_value(account.drawdown_value, account.drawdown_value_type,
                         account.initial_capital)


def progress_pct(amount: float, limit: float) -> float:
    """Progress of `amount` toward `limit`, clamped to [0, 100]. 0 when no limit."""
    if limit <= 0:
        return 0.0
    return max(0.0, min(amount / limit * 100, 100.0))
