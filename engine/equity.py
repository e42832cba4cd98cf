"""
Equity curve tracking.
Replays trades and withdrawals into a running balance for drawdown analysis
and charting, with an optional trailing drawdown threshold line.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence, Union

from config.constants import INITIAL_POINT_LABEL
from engine.trade import Account, Trade, Withdrawal, event_time
from prop.rules import drawdown_limit_amount

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EquityDataPoint:
    date: Union[datetime, str]         # INITIAL_POINT_LABEL for the first point
    equity: float
    trailing_drawdown: Optional[float] = None

    def to_dict(self) -> dict:
        point = {
            'date': self.date.isoformat() if isinstance(self.date, datetime) else self.date,
            'equity': self.equity,
        }
        if self.trailing_drawdown is not None:
            point['trailingDrawdown'] = self.trailing_drawdown
        return point


@dataclass(frozen=True)
class ProfitPoint:
    date: Union[datetime, str]
    profit: float


def build_equity_curve(
    trades: Sequence[Trade],
    initial_capital: float,
    account: Optional[Account] = None,
    withdrawals: Optional[Sequence[Withdrawal]] = None,
) -> List[EquityDataPoint]:
    """
    Build the equity curve from trades and withdrawals.

    Events are ordered by date with a stable sort. Events sharing a
    timestamp keep input order, trades before withdrawals.

    The high water mark only rises: a withdrawal lowers equity but never the
    mark, so the trailing line stays where the best balance put it.

    Args:
        trades: Trades to replay (+result each).
        initial_capital: Starting balance.
        account: When it uses trailing drawdown, every point also carries
            the trailing threshold (high water mark - limit).
        withdrawals: Withdrawals to replay (-amount each).

    Returns:
        Sentinel point followed by one point per event.
    """
    events = [(t.date, t.result) for t in trades]
    events += [(w.date, -w.amount) for w in (withdrawals or [])]
    events.sort(key=lambda e: event_time(e[0]))

    trailing_limit = None
    if account is not None and account.has_trailing_drawdown:
        trailing_limit = drawdown_limit_amount(account)
        logger.debug("Trailing overlay for account %s: limit %.2f", account.id, trailing_limit)

    curve = [EquityDataPoint(
        date=INITIAL_POINT_LABEL,
        equity=initial_capital,
        trailing_drawdown=initial_capital - trailing_limit if trailing_limit is not None else None,
    )]

    balance = initial_capital
    high_water_mark = initial_capital
    for date, delta in events:
        balance += delta
        high_water_mark = max(high_water_mark, balance)
        curve.append(EquityDataPoint(
            date=date,
            equity=balance,
            trailing_drawdown=high_water_mark - trailing_limit if trailing_limit is not None else None,
        ))

    return curve


def max_drawdown_percent(curve: Sequence[EquityDataPoint]) -> float:
    """Largest peak-to-trough decline in percent of the peak."""
    if len(curve) < 2:
        return 0.0

    peak = float('-inf')
    max_dd = 0.0
    for point in curve:
        if point.equity > peak:
            peak = point.equity
        # Underwater peaks have no meaningful percentage
        if peak > 0:
            dd = (peak - point.equity) / peak * 100
            if dd > max_dd:
                max_dd = dd
    return max_dd


def build_profit_curve(trades: Sequence[Trade]) -> List[ProfitPoint]:
    """Cumulative realized profit, in the order the trades are given."""
    curve = [ProfitPoint(date=INITIAL_POINT_LABEL, profit=0.0)]
    cumulative = 0.0
    for t in trades:
        cumulative += t.result
        curve.append(ProfitPoint(date=t.date, profit=cumulative))
    return curve


def equity_curve_frame(curve: Sequence[EquityDataPoint]):
    """Convert to a pandas DataFrame for plotting. Import lazily."""
    import pandas as pd
    return pd.DataFrame(
        [(p.date, p.equity, p.trailing_drawdown) for p in curve],
        columns=['date', 'equity', 'trailing_drawdown'],
    )
