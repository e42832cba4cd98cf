"""
Day Summary: P&L, win rate and direction split for one calendar day.

Feeds the dashboard "today" panel and its intraday cumulative P&L chart,
and the per-day P&L cells of the monthly trade calendar.
"""

import calendar
from dataclasses import dataclass, field
from datetime import date
from typing import List, Sequence, Tuple

from config.constants import INTRADAY_START_LABEL
from config.settings import FROM_SETTINGS, resolve_timezone
from engine.trade import Trade, TradeDirection, event_time, local_time


@dataclass
class DaySummary:
    """Trading activity of a single day."""
    day: date
    pnl: float = 0.0
    win_rate: float = 0.0
    count: int = 0
    wins: int = 0
    losses: int = 0         # result <= 0
    longs: int = 0
    shorts: int = 0
    trades: List[Trade] = field(default_factory=list)   # newest first


@dataclass(frozen=True)
class CalendarDay:
    day: date
    pnl: float = 0.0
    count: int = 0


def summarize_day(
    trades: Sequence[Trade],
    day: date,
    timezone=FROM_SETTINGS,
) -> DaySummary:
    """Summarize the trades whose local calendar date is `day`."""
    tz = resolve_timezone(timezone)
    day_trades = [t for t in trades if local_time(t.date, tz).date() == day]
    day_trades.sort(key=lambda t: event_time(t.date), reverse=True)

    wins = sum(1 for t in day_trades if t.result > 0)
    count = len(day_trades)
    return DaySummary(
        day=day,
        pnl=sum(t.result for t in day_trades),
        win_rate=wins / count * 100 if count else 0.0,
        count=count,
        wins=wins,
        losses=count - wins,
        longs=sum(1 for t in day_trades if t.direction == TradeDirection.BUY),
        shorts=sum(1 for t in day_trades if t.direction == TradeDirection.SELL),
        trades=day_trades,
    )


def intraday_pnl_curve(
    summary: DaySummary,
    timezone=FROM_SETTINGS,
) -> List[Tuple[str, float]]:
    """Cumulative P&L through the day as (HH:MM, pnl), oldest first."""
    tz = resolve_timezone(timezone)
    points = [(INTRADAY_START_LABEL, 0.0)]
    cumulative = 0.0
    for t in reversed(summary.trades):
        cumulative += t.result
        points.append((local_time(t.date, tz).strftime('%H:%M'), cumulative))
    return points


def daily_pnl_calendar(
    trades: Sequence[Trade],
    year: int,
    month: int,
    timezone=FROM_SETTINGS,
) -> List[CalendarDay]:
    """
    P&L and trade count for every day of a month, the 1st first.

    Days without trades are included with zero pnl and count.
    """
    tz = resolve_timezone(timezone)
    _, n_days = calendar.monthrange(year, month)
    pnl = [0.0] * n_days
    counts = [0] * n_days
    for t in trades:
        d = local_time(t.date, tz).date()
        if d.year == year and d.month == month:
            pnl[d.day - 1] += t.result
            counts[d.day - 1] += 1
    return [CalendarDay(date(year, month, i + 1), pnl[i], counts[i]) for i in range(n_days)]
