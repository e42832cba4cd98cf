"""
Performance metrics for journal trades.
Win rate, profit factor, expectancy, per-trade Sharpe, max drawdown,
weekday/hour distributions, per-asset breakdown and notable trades.
"""

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from config.constants import HOURS_PER_DAY, WEEKDAY_LABELS
from config.settings import FROM_SETTINGS, resolve_timezone
from engine.equity import build_equity_curve, max_drawdown_percent
from engine.trade import Trade, Withdrawal, local_time

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DayProfit:
    day: str
    profit: float


@dataclass(frozen=True)
class HourProfit:
    hour: str
    profit: float


@dataclass(frozen=True)
class AssetPerformance:
    asset: str
    profit: float
    trades: int


@dataclass(frozen=True)
class AnalyticsStats:
    total_trades: int = 0
    win_rate: float = 0.0
    profit_factor: Optional[float] = None
    expected_value: float = 0.0
    average_win: float = 0.0
    average_loss: float = 0.0
    payoff_ratio: Optional[float] = None
    max_drawdown: float = 0.0
    sharpe_ratio: Optional[float] = None
    total_profit: float = 0.0
    max_win: Optional[Trade] = None
    max_loss: Optional[Trade] = None
    daily_distribution: List[DayProfit] = field(default_factory=list)
    hourly_distribution: List[HourProfit] = field(default_factory=list)
    asset_performance: List[AssetPerformance] = field(default_factory=list)
    win_loss_distribution: List[float] = field(default_factory=list)
    total_wins: int = 0
    total_losses: int = 0

    def to_dict(self) -> Dict[str, Any]:
        data = dataclasses.asdict(self)
        data['max_win'] = self.max_win.to_dict() if self.max_win else None
        data['max_loss'] = self.max_loss.to_dict() if self.max_loss else None
        return data


def compute_analytics(
    trades: Sequence[Trade],
    initial_capital: float,
    withdrawals: Optional[Sequence[Withdrawal]] = None,
    timezone=FROM_SETTINGS,
) -> AnalyticsStats:
    """
    Compute the analytics snapshot for a set of trades.

    A flat trade (result == 0) counts toward the total but belongs to
    neither the win nor the loss sums, so it lowers the win rate without
    moving gross profit or gross loss.

    Args:
        trades: Trades in any order.
        initial_capital: Starting balance for the drawdown curve.
        withdrawals: Optional withdrawals replayed into the drawdown curve.
        timezone: Zone for weekday/hour buckets. Defaults to settings.timezone;
            None means the system local zone.

    Returns:
        AnalyticsStats. All-zero/None/empty when there are no trades.
    """
    if not trades:
        return AnalyticsStats()

    tz = resolve_timezone(timezone)

    wins = [t for t in trades if t.result > 0]
    losses = [t for t in trades if t.result < 0]
    total_trades = len(trades)
    win_rate = len(wins) / total_trades * 100

    gross_profit = sum(t.result for t in wins)
    gross_loss = abs(sum(t.result for t in losses))
    total_profit = gross_profit - gross_loss
    profit_factor = gross_profit / gross_loss if gross_loss > 0 else None

    average_win = gross_profit / len(wins) if wins else 0.0
    average_loss = gross_loss / len(losses) if losses else 0.0
    payoff_ratio = average_win / average_loss if average_loss > 0 else None

    expected_value = (win_rate / 100) * average_win - ((100 - win_rate) / 100) * average_loss

    curve = build_equity_curve(trades, initial_capital, None, withdrawals)
    max_drawdown = max_drawdown_percent(curve)

    sharpe_ratio = _sharpe_ratio([t.result for t in trades])

    max_win = trades[0]
    for t in trades:
        if t.result > max_win.result:
            max_win = t
    # Seeded at a zero-result copy: with no losing trade this placeholder is
    # returned instead of None.
    max_loss = dataclasses.replace(trades[0], result=0.0)
    for t in trades:
        if t.result < max_loss.result:
            max_loss = t

    logger.debug("Analytics over %d trades: %d wins, %d losses, pf=%s",
                 total_trades, len(wins), len(losses), profit_factor)

    return AnalyticsStats(
        total_trades=total_trades,
        win_rate=win_rate,
        profit_factor=profit_factor,
        expected_value=expected_value,
        average_win=average_win,
        average_loss=average_loss,
        payoff_ratio=payoff_ratio,
        max_drawdown=max_drawdown,
        sharpe_ratio=sharpe_ratio,
        total_profit=total_profit,
        max_win=max_win,
        max_loss=max_loss,
        daily_distribution=_daily_distribution(trades, tz),
        hourly_distribution=_hourly_distribution(trades, tz),
        asset_performance=_asset_performance(trades),
        win_loss_distribution=sorted(t.result for t in trades),
        total_wins=len(wins),
        total_losses=len(losses),
    )


def _sharpe_ratio(returns: List[float]) -> Optional[float]:
    """Per-trade Sharpe (risk-free rate 0, not annualized)."""
    if len(returns) < 2:
        return None
    arr = np.array(returns, dtype=float)
    std = arr.std(ddof=1)
    if std == 0:
        return None
    return float(arr.mean() / std)


def _daily_distribution(trades: Sequence[Trade], tz: Optional[str]) -> List[DayProfit]:
    """Profit per weekday, Sun..Sat."""
    profits = [0.0] * len(WEEKDAY_LABELS)
    for t in trades:
        # weekday() is Mon=0; buckets start on Sunday
        idx = (local_time(t.date, tz).weekday() + 1) % 7
        profits[idx] += t.result
    return [DayProfit(day, p) for day, p in zip(WEEKDAY_LABELS, profits)]


def _hourly_distribution(trades: Sequence[Trade], tz: Optional[str]) -> List[HourProfit]:
    """Profit per entry hour, 00..23. The trade's hour override wins."""
    profits = [0.0] * HOURS_PER_DAY
    for t in trades:
        hour = t.hour if t.hour is not None else local_time(t.date, tz).hour
        if 0 <= hour < HOURS_PER_DAY:
            profits[hour] += t.result
        else:
            logger.warning("Trade %s has out-of-range hour %s, skipped in hourly distribution",
                           t.id, hour)
    return [HourProfit(f"{h:02d}", p) for h, p in enumerate(profits)]


def _asset_performance(trades: Sequence[Trade]) -> List[AssetPerformance]:
    """Profit and trade count per asset, most profitable first."""
    grouped: Dict[str, List[float]] = {}
    for t in trades:
        grouped.setdefault(t.asset, []).append(t.result)

    rows = [AssetPerformance(asset, sum(results), len(results))
            for asset, results in grouped.items()]
    rows.sort(key=lambda r: -r.profit)
    return rows


def _fmt_ratio(value: Optional[float]) -> str:
    return f"{value:.2f}" if value is not None else "n/a"


def print_analytics(stats: AnalyticsStats, currency_symbol: str = '$') -> None:
    """Pretty-print an analytics snapshot."""
    c = currency_symbol
    print(f"\n{'='*70}")
    print(f"  PERFORMANCE REPORT")
    print(f"{'='*70}")

    print(f"\n--- Trade Summary ---")
    print(f"  Total Trades:        {stats.total_trades}")
    print(f"  Win Rate:            {stats.win_rate:.1f}%"
          f"  ({stats.total_wins}W / {stats.total_losses}L)")
    print(f"  Profit Factor:       {_fmt_ratio(stats.profit_factor)}")
    print(f"  Payoff Ratio:        {_fmt_ratio(stats.payoff_ratio)}")
    print(f"  Expectancy:          {c}{stats.expected_value:,.2f} / trade")

    print(f"\n--- P&L ---")
    print(f"  Net P&L:             {c}{stats.total_profit:>12,.2f}")
    print(f"  Avg Win:             {c}{stats.average_win:>12,.2f}")
    print(f"  Avg Loss:            {c}{stats.average_loss:>12,.2f}")
    if stats.max_win is not None:
        print(f"  Best Trade:          {c}{stats.max_win.result:>12,.2f}  ({stats.max_win.asset})")
    if stats.max_loss is not None:
        print(f"  Worst Trade:         {c}{stats.max_loss.result:>12,.2f}  ({stats.max_loss.asset})")

    print(f"\n--- Risk ---")
    print(f"  Sharpe (per trade):  {_fmt_ratio(stats.sharpe_ratio)}")
    print(f"  Max Drawdown %:      {stats.max_drawdown:.2f}%")

    if stats.asset_performance:
        print(f"\n--- Assets ---")
        for row in stats.asset_performance:
            print(f"  {row.asset:20s}: {c}{row.profit:>10,.2f}  ({row.trades} trades)")

    active_days = [d for d in stats.daily_distribution if d.profit != 0]
    if active_days:
        print(f"\n--- Weekdays ---")
        for d in active_days:
            print(f"  {d.day:20s}: {c}{d.profit:>10,.2f}")

    print(f"{'='*70}\n")
