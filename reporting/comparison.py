"""
Trade selection and comparison tables.
Filters the journal by account, strategy or asset and shows
side-by-side analytics per group.
"""

import logging
from collections import Counter
from typing import Dict, List, Optional, Sequence

from config.constants import NO_STRATEGY_LABEL
from engine.trade import Account, Trade, Withdrawal
from reporting.metrics import AnalyticsStats, compute_analytics

logger = logging.getLogger(__name__)


def select_trades(
    trades: Sequence[Trade],
    account_id: Optional[str] = None,
    strategy_id: Optional[str] = None,
    asset: Optional[str] = None,
) -> List[Trade]:
    """
    Trades matching the account, strategy and asset filters (None = any).
    `asset` is a case-insensitive substring: "usd" matches EURUSD and USDJPY.
    """
    needle = asset.lower() if asset else None
    return [
        t for t in trades
        if (account_id is None or t.account_id == account_id)
        and (strategy_id is None or t.strategy_id == strategy_id)
        and (needle is None or needle in t.asset.lower())
    ]


def select_withdrawals(
    withdrawals: Sequence[Withdrawal],
    account_id: Optional[str] = None,
) -> List[Withdrawal]:
    return [w for w in withdrawals if account_id is None or w.account_id == account_id]


def combined_initial_capital(accounts: Sequence[Account], account_id: Optional[str] = None) -> float:
    """
    Starting capital for an analytics view.

    One account selected: its initial capital (0 if the id is unknown).
    No account selected: the sum over all accounts.
    """
    if account_id is None:
        return sum(a.initial_capital for a in accounts)
    for a in accounts:
        if a.id == account_id:
            return a.initial_capital
    logger.warning("Unknown account id %s, using zero initial capital", account_id)
    return 0.0


def compare_by_strategy(
    trades: Sequence[Trade],
    initial_capital: float,
) -> Dict[str, AnalyticsStats]:
    """
    Group trades by strategy_id and compute analytics for each.
    Trades without a strategy are grouped under NO_STRATEGY_LABEL.
    """
    grouped: Dict[str, List[Trade]] = {}
    for t in trades:
        grouped.setdefault(t.strategy_id or NO_STRATEGY_LABEL, []).append(t)

    return {name: compute_analytics(strades, initial_capital)
            for name, strades in sorted(grouped.items())}


def compare_by_asset(
    trades: Sequence[Trade],
    initial_capital: float,
) -> Dict[str, AnalyticsStats]:
    """Group trades by asset and compute analytics for each."""
    grouped: Dict[str, List[Trade]] = {}
    for t in trades:
        grouped.setdefault(t.asset, []).append(t)

    return {name: compute_analytics(strades, initial_capital)
            for name, strades in sorted(grouped.items())}


def compare_by_account(
    trades: Sequence[Trade],
    accounts: Sequence[Account],
    withdrawals: Sequence[Withdrawal] = (),
) -> Dict[str, AnalyticsStats]:
    """
    Analytics per account, each against its own initial capital and
    withdrawals. Keyed by account name (id when unnamed); a name shared by
    several accounts gets the id appended so no account is dropped.
    """
    names = Counter(a.name for a in accounts if a.name)
    results = {}
    for a in accounts:
        if not a.name:
            key = a.id
        elif names[a.name] > 1:
            key = f"{a.name} ({a.id})"
        else:
            key = a.name
        results[key] = compute_analytics(
            select_trades(trades, account_id=a.id),
            a.initial_capital,
            select_withdrawals(withdrawals, account_id=a.id),
        )
    return results


def print_comparison_table(
    comparison: Dict[str, AnalyticsStats],
    title: str = "Strategy Comparison",
    currency_symbol: str = '$',
) -> None:
    """Pretty-print a comparison table."""
    if not comparison:
        print("No data to compare.")
        return

    c = currency_symbol
    print(f"\n{'='*110}")
    print(f"  {title}")
    print(f"{'='*110}")

    header = (f"{'Name':<25} {'Trades':>6} {'WR%':>6} {'PF':>6} "
              f"{'Net P&L':>12} {'AvgWin':>10} {'AvgLoss':>10} "
              f"{'Sharpe':>7} {'MaxDD%':>7} {'Expect':>10}")
    print(header)
    print(f"{'-'*110}")

    for name, s in comparison.items():
        pf = f"{s.profit_factor:>6.2f}" if s.profit_factor is not None else f"{'-':>6}"
        sharpe = f"{s.sharpe_ratio:>7.2f}" if s.sharpe_ratio is not None else f"{'-':>7}"
        print(f"{name:<25} {s.total_trades:>6d} "
              f"{s.win_rate:>5.1f}% "
              f"{pf} "
              f"{c}{s.total_profit:>10,.2f} "
              f"{c}{s.average_win:>8,.2f} "
              f"{c}{s.average_loss:>8,.2f} "
              f"{sharpe} "
              f"{s.max_drawdown:>6.2f}% "
              f"{c}{s.expected_value:>8,.2f}")

    # Totals row
    all_trades = sum(s.total_trades for s in comparison.values())
    all_pnl = sum(s.total_profit for s in comparison.values())
    print(f"{'-'*110}")
    print(f"{'TOTAL':<25} {all_trades:>6d} {'':>6} {'':>6} "
          f"{c}{all_pnl:>10,.2f}")
    print(f"{'='*110}\n")
