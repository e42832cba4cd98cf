"""
Journal report entry point.

Usage:
    python run_journal_report.py backup.json                     # All accounts
    python run_journal_report.py backup.json --account acc-1     # One account
    python run_journal_report.py backup.json --strategy strat-1  # One strategy
    python run_journal_report.py backup.json --asset usd         # Assets containing "usd"
    python run_journal_report.py backup.json --compare strategy  # Side-by-side table
    python run_journal_report.py backup.json --today             # Today's session
    python run_journal_report.py backup.json --calendar 2024-02  # Daily P&L for a month
"""

import sys
import argparse
import logging
from datetime import date, datetime
from pathlib import Path
from zoneinfo import ZoneInfo

# Add project root to path
project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from config.settings import load_settings
from data.loader import SnapshotError, load_snapshot
from engine.equity import build_equity_curve
from prop.account import account_stats, is_drawdown_breached, is_target_reached
from reporting.comparison import (
    combined_initial_capital, compare_by_account, compare_by_asset,
    compare_by_strategy, print_comparison_table, select_trades,
    select_withdrawals,
)
from reporting.day_summary import daily_pnl_calendar, summarize_day
from reporting.metrics import compute_analytics, print_analytics

logger = logging.getLogger(__name__)


def session_date(timezone=None) -> date:
    """Today's calendar date in `timezone` (system local when None)."""
    if timezone:
        return datetime.now(ZoneInfo(timezone)).date()
    return date.today()


def parse_month(value: str):
    """argparse type for YYYY-MM."""
    try:
        month = datetime.strptime(value, "%Y-%m")
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM, got {value!r}")
    return month.year, month.month


def print_account_status(journal, currency_symbol_for) -> None:
    """Print profit target / drawdown progress for every account."""
    print(f"\n{'='*70}")
    print(f"  ACCOUNT RISK MONITOR")
    print(f"{'='*70}")
    for acc in journal.accounts:
        s = account_stats(acc, journal.trades)
        c = currency_symbol_for(acc.currency)
        flags = []
        if is_target_reached(s):
            flags.append('TARGET REACHED')
        if is_drawdown_breached(s):
            flags.append('DRAWDOWN BREACHED')
        print(f"\n  {acc.name or acc.id}  [{acc.drawdown_type.value}]"
              f"{'  ' + ', '.join(flags) if flags else ''}")
        print(f"    Equity:            {c}{s.equity:>12,.2f}   (peak {c}{s.high_water_mark:,.2f})")
        print(f"    Profit:            {c}{s.current_profit:>12,.2f} / {c}{s.profit_target_value:,.2f}"
              f"  ({s.profit_progress:.1f}%)")
        print(f"    Drawdown:          {c}{s.current_drawdown_amount:>12,.2f} / {c}{s.drawdown_limit_value:,.2f}"
              f"  ({s.drawdown_progress:.1f}%)")
    print(f"{'='*70}\n")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Trading Journal Analytics Report')
    parser.add_argument('snapshot', help='Path to the journal JSON backup')
    parser.add_argument('--account', '-a', default=None,
                        help='Restrict analytics to one account id')
    parser.add_argument('--strategy', '-s', default=None,
                        help='Restrict analytics to one strategy id')
    parser.add_argument('--asset', default=None,
                        help='Restrict analytics to assets containing this text (case-insensitive)')
    parser.add_argument('--compare', choices=['strategy', 'asset', 'account'], default=None,
                        help='Print a side-by-side comparison table')
    parser.add_argument('--today', action='store_true',
                        help="Print today's session summary")
    parser.add_argument('--calendar', type=parse_month, default=None, metavar='YYYY-MM',
                        help='Print daily P&L for one month')
    parser.add_argument('--config', default=None,
                        help='Path to a settings YAML file')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Debug logging')
    args = parser.parse_args(argv)

    try:
        cfg = load_settings(args.config)
    except FileNotFoundError as e:
        parser.error(str(e))
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, cfg.log_level, logging.INFO),
        format=cfg.log_format,
    )

    try:
        journal = load_snapshot(args.snapshot)
    except SnapshotError as e:
        logger.error("Cannot load snapshot: %s", e)
        return 1

    trades = select_trades(journal.trades, args.account, args.strategy, args.asset)
    withdrawals = select_withdrawals(journal.withdrawals, args.account)
    initial_capital = combined_initial_capital(journal.accounts, args.account)
    active = next((a for a in journal.accounts if a.id == args.account), None)
    symbol = cfg.currency_symbol(active.currency if active else 'USD')

    print(f"\n{'='*70}")
    print(f"  TRADING JOURNAL REPORT")
    print(f"{'='*70}")
    print(f"Snapshot: {args.snapshot}")
    print(f"  Account:  {args.account or 'All Accounts'}")
    print(f"  Strategy: {args.strategy or 'All Strategies'}")
    if args.asset:
        print(f"  Asset:    *{args.asset}*")
    print(f"  Trades:   {len(trades)}")
    print(f"  Initial capital: {symbol}{initial_capital:,.2f}")

    stats = compute_analytics(trades, initial_capital, withdrawals, timezone=cfg.timezone)
    print_analytics(stats, symbol)

    curve = build_equity_curve(trades, initial_capital, active, withdrawals)
    print(f"Final equity: {symbol}{curve[-1].equity:,.2f} ({len(curve) - 1} events)")
    if curve[-1].trailing_drawdown is not None:
        print(f"Trailing drawdown floor: {symbol}{curve[-1].trailing_drawdown:,.2f}")

    print_account_status(journal, cfg.currency_symbol)

    if args.compare == 'strategy':
        print_comparison_table(compare_by_strategy(trades, initial_capital),
                               "Strategy Comparison", symbol)
    elif args.compare == 'asset':
        print_comparison_table(compare_by_asset(trades, initial_capital),
                               "Asset Comparison", symbol)
    elif args.compare == 'account':
        print_comparison_table(compare_by_account(trades, journal.accounts, withdrawals),
                               "Account Comparison", symbol)

    if args.today:
        summary = summarize_day(trades, session_date(cfg.timezone), timezone=cfg.timezone)
        print(f"\n--- Today ({summary.day}) ---")
        print(f"  Trades: {summary.count}  ({summary.wins}W / {summary.losses}L, "
              f"{summary.win_rate:.1f}%)")
        print(f"  Long/Short: {summary.longs}/{summary.shorts}")
        print(f"  P&L: {symbol}{summary.pnl:,.2f}")

    if args.calendar:
        year, month = args.calendar
        print(f"\n--- Calendar {year}-{month:02d} ---")
        for cell in daily_pnl_calendar(trades, year, month, timezone=cfg.timezone):
            if cell.count:
                print(f"  {cell.day}  {symbol}{cell.pnl:>10,.2f}  ({cell.count} trades)")

    return 0


if __name__ == '__main__':
    sys.exit(main())
