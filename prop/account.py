"""
Account risk monitor.

Replays one funded account's trades to report progress toward the profit
target and how much of the drawdown allowance has been used, under either
drawdown regime:
  MAXIMUM  - static floor, measured from initial capital
  TRAILING - measured from the high water mark

The high water mark here tracks raw trade equity; withdrawals are taken off
afterwards. The equity curve overlay (engine.equity) keeps its own mark.
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Sequence

from engine.trade import Account, DrawdownType, Trade, Withdrawal, event_time
from prop import rules

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccountStats:
    equity: float                   # balance net of withdrawals
    high_water_mark: float          # peak net of withdrawals
    profit_target_value: float
    drawdown_limit_value: float
    profit_progress: float          # 0-100
    drawdown_progress: float        # 0-100
    current_profit: float
    current_drawdown_amount: float

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)


def account_stats(account: Account, trades: Sequence[Trade]) -> AccountStats:
    """
    Live risk status of one account.

    Only trades with account_id == account.id are replayed; the rest of
    the list is ignored, so the journal's full trade list can be passed.
    """
    account_trades = sorted(
        (t for t in trades if t.account_id == account.id),
        key=lambda t: event_time(t.date),
    )

    equity = account.initial_capital
    high_water_mark = account.initial_capital
    for t in account_trades:
        equity += t.result
        if equity > high_water_mark:
            high_water_mark = equity

    profit_target_value = rules.profit_target_amount(account)
    drawdown_limit_value = rules.drawdown_limit_amount(account)

    # Profit counts what was already withdrawn
    current_profit = equity - account.initial_capital
    profit_progress = rules.progress_pct(current_profit, profit_target_value)

    current_balance = equity - account.total_withdrawn
    peak_balance = high_water_mark - account.total_withdrawn

    if account.drawdown_type == DrawdownType.TRAILING:
        current_drawdown_amount = max(0.0, peak_balance - current_balance)
    else:
        current_drawdown_amount = max(0.0, account.initial_capital - current_balance)

    drawdown_progress = rules.progress_pct(current_drawdown_amount, drawdown_limit_value)

    logger.debug("Account %s (%s): %d trades, equity %.2f, dd %.2f/%.2f",
                 account.id, account.drawdown_type.value, len(account_trades),
                 current_balance, current_drawdown_amount, drawdown_limit_value)

    return AccountStats(
        equity=current_balance,
        high_water_mark=peak_balance,
        profit_target_value=profit_target_value,
        drawdown_limit_value=drawdown_limit_value,
        profit_progress=profit_progress,
        drawdown_progress=drawdown_progress,
        current_profit=current_profit,
        current_drawdown_amount=current_drawdown_amount,
    )


def reconcile_current_capital(
    account: Account,
    trades: Sequence[Trade],
    withdrawals: Sequence[Withdrawal] = (),
) -> float:
    """Rebuild current capital: initial + trade results - withdrawals."""
    traded = sum(t.result for t in trades if t.account_id == account.id)
    withdrawn = sum(w.amount for w in withdrawals if w.account_id == account.id)
    capital = account.initial_capital + traded - withdrawn
    if abs(capital - account.current_capital) > 1e-9:
        logger.warning("Account %s current capital %.2f differs from replayed %.2f",
                       account.id, account.current_capital, capital)
    return capital


def is_target_reached(stats: AccountStats) -> bool:
    return stats.profit_target_value > 0 and stats.profit_progress >= 100


def is_drawdown_breached(stats: AccountStats) -> bool:
    return stats.drawdown_limit_value > 0 and stats.drawdown_progress >= 100
