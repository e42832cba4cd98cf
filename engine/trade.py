"""
Journal records: trades, withdrawals and funded accounts.

These are the read-only inputs of every analytics function. The external
store owns their lifecycle; the engine only reads them.
All money fields are in ACCOUNT CURRENCY.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Union
from zoneinfo import ZoneInfo

import pandas as pd


class TradeDirection(Enum):
    BUY = 'Buy'
    SELL = 'Sell'


class DrawdownType(Enum):
    MAXIMUM = 'Maximum'
    TRAILING = 'Trailing'


class ValueType(Enum):
    PERCENTAGE = 'Percentage'
    FIXED = 'Fixed'


def parse_date(value: Union[str, datetime]) -> datetime:
    """Parse an ISO-8601 string (or pass through a datetime)."""
    if isinstance(value, datetime):
        return value
    return pd.to_datetime(value).to_pydatetime()


def event_time(dt: datetime) -> float:
    """Sortable instant. Naive datetimes are taken as local wall time."""
    return dt.timestamp()


def local_time(dt: datetime, timezone: Optional[str] = None) -> datetime:
    """
    Wall-clock view of an instant, used for weekday/hour bucketing.

    Naive datetimes are already local. Aware ones are converted to
    `timezone` (IANA name), or to the system zone when it is None.
    """
    if dt.tzinfo is None:
        return dt
    if timezone:
        return dt.astimezone(ZoneInfo(timezone))
    return dt.astimezone()


@dataclass(frozen=True)
class Trade:
    """A closed trade as logged in the journal."""

    id: str
    account_id: str
    date: datetime
    asset: str
    direction: TradeDirection
    lot_size: float
    take_profit_pips: float
    stop_loss_pips: float
    result: float               # realized P&L, signed
    strategy_id: Optional[str] = None
    notes: Optional[str] = None
    image_ref: Optional[str] = None
    hour: Optional[int] = None  # 0-23 override of the entry hour

    @property
    def is_winner(self) -> bool:
        # A flat trade (result == 0) is a loss
        return self.result > 0

    @classmethod
    def from_dict(cls, data: dict) -> 'Trade':
        hour = data.get('hour')
        return cls(
            id=str(data['id']),
            account_id=str(data['accountId']),
            date=parse_date(data['date']),
            asset=data['asset'],
            direction=TradeDirection(data['direction']),
            lot_size=float(data.get('lotSize', 0.0)),
            take_profit_pips=float(data.get('takeProfitPips', 0.0)),
            stop_loss_pips=float(data.get('stopLossPips', 0.0)),
            result=float(data['result']),
            strategy_id=data.get('strategyId') or None,
            notes=data.get('notes'),
            image_ref=data.get('imageUrl') or data.get('imageRef'),
            hour=int(hour) if hour is not None else None,
        )

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'accountId': self.account_id,
            'strategyId': self.strategy_id,
            'date': self.date.isoformat(),
            'asset': self.asset,
            'direction': self.direction.value,
            'lotSize': self.lot_size,
            'takeProfitPips': self.take_profit_pips,
            'stopLossPips': self.stop_loss_pips,
            'result': self.result,
            'notes': self.notes,
            'imageRef': self.image_ref,
            'hour': self.hour,
        }


@dataclass(frozen=True)
class Withdrawal:
    """Capital taken out of an account."""

    id: str
    account_id: str
    amount: float   # positive
    date: datetime

    @classmethod
    def from_dict(cls, data: dict) -> 'Withdrawal':
        return cls(
            id=str(data['id']),
            account_id=str(data['accountId']),
            amount=float(data['amount']),
            date=parse_date(data['date']),
        )


@dataclass(frozen=True)
class Account:
    """Funded / evaluation account parameters."""

    id: str
    initial_capital: float
    currency: str
    current_capital: float
    profit_target: float
    profit_target_type: ValueType
    drawdown_type: DrawdownType
    drawdown_value: float
    drawdown_value_type: ValueType
    total_withdrawn: float = 0.0
    strategy_id: Optional[str] = None
    name: str = ''

    @property
    def has_trailing_drawdown(self) -> bool:
        return self.drawdown_type == DrawdownType.TRAILING and self.drawdown_value > 0

    @classmethod
    def from_dict(cls, data: dict) -> 'Account':
        initial = float(data['initialCapital'])
        return cls(
            id=str(data['id']),
            initial_capital=initial,
            currency=data.get('currency', 'USD'),
            current_capital=float(data.get('currentCapital', initial)),
            profit_target=float(data.get('profitTarget', 0.0)),
            profit_target_type=ValueType(data.get('profitTargetType', ValueType.PERCENTAGE.value)),
            drawdown_type=DrawdownType(data.get('drawdownType', DrawdownType.MAXIMUM.value)),
            drawdown_value=float(data.get('drawdownValue', 0.0)),
            drawdown_value_type=ValueType(data.get('drawdownValueType', ValueType.PERCENTAGE.value)),
            total_withdrawn=float(data.get('totalWithdrawn') or 0.0),
            strategy_id=data.get('strategyId') or None,
            name=data.get('name', ''),
        )
