"""
Journal snapshot loader.

Reads the JSON backup written by the journal app (accounts, trades,
withdrawals arrays with camelCase fields) into engine records.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Union

from engine.trade import Account, Trade, Withdrawal

logger = logging.getLogger(__name__)


class SnapshotError(Exception):
    """The snapshot file is missing, unreadable or malformed."""


@dataclass
class Journal:
    accounts: List[Account] = field(default_factory=list)
    trades: List[Trade] = field(default_factory=list)
    withdrawals: List[Withdrawal] = field(default_factory=list)


def parse_snapshot(raw: dict) -> Journal:
    """Build a Journal from an already-decoded snapshot object."""
    if not isinstance(raw, dict):
        raise SnapshotError("Snapshot must be a JSON object")
    if not isinstance(raw.get('accounts'), list) or not isinstance(raw.get('trades'), list):
        raise SnapshotError("Invalid snapshot: missing core account or trade data")

    withdrawals = raw.get('withdrawals')
    if not isinstance(withdrawals, list):
        withdrawals = []

    try:
        return Journal(
            accounts=[Account.from_dict(a) for a in raw['accounts']],
            trades=[Trade.from_dict(t) for t in raw['trades']],
            withdrawals=[Withdrawal.from_dict(w) for w in withdrawals],
        )
    except (KeyError, ValueError, TypeError) as e:
        raise SnapshotError(f"Invalid record in snapshot: {e!r}") from e


def load_snapshot(filepath: Union[str, Path]) -> Journal:
    """
    Load a journal snapshot from disk.

    Args:
        filepath: Path to the JSON backup.

    Returns:
        Journal with parsed accounts, trades and withdrawals.
    """
    path = Path(filepath)
    if not path.exists():
        raise SnapshotError(f"Snapshot file not found: {path}")

    try:
        with open(path, encoding='utf-8') as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise SnapshotError(f"Snapshot is not valid JSON: {e}") from e

    journal = parse_snapshot(raw)
    logger.info("Loaded %s: %d accounts, %d trades, %d withdrawals",
                path.name, len(journal.accounts), len(journal.trades),
                len(journal.withdrawals))
    return journal
