"""Shared fixtures for journal records."""

import pytest

from engine.trade import DrawdownType
from tests.factories import make_account, make_trade


@pytest.fixture
def trailing_account():
    return make_account(drawdown_type=DrawdownType.TRAILING)


@pytest.fixture
def mixed_trades():
    """One win, two losses: win rate 33.3%, PF 1.0, net 0."""
    return [make_trade(100, 0), make_trade(-50, 1), make_trade(-50, 2)]
