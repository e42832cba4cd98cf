"""
Named constants for the journal analytics.
All magic numbers and labels from the codebase consolidated here.
"""

# ── Equity Curve ────────────────────────────────────────────────
INITIAL_POINT_LABEL = 'Initial'     # Date of the sentinel first point

# ── Distributions ───────────────────────────────────────────────
WEEKDAY_LABELS = ('Sun', 'Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat')
HOURS_PER_DAY = 24

# ── Grouping ────────────────────────────────────────────────────
NO_STRATEGY_LABEL = 'No Strategy'

# ── Day Summary ─────────────────────────────────────────────────
INTRADAY_START_LABEL = '00:00'

# ── Settings Defaults ───────────────────────────────────────────
DEFAULT_LOG_LEVEL = 'INFO'
DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_CURRENCY_SYMBOLS = {
    'USD': '$',
    'EUR': '€',
    'GBP': '£',
    'JPY': '¥',
}
