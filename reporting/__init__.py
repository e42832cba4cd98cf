"""Reporting and analytics modules."""

from reporting.metrics import AnalyticsStats, compute_analytics
from reporting.comparison import compare_by_strategy, select_trades
from reporting.day_summary import summarize_day

__all__ = ['AnalyticsStats', 'compute_analytics', 'compare_by_strategy',
           'select_trades', 'summarize_day']
