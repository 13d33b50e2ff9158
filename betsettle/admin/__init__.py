"""Ledger, settlement and reporting."""
from .ledger import Ledger, compute_net_balances, default_roster
from .settlement import Transfer, settle
from .standings import (
    BalanceTrend,
    Leaders,
    TrendPoint,
    balance_trend,
    format_standings_table,
    leaders,
    win_counts,
    win_share,
)
from .export import format_history, format_settlement

__all__ = [
    "Ledger",
    "compute_net_balances",
    "default_roster",
    "Transfer",
    "settle",
    "BalanceTrend",
    "Leaders",
    "TrendPoint",
    "balance_trend",
    "format_standings_table",
    "leaders",
    "win_counts",
    "win_share",
    "format_history",
    "format_settlement",
]
