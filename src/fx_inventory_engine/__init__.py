# src/fx_inventory_engine/__init__.py
from .engine.ledger_replayer import LedgerReplayer
from .engine.utility_report import build_utility_report
from .logic.aggregator import UtilityAggregator

__all__ = ["LedgerReplayer", "UtilityAggregator", "build_utility_report"]
