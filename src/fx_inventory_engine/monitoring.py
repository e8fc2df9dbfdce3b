# src/fx_inventory_engine/monitoring.py
from prometheus_client import Counter, Histogram

REPLAY_DEPTH = Histogram(
    "fx_inventory_replay_depth",
    "Number of trading transactions replayed during a single inventory recalculation.",
    buckets=(1, 5, 10, 25, 50, 100, 250, 500, 1000, 5000)
)

REPLAY_DURATION_SECONDS = Histogram(
    "fx_inventory_replay_duration_seconds",
    "Wall-clock time spent replaying the ledger into per-currency stock positions.",
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5)
)

OVERSELL_TOTAL = Counter(
    "fx_inventory_oversell_total",
    "Number of sales whose quantity exceeded the held quantity of the asset currency.",
)

DATA_QUALITY_ISSUES_TOTAL = Counter(
    "fx_inventory_data_quality_issues_total",
    "Number of non-fatal issues raised while replaying the ledger.",
    labelnames=("issue_type",),
)
