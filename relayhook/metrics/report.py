"""
Tabular export of venue metrics for offline analysis.
"""

from __future__ import annotations

import polars as pl

from relayhook.metrics.aggregator import MetricsAggregator

METRICS_SCHEMA = {
    "venue": pl.Utf8,
    "relayed_count": pl.Int64,
    "executed_count": pl.Int64,
    # reported savings are unbounded, keep them exact
    "cumulative_reported_savings": pl.Utf8,
    "relay_ratio": pl.Float64,
}


def to_frame(metrics: MetricsAggregator) -> pl.DataFrame:
    """
    One row per venue with recorded activity, sorted by venue id.
    relay_ratio = relayed_count / executed_count (null before the first executed swap).
    """
    rows = []
    for venue in metrics.venues():
        snap = metrics.snapshot(venue)
        rows.append(
            {
                "venue": venue,
                "relayed_count": snap.relayed_count,
                "executed_count": snap.executed_count,
                "cumulative_reported_savings": str(snap.cumulative_reported_savings),
                "relay_ratio": (
                    snap.relayed_count / snap.executed_count if snap.executed_count else None
                ),
            }
        )
    return pl.DataFrame(rows, schema=METRICS_SCHEMA).sort("venue")
