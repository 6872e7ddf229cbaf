import math
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .config import DEFAULT_PNL_HISTOGRAM_BINS, DEFAULT_WIN_RATE_BINS, HOLDING_PERIOD_THRESHOLDS
from .models import Bucket, BucketCount, EnrichedTrade, HoldingRange


def bucketize(holding_periods: Iterable[float],
              thresholds: Optional[Sequence[Tuple[float, str]]] = None) -> List[Bucket]:
    """
    Builds histogram buckets from the semantic threshold table, trimmed to the
    data. Buckets start at 0 and stop at the first threshold that reaches the
    longest holding period, so short-dated books get one or two buckets
    rather than all eight.
    """
    periods = list(holding_periods)
    if not periods:
        return []

    max_period = max(periods)
    buckets = []
    prev_max = 0.0

    for upper, label in (thresholds or HOLDING_PERIOD_THRESHOLDS):
        if prev_max >= max_period:
            break
        buckets.append(Bucket(min=prev_max, max=upper, label=label))
        prev_max = upper
        if upper >= max_period:
            break

    return buckets


def count_buckets(trades: Iterable[EnrichedTrade], buckets: Sequence[Bucket]) -> List[BucketCount]:
    periods = [t.holding_period_days for t in trades]
    counts = []
    for i, b in enumerate(buckets):
        n = sum(1 for p in periods if b.contains(p))
        # The longest trade sits exactly on the last finite bound; keep it.
        closed = i == len(buckets) - 1 and not b.is_unbounded
        if closed:
            n += sum(1 for p in periods if p == b.max)
        counts.append(BucketCount(bucket=b, count=n, inclusive_max=closed))
    return counts


def win_rate_ranges(trades: Iterable[EnrichedTrade], num_bins: int = DEFAULT_WIN_RATE_BINS) -> List[HoldingRange]:
    """
    Splits trades, ordered by holding period, into equal-population slices and
    reports the share of winners in each. Slices have ceil(n / num_bins)
    trades, so the tail can be short or missing.
    """
    if num_bins < 1:
        raise ValueError(f"num_bins must be at least 1, got {num_bins}")

    ordered = sorted(trades, key=lambda t: t.holding_period_days)
    n = len(ordered)
    if n == 0:
        return []

    bin_size = math.ceil(n / num_bins)
    ranges = []

    for i in range(num_bins):
        chunk = ordered[i * bin_size:min((i + 1) * bin_size, n)]
        if not chunk:
            continue

        min_days = chunk[0].holding_period_days
        max_days = chunk[-1].holding_period_days
        wins = sum(1 for t in chunk if t.is_win)

        ranges.append(HoldingRange(
            label=f"{math.floor(min_days)}-{math.ceil(max_days)}d",
            win_rate=(wins / len(chunk)) * 100.0,
            count=len(chunk),
            min_days=min_days,
            max_days=max_days,
        ))

    return ranges


def pnl_histogram(trades: Iterable[EnrichedTrade], bins: int = DEFAULT_PNL_HISTOGRAM_BINS) -> List[Dict[str, float]]:
    """Equal-width histogram of per-trade gain/loss."""
    values = np.array([t.gross_gain_loss for t in trades], dtype=float)
    if values.size == 0:
        return []

    counts, edges = np.histogram(values, bins=bins)
    return [
        {"lower": float(edges[i]), "upper": float(edges[i + 1]), "count": int(counts[i])}
        for i in range(len(counts))
    ]
