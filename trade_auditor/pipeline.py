import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

import pandas as pd

from .analytics import enrich, to_frame
from .binning import bucketize, count_buckets, pnl_histogram, win_rate_ranges
from .config import DEFAULT_PNL_HISTOGRAM_BINS, DEFAULT_WIN_RATE_BINS, DISPLAY_DATE_FORMAT
from .exceptions import EmptyDatasetError, TradeAuditorError
from .formatting import format_summary
from .loader import CsvSource, read_trade_csv
from .models import BucketCount, EnrichedTrade, HoldingRange, RowFailure, SummaryStats
from .normalizer import TradeNormalizer
from .summary import monthly_pnl, summarize

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    trades: List[EnrichedTrade]
    buckets: List[BucketCount]
    ranges: List[HoldingRange]
    summary: SummaryStats
    monthly_pnl: List[Dict[str, Any]] = field(default_factory=list)
    pnl_histogram: List[Dict[str, float]] = field(default_factory=list)
    failures: List[RowFailure] = field(default_factory=list)

    @property
    def frame(self) -> pd.DataFrame:
        return to_frame(self.trades)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "trades": [_serialize_trade(t) for t in self.trades],
            "buckets": [
                {"label": b.label, "min": b.bucket.min,
                 "max": None if math.isinf(b.bucket.max) else b.bucket.max,
                 "inclusive_max": b.inclusive_max, "count": b.count}
                for b in self.buckets
            ],
            "ranges": [{"range": r.label, "win_rate": r.win_rate, "count": r.count,
                        "min_days": r.min_days, "max_days": r.max_days} for r in self.ranges],
            "summary": self.summary.model_dump(),
            "summary_display": format_summary(self.summary),
            "monthly_pnl": self.monthly_pnl,
            "pnl_histogram": self.pnl_histogram,
            "failures": [{"index": f.index, "field": f.field, "error": f.error} for f in self.failures],
        }


def _serialize_trade(t: EnrichedTrade) -> Dict[str, Any]:
    rec = dict(t.extra)
    rec.update({
        "close_date": t.close_date.strftime(DISPLAY_DATE_FORMAT),
        "open_date": t.open_date.strftime(DISPLAY_DATE_FORMAT),
        "symbol": t.symbol,
        "gross_gain_loss": t.gross_gain_loss,
        "proceeds": t.proceeds,
        "cost": t.cost,
        "quantity": t.quantity,
        "holding_period_days": t.holding_period_days,
        "cumulative_pnl": t.cumulative_pnl,
        "roi": t.roi,
        "underlying": t.underlying,
        "option_type": t.option_type,
        "strike": t.strike,
    })
    return rec


def analyze_rows(rows: Iterable[Mapping[str, Any]],
                 num_bins: int = DEFAULT_WIN_RATE_BINS,
                 pnl_bins: int = DEFAULT_PNL_HISTOGRAM_BINS) -> AnalysisResult:
    # 1. Normalize & sort
    report = TradeNormalizer().normalize(rows)
    if not report.trades:
        raise EmptyDatasetError()

    # 2. Enrich (sequential, relies on close-date order)
    trades = enrich(report.trades)

    # 3. Bin
    buckets = count_buckets(trades, bucketize(t.holding_period_days for t in trades))
    ranges = win_rate_ranges(trades, num_bins=num_bins)

    # 4. Summarize
    result = AnalysisResult(
        trades=trades,
        buckets=buckets,
        ranges=ranges,
        summary=summarize(trades),
        monthly_pnl=monthly_pnl(trades),
        pnl_histogram=pnl_histogram(trades, bins=pnl_bins),
        failures=report.failures,
    )
    logger.info(f"Analyzed {len(trades)} trades ({len(report.failures)} rows dropped)")
    return result


def analyze_csv(csv_path: Optional[CsvSource] = None,
                num_bins: int = DEFAULT_WIN_RATE_BINS,
                pnl_bins: int = DEFAULT_PNL_HISTOGRAM_BINS) -> Dict[str, Any]:
    """
    Reads a trade export and runs the full analysis.

    Pipeline-level failures are reported as {"error": message}; individual
    bad rows are listed under "failures" and do not stop the run.
    """
    if csv_path is None:
        return {"error": "No input data provided"}

    try:
        rows = read_trade_csv(csv_path)
        result = analyze_rows(rows, num_bins=num_bins, pnl_bins=pnl_bins)
    except TradeAuditorError as e:
        logger.error(f"Analysis failed: {e}")
        return {"error": str(e)}

    return result.to_dict()
