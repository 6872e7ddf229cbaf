import logging
from dataclasses import asdict
from typing import Iterable, List

import pandas as pd

from .config import FRAME_COLUMNS, SECONDS_PER_DAY
from .models import CanonicalTrade, EnrichedTrade
from .symbols import decode_option_symbol

logger = logging.getLogger(__name__)


def holding_period_days(open_date: pd.Timestamp, close_date: pd.Timestamp) -> float:
    """Days between open and close. Opens after the close clamp to 0."""
    delta = (close_date - open_date).total_seconds()
    return max(0.0, delta / SECONDS_PER_DAY)


def compute_roi(gain_loss: float, cost: float) -> float:
    if cost == 0:
        return 0.0
    return (gain_loss / abs(cost)) * 100.0


def enrich(sorted_trades: Iterable[CanonicalTrade]) -> List[EnrichedTrade]:
    """
    Adds holding period, running P&L, ROI and option details to each trade.

    Input must already be in close-date order; the running total is taken in
    the order given.
    """
    enriched = []
    cumulative = 0.0

    for t in sorted_trades:
        cumulative += t.gross_gain_loss
        opt = decode_option_symbol(t.symbol)

        enriched.append(EnrichedTrade(
            close_date=t.close_date,
            open_date=t.open_date,
            symbol=t.symbol,
            gross_gain_loss=t.gross_gain_loss,
            proceeds=t.proceeds,
            cost=t.cost,
            quantity=t.quantity,
            extra=t.extra,
            holding_period_days=holding_period_days(t.open_date, t.close_date),
            cumulative_pnl=cumulative,
            roi=compute_roi(t.gross_gain_loss, t.cost),
            underlying=opt.underlying,
            option_type=opt.option_type,
            strike=opt.strike,
        ))

    logger.debug(f"Enriched {len(enriched)} trades, closing P&L {cumulative:.2f}")
    return enriched


def to_frame(trades: Iterable[EnrichedTrade]) -> pd.DataFrame:
    """Flattens enriched trades into the upper-case column layout used for charts."""
    records = []
    for t in trades:
        rec = dict(t.extra)
        data = asdict(t)
        data.pop("extra")
        for key, value in data.items():
            rec[FRAME_COLUMNS[key]] = value
        rec["POSITION_SIZE"] = t.position_size
        records.append(rec)

    if not records:
        return pd.DataFrame(columns=list(FRAME_COLUMNS.values()) + ["POSITION_SIZE"])
    return pd.DataFrame(records)
