import math
import os
from typing import Dict, List, Tuple

# Raw CSV columns consumed by the normalizer. Anything else is passed through.
CLOSE_DATE_FIELD = "CLOSE_DATE"
OPEN_DATE_FIELD = "OPEN_DATE"
GAINLOSS_FIELD = "NO_WS_GAINLOSS"
PROCEEDS_FIELD = "NO_WS_PROCEEDS"
COST_FIELD = "NO_WS_COST"
QUANTITY_FIELD = "QUANTITY"
SYMBOL_FIELD = "SYMBOL"

KNOWN_FIELDS = (
    CLOSE_DATE_FIELD, OPEN_DATE_FIELD, GAINLOSS_FIELD, PROCEEDS_FIELD,
    COST_FIELD, QUANTITY_FIELD, SYMBOL_FIELD,
)

# Column names of the enriched DataFrame handed to charting code.
FRAME_COLUMNS: Dict[str, str] = {
    "close_date": "CLOSE_DATE",
    "open_date": "OPEN_DATE",
    "gross_gain_loss": "TOTAL_GAINLOSS",
    "proceeds": "NO_WS_PROCEEDS",
    "cost": "NO_WS_COST",
    "quantity": "QUANTITY",
    "symbol": "SYMBOL",
    "holding_period_days": "HOLDING_PERIOD",
    "cumulative_pnl": "CUMULATIVE_PNL",
    "roi": "ROI",
    "underlying": "UNDERLYING",
    "option_type": "OPTION_TYPE",
    "strike": "STRIKE",
}

# Compact OCC-style ticker: UNDERLYING--YYMMDD{C|P}STRIKE*1000
OPTION_SYMBOL_PATTERN = r"(\w+)--(\d+)([CP])(\d+)"
STRIKE_DIVISOR = 1000.0

SECONDS_PER_DAY = 86400.0

# Holding period histogram thresholds (days), walked in order.
HOLDING_PERIOD_THRESHOLDS: List[Tuple[float, str]] = [
    (1, "≤ 24 hours"),
    (7, "≤ 1 week"),
    (14, "≤ 2 weeks"),
    (30, "≤ 1 month"),
    (90, "≤ 3 months"),
    (180, "≤ 6 months"),
    (365, "≤ 1 year"),
    (math.inf, "> 1 year"),
]


def _int_from_env(key: str, default: int) -> int:
    val = os.environ.get(key)
    if not val:
        return default
    try:
        return int(val)
    except ValueError:
        return default


DEFAULT_WIN_RATE_BINS = _int_from_env("TRADE_AUDITOR_NUM_BINS", 5)
DEFAULT_PNL_HISTOGRAM_BINS = _int_from_env("TRADE_AUDITOR_PNL_BINS", 20)

MONTH_FORMAT = "%Y-%m"
DISPLAY_DATE_FORMAT = "%Y-%m-%d"
