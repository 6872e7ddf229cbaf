from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any, Union
import math
import pandas as pd
from pydantic import BaseModel, ConfigDict
from .config import MONTH_FORMAT


@dataclass(frozen=True)
class CanonicalTrade:
    close_date: pd.Timestamp
    open_date: pd.Timestamp
    symbol: str
    gross_gain_loss: float = 0.0
    proceeds: float = 0.0
    cost: float = 0.0
    quantity: int = 0
    # Columns the normalizer does not interpret, kept verbatim.
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_win(self) -> bool:
        return self.gross_gain_loss > 0

    @property
    def position_size(self) -> float:
        return abs(self.cost)


@dataclass(frozen=True)
class EnrichedTrade(CanonicalTrade):
    holding_period_days: float = 0.0
    cumulative_pnl: float = 0.0
    roi: float = 0.0
    underlying: Any = None
    option_type: Optional[str] = None
    strike: Optional[float] = None

    @property
    def month(self) -> str:
        return self.close_date.strftime(MONTH_FORMAT)


@dataclass(frozen=True)
class Bucket:
    min: float
    max: float
    label: str

    def contains(self, value: float) -> bool:
        return self.min <= value < self.max

    @property
    def is_unbounded(self) -> bool:
        return math.isinf(self.max)


@dataclass(frozen=True)
class BucketCount:
    bucket: Bucket
    count: int
    # Set on the last finite bucket, which also counts trades on its max.
    inclusive_max: bool = False

    @property
    def label(self) -> str:
        return self.bucket.label


@dataclass(frozen=True)
class HoldingRange:
    label: str
    win_rate: float
    count: int
    min_days: float
    max_days: float


@dataclass(frozen=True)
class RowSuccess:
    index: int
    trade: CanonicalTrade
    ok: bool = True


@dataclass(frozen=True)
class RowFailure:
    index: int
    row: Dict[str, Any]
    error: str
    # Source column that failed to parse, when known.
    field: Optional[str] = None
    ok: bool = False


NormalizationResult = Union[RowSuccess, RowFailure]


@dataclass
class NormalizationReport:
    trades: List[CanonicalTrade] = field(default_factory=list)
    failures: List[RowFailure] = field(default_factory=list)

    @property
    def total_rows(self) -> int:
        return len(self.trades) + len(self.failures)


class SummaryStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_trades: int = 0
    total_pnl: float = 0.0
    win_rate: float = 0.0
    average_win: Optional[float] = None
    average_loss: Optional[float] = None
    biggest_gain: Optional[float] = None
    biggest_loss: Optional[float] = None
    average_roi: Optional[float] = None
    max_roi: Optional[float] = None
    average_holding_days: Optional[float] = None
    best_month: Optional[str] = None
