from typing import Dict, List, Sequence

import pandas as pd

from .models import EnrichedTrade, SummaryStats


def _monthly_series(trades: Sequence[EnrichedTrade]) -> pd.Series:
    df = pd.DataFrame({
        "month": [t.month for t in trades],
        "pnl": [t.gross_gain_loss for t in trades],
    })
    return df.groupby("month", sort=True)["pnl"].sum()


def monthly_pnl(trades: Sequence[EnrichedTrade]) -> List[Dict]:
    """Aggregates gain/loss by close year-month."""
    if not trades:
        return []
    series = _monthly_series(trades)
    return [{"month": month, "pnl": float(pnl)} for month, pnl in series.items()]


def summarize(trades: Sequence[EnrichedTrade]) -> SummaryStats:
    if not trades:
        return SummaryStats()

    df = pd.DataFrame({
        "pnl": [t.gross_gain_loss for t in trades],
        "roi": [t.roi for t in trades],
        "hold": [t.holding_period_days for t in trades],
    })

    wins = df.loc[df["pnl"] > 0, "pnl"]
    losses = df.loc[df["pnl"] < 0, "pnl"]

    monthly = _monthly_series(trades)
    # idxmax returns the first label on ties, i.e. the earliest month.
    best_month = str(monthly.idxmax())

    return SummaryStats(
        total_trades=len(df),
        total_pnl=float(df["pnl"].sum()),
        win_rate=(len(wins) / len(df)) * 100.0,
        average_win=float(wins.mean()) if not wins.empty else None,
        average_loss=float(losses.abs().mean()) if not losses.empty else None,
        biggest_gain=float(df["pnl"].max()),
        biggest_loss=float(df["pnl"].min()),
        average_roi=float(df["roi"].mean()),
        max_roi=float(df["roi"].max()),
        average_holding_days=float(df["hold"].mean()),
        best_month=best_month,
    )
