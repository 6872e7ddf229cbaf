from typing import Dict, Optional

from .models import SummaryStats


def format_currency(value: Optional[float]) -> str:
    """USD with thousands separators and two decimals, e.g. -$1,234.50."""
    if value is None:
        return "N/A"
    if value < 0:
        return f"-${abs(value):,.2f}"
    return f"${value:,.2f}"


def _pct(value: Optional[float]) -> str:
    return "N/A" if value is None else f"{value:.1f}%"


def format_summary(stats: SummaryStats) -> Dict[str, str]:
    """Label -> display value mapping for the summary panel."""
    return {
        "Total P&L": format_currency(stats.total_pnl),
        "Win Rate": _pct(stats.win_rate),
        "Average Win": format_currency(stats.average_win),
        "Average Loss": format_currency(stats.average_loss),
        "Biggest Gain": format_currency(stats.biggest_gain),
        "Biggest Loss": format_currency(stats.biggest_loss),
        "Average ROI": _pct(stats.average_roi),
        "Max ROI": _pct(stats.max_roi),
        "Average Hold Time": "N/A" if stats.average_holding_days is None else f"{stats.average_holding_days:.1f} days",
        "Best Month": stats.best_month or "N/A",
    }
