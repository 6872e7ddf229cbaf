import pytest
import pandas as pd
from trade_auditor.analytics import enrich
from trade_auditor.models import CanonicalTrade

SAMPLE_CSV = """CLOSE_DATE,OPEN_DATE,SYMBOL,QUANTITY,NO_WS_PROCEEDS,NO_WS_COST,NO_WS_GAINLOSS,ACCOUNT
01/15/2024,01/10/2024,AAPL--240119C00150000,2,$300.00,$200.00,$100.00,IRA

2024-01-20,2024-01-19,SPY,10,"$4,750.00","$4,800.00",$-50.00,IRA
02/10/2024,12/01/2023,TSLA--240216P00190000,1,$400.00,$200.00,$200.00,Taxable
"""


@pytest.fixture
def sample_csv(tmp_path):
    """A small trade export with mixed date formats and a blank line."""
    path = tmp_path / "trades.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path


@pytest.fixture
def make_trades():
    """
    Builds enriched trades from (holding_days, gain_loss) pairs.
    Close dates advance one day per trade starting 2024-01-01.
    """
    def _make(specs, cost=100.0, symbol="AAPL"):
        base = pd.Timestamp("2024-01-01")
        canon = []
        for i, (hold, pnl) in enumerate(specs):
            close = base + pd.Timedelta(days=i)
            canon.append(CanonicalTrade(
                close_date=close,
                open_date=close - pd.Timedelta(days=hold),
                symbol=symbol,
                gross_gain_loss=pnl,
                cost=cost,
            ))
        return enrich(canon)
    return _make


@pytest.fixture
def raw_rows():
    """Ten well-formed rows, one per day in March 2024."""
    rows = []
    for i in range(10):
        rows.append({
            "CLOSE_DATE": f"03/{i + 11:02d}/2024",
            "OPEN_DATE": f"2024-03-{i + 1:02d}",
            "SYMBOL": "MSFT",
            "QUANTITY": str(i + 1),
            "NO_WS_PROCEEDS": f"${(i + 1) * 100:,.2f}",
            "NO_WS_COST": "$100.00",
            "NO_WS_GAINLOSS": f"${(i - 4) * 10:.2f}",
            "NOTE": f"row {i}",
        })
    return rows
