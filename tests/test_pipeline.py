import pytest
import pandas as pd
from trade_auditor.exceptions import EmptyDatasetError
from trade_auditor.pipeline import analyze_csv, analyze_rows

def _row(close, open_, pnl, cost="$100.00", symbol="AAPL"):
    return {
        "CLOSE_DATE": close,
        "OPEN_DATE": open_,
        "SYMBOL": symbol,
        "NO_WS_GAINLOSS": pnl,
        "NO_WS_COST": cost,
    }

def test_end_to_end_running_pnl():
    rows = [
        _row("01/03/2024", "01/01/2024", "$200.00"),
        _row("2024-01-01", "2023-12-20", "$100.00"),
        _row("01/02/2024", "2023-12-25", "$-50.00"),
    ]
    result = analyze_rows(rows)

    assert [t.gross_gain_loss for t in result.trades] == [100, -50, 200]
    assert [t.cumulative_pnl for t in result.trades] == [100, 50, 250]
    assert result.summary.total_pnl == 250
    assert result.failures == []

def test_malformed_row_dropped(raw_rows):
    clean = analyze_rows(raw_rows[:3] + raw_rows[4:])
    raw_rows[3]["OPEN_DATE"] = "3rd of March"
    result = analyze_rows(raw_rows)

    assert len(result.trades) == 9
    assert len(result.failures) == 1
    assert result.failures[0].index == 3
    assert result.failures[0].field == "OPEN_DATE"
    assert result.trades == clean.trades

def test_no_winners_pipeline():
    rows = [_row("2024-01-02", "2024-01-01", "-$5.00"), _row("2024-01-03", "2024-01-01", "$0.00")]
    result = analyze_rows(rows)
    assert result.summary.win_rate == 0
    assert result.summary.average_win is None
    assert all(r.win_rate == 0 for r in result.ranges)

def test_all_rows_bad_raises():
    rows = [_row("whenever", "2024-01-01", "$1.00"), {"CLOSE_DATE": "2024-01-01"}]
    with pytest.raises(EmptyDatasetError, match="No valid data"):
        analyze_rows(rows)

def test_empty_input_raises():
    with pytest.raises(EmptyDatasetError):
        analyze_rows([])

def test_result_artifacts(raw_rows):
    result = analyze_rows(raw_rows, num_bins=3)

    # Holding periods are all exactly 10 days
    assert [b.label for b in result.buckets] == ["≤ 24 hours", "≤ 1 week", "≤ 2 weeks"]
    assert sum(b.count for b in result.buckets) == 10
    assert len(result.ranges) == 3
    assert sum(r.count for r in result.ranges) == 10
    assert result.monthly_pnl == [{"month": "2024-03", "pnl": 50.0}]
    assert sum(h["count"] for h in result.pnl_histogram) == 10

    frame = result.frame
    assert isinstance(frame, pd.DataFrame)
    assert list(frame["NOTE"]) == [f"row {i}" for i in range(10)]

def test_analyze_csv(sample_csv):
    res = analyze_csv(str(sample_csv))

    assert "error" not in res
    assert len(res["trades"]) == 3
    assert [t["symbol"] for t in res["trades"]] == ["AAPL--240119C00150000", "SPY", "TSLA--240216P00190000"]
    assert [t["cumulative_pnl"] for t in res["trades"]] == [100.0, 50.0, 250.0]
    assert res["trades"][0]["option_type"] == "C"
    assert res["trades"][0]["strike"] == 150.0
    assert res["trades"][0]["ACCOUNT"] == "IRA"
    assert res["summary"]["total_pnl"] == 250.0
    assert res["summary_display"]["Total P&L"] == "$250.00"
    assert res["summary_display"]["Best Month"] == "2024-02"
    # TSLA was held 71 days, so buckets run up to the 3 month bound
    assert res["buckets"][-1]["label"] == "≤ 3 months"
    assert res["buckets"][-1]["max"] == 90
    assert res["buckets"][-1]["inclusive_max"] is True
    assert all(b["inclusive_max"] is False for b in res["buckets"][:-1])

def test_analyze_csv_unbounded_bucket_serializes_as_none(tmp_path):
    path = tmp_path / "long.csv"
    path.write_text("CLOSE_DATE,OPEN_DATE,SYMBOL,NO_WS_GAINLOSS\n2024-06-01,2022-01-01,IBM,$10.00\n")
    res = analyze_csv(str(path))
    assert res["buckets"][-1]["label"] == "> 1 year"
    assert res["buckets"][-1]["max"] is None
    assert res["buckets"][-1]["inclusive_max"] is False

def test_analyze_csv_errors(tmp_path):
    assert analyze_csv() == {"error": "No input data provided"}
    assert "not found" in analyze_csv(str(tmp_path / "missing.csv"))["error"]

    empty = tmp_path / "empty.csv"
    empty.write_text("")
    assert analyze_csv(str(empty)) == {"error": "CSV file is empty"}

    junk = tmp_path / "junk.csv"
    junk.write_text("CLOSE_DATE,OPEN_DATE,SYMBOL\nsoon,later,AAPL\n")
    assert analyze_csv(str(junk)) == {"error": "No valid data after processing"}

def test_analyze_csv_failures_name_the_bad_column(tmp_path):
    path = tmp_path / "partial.csv"
    path.write_text(
        "CLOSE_DATE,OPEN_DATE,SYMBOL,NO_WS_GAINLOSS\n"
        "2024-01-05,2024-01-01,AAPL,$10.00\n"
        "someday,2024-01-01,MSFT,$5.00\n"
        "2024-01-07,2024-01-01,,$1.00\n"
    )
    res = analyze_csv(str(path))

    assert len(res["trades"]) == 1
    assert res["failures"][0]["index"] == 1
    assert res["failures"][0]["field"] == "CLOSE_DATE"
    assert "someday" in res["failures"][0]["error"]
    assert res["failures"][1] == {"index": 2, "field": "SYMBOL", "error": "Missing symbol"}
