import argparse
import logging
import sys
from tabulate import tabulate
from .config import DEFAULT_WIN_RATE_BINS
from .formatting import format_currency
from .pipeline import analyze_csv

# ANSI color codes
GREEN = '\033[92m'
RED = '\033[91m'
RESET = '\033[0m'

def _format_pnl(pnl):
    """Formats PnL with color."""
    if pnl >= 0:
        return f"{GREEN}{format_currency(pnl)}{RESET}"
    else:
        return f"{RED}{format_currency(pnl)}{RESET}"

def main(argv=None):
    parser = argparse.ArgumentParser(description="The Trade Auditor")
    parser.add_argument("--csv", required=True, help="Path to CSV")
    parser.add_argument("--bins", type=int, default=DEFAULT_WIN_RATE_BINS,
                        help="Number of equal-population holding period ranges")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.bins < 1:
        print("Error: --bins must be at least 1")
        return 1

    res = analyze_csv(csv_path=args.csv, num_bins=args.bins)

    if "error" in res:
        print(f"Error: {res['error']}")
        return 1

    print("\n--- TRADE SUMMARY ---")
    summary = [[label, value] for label, value in res["summary_display"].items()]
    summary.append(["Trades Analyzed", f"{res['summary']['total_trades']}"])
    if res["failures"]:
        summary.append(["Rows Skipped", f"{len(res['failures'])}"])
    print(tabulate(summary, tablefmt="presto", numalign="right"))

    print("\n--- HOLDING PERIODS ---")
    bucket_table = [[b["label"], b["count"]] for b in res["buckets"]]
    print(tabulate(bucket_table, headers=["Holding Period", "Trades"], tablefmt="presto", numalign="right"))

    print("\n--- WIN RATE BY HOLDING PERIOD ---")
    range_table = [[r["range"], f"{r['win_rate']:.1f}%", r["count"]] for r in res["ranges"]]
    print(tabulate(range_table, headers=["Days", "Win Rate", "Trades"], tablefmt="presto", numalign="right"))

    print("\n--- MONTHLY P&L ---")
    month_table = [[m["month"], _format_pnl(m["pnl"])] for m in res["monthly_pnl"]]
    print(tabulate(month_table, headers=["Month", "P&L"], tablefmt="presto", numalign="right"))

    return 0

def run_main():
    sys.exit(main())

if __name__ == "__main__": # pragma: no cover
    run_main()
