#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
from datetime import date

from tally.reporting import Query, ReportAPI


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Fetch a merged analytics report")
    p.add_argument("ids", nargs="+", help="Account/view ids (without the ga: prefix)")
    p.add_argument("--access-token", required=True)
    p.add_argument("--start-date", type=date.fromisoformat)
    p.add_argument("--end-date", type=date.fromisoformat)
    p.add_argument("--metrics", default="ga:pageviews", help="Comma separated metrics")
    p.add_argument("--dimensions", default="", help="Comma separated dimensions")
    p.add_argument("--filter", action="append", default=[], dest="filters")
    p.add_argument("--filters-separator", default=",")
    p.add_argument("--max-results", type=int, default=10000)
    p.add_argument("--user-ip")
    return p.parse_args()


async def main() -> None:
    args = parse_args()

    fields = {
        "ids": args.ids,
        "access_token": args.access_token,
        "metrics": [m for m in args.metrics.split(",") if m],
        "dimensions": [d for d in args.dimensions.split(",") if d],
        "filters": args.filters,
        "filters_separator": args.filters_separator,
        "max_results": args.max_results,
        "user_ip": args.user_ip,
    }
    if args.start_date:
        fields["start_date"] = args.start_date
    if args.end_date:
        fields["end_date"] = args.end_date
    query = Query(**fields)

    async with ReportAPI() as api:
        report = await api.fetch_report(query)

    print("=" * 65)
    print(f"Ids        : {query.normalized_ids()}")
    print(f"Range      : {query.start_date} -> {query.end_date}")
    print(f"Rows       : {len(report.rows)}")
    print("=" * 65)
    for metric, total in report.totals_for_all_results.items():
        print(f"{metric:30} | {total:>15}")
    print("-" * 65)
    for row in report.rows[:20]:
        print(" | ".join(str(cell) for cell in row))
    print("=" * 65)


if __name__ == "__main__":
    asyncio.run(main())
