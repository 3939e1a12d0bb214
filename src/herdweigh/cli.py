"""Command-line interface for herd growth and health insights.

Usage:
    herdweigh --data herd.json growth A-001
    herdweigh --data herd.json health A-001 --new-weight 310
    herdweigh ready --species cattle --min-progress 90
    herdweigh feed --start 2026-01-01 --end 2026-03-31 --json

Without --data (or HERD_DATA_FILE) the remote herd-records API is used.
"""

import argparse
import asyncio
import json
import logging
import sys
from datetime import datetime, time
from pathlib import Path

from herdweigh.core.config import settings
from herdweigh.core.models import DateRange, ReadyToSellFilters, as_utc
from herdweigh.core.units import format_adg, format_percent, format_weight
from herdweigh.data.local import load_json_store
from herdweigh.data.remote import HerdAPIError, RemoteEntityStore, RemoteTransactionStore, RetryableError
from herdweigh.insights import (
    FeedPerformanceUseCase,
    GrowthMetricsUseCase,
    HealthIssuesUseCase,
    ReadyToSellUseCase,
)


def _parse_day(value: str, end_of_day: bool = False) -> datetime:
    day = datetime.fromisoformat(value)
    if len(value) == 10 and end_of_day:
        day = datetime.combine(day.date(), time.max)
    return as_utc(day)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Livestock growth and health insights")
    parser.add_argument("--data", type=Path, help="Local JSON export (default: HERD_DATA_FILE or remote API)")
    parser.add_argument("--tenant", default=None, help="Tenant ID (default: HERD_TENANT_ID)")
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    growth_parser = subparsers.add_parser("growth", help="Growth report for one animal")
    growth_parser.add_argument("animal_id", help="Animal ID")

    health_parser = subparsers.add_parser("health", help="Health flags for one animal")
    health_parser.add_argument("animal_id", help="Animal ID")
    health_parser.add_argument("--new-weight", type=float, help="Check a weight (kg) before recording it")

    ready_parser = subparsers.add_parser("ready", help="Animals ranked by progress to target weight")
    ready_parser.add_argument("--species", help="Filter by species")
    ready_parser.add_argument("--group", help="Filter by current group")
    ready_parser.add_argument("--min-progress", type=float, help="Minimum progress percent")

    feed_parser = subparsers.add_parser("feed", help="Compare feed types by average daily gain")
    feed_parser.add_argument("--start", required=True, help="Start date (YYYY-MM-DD)")
    feed_parser.add_argument("--end", required=True, help="End date (YYYY-MM-DD, inclusive)")

    return parser


def _open_stores(data_file: Path | None):
    """Return (transaction_store, entity_store)."""
    path = data_file or settings.herd_data_file
    if path is not None:
        store = load_json_store(path)
        return store, store
    return RemoteTransactionStore(), RemoteEntityStore()


def _print_json(payload) -> None:
    print(json.dumps(payload, indent=2, default=str))


async def cli_main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        return 0

    tenant_id = args.tenant or settings.herd_tenant_id

    try:
        transactions, entities = _open_stores(args.data)

        if args.command == "growth":
            report = await GrowthMetricsUseCase(transactions).execute(args.animal_id)
            if args.json:
                _print_json(report.to_dict())
            else:
                print(f"Animal: {args.animal_id}")
                print(f"First weigh: {format_weight(report.first_weight_kg)} on {report.first_date:%Y-%m-%d}")
                print(f"Latest weigh: {format_weight(report.latest_weight_kg)} on {report.latest_date:%Y-%m-%d}")
                print(f"Total gain: {format_weight(report.total_gain_kg)} over {report.total_days} days")
                print(f"ADG: {format_adg(report.avg_daily_gain_kg_per_day)}")
                if report.weekly_gains:
                    print("\nWeekly gains:")
                    for week in report.weekly_gains:
                        print(
                            f"  {week.week_start:%Y-%m-%d} - {week.week_end:%Y-%m-%d}  "
                            f"{format_weight(week.gain_kg):>10}  {format_adg(week.adg_kg_per_day)}"
                        )

        elif args.command == "health":
            flags = await HealthIssuesUseCase(transactions).execute(args.animal_id, args.new_weight)
            if args.json:
                _print_json([f.to_dict() for f in flags])
            elif not flags:
                print(f"No health issues found for {args.animal_id}")
            else:
                for flag in flags:
                    print(f"[{flag.severity.value.upper():<8}] {flag.timestamp:%Y-%m-%d}  {flag.message}")

        elif args.command == "ready":
            filters = ReadyToSellFilters(
                species=args.species,
                group=args.group,
                min_progress_percent=args.min_progress,
            )
            ranked = await ReadyToSellUseCase(entities, transactions).execute(tenant_id, filters)
            if args.json:
                _print_json([r.to_dict() for r in ranked])
            else:
                for r in ranked:
                    tag = r.profile.primary_tag or r.animal_id
                    status = "READY" if r.is_ready else f"{format_weight(r.remaining_kg)} to go"
                    print(
                        f"{tag:<15} {format_weight(r.current_weight_kg):>10} / "
                        f"{format_weight(r.target_weight_kg):<10} {format_percent(r.progress_percent):>7}  {status}"
                    )

        elif args.command == "feed":
            date_range = DateRange(start=_parse_day(args.start), end=_parse_day(args.end, end_of_day=True))
            result = await FeedPerformanceUseCase(transactions).execute(tenant_id, date_range)
            if args.json:
                _print_json(result.to_dict())
            else:
                print(f"Animals weighed: {result.total_animals}")
                for m in result.metrics:
                    brand = f" ({m.feed_brand})" if m.feed_brand else ""
                    print(
                        f"#{m.performance_rank} {m.feed_type}{brand}: {format_adg(m.avg_adg)}, "
                        f"{m.animal_count} animals, avg gain {format_weight(m.avg_total_gain)} "
                        f"over {m.avg_days_on_feed:.0f} days"
                    )

    except FileNotFoundError as e:
        print(f"Error: data file not found: {e.filename}", file=sys.stderr)
        return 1
    except ValueError as e:
        # Includes NoTransactionsError and malformed dates or records
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (HerdAPIError, RetryableError) as e:
        print(f"API error: {e}", file=sys.stderr)
        return 2

    return 0


def cli() -> None:
    """Console script entry point."""
    sys.exit(asyncio.run(cli_main()))


if __name__ == "__main__":
    cli()
