"""Command line interface for RestSeating."""
from __future__ import annotations

import argparse
import csv
import logging
import sys
from pathlib import Path
from typing import List, Sequence

from .csv_loader import load_all
from .manager import SeatingManager
from .models import SeatingError
from .replay import EventReplay, Snapshot, demo_events, demo_tables


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Replay venue arrivals and departures")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--tables", type=Path, help="Path to tables.csv")
    source.add_argument("--demo", action="store_true",
                        help="Replay the built-in seven table demo.")
    parser.add_argument("--events", type=Path, help="Path to events.csv (required with --tables)")
    parser.add_argument("--quiet", action="store_true",
                        help="Only print the final state instead of every step.")
    parser.add_argument("--out-snapshots", type=Path,
                        help="Write one CSV row per replayed event.")
    parser.add_argument("--out-report", type=Path,
                        help="Write per-table occupancy report CSV for the final state.")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging verbosity.")
    return parser


def _write_snapshots(path: Path, history: List[Snapshot]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as f:
        w = csv.writer(f)
        w.writerow(["step", "event", "group", "size", "table", "state"])
        for snap in history:
            w.writerow([
                snap.step,
                snap.event.kind,
                snap.event.label,
                snap.event.size if snap.event.size is not None else "",
                snap.table or "",
                snap.text.replace("\n", " | "),
            ])


def _write_report(path: Path, manager: SeatingManager) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as f:
        w = csv.DictWriter(f, fieldnames=[
            "table", "capacity", "free_seats", "used_seats", "occupied", "utilisation",
        ])
        w.writeheader()
        for s in manager.occupancy_report():
            row = dict(s)
            row["utilisation"] = f"{s['utilisation']:.4f}"
            w.writerow(row)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point used by ``python -m rest_seating.cli``."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.tables and not args.events:
        parser.error("--events is required with --tables")
    if args.demo and args.events:
        parser.error("--events cannot be used with --demo")

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.demo:
            tables, events = demo_tables(), demo_events()
        else:
            tables, events = load_all(args.tables, args.events)
        manager = SeatingManager(tables)
        replay = EventReplay(manager)

        if not args.quiet:
            print(manager)
            print("---")
        for event in events:
            snap = replay.apply(event)
            if not args.quiet:
                print(event)
                print(snap.text)
    except (ValueError, SeatingError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.quiet:
        print(manager)

    summary = manager.summarize()
    print(f"[SUMMARY] tables={summary['tables']} occupied={summary['occupied_tables']} "
          f"free_seats={summary['free_seats']}/{summary['total_capacity']} "
          f"waiting={summary['waiting_groups']} ({summary['waiting_clients']} clients)")

    if args.out_snapshots:
        _write_snapshots(args.out_snapshots, replay.history)
    if args.out_report:
        _write_report(args.out_report, manager)
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
