"""
Drink ledger CLI. Run from project root: python -m drink_ledger.main <command>
Logs drinks into the local slot and prints the running pure-alcohol total.
"""

import argparse
import logging
import sys

from drink_ledger import config
from drink_ledger.calculations import format_amount, is_valid_factor
from drink_ledger.errors import ErrorKind, LedgerError
from drink_ledger.graph import save_total_graph


def _factor(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {raw!r}")
    if not is_valid_factor(value):
        raise argparse.ArgumentTypeError(f"must be a finite number > 0: {raw!r}")
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Drink ledger: log drinks and track pure alcohol")
    parser.add_argument("--db", type=str, help="SQLite file holding the slot (default: $LEDGER_DB_PATH)")
    parser.add_argument("--key", type=str, help="Slot name (default: $LEDGER_STORAGE_KEY)")
    parser.add_argument("--factor", type=_factor, help="Absorption factor, e.g. 1.0 (ml) or 0.8 (g)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command", required=True)
    add = sub.add_parser("add", help="Log a drink")
    add.add_argument("name")
    add.add_argument("strength", help="Alcohol strength in percent (0-100)")
    add.add_argument("volume", help="Volume drunk in ml (>= 1)")
    delete = sub.add_parser("delete", help="Delete a drink by id")
    delete.add_argument("record_id")
    sub.add_parser("list", help="List drinks, newest first")
    sub.add_parser("total", help="Print the running total")
    sub.add_parser("reset", help="Remove every logged drink")
    graph = sub.add_parser("graph", help="Save running-total graph")
    graph.add_argument("output", metavar="FILE", help="Image path, e.g. total.png")
    return parser


def main(argv=None):
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    ledger = config.build_ledger(path=args.db, key=args.key, factor=args.factor)
    warning = ledger.load_from_store()
    if warning is ErrorKind.CORRUPT_DATA:
        print("Stored data was unreadable; starting with an empty ledger.", file=sys.stderr)
    elif warning is not None:
        print(f"Storage problem ({warning.value}); starting with an empty ledger.", file=sys.stderr)

    unit = ledger.unit
    try:
        if args.command == "add":
            record = ledger.add(args.name, args.strength, args.volume)
            print(f"{record.id}  {record.name}: {format_amount(record.pure_alcohol)} {unit}")
        elif args.command == "delete":
            ledger.delete(args.record_id)
            print(f"Deleted {args.record_id}")
        elif args.command == "list":
            records = ledger.get_all()
            if not records:
                print("No drinks logged yet.")
            for r in reversed(records):
                print(
                    f"{r.id}  {r.name}  {r.strength_percent:g}%  {r.volume_ml:g}ml  "
                    f"{format_amount(r.pure_alcohol)} {unit}"
                )
        elif args.command == "reset":
            ledger.store.clear()
            print("Ledger cleared.")
            return 0
        elif args.command == "graph":
            try:
                path = save_total_graph(ledger.get_all(), output_path=args.output, unit=unit)
            except ImportError:
                print("matplotlib not installed. pip install matplotlib", file=sys.stderr)
                return 1
            print(f"Graph saved: {path}")
    except LedgerError as exc:
        print(f"Error ({exc.kind.value}): {exc}", file=sys.stderr)
        return 1

    print(f"Total: {format_amount(ledger.get_total())} {unit}")
    return 0


if __name__ == "__main__":
    sys.exit(main() or 0)
