#!/usr/bin/env python3
"""
Add or list todo items directly in the configured store (SQLite or MySQL).

Usage:
  python scripts/add_item.py --name "Buy milk" [--completed]
  python scripts/add_item.py --list
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Make the todoapp package importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from todoapp.core.config import get_settings
from todoapp.core.logging import configure_logging
from todoapp.services.store_factory import open_store


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Add or list todo items")
    group = ap.add_mutually_exclusive_group(required=True)
    group.add_argument("--name", help="Item text (ex.: 'Buy milk')")
    group.add_argument("--list", action="store_true", help="Print every item")
    ap.add_argument("--completed", action="store_true", help="Create the item already completed")
    args = ap.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.log_level)
    store = open_store(settings)
    try:
        if args.list:
            for item in store.list():
                mark = "x" if item.completed else " "
                print(f"[{mark}] {item.id}: {item.name}")
            return
        item = store.create(args.name, completed=args.completed)
        print("OK: item created")
        print(f"  ID: {item.id}")
        print(f"  Name: {item.name}")
        print(f"  Completed: {item.completed}")
    finally:
        store.close()


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
