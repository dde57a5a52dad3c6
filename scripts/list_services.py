#!/usr/bin/env python3
"""Print one page of the services catalog the way the table shows it.

Usage
-----
Point the client at a backend and run::

    export CATALOG_BASE_URL="http://localhost:3000"
    python scripts/list_services.py --search strzyż --page 0 --size 25

Options::

    --search TEXT        Case-insensitive name filter
    --page N             Zero-based page index (default: 0)
    --size N             Rows per page (one of the configured options)
    --json               Output as machine-readable JSON
    --delete ID [ID...]  Bulk-delete these ids before listing
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pycatalog import CatalogClient, CatalogConfig, CatalogError, ServicesTable  # noqa: E402


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _parse_id(value: str) -> int | str:
    return int(value) if value.isdigit() else value


def _report_error(error: CatalogError) -> None:
    print(f"  !! {error}", file=sys.stderr)


async def main() -> int:
    parser = argparse.ArgumentParser(description="List services from the catalog backend.")
    parser.add_argument("--search", default="", help="Case-insensitive name filter")
    parser.add_argument("--page", type=int, default=0, help="Zero-based page index")
    parser.add_argument("--size", type=int, help="Rows per page")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--delete", nargs="+", default=[], metavar="ID", help="Bulk-delete these ids first")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    config = CatalogConfig.from_env()

    async with CatalogClient(config) as client:
        table = ServicesTable(client, on_error=_report_error)
        if not await table.mount():
            return 1

        if args.delete:
            for service_id in args.delete:
                table.toggle_selected(_parse_id(service_id))
            result = await table.delete_selected()
            if result is not None and not args.json_mode:
                print(f"deleted: {list(result.deleted)} failed: {list(result.failed)}")

        if args.size is not None:
            table.set_rows_per_page(args.size)
        table.set_search(args.search)
        table.set_page(args.page)
        view = table.projection
        rows = table.rows()

    if args.json_mode:
        payload: dict[str, Any] = {
            "search": args.search,
            "page": view.page,
            "page_size": view.page_size,
            "page_count": view.page_count,
            "total": view.total,
            "rows": [
                {"id": row.service.id, "name": row.service.name, "price": row.price_label}
                for row in rows
            ],
        }
        print(json.dumps(payload, indent=2, default=str, ensure_ascii=False))
        return 0

    print(_section(f"services (page {view.page + 1}/{max(view.page_count, 1)}, {view.total} matching)"))
    for row in rows:
        print(f"  {str(row.service.id):>6}  {row.service.name:<40} {row.price_label:>12}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
