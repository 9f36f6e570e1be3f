"""``pageshell routes``: list routed pages in the order they are tried."""

import argparse
import sys

from pageshell.cli._resolve import resolve_app

_HEADER = ("#", "PATH", "MATCH", "PAGE")


def run_routes(args: argparse.Namespace) -> None:
    """Print the route table of ``args.app``; first match wins, so row 1 is tried first."""
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    entries = app.routes
    if not entries:
        print("No routes registered.")
        return

    rows = [_HEADER]
    rows.extend(
        (str(position), entry.path, entry.match_kind, entry.page_label)
        for position, entry in enumerate(entries, start=1)
    )
    widths = [max(len(row[column]) for row in rows) for column in range(3)]

    for line, row in enumerate(rows):
        print(
            f"{row[0]:>{widths[0]}}  {row[1]:<{widths[1]}}  {row[2]:<{widths[2]}}  {row[3]}"
        )
        if line == 0:
            print("-" * min(sum(widths) + 6 + max(len(r[3]) for r in rows), 80))
