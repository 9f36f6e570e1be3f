"""``pageshell run``: serve an app from an import string."""

import argparse
import sys

from pageshell.cli._resolve import resolve_app


def run_app(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and serve it.

    ``--reload`` forces reload on; otherwise the app's ``debug`` setting
    decides. The import string is passed on so reload re-imports the app.
    """
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    from pageshell.server.serve import run_server

    run_server(
        app,
        host=args.host,
        port=args.port,
        reload=True if args.reload else None,
        app_path=args.app,
    )
