"""Command line: serve a pageshell app, or print its route table.

Installed as the ``pageshell`` console script::

    pageshell run notes.app:app --port 8080
    pageshell routes notes.app:app
"""

import argparse


def _run(args: argparse.Namespace) -> None:
    from pageshell.cli._run import run_app

    run_app(args)


def _routes(args: argparse.Namespace) -> None:
    from pageshell.cli._routes import run_routes

    run_routes(args)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pageshell",
        description="Routed pages inside a server-rendered application shell.",
    )
    commands = parser.add_subparsers(dest="command")

    run = commands.add_parser("run", help="Serve the app")
    run.add_argument("app", help="Import string, e.g. notes.app:app")
    run.add_argument("--host", default=None, help="Address to bind (default: config.host)")
    run.add_argument("--port", type=int, default=None, help="Port to bind (default: config.port)")
    run.add_argument(
        "--reload",
        action="store_true",
        help="Restart when source files change (on by default with debug=True)",
    )
    run.set_defaults(handler=_run)

    routes = commands.add_parser("routes", help="Print routed pages in the order they are tried")
    routes.add_argument("app", help="Import string, e.g. notes.app:app")
    routes.set_defaults(handler=_routes)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Entry point of the ``pageshell`` command; prints help when no command is given."""
    parser = build_parser()
    args = parser.parse_args(argv)
    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        raise SystemExit(0)
    handler(args)
