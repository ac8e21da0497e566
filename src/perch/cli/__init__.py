"""Perch CLI — inspect a router's routes, matches, and rendered URIs.

Entry point registered as ``perch`` in ``pyproject.toml``::

    [project.scripts]
    perch = "perch.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``perch`` command."""
    parser = argparse.ArgumentParser(
        prog="perch",
        description="Perch — URI templates, route matching, and reverse routing.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log routing decisions to stderr",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- perch routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument("router", help="Import string (e.g. myapp:router)")

    # -- perch match ------------------------------------------------------
    match_parser = subparsers.add_parser("match", help="Show every route matching a path")
    match_parser.add_argument("router", help="Import string (e.g. myapp:router)")
    match_parser.add_argument("method", help="Request method (e.g. GET)")
    match_parser.add_argument("path", help="Raw request path (e.g. /contact/5)")

    # -- perch url --------------------------------------------------------
    url_parser = subparsers.add_parser("url", help="Render a URI from a route name or pattern")
    url_parser.add_argument("router", help="Import string (e.g. myapp:router)")
    url_parser.add_argument("target", help="Route name or uri pattern")
    url_parser.add_argument(
        "params",
        nargs="*",
        metavar="key=value",
        help="Parameter values; leftovers become the query string",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from perch.cli._routes import run_routes

        run_routes(args)
    elif args.command == "match":
        from perch.cli._match import run_match

        run_match(args)
    elif args.command == "url":
        from perch.cli._match import run_url

        run_url(args)
