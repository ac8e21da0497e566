"""``perch match`` and ``perch url`` — try a router from the command line."""

import argparse
import sys

from perch.cli._routes import handler_label, load_router
from perch.errors import PerchError


def run_match(args: argparse.Namespace) -> None:
    """Print every route matching ``args.path`` for ``args.method``.

    Exits with status 1 when nothing matches.
    """
    router = load_router(args.router)
    matches = router.find_routes(args.path, args.method)
    if not matches:
        print(f"No route matches {args.method} {args.path}", file=sys.stderr)
        raise SystemExit(1)

    for match in matches:
        route = match.route
        print(f"{route.method}  {route.uri_pattern}  {handler_label(route.handler)}")
        for name, value in match.path_params.items():
            print(f"    {name} = {value}")


def run_url(args: argparse.Namespace) -> None:
    """Render a URI from a route name or pattern plus ``key=value`` pairs."""
    params: dict[str, str] = {}
    for item in args.params:
        key, sep, value = item.partition("=")
        if not sep or not key:
            print(f"Error: expected key=value, got {item!r}", file=sys.stderr)
            raise SystemExit(2)
        params[key] = value

    router = load_router(args.router)
    try:
        uri = router.uri_for(args.target, params)
    except PerchError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    print(uri)
