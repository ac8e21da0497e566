"""``perch routes`` — list registered routes.

Resolves an import string to a perch Router and prints all registered
routes with method, pattern, and handler info.
"""

import argparse
import sys

from perch.cli._resolve import resolve_router
from perch.errors import PerchError
from perch.routing.router import Router


def load_router(import_string: str) -> Router:
    """Resolve *import_string*, exiting with status 1 on failure."""
    try:
        return resolve_router(import_string)
    except (ModuleNotFoundError, AttributeError, TypeError, PerchError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


def handler_label(handler: object) -> str:
    return getattr(handler, "__name__", None) or repr(handler)


def run_routes(args: argparse.Namespace) -> None:
    """List registered routes in registration order.

    Prints a table of METHOD, PATTERN, and handler name.
    """
    router = load_router(args.router)
    routes = router.routes
    if not routes:
        print("No routes registered.")
        return

    rows: list[tuple[str, str, str]] = []
    for route in routes:
        label = handler_label(route.handler)
        if route.name:
            label = f"{label} ({route.name})"
        rows.append((route.method, route.uri_pattern, label))

    max_method = max(6, *(len(r[0]) for r in rows))  # "METHOD" header
    max_pattern = max(7, *(len(r[1]) for r in rows))  # "PATTERN" header

    fmt = f"{{:<{max_method}}}  {{:<{max_pattern}}}  {{}}"
    print(fmt.format("METHOD", "PATTERN", "HANDLER"))
    sep_len = max_method + max_pattern + 4 + max((len(r[2]) for r in rows), default=0)
    print("-" * min(sep_len, 80))
    for method, pattern, label in rows:
        print(fmt.format(method, pattern, label))
