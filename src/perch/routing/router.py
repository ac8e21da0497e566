"""Route registry and matcher.

Routes are compiled eagerly when they are added, so a malformed pattern
fails at registration instead of silently never matching.

Free-threading safety:
    - Router state lives in one immutable ``_RouteTable`` snapshot
    - Writers serialize on a Lock and swap in a rebuilt table
    - Readers grab the current table once and never lock, so a lookup
      never sees a half-applied add or remove
"""

import logging
import threading
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from perch.config import RouterConfig
from perch.errors import (
    DuplicateRouteNameError,
    InvalidMethodError,
    InvalidPatternError,
)
from perch.routing.pattern import CompiledPattern, compile_pattern
from perch.routing.route import ALL, METHODS, Route, RouteGroup, RouteMatch, join_uri
from perch.routing.uri import render_uri

logger = logging.getLogger("perch.routing")


@dataclass(frozen=True, slots=True)
class _Entry:
    """A registered route together with its compiled pattern."""

    route: Route
    compiled: CompiledPattern


@dataclass(frozen=True, slots=True)
class _RouteTable:
    """Immutable snapshot of everything a lookup needs."""

    entries: tuple[_Entry, ...]
    # method -> candidates in registration order, ALL routes interleaved
    by_method: Mapping[str, tuple[_Entry, ...]]
    by_name: Mapping[str, Route]

    @classmethod
    def build(cls, entries: Iterable[_Entry]) -> "_RouteTable":
        entries = tuple(entries)
        by_method: dict[str, tuple[_Entry, ...]] = {}
        for method in METHODS:
            if method == ALL:
                by_method[method] = tuple(e for e in entries if e.route.method == ALL)
            else:
                by_method[method] = tuple(
                    e for e in entries if e.route.method in (method, ALL)
                )
        by_name = {e.route.name: e.route for e in entries if e.route.name}
        return cls(entries=entries, by_method=by_method, by_name=by_name)


class Router:
    """Ordered route registry with regex-based path matching.

    Usage::

        router = Router()
        router.add_route(Route("GET", "/contact/{id: [0-9]+}", show_contact))
        router.add_route(Route("ALL", "/public/{path: .*}", serve_static))

        for match in router.find_routes("/contact/5", "GET"):
            match.route.handler, match.path_params   # ..., {"id": "5"}

        router.uri_for("/contact/{id}", {"id": 5, "tab": "notes"})
        # "/contact/5?tab=notes"
    """

    __slots__ = ("_config", "_context_path", "_lock", "_table")

    def __init__(self, config: RouterConfig | None = None) -> None:
        self._config = config or RouterConfig()
        self._context_path = self._config.context_path.rstrip("/")
        self._lock = threading.Lock()
        self._table = _RouteTable.build(())

    @property
    def config(self) -> RouterConfig:
        return self._config

    # -- Registration ------------------------------------------------------

    def add_route(self, route: Route) -> Route:
        """Validate, compile, and append a route.

        Raises ``InvalidPatternError`` or ``InvalidMethodError`` for a
        missing pattern or method, ``CompilationError`` for a malformed
        pattern, and ``DuplicateRouteNameError`` for a name already in use.
        The router is unchanged when any of these is raised.
        """
        self._add((route,))
        return route

    def add_route_group(self, group: RouteGroup) -> list[Route]:
        """Add every route of *group* (and its nested groups), all or nothing."""
        routes = group.all_routes()
        self._add(routes)
        return routes

    def _add(self, routes: Iterable[Route]) -> None:
        entries = [self._compile(route) for route in routes]
        with self._lock:
            table = self._table
            names = set(table.by_name)
            for entry in entries:
                name = entry.route.name
                if name is None:
                    continue
                if name in names:
                    raise DuplicateRouteNameError(name)
                names.add(name)
            self._table = _RouteTable.build((*table.entries, *entries))

        for entry in entries:
            logger.debug("Added route %s %s", entry.route.method, entry.route.uri_pattern)

    def _compile(self, route: Route) -> _Entry:
        if not route.uri_pattern:
            raise InvalidPatternError()
        if not route.method or route.method not in METHODS:
            raise InvalidMethodError(route.method)
        return _Entry(route=route, compiled=compile_pattern(route.uri_pattern, self._config))

    def remove_route(self, route: Route) -> bool:
        """Remove *route* by identity.

        Returns ``False`` (and changes nothing) if it was not registered.
        """
        with self._lock:
            table = self._table
            kept = tuple(e for e in table.entries if e.route is not route)
            if len(kept) == len(table.entries):
                return False
            self._table = _RouteTable.build(kept)

        logger.debug("Removed route %s %s", route.method, route.uri_pattern)
        return True

    # -- Introspection -----------------------------------------------------

    @property
    def routes(self) -> list[Route]:
        """Return all registered routes in registration order."""
        return [e.route for e in self._table.entries]

    def get_routes(self, method: str | None = None) -> list[Route]:
        """Return routes visible to *method* (``ALL`` routes included).

        With no method, returns every route. The list is a fresh copy;
        later changes to the router don't show up in it.
        """
        if method is None:
            return self.routes
        return [e.route for e in self._table.by_method.get(method, ())]

    def get_route(self, name: str) -> Route | None:
        """Return the route registered under *name*, if any."""
        return self._table.by_name.get(name)

    def __len__(self) -> int:
        return len(self._table.entries)

    def __iter__(self) -> Iterator[Route]:
        return iter(self.routes)

    def __contains__(self, route: object) -> bool:
        return any(e.route is route for e in self._table.entries)

    # -- Matching ----------------------------------------------------------

    def find_routes(self, path: str, method: str) -> list[RouteMatch]:
        """Return every route matching *path* for *method*.

        Candidates are the routes registered for *method* plus ``ALL``
        routes, tried in registration order. The path is matched raw, so
        ``%2f`` is ordinary text inside a segment. No match is an empty
        list, never an error.
        """
        table = self._table
        path = self._strip_context_path(path)

        matches: list[RouteMatch] = []
        for entry in table.by_method.get(method, ()):
            params = entry.compiled.match(path)
            if params is not None:
                matches.append(RouteMatch(route=entry.route, path_params=params))

        if not matches:
            logger.debug("No route matches %s %r", method, path)
        return matches

    def _strip_context_path(self, path: str) -> str:
        prefix = self._context_path
        if not prefix:
            return path
        if path == prefix:
            return "/"
        if path.startswith(prefix + "/"):
            return path[len(prefix) :]
        return path

    # -- Reverse routing ---------------------------------------------------

    def uri_for(self, name_or_pattern: str, parameters: Mapping[str, Any] | None = None) -> str:
        """Render a URI from a route name or a pattern.

        A registered route name takes precedence; anything else is treated
        as a pattern. Placeholder values are inserted unencoded, leftovers
        become a form-encoded query string, and the context path is
        prepended.

        Raises ``UnresolvedParameterError`` when a placeholder has no value.
        """
        if not name_or_pattern:
            raise InvalidPatternError()
        route = self._table.by_name.get(name_or_pattern)
        pattern = route.uri_pattern if route is not None else name_or_pattern
        compiled = compile_pattern(pattern, self._config)
        uri = render_uri(pattern, compiled.tokens, parameters or {})
        return self.uri_for_path(uri)

    def uri_for_path(self, relative_uri: str) -> str:
        """Prefix *relative_uri* with the configured context path."""
        return join_uri(self._context_path, relative_uri)
