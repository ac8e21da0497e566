"""Route, RouteMatch, and RouteGroup definitions."""

from dataclasses import dataclass, field
from typing import Any

# Wildcard method: the route takes part in lookups for every method
ALL = "ALL"

METHODS: frozenset[str] = frozenset(
    {"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS", "CONNECT", "TRACE", ALL}
)


@dataclass(frozen=True, slots=True, eq=False)
class Route:
    """A frozen route definition.

    Equality is identity: two routes with the same method and pattern are
    still distinct entries in a router, and ``remove_route()`` only ever
    removes the exact object it is given.

    The handler is opaque; perch stores it and hands it back in matches
    but never inspects or calls it.
    """

    method: str
    uri_pattern: str
    handler: Any
    name: str | None = None


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match.

    ``path_params`` keys appear in left-to-right pattern order.
    """

    route: Route
    path_params: dict[str, str]


def join_uri(prefix: str, uri: str) -> str:
    """Join two URI fragments with exactly one ``/`` between them."""
    if not prefix:
        return uri
    if not uri:
        return prefix
    return f"{prefix.rstrip('/')}/{uri.lstrip('/')}"


@dataclass(slots=True)
class RouteGroup:
    """Routes declared relative to a shared URI prefix.

    Usage::

        api = RouteGroup("/api")
        api.get("/contact/{id}", show_contact)
        api.post("/contact", create_contact, name="contact.create")
        router.add_route_group(api)

    Groups nest; a child group's prefix is joined onto its parent's.
    """

    prefix: str
    routes: list[Route] = field(default_factory=list)
    children: list["RouteGroup"] = field(default_factory=list)

    def add(self, method: str, uri_pattern: str, handler: Any, name: str | None = None) -> Route:
        """Declare a route relative to this group and return it."""
        route = Route(method, join_uri(self.prefix, uri_pattern), handler, name)
        self.routes.append(route)
        return route

    def group(self, prefix: str) -> "RouteGroup":
        """Create a nested group under this one."""
        child = RouteGroup(join_uri(self.prefix, prefix))
        self.children.append(child)
        return child

    def all_routes(self) -> list[Route]:
        """Return this group's routes followed by each child's, depth first."""
        collected = list(self.routes)
        for child in self.children:
            collected.extend(child.all_routes())
        return collected

    def get(self, uri_pattern: str, handler: Any, name: str | None = None) -> Route:
        return self.add("GET", uri_pattern, handler, name)

    def post(self, uri_pattern: str, handler: Any, name: str | None = None) -> Route:
        return self.add("POST", uri_pattern, handler, name)

    def put(self, uri_pattern: str, handler: Any, name: str | None = None) -> Route:
        return self.add("PUT", uri_pattern, handler, name)

    def patch(self, uri_pattern: str, handler: Any, name: str | None = None) -> Route:
        return self.add("PATCH", uri_pattern, handler, name)

    def delete(self, uri_pattern: str, handler: Any, name: str | None = None) -> Route:
        return self.add("DELETE", uri_pattern, handler, name)

    def any(self, uri_pattern: str, handler: Any, name: str | None = None) -> Route:
        return self.add(ALL, uri_pattern, handler, name)
