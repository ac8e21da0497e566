"""Perch exception hierarchy.

Shared across the pattern compiler, Router, URI builder, and CLI so every
module raises and catches the same types.
"""


class PerchError(Exception):
    """Base for all perch-specific errors."""


class RouteValidationError(PerchError, ValueError):
    """Raised when a route is rejected at registration time.

    The router is left unmodified when this is raised.
    """


class InvalidPatternError(RouteValidationError):
    """The route's URI pattern is ``None`` or empty."""

    def __init__(self, detail: str = "The uri pattern cannot be null or empty") -> None:
        super().__init__(detail)


class InvalidMethodError(RouteValidationError):
    """The route's request method is missing or not a known token."""

    def __init__(self, method: str | None = None) -> None:
        self.method = method
        if not method:
            detail = "Unspecified request method"
        else:
            detail = f"Unknown request method {method!r}"
        super().__init__(detail)


class DuplicateRouteNameError(RouteValidationError):
    """Another registered route already uses this name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"A route named {name!r} is already registered")


class CompilationError(PerchError, ValueError):
    """A URI pattern could not be compiled into a matcher.

    Raised eagerly by ``Router.add_route()`` so a misconfigured route
    fails at startup instead of silently never matching.
    """

    def __init__(self, pattern: str, detail: str) -> None:
        self.pattern = pattern
        self.detail = detail
        super().__init__(f"Cannot compile uri pattern {pattern!r}: {detail}")


# Alias used by callers that think in terms of the pattern language.
PatternError = CompilationError


class UnresolvedParameterError(PerchError, LookupError):
    """``uri_for()`` found a placeholder with no supplied value."""

    def __init__(self, name: str, pattern: str) -> None:
        self.name = name
        self.pattern = pattern
        super().__init__(f"No value supplied for parameter {name!r} in {pattern!r}")
