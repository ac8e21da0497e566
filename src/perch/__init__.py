"""Perch — URI templates, route matching, and reverse routing.

Compiles declarative path patterns into matchers, finds every route that
matches a request path, and renders URIs back from patterns.

Basic usage::

    from perch import Route, Router

    router = Router()
    router.add_route(Route("GET", "/contact/{id: [0-9]+}", show_contact))

    matches = router.find_routes("/contact/5", "GET")
    matches[0].path_params  # {"id": "5"}

    router.uri_for("/contact/{id}", {"id": 5})  # "/contact/5"
"""

# Declare free-threading support (PEP 703)
_Py_mod_gil = 0

__version__ = "0.1.0-dev"
__all__ = [
    "ALL",
    "CompilationError",
    "DuplicateRouteNameError",
    "InvalidMethodError",
    "InvalidPatternError",
    "PatternError",
    "PerchError",
    "Route",
    "RouteGroup",
    "RouteMatch",
    "RouteValidationError",
    "Router",
    "RouterConfig",
    "UnresolvedParameterError",
    "compile_pattern",
]

# name -> module it lives in
_LAZY_IMPORTS: dict[str, str] = {
    "ALL": "perch.routing.route",
    "Route": "perch.routing.route",
    "RouteGroup": "perch.routing.route",
    "RouteMatch": "perch.routing.route",
    "Router": "perch.routing.router",
    "RouterConfig": "perch.config",
    "compile_pattern": "perch.routing.pattern",
    "CompilationError": "perch.errors",
    "DuplicateRouteNameError": "perch.errors",
    "InvalidMethodError": "perch.errors",
    "InvalidPatternError": "perch.errors",
    "PatternError": "perch.errors",
    "PerchError": "perch.errors",
    "RouteValidationError": "perch.errors",
    "UnresolvedParameterError": "perch.errors",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    module_path = _LAZY_IMPORTS.get(name)
    if module_path is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_path), name)
