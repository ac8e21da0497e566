"""Locate the route table named on the command line.

An import string is ``"package.module:attribute"``; the attribute defaults
to ``router``. The attribute may be a ``Router``, a ``RouteGroup`` (loaded
into a fresh ``Router``), or a zero-argument factory returning either.
"""

import importlib
from typing import Any

from perch.routing.route import RouteGroup
from perch.routing.router import Router

DEFAULT_ATTRIBUTE = "router"


def resolve_router(import_string: str) -> Router:
    """Import *import_string* and return the ``Router`` it names.

    Raises ``ModuleNotFoundError`` for a missing module, ``AttributeError``
    when the module lacks the attribute, and ``TypeError`` when the target
    (or what its factory returns) is neither a ``Router`` nor a
    ``RouteGroup``. Routes that fail validation while a group is loaded
    raise their usual ``PerchError``.
    """
    module_path, _, attr_name = import_string.partition(":")
    attr_name = attr_name or DEFAULT_ATTRIBUTE
    module = importlib.import_module(module_path)

    try:
        target = getattr(module, attr_name)
    except AttributeError as exc:
        msg = f"module {module_path!r} has no attribute {attr_name!r}"
        raise AttributeError(msg) from exc

    if not isinstance(target, Router | RouteGroup) and callable(target):
        try:
            target = target()
        except Exception as exc:
            msg = f"router factory {attr_name!r} in module {module_path!r} failed: {exc}"
            raise TypeError(msg) from exc
        return _as_router(target, f"{module_path}:{attr_name}()")
    return _as_router(target, f"{module_path}:{attr_name}")


def _as_router(target: Any, origin: str) -> Router:
    if isinstance(target, Router):
        return target
    if isinstance(target, RouteGroup):
        router = Router()
        router.add_route_group(target)
        return router
    msg = f"{origin} is a {type(target).__name__}, expected a Router or RouteGroup"
    raise TypeError(msg)
