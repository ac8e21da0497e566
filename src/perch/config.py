"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, hashable
(so compiled patterns can be cached per config), no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(context_path="/app", trailing_slash=False)
    """

    # Prefix the application is mounted under. Prepended by uri_for(),
    # stripped from request paths by find_routes().
    context_path: str = ""

    # Tolerate one trailing "/" after a pattern that doesn't absorb it itself
    trailing_slash: bool = True

    # Constraint used by a bare {name} placeholder: one path segment
    default_param_regex: str = r"[^/]+"
