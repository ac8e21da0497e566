"""Reverse routing — render a concrete URI from a pattern and parameters."""

from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import urlencode

from perch.errors import UnresolvedParameterError
from perch.routing.pattern import Literal, Token


def render_uri(pattern: str, tokens: Iterable[Token], parameters: Mapping[str, Any]) -> str:
    """Substitute placeholders and append leftovers as a query string.

    Placeholder values are inserted as ``str(value)`` without encoding so a
    value may carry ``/`` into a splat parameter. Parameters no placeholder
    consumed are form-encoded into the query string in the mapping's
    iteration order; sequence values repeat their key and ``None`` values
    are dropped.

    Example::

        render_uri("/user/{email}", tokens, {"email": "a@b.c", "q": "x y"})
        -> "/user/a@b.c?q=x+y"

    Raises ``UnresolvedParameterError`` when a placeholder has no value.
    """
    remaining = dict(parameters)
    parts: list[str] = []
    for token in tokens:
        if isinstance(token, Literal):
            parts.append(token.text)
            continue
        value = remaining.pop(token.name, None)
        if value is None:
            raise UnresolvedParameterError(token.name, pattern)
        parts.append(str(value))

    uri = "".join(parts)
    query = {key: _query_value(value) for key, value in remaining.items() if value is not None}
    if query:
        uri = f"{uri}?{urlencode(query, doseq=True)}"
    return uri


def _query_value(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return str(value)
