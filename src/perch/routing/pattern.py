"""URI pattern compiler.

A pattern is literal regular-expression text interleaved with named
placeholders::

    "/contact/{id}"                      -> [Literal("/contact/"), Parameter("id")]
    "/contact/{id: [0-9]+}"              -> [Literal("/contact/"), Parameter("id", "[0-9]+")]
    "/user/{login: :alpha:+}"            -> POSIX shorthand, expanded before compiling
    "/customers/\\d+"                    -> [Literal("/customers/\\d+")]  (raw regex route)
    "/api/{id: [0-9]+}(\\.(json|xml))?"  -> user groups stay anonymous

Each placeholder becomes one named capturing group; a bare ``{name}``
matches a single path segment. The compiled expression must consume the
whole request path, optionally followed by a single trailing ``/``.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

import regex

from perch.config import RouterConfig
from perch.errors import CompilationError
from perch.routing.posix import expand_posix_classes


@dataclass(frozen=True, slots=True)
class Literal:
    """Pattern text outside any placeholder, kept as regex source."""

    text: str


@dataclass(frozen=True, slots=True)
class Parameter:
    """A ``{name}`` or ``{name: constraint}`` placeholder."""

    name: str
    constraint: str | None = None


Token = Literal | Parameter

# "{3}", "{2,}", "{1,4}" are quantifiers, not placeholders
_QUANTIFIER = regex.compile(r"\d+(?:,\d*)?")
_GLOBAL_FLAGS = regex.compile(r"\(\?[aiLmsux]+\)")
_GROUP_PREFIX = "_perch_p"


def tokenize(pattern: str) -> list[Token]:
    """Split a pattern into literal and placeholder tokens.

    Braces nest, so a constraint may carry its own ``{m,n}`` quantifiers.
    A backslash escapes the following character.

    Raises ``CompilationError`` on an unclosed brace or a nameless
    placeholder.
    """
    tokens: list[Token] = []
    literal: list[str] = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "\\":
            literal.append(pattern[i : i + 2])
            i += 2
            continue
        if ch != "{":
            literal.append(ch)
            i += 1
            continue

        end = _brace_end(pattern, i)
        inner = pattern[i + 1 : end]
        if _QUANTIFIER.fullmatch(inner):
            literal.append(pattern[i : end + 1])
        else:
            if literal:
                tokens.append(Literal("".join(literal)))
                literal = []
            tokens.append(_parse_parameter(pattern, inner))
        i = end + 1

    if literal:
        tokens.append(Literal("".join(literal)))
    return tokens


def _brace_end(pattern: str, start: int) -> int:
    """Return the index of the ``}`` balancing the ``{`` at *start*."""
    depth = 0
    i = start
    while i < len(pattern):
        ch = pattern[i]
        if ch == "\\":
            i += 2
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    raise CompilationError(pattern, f"unbalanced '{{' at position {start}")


def _parse_parameter(pattern: str, inner: str) -> Parameter:
    name, _, constraint = inner.partition(":")
    name = name.strip()
    if not name:
        raise CompilationError(pattern, f"placeholder {{{inner}}} has no name")
    return Parameter(name=name, constraint=constraint.strip() or None)


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """A pattern compiled into a single matcher. Immutable and shareable."""

    pattern: str
    expression: regex.Pattern[str]
    param_names: tuple[str, ...]
    tokens: tuple[Token, ...]

    def match(self, path: str) -> dict[str, str] | None:
        """Match *path* and return its parameters, or ``None`` on a miss.

        Placeholders that did not take part in the match (inside an
        optional group) are left out.
        """
        found = self.expression.fullmatch(path)
        if found is None:
            return None
        params: dict[str, str] = {}
        for index, name in enumerate(self.param_names):
            value = found.group(f"{_GROUP_PREFIX}{index}")
            if value is not None:
                params[name] = value
        return params


_DEFAULT_CONFIG = RouterConfig()


@lru_cache(maxsize=1024)
def compile_pattern(pattern: str, config: RouterConfig = _DEFAULT_CONFIG) -> CompiledPattern:
    """Compile *pattern* into a ``CompiledPattern``.

    Results are cached per ``(pattern, config)``.

    Raises ``CompilationError`` for unbalanced braces or brackets,
    nameless or duplicated placeholders, and anything ``regex`` rejects.
    """
    tokens = tokenize(pattern)
    parts: list[str] = []
    names: list[str] = []
    for token in tokens:
        if isinstance(token, Literal):
            parts.append(token.text)
            continue
        if token.name in names:
            raise CompilationError(pattern, f"duplicate parameter {token.name!r}")
        if token.constraint is None:
            body = config.default_param_regex
        else:
            try:
                body = expand_posix_classes(token.constraint)
            except ValueError as exc:
                raise CompilationError(pattern, str(exc)) from exc
        parts.append(f"(?P<{_GROUP_PREFIX}{len(names)}>{body})")
        names.append(token.name)

    source = "".join(parts)
    # Global inline flags must stay at the very start of the expression
    flags = _GLOBAL_FLAGS.match(source)
    prefix = flags.group(0) if flags else ""
    source = f"{prefix}(?:{source[len(prefix):]})"
    if config.trailing_slash:
        source += "/?"

    try:
        expression = regex.compile(source)
    except regex.error as exc:
        raise CompilationError(pattern, str(exc)) from exc

    return CompiledPattern(
        pattern=pattern,
        expression=expression,
        param_names=tuple(names),
        tokens=tuple(tokens),
    )
