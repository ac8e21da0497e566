"""POSIX-style character-class shorthands for parameter constraints.

A constraint body may use ``:name:`` shorthands either bare or inside a
bracket expression next to literal and escaped characters::

    {login: :alpha:+}
    {login: [:digit::alpha:-_\\+\\.]+}
    {login: [[:alpha:][:digit:]]+}

Expansion is purely textual and runs before the constraint is handed to
``regex``. Every class expands to a bracket member built from Unicode
properties, so shorthands mix freely with other members and a negated
bracket stays a single character class.
"""

import regex

# name -> member usable inside [...]
POSIX_CLASSES: dict[str, str] = {
    "alpha": r"\p{L}",
    "digit": r"\p{Nd}",
    "alnum": r"\p{L}\p{Nd}",
    "xdigit": r"0-9a-fA-F",
    "ascii": r"\x00-\x7F",
}

_NAMES = "|".join(POSIX_CLASSES)
_SHORTHAND = regex.compile(f":({_NAMES}):")
# The standard spelling inside a bracket: [[:digit:]]
_BRACKETED = regex.compile(rf"\[:({_NAMES}):\]")


def expand_posix_classes(body: str) -> str:
    """Expand every ``:name:`` shorthand in a constraint body.

    Unknown names are left untouched. Raises ``ValueError`` if a bracket
    expression is never closed or holds an unescaped ``[`` that is not a
    ``[:name:]`` class.
    """
    out: list[str] = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == "\\":
            out.append(body[i : i + 2])
            i += 2
            continue
        if body.startswith("(?:", i):
            # Non-capturing group opener, not the start of a shorthand
            out.append("(?:")
            i += 3
            continue
        if ch == "[":
            expanded, i = _expand_bracket(body, i)
            out.append(expanded)
            continue
        match = _SHORTHAND.match(body, i)
        if match:
            out.append(f"[{POSIX_CLASSES[match.group(1)]}]")
            i = match.end()
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def _expand_bracket(body: str, start: int) -> tuple[str, int]:
    """Expand the bracket expression opening at *start*.

    Returns the expansion and the index just past its closing ``]``.
    """
    out = ["["]
    i = start + 1
    if body.startswith("^", i):
        out.append("^")
        i += 1
    if body.startswith("]", i):
        # A leading "]" is a literal member
        out.append(r"\]")
        i += 1

    while i < len(body):
        ch = body[i]
        if ch == "\\":
            out.append(body[i : i + 2])
            i += 2
            continue
        if ch == "]":
            out.append("]")
            return "".join(out), i + 1
        match = _BRACKETED.match(body, i) or _SHORTHAND.match(body, i)
        if match:
            # A dash next to a class can't form a range
            if out[-1] == "-":
                out[-1] = r"\-"
            out.append(POSIX_CLASSES[match.group(1)])
            i = match.end()
            if body.startswith("-", i):
                out.append(r"\-")
                i += 1
            continue
        if ch == "[":
            msg = (
                f"nested '[' at position {i} in constraint {body!r}; "
                "escape it or use a [:name:] class"
            )
            raise ValueError(msg)
        out.append(ch)
        i += 1

    msg = f"unbalanced '[' at position {start} in constraint {body!r}"
    raise ValueError(msg)
