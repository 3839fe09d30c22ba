"""URI Template expansion and URL resolution.

Only the subset of RFC 6570 that HAL APIs commonly use is supported:

- ``{?a,b}``  form-style query, emits ``?a=1&b=2`` for supplied variables
- ``{&a,b}``  query continuation, emits ``&a=1&b=2``
- ``{a}``     simple substitution

The simple form substitutes only the first variable of a comma-separated
list (``{a,b}`` behaves like ``{a}``).  Variables that are not supplied
expand to nothing; no error is raised.
"""
from __future__ import annotations

import re
from collections.abc import Mapping
from urllib.parse import quote

_EXPRESSION = re.compile(r"\{([?&]?)([^}]+)\}")
# Kept literal in addition to quote()'s unreserved set.
_UNRESERVED_EXTRA = "!*'()"


def _encode(value: object) -> str:
    return quote(str(value), safe=_UNRESERVED_EXTRA)


def _query_pairs(names: str, variables: Mapping[str, object]) -> list[str]:
    pairs: list[str] = []
    for name in (part.strip() for part in names.split(",")):
        if name in variables and variables[name] is not None:
            pairs.append(f"{name}={_encode(variables[name])}")
    return pairs


def expand_template(template: str, variables: Mapping[str, object]) -> str:
    """Expand every brace expression of ``template`` using ``variables``.

    Examples
    --------
    >>> expand_template("/search{?q,limit}", {"q": "a b"})
    '/search?q=a%20b'
    >>> expand_template("{&page}", {"page": "2"})
    '&page=2'
    """

    def _replace(match: re.Match[str]) -> str:
        operator, names = match.group(1), match.group(2)
        if operator in ("?", "&"):
            pairs = _query_pairs(names, variables)
            return f"{operator}{'&'.join(pairs)}" if pairs else ""
        first = names.split(",")[0].strip()
        value = variables.get(first)
        return _encode(value) if value is not None else ""

    return _EXPRESSION.sub(_replace, template)


def resolve_url(base: str, href: str) -> str:
    """Resolve ``href`` against the session entry point ``base``.

    Absolute ``http``/``https`` hrefs are returned unchanged.  Anything
    else is appended to ``base`` (trailing slash removed) with exactly one
    separating slash.
    """
    if href.startswith(("http://", "https://")):
        return href
    path = href if href.startswith("/") else f"/{href}"
    return f"{base.rstrip('/')}{path}"
