"""Scope names and hierarchy helpers.

Scopes are dot-delimited strings. A binding or function registered on
``"a.b"`` is visible to ``"a.b"`` and ``"a.b.c"`` but not to ``"a.x"``.
``ALL_SCOPES`` is visible everywhere.
"""

from __future__ import annotations

from typing import Final, Iterator

ALL_SCOPES: Final = "*"
DELIMITER: Final = "."


def scope_hierarchy(scope: str) -> Iterator[str]:
    """Yield *scope* and its ancestors, most specific first.

    ``"a.b.c"`` yields ``"a.b.c"``, ``"a.b"``, ``"a"``.
    """
    parts = scope.split(DELIMITER)
    for end in range(len(parts), 0, -1):
        yield DELIMITER.join(parts[:end])


def is_visible(registered: str, requested: str) -> bool:
    """Return ``True`` if something registered on *registered* is visible to *requested*."""
    if registered == ALL_SCOPES:
        return True
    return requested == registered or requested.startswith(registered + DELIMITER)


def visible_scopes(requested: str) -> tuple[str, ...]:
    """Every registration scope visible to *requested*, most specific first."""
    return (*scope_hierarchy(requested), ALL_SCOPES)


__all__ = ["ALL_SCOPES", "DELIMITER", "is_visible", "scope_hierarchy", "visible_scopes"]
