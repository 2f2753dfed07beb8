from __future__ import annotations

from collections.abc import Iterable

RelationshipMap = dict[str, list[str]]


def is_related(base: str, symbol: str) -> bool:
    """True if ``symbol`` is ``base`` followed by a space and more tokens."""
    return symbol != base and symbol.startswith(base + " ")


def resolve_related_symbols(symbols: Iterable[str]) -> RelationshipMap:
    """Map each base symbol to the derivative symbols written on top of it.

    An option such as "AAPL 03/15/2024 150 C" is related to "AAPL". Only direct
    prefix matches count; bases without matches are left out. Accepts the
    grouping itself, since iterating a dict yields its keys.
    """
    keys = list(symbols)
    results: RelationshipMap = {}
    for base in keys:
        related = [s for s in keys if is_related(base, s)]
        if related:
            results[base] = related
    return results
