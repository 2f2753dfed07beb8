from __future__ import annotations

from collections.abc import Iterable

from stonks.model import Trade

SymbolGroups = dict[str, tuple[Trade, ...]]


def group_by_symbol(trades: Iterable[Trade]) -> SymbolGroups:
    """Bucket trades by trimmed symbol, keeping file order within each bucket.

    Trades with a blank symbol belong to no group.
    """
    acc: dict[str, list[Trade]] = {}
    for t in trades:
        symbol = t.symbol.strip()
        if not symbol:
            continue
        acc.setdefault(symbol, []).append(t)
    return {symbol: tuple(group) for symbol, group in acc.items()}
