from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from stonks.model import Trade


class TradeVolume:
    """Count trades per underlying symbol, options rolled up into their stock."""

    def __init__(self) -> None:
        self._counts: Counter[str] = Counter()

    @classmethod
    def from_trades(cls, trades: Iterable[Trade]) -> TradeVolume:
        inst = cls()
        for t in trades:
            inst.count_trade(t)
        return inst

    def count_trade(self, trade: Trade) -> None:
        underlying = trade.underlying_symbol
        if underlying:
            self._counts[underlying] += 1

    @property
    def total_trades(self) -> dict[str, int]:
        return dict(self._counts)

    def most_traded(self, n: int | None = None) -> list[tuple[str, int]]:
        return self._counts.most_common(n)
