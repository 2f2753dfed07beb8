from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from decimal import Decimal

from stonks.errors import DivisionUndefined
from stonks.model import Trade

logger = logging.getLogger(__name__)


@dataclass
class CostBasis:
    """Realized cash flow and net size of one symbol, plus related positions.

    ``position`` and ``pl`` only ever cover the symbol's own trades; ``eff_pl``
    adds the ``pl`` of every attached related position.
    """

    symbol: str
    position: Decimal
    pl: Decimal
    trades: tuple[Trade, ...] = ()
    related_positions: list[CostBasis] = field(default_factory=list)
    eff_pl: Decimal = field(init=False)

    def __post_init__(self) -> None:
        self._recompute_eff_pl()

    @property
    def is_closed(self) -> bool:
        return self.position == 0

    @property
    def related_pl(self) -> Decimal:
        return sum((r.pl for r in self.related_positions), Decimal("0"))

    def attach_related(self, related: CostBasis) -> None:
        if related is self:
            raise ValueError(f"{self.symbol} cannot be related to itself")
        self.related_positions.append(related)
        self._recompute_eff_pl()

    def avg_cost(self) -> Decimal:
        """Realized P/L per open unit."""
        return self._per_unit(self.pl)

    def eff_avg_cost(self) -> Decimal:
        """Effective P/L (related positions included) per open unit."""
        return self._per_unit(self.eff_pl)

    def _per_unit(self, value: Decimal) -> Decimal:
        if self.is_closed:
            raise DivisionUndefined(
                f"Average cost of {self.symbol} is undefined: position is closed"
            )
        return value / self.position

    def _recompute_eff_pl(self) -> None:
        self.eff_pl = self.pl + self.related_pl


def build_cost_basis(symbol: str, trades: Sequence[Trade]) -> CostBasis:
    """Sum signed quantity and amount across a symbol's trades."""
    position = sum((t.quantity for t in trades), Decimal("0"))
    pl = sum((t.amount for t in trades), Decimal("0"))
    return CostBasis(symbol=symbol, position=position, pl=pl, trades=tuple(trades))


def aggregate_cost_basis(
    related_symbols: Mapping[str, Sequence[str]],
    grouped: Mapping[str, Sequence[Trade]],
) -> list[CostBasis]:
    """Build one CostBasis per symbol, folding related symbols into their base.

    Bases are visited in ``related_symbols`` order. A symbol already claimed
    (as a base or as someone's related position) is never built twice.
    Remaining symbols are appended standalone in ``grouped`` order.
    """
    visited: set[str] = set()
    out: list[CostBasis] = []

    for base, related in related_symbols.items():
        if base in visited:
            continue
        cb = build_cost_basis(base, grouped.get(base, ()))
        visited.add(base)
        for symbol in related:
            if symbol in visited:
                continue
            cb.attach_related(build_cost_basis(symbol, grouped.get(symbol, ())))
            visited.add(symbol)
        logger.debug(
            "%s: position=%s pl=%s eff_pl=%s (%d related)",
            cb.symbol,
            cb.position,
            cb.pl,
            cb.eff_pl,
            len(cb.related_positions),
        )
        out.append(cb)

    for symbol, trades in grouped.items():
        if symbol in visited:
            continue
        out.append(build_cost_basis(symbol, trades))
        visited.add(symbol)

    return out


def open_positions(records: Iterable[CostBasis]) -> list[CostBasis]:
    """Records that still hold a non-zero position."""
    return [cb for cb in records if not cb.is_closed]
