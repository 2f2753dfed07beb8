from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from decimal import Decimal

from .cost_basis import CostBasis

_HUNDRED = Decimal("100")


@dataclass
class TransactionStats:
    positions: list[CostBasis] = field(default_factory=list)
    pct_profitable: Decimal = Decimal("0")
    largest_gain: CostBasis | None = None
    largest_loss: CostBasis | None = None


def summarize(records: Sequence[CostBasis]) -> TransactionStats:
    """Reduce cost-basis records to portfolio metrics.

    The profitable percentage is taken over every record, open or closed,
    while the largest gain and loss are only picked among closed positions.
    Ties keep the first record encountered.
    """
    stats = TransactionStats(positions=list(records))
    if not records:
        return stats

    profitable = sum(1 for cb in records if cb.eff_pl > 0)
    stats.pct_profitable = _HUNDRED * profitable / len(records)

    for cb in records:
        if not cb.is_closed:
            continue
        if cb.eff_pl > 0 and (
            stats.largest_gain is None or cb.eff_pl > stats.largest_gain.eff_pl
        ):
            stats.largest_gain = cb
        if cb.eff_pl < 0 and (
            stats.largest_loss is None or cb.eff_pl < stats.largest_loss.eff_pl
        ):
            stats.largest_loss = cb

    return stats
