from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from stonks.model import Trade

from .cost_basis import CostBasis, aggregate_cost_basis, open_positions
from .grouping import SymbolGroups, group_by_symbol
from .relations import RelationshipMap, resolve_related_symbols
from .stats import TransactionStats, summarize
from .volume import TradeVolume

logger = logging.getLogger(__name__)


@dataclass
class CostBasisReport:
    """Everything one run computes, ready to hand to a ReportSink."""

    groups: SymbolGroups = field(default_factory=dict)
    related: RelationshipMap = field(default_factory=dict)
    positions: list[CostBasis] = field(default_factory=list)
    stats: TransactionStats = field(default_factory=TransactionStats)
    volume: TradeVolume = field(default_factory=TradeVolume)

    @property
    def open_positions(self) -> list[CostBasis]:
        return open_positions(self.positions)


def build_report(trades: Sequence[Trade]) -> CostBasisReport:
    """Run parse output through group -> resolve -> aggregate -> summarize."""
    groups = group_by_symbol(trades)
    related = resolve_related_symbols(groups)
    positions = aggregate_cost_basis(related, groups)
    stats = summarize(positions)

    logger.info(
        "Aggregated %d trades into %d symbols (%d bases with related symbols, "
        "%d open positions)",
        len(trades),
        len(groups),
        len(related),
        len(open_positions(positions)),
    )
    return CostBasisReport(
        groups=groups,
        related=related,
        positions=positions,
        stats=stats,
        volume=TradeVolume.from_trades(trades),
    )
