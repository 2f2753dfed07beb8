from .cost_basis import CostBasis, aggregate_cost_basis, build_cost_basis, open_positions
from .grouping import SymbolGroups, group_by_symbol
from .relations import RelationshipMap, resolve_related_symbols
from .report_builder import CostBasisReport, build_report
from .report_sink import ConsoleReportSink, ExcelReportSink, JsonReportSink, ReportSink
from .stats import TransactionStats, summarize
from .volume import TradeVolume

__all__ = [
    "CostBasis",
    "aggregate_cost_basis",
    "build_cost_basis",
    "open_positions",
    "SymbolGroups",
    "group_by_symbol",
    "RelationshipMap",
    "resolve_related_symbols",
    "CostBasisReport",
    "build_report",
    "ReportSink",
    "ConsoleReportSink",
    "ExcelReportSink",
    "JsonReportSink",
    "TransactionStats",
    "summarize",
    "TradeVolume",
]
