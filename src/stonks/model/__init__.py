from .tda import (
    ParseIssue,
    ParseReport,
    TdaTransactionCsvParser,
    Trade,
    load_trades,
)

__all__ = [
    "ParseIssue",
    "ParseReport",
    "TdaTransactionCsvParser",
    "Trade",
    "load_trades",
]
