from __future__ import annotations

import csv
import datetime as dt
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Iterable, Literal, Mapping, Sequence

from stonks.conv import parse_us_date, to_dec_strict
from stonks.errors import FileAccessError, RowParseError

logger = logging.getLogger(__name__)

HEADER_SENTINEL = "DATE"
EOF_SENTINEL = "***END OF FILE***"
SKIP_SENTINELS = frozenset({HEADER_SENTINEL, EOF_SENTINEL})

BUY_PREFIX = "Bought"

# Positional layout of a TD Ameritrade transaction export.
TDA_COLS = [
    "DATE",
    "TRANSACTION ID",
    "DESCRIPTION",
    "QUANTITY",
    "SYMBOL",
    "PRICE",
    "COMMISSION",
    "AMOUNT",
    "REG FEE",
]

# Positional rows shorter than this lack the AMOUNT column.
MIN_POSITIONAL_COLS = TDA_COLS.index("AMOUNT") + 1

NUMERIC_COLS = ("QUANTITY", "PRICE", "COMMISSION", "AMOUNT", "REG FEE")


@dataclass(frozen=True)
class Trade:
    date: dt.date
    description: str
    symbol: str
    quantity: Decimal  # positive acquires, negative reduces
    price: Decimal
    commission: Decimal
    amount: Decimal  # net cash effect, fees included
    transaction_id: str = ""
    reg_fee: Decimal = Decimal("0")

    @property
    def underlying_symbol(self) -> str:
        """First token of the symbol; equals the symbol for plain stocks."""
        return self.symbol.strip().split(" ", 1)[0]

    @property
    def is_buy(self) -> bool:
        return self.description.startswith(BUY_PREFIX)


@dataclass(frozen=True)
class ParseIssue:
    line_no: int
    severity: Literal["warning", "error"]
    message: str
    row_preview: Sequence[str] | Mapping[str, str] | None = None


@dataclass
class ParseReport:
    """Non-fatal diagnostics collected during parsing."""

    issues: list[ParseIssue] = field(default_factory=list)

    def warn(self, line_no: int, msg: str, row=None) -> None:
        self.issues.append(ParseIssue(line_no, "warning", msg, row))

    def error(self, line_no: int, msg: str, row=None) -> None:
        self.issues.append(ParseIssue(line_no, "error", msg, row))

    @property
    def has_errors(self) -> bool:
        return any(i.severity == "error" for i in self.issues)

    @property
    def dropped_rows(self) -> int:
        return sum(1 for i in self.issues if i.severity == "error")

    def log_with(self, log: logging.Logger) -> None:
        for i in self.issues:
            prefix = "ERROR" if i.severity == "error" else "WARN"
            if i.row_preview is not None:
                log.warning(
                    "%s: line %d: %s | row=%s",
                    prefix,
                    i.line_no,
                    i.message,
                    i.row_preview,
                )
            else:
                log.warning("%s: line %d: %s", prefix, i.line_no, i.message)


class TdaTransactionCsvParser:
    """
    Maps raw TD Ameritrade transaction rows -> Trade entities (+ ParseReport).

    CSV shape:
        DATE,TRANSACTION ID,DESCRIPTION,QUANTITY,SYMBOL,PRICE,COMMISSION,AMOUNT,REG FEE,...
        01/15/2024,123,Bought 100 AAPL @ 150,100,AAPL,150.00,0.00,-15000.00,
        ...
        ***END OF FILE***

    The header and end-of-file rows are recognised by their first cell and
    skipped. A row with a bad date is dropped and reported as an error; a bad
    numeric cell becomes zero and is reported as a warning.
    """

    def parse_file(
        self, path: str | Path, *, encoding: str = "utf-8", newline: str = ""
    ) -> tuple[list[Trade], ParseReport]:
        try:
            fp = open(path, "r", encoding=encoding, errors="replace", newline=newline)
        except OSError as e:
            raise FileAccessError(f"Cannot read transactions file {path}: {e}") from e
        with fp:
            return self.parse_rows(csv.reader(fp))

    def parse_rows(
        self, rows: Iterable[Sequence[str]]
    ) -> tuple[list[Trade], ParseReport]:
        """Parse positional rows laid out as TDA_COLS."""
        report = ParseReport()
        trades: list[Trade] = []

        for line_no, row in enumerate(rows, start=1):
            if not row or not any(cell.strip() for cell in row):
                report.warn(line_no, "Empty row; skipped.")
                continue

            # Strip BOM on first cell if present
            first = (row[0] or "").lstrip("\ufeff").strip()
            if first in SKIP_SENTINELS:
                continue

            if len(row) < MIN_POSITIONAL_COLS:
                report.warn(
                    line_no,
                    f"Row has {len(row)} cells, expected at least "
                    f"{MIN_POSITIONAL_COLS}; skipped.",
                    row,
                )
                continue

            record = dict(zip(TDA_COLS, [first, *row[1:]]))
            self._append(trades, report, line_no, record, row)

        return trades, report

    def parse_records(
        self, records: Iterable[Mapping[str, str]]
    ) -> tuple[list[Trade], ParseReport]:
        """Parse rows keyed by header name (e.g. from csv.DictReader)."""
        report = ParseReport()
        trades: list[Trade] = []

        for line_no, rec in enumerate(records, start=1):
            # DictReader files surplus cells under a None key
            record = {
                k.lstrip("\ufeff").strip(): v for k, v in rec.items() if k is not None
            }
            first = (record.get("DATE") or "").strip()
            if first in SKIP_SENTINELS:
                continue
            if not any((v or "").strip() for v in record.values()):
                report.warn(line_no, "Empty row; skipped.")
                continue
            self._append(trades, report, line_no, record, rec)

        return trades, report

    def parse_row(
        self,
        row: Sequence[str] | Mapping[str, str],
        *,
        line_no: int = 0,
        report: ParseReport | None = None,
    ) -> Trade:
        """Build a single Trade from a positional or name-keyed row.

        Raises RowParseError if the date cannot be parsed.
        """
        if isinstance(row, Mapping):
            record = {k.strip(): v for k, v in row.items() if k is not None}
        else:
            record = dict(zip(TDA_COLS, row))
        return _build_trade(record, line_no, report or ParseReport())

    def _append(
        self,
        trades: list[Trade],
        report: ParseReport,
        line_no: int,
        record: Mapping[str, str],
        raw,
    ) -> None:
        try:
            trades.append(_build_trade(record, line_no, report))
        except RowParseError as e:
            report.error(line_no, f"Skipping invalid transaction: {e}", raw)


def _build_trade(record: Mapping[str, str], line_no: int, report: ParseReport) -> Trade:
    date_s = (record.get("DATE") or "").strip()
    try:
        date = parse_us_date(date_s)
    except ValueError as e:
        raise RowParseError(str(e), line_no) from e

    nums = {
        name: _numeric_field(record, name, line_no, report) for name in NUMERIC_COLS
    }

    description = (record.get("DESCRIPTION") or "").strip()
    quantity = nums["QUANTITY"]
    if not description.startswith(BUY_PREFIX):
        quantity = -quantity

    return Trade(
        date=date,
        description=description,
        symbol=record.get("SYMBOL") or "",
        quantity=quantity,
        price=nums["PRICE"],
        commission=nums["COMMISSION"],
        amount=nums["AMOUNT"],
        transaction_id=(record.get("TRANSACTION ID") or "").strip(),
        reg_fee=nums["REG FEE"],
    )


def _numeric_field(
    record: Mapping[str, str], name: str, line_no: int, report: ParseReport
) -> Decimal:
    raw = record.get(name)
    if raw is None or not raw.strip():
        return Decimal("0")
    try:
        return to_dec_strict(raw)
    except ValueError as e:
        logger.debug("line %d: %s unparsable (%s); using 0", line_no, name, e)
        report.warn(line_no, f"{name} {raw!r} is not a number; using 0.")
        return Decimal("0")


def load_trades(path: str | Path) -> tuple[list[Trade], ParseReport]:
    """Read a TDA transactions CSV; raises FileAccessError if it cannot be opened."""
    return TdaTransactionCsvParser().parse_file(path)
