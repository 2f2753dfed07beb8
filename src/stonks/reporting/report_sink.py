from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Any, Protocol, TextIO

from openpyxl import Workbook

from stonks.errors import DivisionUndefined

from .cost_basis import CostBasis
from .money import quantize_money, quantize_pct
from .report_builder import CostBasisReport
from .stats import TransactionStats


class ReportSink(Protocol):
    def write(self, report: CostBasisReport) -> Path | None:  # written file, if any
        ...


def _avg_or_none(cb: CostBasis, effective: bool = False) -> Decimal | None:
    try:
        return cb.eff_avg_cost() if effective else cb.avg_cost()
    except DivisionUndefined:
        return None


def _dec_str(value: Decimal | None) -> str | None:
    return None if value is None else str(value)


def cost_basis_to_dict(cb: CostBasis) -> dict[str, Any]:
    return {
        "symbol": cb.symbol,
        "position": str(cb.position),
        "pl": str(cb.pl),
        "effPL": str(cb.eff_pl),
        "avgCost": _dec_str(_avg_or_none(cb)),
        "effAvgCost": _dec_str(_avg_or_none(cb, effective=True)),
        "trades": len(cb.trades),
        "relatedPositions": [cost_basis_to_dict(r) for r in cb.related_positions],
    }


def stats_to_dict(stats: TransactionStats) -> dict[str, Any]:
    def _ref(cb: CostBasis | None) -> dict[str, str] | None:
        if cb is None:
            return None
        return {"symbol": cb.symbol, "effPL": str(cb.eff_pl)}

    return {
        "positions": len(stats.positions),
        "pctProfitable": str(stats.pct_profitable),
        "largestGain": _ref(stats.largest_gain),
        "largestLoss": _ref(stats.largest_loss),
    }


def report_to_dict(report: CostBasisReport) -> dict[str, Any]:
    return {
        "positions": [cost_basis_to_dict(cb) for cb in report.positions],
        "stats": stats_to_dict(report.stats),
        "tradeVolume": report.volume.total_trades,
    }


@dataclass
class JsonReportSink:
    out_path: Path | None = None  # None writes to stream
    stream: TextIO = field(default_factory=lambda: sys.stdout)
    indent: int = 2

    def write(self, report: CostBasisReport) -> Path | None:
        payload = report_to_dict(report)
        if self.out_path is None:
            json.dump(payload, self.stream, indent=self.indent)
            self.stream.write("\n")
            return None
        out_path = Path(self.out_path)
        with open(out_path, "w", encoding="utf-8") as fp:
            json.dump(payload, fp, indent=self.indent)
            fp.write("\n")
        return out_path


@dataclass
class ConsoleReportSink:
    """Plain-text summary: symbol counts, relationships, open effective basis."""

    stream: TextIO = field(default_factory=lambda: sys.stdout)

    def _p(self, line: str = "") -> None:
        self.stream.write(line + "\n")

    def write(self, report: CostBasisReport) -> Path | None:
        self._p("Symbol : total transactions")
        for symbol, trades in report.groups.items():
            self._p(f"\t{symbol} : {len(trades)}")

        self._p("Related Symbols")
        for symbol, related in report.related.items():
            self._p(f"{symbol}:")
            for r in related:
                self._p(f"\t{r}")

        self._p("Computing effective cost basis of open positions")
        for cb in report.open_positions:
            if not cb.related_positions:
                continue
            self._write_open_position(cb)

        self._write_stats(report.stats)
        return None

    def _write_open_position(self, cb: CostBasis) -> None:
        self._p(f"{cb.symbol} open position: {cb.position}")
        self._p(f"\tcost basis of open position: {cb.pl}")
        self._p(
            "\tavg share price of open position before computing options P/L: "
            f"{quantize_money(cb.avg_cost())}"
        )
        for r in cb.related_positions:
            self._p(f"\tP/L from {r.symbol}: {r.pl}")
        self._p(f"\ttotal P/L from related positions: {cb.related_pl}")
        self._p(
            f"\tcost basis of open position including related positions P/L: {cb.eff_pl}"
        )
        self._p(
            "\tavg share price of open position after computing options P/L: "
            f"{quantize_money(cb.eff_avg_cost())}"
        )

    def _write_stats(self, stats: TransactionStats) -> None:
        self._p("Statistics")
        self._p(f"\tpositions: {len(stats.positions)}")
        self._p(f"\tprofitable positions: {quantize_pct(stats.pct_profitable)}%")
        for label, cb in (
            ("largest gain", stats.largest_gain),
            ("largest loss", stats.largest_loss),
        ):
            if cb is None:
                self._p(f"\t{label}: n/a")
            else:
                self._p(f"\t{label}: {cb.symbol} ({cb.eff_pl})")


_MONEY_FMT = "$#,##0.00"
_QTY_FMT = "0.########"
_PCT_FMT = '0.00"%"'


@dataclass
class ExcelReportSink:
    out_path: Path

    def write(self, report: CostBasisReport) -> Path:
        out_path = Path(self.out_path)
        wb = Workbook()

        # Remove the default sheet
        wb.remove(wb.active)

        ws = wb.create_sheet(title="Cost Basis")
        ws.append(
            [
                "Symbol",
                "Position",
                "P/L",
                "Related P/L",
                "Effective P/L",
                "Avg Cost",
                "Effective Avg Cost",
                "Trades",
                "Status",
            ]
        )
        for cb in report.positions:
            avg = _avg_or_none(cb)
            eff_avg = _avg_or_none(cb, effective=True)
            ws.append(
                [
                    cb.symbol,
                    float(cb.position),
                    float(cb.pl),
                    float(cb.related_pl),
                    float(cb.eff_pl),
                    None if avg is None else float(avg),
                    None if eff_avg is None else float(eff_avg),
                    len(cb.trades),
                    "Closed" if cb.is_closed else "Open",
                ]
            )
            r = ws.max_row
            ws.cell(row=r, column=2).number_format = _QTY_FMT
            for c in range(3, 8):
                ws.cell(row=r, column=c).number_format = _MONEY_FMT

        ws = wb.create_sheet(title="Related Positions")
        ws.append(["Base Symbol", "Related Symbol", "Position", "P/L"])
        for cb in report.positions:
            for rel in cb.related_positions:
                ws.append([cb.symbol, rel.symbol, float(rel.position), float(rel.pl)])
                r = ws.max_row
                ws.cell(row=r, column=3).number_format = _QTY_FMT
                ws.cell(row=r, column=4).number_format = _MONEY_FMT

        ws = wb.create_sheet(title="Summary")
        stats = report.stats
        ws.append(["Metric", "Value"])
        ws.append(["Positions", len(stats.positions)])
        ws.append(["Profitable Positions (%)", float(stats.pct_profitable)])
        ws.cell(row=ws.max_row, column=2).number_format = _PCT_FMT
        for label, cb in (
            ("Largest Gain", stats.largest_gain),
            ("Largest Loss", stats.largest_loss),
        ):
            if cb is None:
                ws.append([label, None])
                continue
            ws.append([f"{label} ({cb.symbol})", float(cb.eff_pl)])
            ws.cell(row=ws.max_row, column=2).number_format = _MONEY_FMT

        ws = wb.create_sheet(title="Trade Volume")
        ws.append(["Underlying", "Trades"])
        for symbol, count in report.volume.most_traded():
            ws.append([symbol, count])

        wb.save(out_path)
        return out_path
