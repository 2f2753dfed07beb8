"""Test fixtures for trades and transaction exports.

Production code builds Trade objects from CSV rows via TdaTransactionCsvParser.
Tests that exercise grouping and aggregation only need a handful of fields, so
``make_trade`` fills in the rest.
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal

from stonks.model import Trade

TDA_HEADER = (
    "DATE,TRANSACTION ID,DESCRIPTION,QUANTITY,SYMBOL,PRICE,COMMISSION,AMOUNT,REG FEE"
)

SAMPLE_CSV = "\n".join(
    [
        TDA_HEADER,
        "01/15/2024,1001,Bought 100 AAPL @ 150,100,AAPL,150.00,0.00,-15000.00,",
        "01/16/2024,1002,Sold 1 AAPL Mar 15 2024 150.0 Call @ 2.10,1,AAPL 03/15/2024 150 C,2.10,0.65,209.35,0.01",
        "02/01/2024,1003,Bought 10 MSFT @ 400,10,MSFT,400.00,0.00,-4000.00,",
        "02/15/2024,1004,Sold 10 MSFT @ 390,10,MSFT,390.00,0.00,3900.00,0.02",
        "02/20/2024,1005,Bought 5 NVDA @ 700,5,NVDA,700.00,0.00,-3500.00,",
        "03/01/2024,1006,Sold 5 NVDA @ 760,5,NVDA,760.00,0.00,3800.00,0.02",
        "03/05/2024,1007,CLIENT REQUESTED ELECTRONIC FUNDING RECEIPT,,,,,5000.00,",
        "***END OF FILE***",
    ]
) + "\n"


def make_trade(
    symbol: str,
    quantity: str | int,
    amount: str | int,
    *,
    description: str | None = None,
    date: dt.date = dt.date(2024, 1, 15),
    price: str = "0",
) -> Trade:
    qty = Decimal(str(quantity))
    if description is None:
        description = "Bought" if qty > 0 else "Sold"
    return Trade(
        date=date,
        description=description,
        symbol=symbol,
        quantity=qty,
        price=Decimal(price),
        commission=Decimal("0"),
        amount=Decimal(str(amount)),
    )
