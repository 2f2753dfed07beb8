from decimal import Decimal

from fixtures import make_trade

from stonks.reporting.cost_basis import CostBasis
from stonks.reporting.stats import summarize
from stonks.reporting.volume import TradeVolume


def _cb(symbol, position, pl):
    return CostBasis(symbol=symbol, position=Decimal(position), pl=Decimal(pl))


def test_pct_profitable_counts_open_and_closed_records():
    records = [
        _cb("A", "0", "100"),
        _cb("B", "0", "-50"),
        _cb("C", "0", "0"),
        _cb("D", "10", "20"),
    ]
    stats = summarize(records)

    assert stats.pct_profitable == Decimal("50")
    assert stats.positions == records


def test_pct_profitable_uses_eff_pl():
    base = _cb("AAPL", "100", "-100")
    base.attach_related(_cb("AAPL 1 C", "0", "150"))

    assert summarize([base, _cb("X", "0", "-1")]).pct_profitable == Decimal("50")


def test_largest_loss_only_among_closed_positions():
    closed_loss = _cb("AAPL", "0", "-500")
    open_loss = _cb("MSFT", "10", "-10000")

    stats = summarize([open_loss, closed_loss])

    assert closed_loss.eff_pl == Decimal("-500")
    assert stats.largest_loss is closed_loss
    assert stats.largest_gain is None


def test_largest_gain_only_among_closed_positions():
    small = _cb("A", "0", "10")
    big = _cb("B", "0", "300")
    open_big = _cb("C", "5", "9999")

    stats = summarize([small, open_big, big])

    assert stats.largest_gain is big
    assert stats.largest_loss is None


def test_ties_keep_first_encountered():
    first_gain = _cb("A", "0", "100")
    second_gain = _cb("B", "0", "100")
    first_loss = _cb("C", "0", "-100")
    second_loss = _cb("D", "0", "-100")

    stats = summarize([first_gain, first_loss, second_gain, second_loss])

    assert stats.largest_gain is first_gain
    assert stats.largest_loss is first_loss


def test_break_even_closed_position_is_neither_gain_nor_loss():
    stats = summarize([_cb("A", "0", "0")])

    assert stats.largest_gain is None
    assert stats.largest_loss is None
    assert stats.pct_profitable == Decimal("0")


def test_summarize_empty():
    stats = summarize([])

    assert stats.positions == []
    assert stats.pct_profitable == Decimal("0")
    assert stats.largest_gain is None and stats.largest_loss is None


def test_trade_volume_rolls_options_into_underlying():
    trades = [
        make_trade("AAPL", 100, -15000),
        make_trade("AAPL 03/15/2024 150 C", -1, 200),
        make_trade("MSFT", 10, -4000),
        make_trade("AAPL", -100, 16000),
        make_trade("", 0, 5000, description="FUNDING"),
    ]
    volume = TradeVolume.from_trades(trades)

    assert volume.total_trades == {"AAPL": 3, "MSFT": 1}
    assert volume.most_traded(1) == [("AAPL", 3)]


def test_trade_volume_count_trade_increments():
    volume = TradeVolume()
    volume.count_trade(make_trade("NVDA", 1, -1))
    volume.count_trade(make_trade("NVDA 240315 P", 1, -1))

    assert volume.total_trades == {"NVDA": 2}
