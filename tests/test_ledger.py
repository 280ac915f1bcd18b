"""
Tests for Transaction and Ledger: immutability, FIFO consumption, pruning.
"""

from datetime import date

import pytest

from folio_core import (
    InsufficientQuantity,
    InvalidParameter,
    InvalidRemovalDate,
    Ledger,
    Side,
    Transaction,
)


# --- Transaction ---


def test_transaction_coerces_date_and_side():
    t = Transaction("BUY", "AAPL", 5.0, "2024-06-10")
    assert t.side is Side.BUY
    assert t.date == date(2024, 6, 10)
    assert t.signed_quantity == 5.0


def test_transaction_immutable():
    t = Transaction.sell("AAPL", 2, date(2024, 6, 10))
    with pytest.raises(AttributeError):
        t.quantity = 1.0
    assert t.signed_quantity == -2.0


def test_with_quantity_keeps_identity_fields():
    t = Transaction.buy("AAPL", 5, date(2024, 6, 10))
    u = t.with_quantity(3.0)
    assert (u.side, u.symbol, u.date, u.quantity) == (Side.BUY, "AAPL", date(2024, 6, 10), 3.0)
    assert t.quantity == 5.0


def test_describe():
    assert Transaction.buy("AAPL", 5, "2024-06-10").describe() == "(2024-06-10, 5.0, buy)"


def test_invalid_date_string():
    with pytest.raises(InvalidParameter):
        Transaction.buy("AAPL", 1, "June 10th")


@pytest.mark.parametrize("quantity", [0, -5])
def test_buy_and_sell_need_positive_quantity(quantity):
    with pytest.raises(InvalidParameter):
        Transaction.buy("AAPL", quantity, "2024-06-10")
    with pytest.raises(InvalidParameter):
        Transaction.sell("AAPL", quantity, "2024-06-10")


def test_negative_record_rejected_but_drawn_down_lot_allowed():
    with pytest.raises(InvalidParameter):
        Transaction(Side.BUY, "AAPL", -1.0, "2024-06-10")
    with pytest.raises(InvalidParameter):
        Ledger.of([Transaction("buy", "AAPL", -5.0, "2024-06-10")])
    assert Transaction.buy("AAPL", 5, "2024-06-10").with_quantity(0.0).quantity == 0.0


def test_unknown_side_rejected():
    with pytest.raises(InvalidParameter, match="Unknown transaction side"):
        Transaction("hold", "AAPL", 1.0, "2024-06-10")


# --- Ledger queries ---


def test_lots_sorted_by_date_not_insertion():
    ledger = Ledger.of([
        Transaction.buy("AAPL", 5, "2024-06-12"),
        Transaction.buy("GOOG", 1, "2024-06-01"),
        Transaction.buy("AAPL", 4, "2024-06-10"),
        Transaction.sell("AAPL", 1, "2024-06-11"),
    ])
    assert [t.date for t in ledger.lots("AAPL")] == [date(2024, 6, 10), date(2024, 6, 12)]
    assert ledger.remaining("AAPL") == 9.0
    assert ledger.symbols() == ["AAPL", "GOOG"]
    assert len(ledger.on_or_before("2024-06-10")) == 2


def test_append_returns_new_snapshot():
    ledger = Ledger()
    grown = ledger.append(Transaction.buy("AAPL", 1, "2024-06-10"))
    assert len(ledger) == 0
    assert len(grown) == 1


# --- consume ---


def test_consume_fifo_by_date():
    ledger = Ledger.of([
        Transaction.buy("AAPL", 5, "2024-06-12"),
        Transaction.buy("AAPL", 5, "2024-06-10"),
    ])
    out = ledger.consume("AAPL", 7, "2024-06-15")
    # the 06-10 lot is exhausted and pruned; 3 remain of the 06-12 lot
    assert [(t.date, t.quantity) for t in out] == [(date(2024, 6, 12), 3.0)]


def test_consume_leaves_original_untouched():
    ledger = Ledger.of([Transaction.buy("AAPL", 5, "2024-06-10")])
    ledger.consume("AAPL", 2, "2024-06-11")
    assert ledger.remaining("AAPL") == 5.0


def test_consume_stops_once_satisfied():
    ledger = Ledger.of([
        Transaction.buy("AAPL", 5, "2024-06-10"),
        Transaction.buy("AAPL", 5, "2024-06-20"),
    ])
    out = ledger.consume("AAPL", 5, "2024-06-15")
    assert out.remaining("AAPL") == 5.0


def test_consume_before_needed_purchase_raises():
    ledger = Ledger.of([
        Transaction.buy("AAPL", 5, "2024-06-10"),
        Transaction.buy("AAPL", 5, "2024-06-20"),
    ])
    with pytest.raises(InvalidRemovalDate):
        ledger.consume("AAPL", 7, "2024-06-15")


def test_consume_insufficient_raises():
    ledger = Ledger.of([Transaction.buy("AAPL", 5, "2024-06-10")])
    with pytest.raises(InsufficientQuantity):
        ledger.consume("AAPL", 6, "2024-06-11")


def test_consume_ignores_sell_records_and_other_symbols():
    ledger = Ledger.of([
        Transaction.buy("AAPL", 5, "2024-06-10"),
        Transaction.sell("AAPL", 2, "2024-06-11"),
        Transaction.buy("GOOG", 5, "2024-06-10"),
    ])
    out = ledger.consume("AAPL", 5, "2024-06-12")
    assert out.lots("AAPL") == []
    assert len(out.for_symbol("AAPL")) == 1  # the sell record survives
    assert out.remaining("GOOG") == 5.0


def test_consume_non_positive_quantity_rejected():
    ledger = Ledger.of([Transaction.buy("AAPL", 5, "2024-06-10")])
    with pytest.raises(InvalidParameter):
        ledger.consume("AAPL", 0, "2024-06-11")
