"""
Tests for Portfolio: add/remove, ledger consistency, atomic failure.
"""

from datetime import date

import pytest

from folio_core import (
    InsufficientQuantity,
    InvalidParameter,
    InvalidRemovalDate,
    NoSuchHolding,
    Portfolio,
    Side,
    Transaction,
    ValuationEngine,
)


# --- add_stock ---


def test_initial_state():
    p = Portfolio()
    assert p.holdings == {}
    assert p.holding("AAPL") == 0.0
    assert p.transactions == []


def test_add_stock_records_buy():
    p = Portfolio()
    p.add_stock("AAPL", "2024-06-10", 10)
    assert p.holdings == {"AAPL": 10.0}
    [t] = p.transactions
    assert (t.side, t.symbol, t.quantity, t.date) == (Side.BUY, "AAPL", 10.0, date(2024, 6, 10))


def test_add_stock_rejects_non_positive():
    p = Portfolio()
    with pytest.raises(InvalidParameter):
        p.add_stock("AAPL", "2024-06-10", 0)
    assert p.holdings == {}


def test_seeded_portfolio():
    p = Portfolio.seeded({"AAPL": 3, "GOOG": 0}, [Transaction.buy("AAPL", 3, "2024-06-10")])
    assert p.holdings == {"AAPL": 3.0}
    assert len(p.ledger) == 1


# --- remove_stock ---


def test_remove_stock_scenario(june_gateway):
    p = Portfolio()
    p.add_stock("SYM", date(2024, 6, 10), 10)
    assert ValuationEngine(june_gateway).get_value(p, "2024-06-10") == 1500.0

    p.remove_stock("SYM", date(2024, 6, 11), 5)
    assert p.holding("SYM") == 5.0
    with pytest.raises(InsufficientQuantity):
        p.remove_stock("SYM", date(2024, 6, 11), 6)
    assert p.holding("SYM") == 5.0


def test_remove_stock_records_sell_and_depletes_buy():
    p = Portfolio()
    p.add_stock("AAPL", "2024-06-10", 10)
    p.remove_stock("AAPL", "2024-06-11", 4)
    buy, sell = p.transactions
    assert (buy.side, buy.quantity) == (Side.BUY, 6.0)
    assert (sell.side, sell.quantity, sell.date) == (Side.SELL, 4, date(2024, 6, 11))


def test_remove_all_deletes_holding():
    p = Portfolio()
    p.add_stock("AAPL", "2024-06-10", 10)
    p.remove_stock("AAPL", "2024-06-11", 10)
    assert "AAPL" not in p.holdings
    assert p.ledger.lots("AAPL") == []


def test_remove_unknown_symbol():
    with pytest.raises(NoSuchHolding):
        Portfolio().remove_stock("AAPL", "2024-06-10", 1)


def test_remove_before_purchase_leaves_state_untouched():
    p = Portfolio()
    p.add_stock("AAPL", "2024-06-10", 10)
    before = (dict(p.holdings), p.ledger)
    with pytest.raises(InvalidRemovalDate):
        p.remove_stock("AAPL", "2024-06-09", 1)
    assert (p.holdings, p.ledger) == before


def test_remove_then_add_restores_holding():
    p = Portfolio()
    p.add_stock("AAPL", "2024-06-10", 10)
    p.remove_stock("AAPL", "2024-06-11", 4)
    p.add_stock("AAPL", "2024-06-11", 4)
    assert p.holding("AAPL") == 10.0


@pytest.mark.parametrize(
    "ops",
    [
        [("buy", 10, "2024-06-10"), ("sell", 3, "2024-06-11"), ("buy", 2, "2024-06-12")],
        [("buy", 5, "2024-06-12"), ("buy", 5, "2024-06-10"), ("sell", 7, "2024-06-13")],
        [("buy", 1.5, "2024-06-10"), ("sell", 0.5, "2024-06-10"), ("sell", 1, "2024-06-11")],
    ],
)
def test_holding_equals_remaining_lots(ops):
    p = Portfolio()
    for kind, qty, day in ops:
        if kind == "buy":
            p.add_stock("AAPL", day, qty)
        else:
            p.remove_stock("AAPL", day, qty)
    assert p.holding("AAPL") == pytest.approx(p.ledger.remaining("AAPL"))


def test_copy_is_independent():
    p = Portfolio()
    p.add_stock("AAPL", "2024-06-10", 10)
    q = p.copy()
    q.add_stock("AAPL", "2024-06-11", 1)
    assert p.holding("AAPL") == 10.0
    assert len(p.ledger) == 1


# --- composition ---


def test_composition_lists_holdings_and_history():
    p = Portfolio()
    p.add_stock("AAPL", "2024-06-10", 10)
    p.remove_stock("AAPL", "2024-06-11", 4)
    assert p.composition() == (
        "AAPL: 6.0\n"
        "\t(2024-06-10, 6.0, buy)\n"
        "\t(2024-06-11, 4.0, sell)"
    )
