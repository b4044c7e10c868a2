"""Tests for the paper-trading ledger."""

import pytest

from triveast.errors import InsufficientFunds, InsufficientShares
from triveast.ledger import PortfolioLedger


class TestPortfolioLedger:
    def setup_method(self) -> None:
        self.ledger = PortfolioLedger(10000)

    def test_round_trip_profit(self) -> None:
        self.ledger.buy("AAPL", 10, 100)
        snap = self.ledger.sell("AAPL", 10, 110)

        assert snap.balance == 10100
        assert "AAPL" not in snap.portfolio

    def test_weighted_average_cost(self) -> None:
        self.ledger.buy("AAPL", 5, 100)
        snap = self.ledger.buy("AAPL", 5, 200)

        assert snap.portfolio["AAPL"].shares == 10
        assert snap.portfolio["AAPL"].avg_price == 150
        assert snap.balance == 10000 - 500 - 1000

    def test_partial_sell_keeps_average(self) -> None:
        self.ledger.buy("MSFT", 4, 250)
        snap = self.ledger.sell("MSFT", 1, 300)

        assert snap.portfolio["MSFT"].shares == 3
        assert snap.portfolio["MSFT"].avg_price == 250
        assert snap.balance == 10000 - 1000 + 300

    def test_symbols_are_uppercased(self) -> None:
        self.ledger.buy("aapl", 1, 10)
        snap = self.ledger.sell("AAPL", 1, 10)

        assert snap.portfolio == {}

    def test_buy_more_than_balance_fails(self) -> None:
        with pytest.raises(InsufficientFunds) as exc_info:
            self.ledger.buy("AAPL", 101, 100)

        assert exc_info.value.cost == 10100
        assert self.ledger.balance == 10000
        assert self.ledger.snapshot().portfolio == {}

    def test_buy_exact_balance_succeeds(self) -> None:
        snap = self.ledger.buy("AAPL", 100, 100)

        assert snap.balance == 0

    def test_sell_unknown_symbol_fails(self) -> None:
        with pytest.raises(InsufficientShares) as exc_info:
            self.ledger.sell("TSLA", 1, 100)

        assert exc_info.value.held == 0

    def test_sell_more_than_held_fails(self) -> None:
        self.ledger.buy("AAPL", 2, 100)

        with pytest.raises(InsufficientShares):
            self.ledger.sell("AAPL", 3, 100)

        assert self.ledger.snapshot().portfolio["AAPL"].shares == 2
        assert self.ledger.balance == 9800

    def test_snapshot_is_detached_from_state(self) -> None:
        snap = self.ledger.buy("AAPL", 2, 100)
        snap.portfolio["AAPL"].shares = 999
        snap.portfolio["GOOG"] = snap.portfolio["AAPL"]
        snap.balance = 0

        fresh = self.ledger.snapshot()
        assert fresh.portfolio["AAPL"].shares == 2
        assert "GOOG" not in fresh.portfolio
        assert fresh.balance == 9800

    @pytest.mark.parametrize(("shares", "price"), [(0, 10), (-1, 10), (1, 0), (1, -5), (1.5, 10)])
    def test_rejects_invalid_trade_arguments(self, shares, price) -> None:
        with pytest.raises(ValueError):
            self.ledger.buy("AAPL", shares, price)
