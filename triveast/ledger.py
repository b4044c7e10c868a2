"""
In-memory paper-trading ledger: one cash balance plus symbol -> position.

Every trade returns a PortfolioSnapshot built from fresh objects, so callers
cannot reach internal state through the returned view.
"""

from __future__ import annotations

from dataclasses import dataclass

from triveast.errors import InsufficientFunds, InsufficientShares
from triveast.schemas import PortfolioSnapshot, Position

INITIAL_BALANCE = 10000.0


@dataclass
class _Holding:
    shares: int = 0
    avg_price: float = 0.0


def _check_trade(shares: int, price: float) -> None:
    if isinstance(shares, bool) or not isinstance(shares, int) or shares <= 0:
        raise ValueError(f"shares must be a positive integer, got {shares!r}")
    if not price > 0:
        raise ValueError(f"price must be positive, got {price!r}")


class PortfolioLedger:
    def __init__(self, initial_balance: float = INITIAL_BALANCE):
        self._balance = float(initial_balance)
        self._positions: dict[str, _Holding] = {}

    @property
    def balance(self) -> float:
        return self._balance

    def buy(self, symbol: str, shares: int, price: float) -> PortfolioSnapshot:
        _check_trade(shares, price)
        key = symbol.strip().upper()
        cost = shares * price
        if cost > self._balance:
            raise InsufficientFunds(cost=cost, balance=self._balance)

        self._balance -= cost
        holding = self._positions.setdefault(key, _Holding())
        holding.avg_price = (holding.avg_price * holding.shares + cost) / (holding.shares + shares)
        holding.shares += shares
        return self.snapshot()

    def sell(self, symbol: str, shares: int, price: float) -> PortfolioSnapshot:
        _check_trade(shares, price)
        key = symbol.strip().upper()
        holding = self._positions.get(key)
        if holding is None or holding.shares < shares:
            raise InsufficientShares(key, requested=shares, held=holding.shares if holding else 0)

        self._balance += shares * price
        holding.shares -= shares
        if holding.shares == 0:
            del self._positions[key]
        return self.snapshot()

    def snapshot(self) -> PortfolioSnapshot:
        return PortfolioSnapshot(
            balance=self._balance,
            portfolio={
                sym: Position(shares=h.shares, avg_price=h.avg_price)
                for sym, h in self._positions.items()
            },
        )
