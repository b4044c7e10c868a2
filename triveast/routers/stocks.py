# triveast/routers/stocks.py

import re

from fastapi import APIRouter, Depends, Path

from triveast.deps import get_ledger, get_quote_cache
from triveast.errors import http_error
from triveast.ledger import PortfolioLedger
from triveast.quote_cache import QuoteCache
from triveast.schemas import ErrorCode, PortfolioSnapshot, Quote, TradeRequest

router = APIRouter(prefix="/api", tags=["stocks"])

_SYMBOL_RE = re.compile(r"^[A-Za-z0-9.\-]{1,10}$")


@router.get("/quote/{symbol}", response_model=Quote)
async def quote(
    symbol: str = Path(..., description="Ticker (e.g., AAPL)"),
    cache: QuoteCache = Depends(get_quote_cache),
):
    if not _SYMBOL_RE.match(symbol.strip()):
        raise http_error(ErrorCode.INVALID_SYMBOL, "Invalid ticker symbol", hint="e.g. AAPL")
    return await cache.get_quote(symbol)


@router.post("/buy", response_model=PortfolioSnapshot)
def buy(req: TradeRequest, ledger: PortfolioLedger = Depends(get_ledger)):
    return ledger.buy(req.symbol, req.shares, req.price)


@router.post("/sell", response_model=PortfolioSnapshot)
def sell(req: TradeRequest, ledger: PortfolioLedger = Depends(get_ledger)):
    return ledger.sell(req.symbol, req.shares, req.price)


@router.get("/portfolio", response_model=PortfolioSnapshot)
def portfolio(ledger: PortfolioLedger = Depends(get_ledger)):
    return ledger.snapshot()
