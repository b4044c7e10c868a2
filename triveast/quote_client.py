# triveast/quote_client.py
# Purpose: Real-time quote lookup against Yahoo Finance.
# Pitfalls: Yahoo endpoints are unofficial -> can rate-limit (429) or change shape.

from __future__ import annotations

from typing import Any

import httpx

from triveast.errors import InvalidQuote
from triveast.schemas import Quote
from triveast.upstream import get_json
from triveast.validator import validate_quote_record

BASE_URL = "https://query1.finance.yahoo.com/v7/finance/quote"


def normalize_yahoo_quote(resp: Any, symbol: str) -> Quote | None:
    """
    Pull the first record out of a Yahoo quote envelope.
    We expect:
      resp["quoteResponse"]["result"][0] -> {symbol, regularMarketPrice, regularMarketChangePercent}
    """
    try:
        record = resp["quoteResponse"]["result"][0]
    except (KeyError, IndexError, TypeError):
        return None
    return validate_quote_record(record, symbol)


class YahooQuoteClient:
    name = "yahoo"

    def __init__(
        self,
        base_url: str = BASE_URL,
        *,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self._client = client

    async def fetch_quote(self, symbol: str) -> Quote:
        sym = symbol.strip().upper()
        data = await get_json(
            self.base_url, {"symbols": sym}, timeout=self.timeout, client=self._client
        )
        quote = normalize_yahoo_quote(data, sym)
        if quote is None:
            raise InvalidQuote(sym)
        return quote
