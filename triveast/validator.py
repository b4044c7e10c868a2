from __future__ import annotations

import math
from typing import Any

from triveast.schemas import Quote

# Return normalized values or None; callers decide what a rejection means.


def _as_float(val: Any) -> float | None:
    """Coerce numbers (or numeric strings) to a finite float."""
    if val is None or isinstance(val, bool):
        return None
    # Yahoo sometimes wraps numbers as {"raw": 1.23, "fmt": "1.23"}
    if isinstance(val, dict):
        val = val.get("raw")
    try:
        out = float(val)
    except (TypeError, ValueError):
        return None
    if math.isnan(out) or math.isinf(out):
        return None
    return out


def validate_quote_record(record: Any, symbol: str) -> Quote | None:
    """Check a single quote record and return a Quote or None if unusable."""
    if not isinstance(record, dict):
        return None
    price = _as_float(record.get("regularMarketPrice"))
    if price is None or price <= 0:
        return None
    sym = record.get("symbol")
    if not isinstance(sym, str) or not sym.strip():
        sym = symbol
    return Quote(
        symbol=sym.strip().upper(),
        price=price,
        percent_change=_as_float(record.get("regularMarketChangePercent")),
    )


def validate_trivia_item(item: Any) -> dict[str, Any] | None:
    """Check one Open Trivia DB result; returns the still-encoded fields or None."""
    if not isinstance(item, dict):
        return None
    question = item.get("question")
    correct = item.get("correct_answer")
    incorrect = item.get("incorrect_answers")
    if not isinstance(question, str) or not question:
        return None
    if not isinstance(correct, str):
        return None
    if not isinstance(incorrect, list) or not all(isinstance(a, str) for a in incorrect):
        return None
    return {
        "question": question,
        "correct_answer": correct,
        "incorrect_answers": incorrect,
        "difficulty": item.get("difficulty") if isinstance(item.get("difficulty"), str) else "",
    }
