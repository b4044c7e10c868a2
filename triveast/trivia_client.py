"""
Open Trivia DB client.

Returns a list of Question records:
  [
    {id, category_id, question, options: [...], correct_answer: <index>, difficulty: 1..3},
    ...
  ]

Notes / Pitfalls:
- Strings come back percent-encoded (encode=url3986) and are decoded here.
- Options are shuffled per question; correct_answer is the post-shuffle index.
- response_code != 0 is an error even on HTTP 200.
"""

from __future__ import annotations

import random
from typing import Any
from urllib.parse import unquote

import httpx

from triveast.errors import UnknownCategory, UpstreamError, UpstreamReason
from triveast.schemas import Question
from triveast.upstream import get_json
from triveast.utils import new_id
from triveast.validator import validate_trivia_item

BASE_URL = "https://opentdb.com/api.php"

# Internal category id -> Open Trivia DB category number
CATEGORY_MAPPING: dict[str, int] = {
    "general": 9,  # General Knowledge
    "science": 17,  # Science & Nature
    "history": 23,
    "sports": 21,
    "entertainment": 11,  # Entertainment: Film
    "music": 12,  # Entertainment: Music
}

_DIFFICULTY = {"easy": 1, "medium": 2, "hard": 3}

_RESPONSE_CODES = {
    1: UpstreamReason.NO_RESULTS,
    2: UpstreamReason.INVALID_PARAMETER,
    3: UpstreamReason.TOKEN_NOT_FOUND,
    4: UpstreamReason.TOKEN_EMPTY,
    5: UpstreamReason.RATE_LIMITED,
}


def difficulty_level(raw: str | None) -> int:
    return _DIFFICULTY.get((raw or "").lower(), 2)


def shuffle_options(
    correct: str, incorrect: list[str], rng: random.Random
) -> tuple[list[str], int]:
    """Fisher-Yates shuffle of [correct, *incorrect]; returns (options, correct index)."""
    options = [correct, *incorrect]
    for i in range(len(options) - 1, 0, -1):
        j = rng.randint(0, i)
        options[i], options[j] = options[j], options[i]
    return options, options.index(correct)


def to_question(item: dict[str, Any], category_id: str, rng: random.Random) -> Question | None:
    """Convert one provider result into a Question (None if malformed)."""
    good = validate_trivia_item(item)
    if good is None:
        return None
    correct = unquote(good["correct_answer"])
    incorrect = [unquote(a) for a in good["incorrect_answers"]]
    options, correct_idx = shuffle_options(correct, incorrect, rng)
    return Question(
        id=new_id(),
        category_id=category_id,
        question=unquote(good["question"]),
        options=tuple(options),
        correct_answer=correct_idx,
        difficulty=difficulty_level(unquote(good["difficulty"])),
    )


class OpenTriviaClient:
    """Fetches multiple-choice questions for an internal category id."""

    name = "opentdb"

    def __init__(
        self,
        base_url: str = BASE_URL,
        *,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
        rng: random.Random | None = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self._client = client
        self._rng = rng or random.Random()

    async def fetch_questions(self, category_id: str, amount: int) -> list[Question]:
        provider_category = CATEGORY_MAPPING.get(category_id)
        if provider_category is None:
            raise UnknownCategory(category_id)

        params = {
            "amount": amount,
            "category": provider_category,
            "type": "multiple",
            "encode": "url3986",
        }
        data = await get_json(self.base_url, params, timeout=self.timeout, client=self._client)
        return self.parse_response(data, category_id)

    def parse_response(self, data: Any, category_id: str) -> list[Question]:
        if not isinstance(data, dict):
            raise UpstreamError(UpstreamReason.UNKNOWN)

        code = data.get("response_code")
        if code != 0:
            raise UpstreamError(_RESPONSE_CODES.get(code, UpstreamReason.UNKNOWN), code)

        results = data.get("results") or []
        if not isinstance(results, list):
            raise UpstreamError(UpstreamReason.UNKNOWN)
        questions = [q for q in (to_question(r, category_id, self._rng) for r in results) if q]
        if not questions:
            raise UpstreamError(UpstreamReason.EMPTY_RESULTS)
        return questions
