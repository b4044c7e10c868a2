"""Tests for the Open Trivia DB client: request shape, decoding, shuffling, errors."""

import random
from typing import Any

import httpx
import pytest

from triveast.errors import FetchError, UnknownCategory, UpstreamError, UpstreamReason
from triveast.trivia_client import OpenTriviaClient, difficulty_level, shuffle_options


def _item(**overrides: Any) -> dict[str, Any]:
    item = {
        "category": "Science%3A%20Computers",
        "type": "multiple",
        "difficulty": "hard",
        "question": "What%20is%202%2B2%3F",
        "correct_answer": "4",
        "incorrect_answers": ["3", "5", "22"],
    }
    item.update(overrides)
    return item


def _client(handler) -> OpenTriviaClient:
    transport = httpx.MockTransport(handler)
    return OpenTriviaClient(
        "https://opentdb.test/api.php",
        client=httpx.AsyncClient(transport=transport),
        rng=random.Random(7),
    )


class TestShuffle:
    def test_correct_index_points_at_correct_answer(self) -> None:
        for seed in range(200):
            options, idx = shuffle_options("right", ["w1", "w2", "w3"], random.Random(seed))

            assert options[idx] == "right"
            assert sorted(options) == sorted(["right", "w1", "w2", "w3"])

    def test_correct_answer_moves_around(self) -> None:
        positions = {
            shuffle_options("right", ["w1", "w2", "w3"], random.Random(seed))[1]
            for seed in range(200)
        }

        assert positions == {0, 1, 2, 3}


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("easy", 1), ("medium", 2), ("hard", 3), ("HARD", 3), ("", 2), ("insane", 2), (None, 2)],
)
def test_difficulty_level(raw, expected) -> None:
    assert difficulty_level(raw) == expected


class TestOpenTriviaClient:
    @pytest.mark.asyncio
    async def test_fetch_builds_request_and_decodes(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"response_code": 0, "results": [_item()]})

        questions = await _client(handler).fetch_questions("science", 20)

        params = seen[0].url.params
        assert params["amount"] == "20"
        assert params["category"] == "17"
        assert params["type"] == "multiple"
        assert params["encode"] == "url3986"

        q = questions[0]
        assert q.question == "What is 2+2?"
        assert q.category_id == "science"
        assert q.options[q.correct_answer] == "4"
        assert q.difficulty == 3
        assert q.id

    @pytest.mark.asyncio
    async def test_unknown_category_skips_network(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("provider should not be called")

        with pytest.raises(UnknownCategory) as exc_info:
            await _client(handler).fetch_questions("astrology", 10)

        assert exc_info.value.category_id == "astrology"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("code", "reason"),
        [
            (1, UpstreamReason.NO_RESULTS),
            (2, UpstreamReason.INVALID_PARAMETER),
            (3, UpstreamReason.TOKEN_NOT_FOUND),
            (4, UpstreamReason.TOKEN_EMPTY),
            (5, UpstreamReason.RATE_LIMITED),
            (42, UpstreamReason.UNKNOWN),
        ],
    )
    async def test_response_codes_map_to_reasons(self, code: int, reason: UpstreamReason) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"response_code": code, "results": []})

        with pytest.raises(UpstreamError) as exc_info:
            await _client(handler).fetch_questions("general", 10)

        assert exc_info.value.reason is reason
        assert exc_info.value.response_code == code

    @pytest.mark.asyncio
    async def test_empty_results_is_an_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"response_code": 0, "results": []})

        with pytest.raises(UpstreamError) as exc_info:
            await _client(handler).fetch_questions("music", 10)

        assert exc_info.value.reason is UpstreamReason.EMPTY_RESULTS

    @pytest.mark.asyncio
    @pytest.mark.parametrize("results", [5, "abc", {"question": "x"}])
    async def test_non_list_results_is_an_error(self, results: Any) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"response_code": 0, "results": results})

        with pytest.raises(UpstreamError) as exc_info:
            await _client(handler).fetch_questions("science", 5)

        assert exc_info.value.reason is UpstreamReason.UNKNOWN

    @pytest.mark.asyncio
    async def test_malformed_items_are_dropped(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            results = [_item(), _item(incorrect_answers="nope"), {"question": 3}]
            return httpx.Response(200, json={"response_code": 0, "results": results})

        questions = await _client(handler).fetch_questions("history", 10)

        assert len(questions) == 1

    @pytest.mark.asyncio
    async def test_http_error_status_is_fetch_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, text="busy")

        with pytest.raises(FetchError):
            await _client(handler).fetch_questions("sports", 10)

    @pytest.mark.asyncio
    async def test_transport_failure_is_fetch_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(FetchError):
            await _client(handler).fetch_questions("sports", 10)

    @pytest.mark.asyncio
    async def test_non_json_body_is_fetch_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>maintenance</html>")

        with pytest.raises(FetchError):
            await _client(handler).fetch_questions("entertainment", 10)
