"""Shared test helpers: fake clock and fake upstream providers."""

from unittest.mock import AsyncMock, MagicMock

from triveast.schemas import Question, Quote


class FakeClock:
    """Manually advanced replacement for time.time."""

    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_questions(amount: int, category_id: str = "science", prefix: str = "q") -> list[Question]:
    return [
        Question(
            id=f"{prefix}-{i}",
            category_id=category_id,
            question=f"Question {i}?",
            options=("a", "b", "c", "d"),
            correct_answer=i % 4,
            difficulty=2,
        )
        for i in range(amount)
    ]


def question_provider(**kwargs) -> MagicMock:
    """Provider whose fetch_questions returns `amount` generated questions by default."""
    provider = MagicMock()
    provider.name = "fake-trivia"
    if not kwargs:
        kwargs["side_effect"] = lambda category_id, amount: make_questions(amount, category_id)
    provider.fetch_questions = AsyncMock(**kwargs)
    return provider


def quote_provider(**kwargs) -> MagicMock:
    provider = MagicMock()
    provider.name = "fake-quotes"
    if not kwargs:
        kwargs["side_effect"] = lambda symbol: Quote(
            symbol=symbol, price=100.0, percent_change=1.5
        )
    provider.fetch_quote = AsyncMock(**kwargs)
    return provider
