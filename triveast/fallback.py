# triveast/fallback.py
# Purpose: Hand-written questions served when the provider and the cache both fail.
# Pitfalls: Tiny sets (1-2 per category); callers may get fewer than they asked for.

from __future__ import annotations

from typing import Any

from triveast.schemas import Question
from triveast.utils import new_id

_FALLBACK: dict[str, list[dict[str, Any]]] = {
    "science": [
        {
            "question": "What is the largest planet in our solar system?",
            "options": ("Earth", "Jupiter", "Saturn", "Neptune"),
            "correct_answer": 1,
            "difficulty": 1,
        },
        {
            "question": "What is the chemical symbol for gold?",
            "options": ("Go", "Gd", "Au", "Ag"),
            "correct_answer": 2,
            "difficulty": 2,
        },
    ],
    "history": [
        {
            "question": "In which year did World War II end?",
            "options": ("1944", "1945", "1946", "1947"),
            "correct_answer": 1,
            "difficulty": 1,
        },
        {
            "question": "Who was the first person to walk on the moon?",
            "options": ("Buzz Aldrin", "Neil Armstrong", "John Glenn", "Alan Shepard"),
            "correct_answer": 1,
            "difficulty": 1,
        },
    ],
    "general": [
        {
            "question": "What is the capital of Australia?",
            "options": ("Sydney", "Melbourne", "Canberra", "Brisbane"),
            "correct_answer": 2,
            "difficulty": 2,
        },
        {
            "question": "Which planet is known as the Red Planet?",
            "options": ("Venus", "Mars", "Jupiter", "Saturn"),
            "correct_answer": 1,
            "difficulty": 1,
        },
    ],
    "sports": [
        {
            "question": "How many players are on a basketball team on the court at one time?",
            "options": ("4", "5", "6", "7"),
            "correct_answer": 1,
            "difficulty": 1,
        },
    ],
    "entertainment": [
        {
            "question": "Which movie features the quote 'May the Force be with you'?",
            "options": ("Star Trek", "Star Wars", "Blade Runner", "The Matrix"),
            "correct_answer": 1,
            "difficulty": 1,
        },
    ],
    "music": [
        {
            "question": "Which instrument has 88 keys?",
            "options": ("Organ", "Piano", "Harpsichord", "Accordion"),
            "correct_answer": 1,
            "difficulty": 1,
        },
    ],
}


def fallback_questions(category_id: str, limit: int) -> list[Question]:
    """Up to `limit` hardcoded questions; unknown categories get the general set."""
    key = category_id if category_id in _FALLBACK else "general"
    return [
        Question(id=new_id(), category_id=key, **q)
        for q in _FALLBACK[key][:limit]
    ]
