# triveast/storage.py
# Purpose: In-memory categories and game sessions.
# Pitfalls: Not persistent; sessions vanish on restart.

from __future__ import annotations

from triveast.errors import NotFound
from triveast.schemas import Category, GameSession, GameSessionCreate, GameSessionUpdate
from triveast.utils import new_id

DEFAULT_CATEGORIES = (
    Category(
        id="general",
        name="General Knowledge",
        description="Mix of topics from various fields",
        icon="BookOpen",
    ),
    Category(
        id="science",
        name="Science & Nature",
        description="Biology, chemistry, physics & more",
        icon="Atom",
    ),
    Category(
        id="history", name="History", description="World events and historical facts", icon="Globe"
    ),
    Category(
        id="sports", name="Sports", description="Athletics, games, and competitions", icon="Trophy"
    ),
    Category(
        id="entertainment",
        name="Entertainment",
        description="Movies, TV shows, and pop culture",
        icon="Gamepad2",
    ),
    Category(
        id="music", name="Music", description="Artists, songs, and musical history", icon="Music"
    ),
)

_NULLABLE = {"end_time", "question_results"}


class MemStorage:
    def __init__(self):
        self._categories: dict[str, Category] = {c.id: c for c in DEFAULT_CATEGORIES}
        self._sessions: dict[str, GameSession] = {}

    # --- categories ---
    def get_categories(self) -> list[Category]:
        return list(self._categories.values())

    def get_category(self, category_id: str) -> Category | None:
        return self._categories.get(category_id)

    # --- game sessions ---
    def create_session(self, data: GameSessionCreate) -> GameSession:
        session = GameSession(id=new_id(), **data.model_dump())
        self._sessions[session.id] = session
        return session

    def get_session(self, session_id: str) -> GameSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise NotFound("Game session not found")
        return session

    def update_session(self, session_id: str, updates: GameSessionUpdate) -> GameSession:
        session = self.get_session(session_id)
        changes = updates.model_dump(exclude_unset=True)
        # end_time/question_results may be cleared with null; counters may not
        changes = {k: v for k, v in changes.items() if v is not None or k in _NULLABLE}
        correct = changes.get("correct_answers")
        if correct is not None and correct > session.total_questions:
            raise ValueError("Correct answers cannot exceed total questions")
        updated = session.model_copy(update=changes)
        # model_copy skips validation; rebuild to keep nested models typed
        updated = GameSession.model_validate(updated.model_dump())
        self._sessions[session_id] = updated
        return updated

    def delete_session(self, session_id: str) -> None:
        if self._sessions.pop(session_id, None) is None:
            raise NotFound("Game session not found")
