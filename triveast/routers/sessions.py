# triveast/routers/sessions.py

from fastapi import APIRouter, Depends, Response, status

from triveast.deps import get_storage
from triveast.errors import http_error
from triveast.schemas import ErrorCode, GameSession, GameSessionCreate, GameSessionUpdate
from triveast.storage import MemStorage

router = APIRouter(prefix="/api/game-sessions", tags=["sessions"])


@router.post("", response_model=GameSession, status_code=status.HTTP_201_CREATED)
def create_session(body: GameSessionCreate, storage: MemStorage = Depends(get_storage)):
    if body.correct_answers > body.total_questions:
        raise http_error(
            ErrorCode.VALIDATION_ERROR, "Correct answers cannot exceed total questions"
        )
    return storage.create_session(body)


@router.get("/{session_id}", response_model=GameSession)
def get_session(session_id: str, storage: MemStorage = Depends(get_storage)):
    return storage.get_session(session_id)


@router.patch("/{session_id}", response_model=GameSession)
def update_session(
    session_id: str, body: GameSessionUpdate, storage: MemStorage = Depends(get_storage)
):
    try:
        return storage.update_session(session_id, body)
    except ValueError as e:
        raise http_error(ErrorCode.VALIDATION_ERROR, str(e), hint="correct_answers") from e


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_session(session_id: str, storage: MemStorage = Depends(get_storage)):
    storage.delete_session(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
