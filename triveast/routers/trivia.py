# triveast/routers/trivia.py

from fastapi import APIRouter, Depends, Query

from triveast.deps import get_question_cache, get_quote_cache, get_storage
from triveast.errors import UnknownCategory
from triveast.question_cache import MAX_LIMIT, QuestionCache
from triveast.quote_cache import QuoteCache
from triveast.schemas import CacheStatsResponse, Category, Question
from triveast.storage import MemStorage

router = APIRouter(prefix="/api", tags=["trivia"])


@router.get("/categories", response_model=list[Category])
def categories(storage: MemStorage = Depends(get_storage)):
    return storage.get_categories()


@router.get("/categories/{category_id}/questions", response_model=list[Question])
async def questions(
    category_id: str,
    limit: int = Query(10, ge=1, le=MAX_LIMIT, description="Questions to return"),
    storage: MemStorage = Depends(get_storage),
    cache: QuestionCache = Depends(get_question_cache),
):
    """Questions for a category; degrades to stale or built-in questions, never 5xx."""
    if storage.get_category(category_id) is None:
        raise UnknownCategory(category_id)
    return await cache.get_questions(category_id, limit)


@router.get("/cache/stats", response_model=CacheStatsResponse)
def cache_stats(
    questions: QuestionCache = Depends(get_question_cache),
    quotes: QuoteCache = Depends(get_quote_cache),
):
    return CacheStatsResponse(questions=questions.cache_stats(), quotes=quotes.cache_stats())
