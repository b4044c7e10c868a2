# triveast/deps.py
# FastAPI dependencies resolving the services create_app() put on app.state.

from fastapi import Request

from triveast.config import Settings
from triveast.ledger import PortfolioLedger
from triveast.question_cache import QuestionCache
from triveast.quote_cache import QuoteCache
from triveast.rss import ImageStore, RssFeed
from triveast.storage import MemStorage


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_question_cache(request: Request) -> QuestionCache:
    return request.app.state.question_cache


def get_quote_cache(request: Request) -> QuoteCache:
    return request.app.state.quote_cache


def get_ledger(request: Request) -> PortfolioLedger:
    return request.app.state.ledger


def get_storage(request: Request) -> MemStorage:
    return request.app.state.storage


def get_feed(request: Request) -> RssFeed:
    return request.app.state.rss_feed


def get_images(request: Request) -> ImageStore:
    return request.app.state.images
