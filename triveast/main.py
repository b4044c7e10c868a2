# triveast/main.py
from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from triveast.config import Settings
from triveast.errors import install_error_handlers
from triveast.ledger import PortfolioLedger
from triveast.logging_conf import setup_logging

# --- Observability ---
from triveast.observability import metrics_endpoint, timing_middleware
from triveast.question_cache import QuestionCache, QuestionProvider
from triveast.quote_cache import QuoteCache, QuoteProvider
from triveast.quote_client import YahooQuoteClient

# --- Routers ---
from triveast.routers import news, sessions, stocks, trivia
from triveast.rss import ImageStore, RssFeed
from triveast.schemas import HealthResponse, VersionResponse
from triveast.storage import MemStorage
from triveast.trivia_client import OpenTriviaClient
from triveast.utils import utc_now_iso
from triveast.version import SERVICE_NAME, service_version_payload


def create_app(
    settings: Settings | None = None,
    *,
    question_provider: QuestionProvider | None = None,
    quote_provider: QuoteProvider | None = None,
) -> FastAPI:
    """
    Build the app and its process-wide services.

    Providers default to the real Open Trivia DB / Yahoo clients; tests pass fakes.
    """
    settings = settings or Settings.from_env()
    app = FastAPI(title="Triveast", version=service_version_payload()["version"])

    question_provider = question_provider or OpenTriviaClient(
        settings.trivia_url, timeout=settings.http_timeout_s
    )
    quote_provider = quote_provider or YahooQuoteClient(
        settings.quote_url, timeout=settings.http_timeout_s
    )

    # --- Services (one instance per process) ---
    app.state.settings = settings
    app.state.question_cache = QuestionCache(question_provider, settings.question_ttl_s)
    app.state.quote_cache = QuoteCache(quote_provider, settings.quote_ttl_s)
    app.state.ledger = PortfolioLedger(settings.initial_balance)
    app.state.storage = MemStorage()
    app.state.rss_feed = RssFeed()
    app.state.images = ImageStore(settings.uploads_dir, max_bytes=settings.max_upload_bytes)

    # --- Include routers ---
    app.include_router(trivia.router)
    app.include_router(sessions.router)
    app.include_router(stocks.router)
    app.include_router(news.router)
    app.mount("/uploads", StaticFiles(directory=app.state.images.directory), name="uploads")

    install_error_handlers(app)

    # --- Middleware ---
    app.middleware("http")(timing_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.allowed_origins),
        allow_credentials="*" not in settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Utility endpoints ---
    @app.get("/health", response_model=HealthResponse)
    def health():
        return HealthResponse(as_of=utc_now_iso(), service=SERVICE_NAME)

    @app.get("/version", response_model=VersionResponse)
    def version():
        return VersionResponse(**service_version_payload())

    @app.get("/metrics")
    def metrics():
        return metrics_endpoint()

    return app


# --- App ---
setup_logging()
app = create_app()
