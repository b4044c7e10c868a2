from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

VALID_CATEGORY_IDS = ("general", "science", "history", "sports", "entertainment", "music")

CategoryId = Literal["general", "science", "history", "sports", "entertainment", "music"]


# --- Trivia ---
class Category(BaseModel):
    id: str
    name: str
    description: str
    icon: str


class Question(BaseModel):
    model_config = ConfigDict(frozen=True)
    id: str
    category_id: str
    question: str
    options: tuple[str, ...]
    correct_answer: int = Field(ge=0)
    difficulty: int = Field(default=2, ge=1, le=3)


# --- Stocks ---
class Quote(BaseModel):
    model_config = ConfigDict(frozen=True)
    symbol: str
    price: float
    percent_change: float | None = None


class Position(BaseModel):
    shares: int
    avg_price: float


class PortfolioSnapshot(BaseModel):
    balance: float
    portfolio: dict[str, Position]


class TradeRequest(BaseModel):
    symbol: str = Field(..., min_length=1, max_length=10, pattern=r"^[A-Za-z0-9.\-]+$")
    shares: int = Field(..., gt=0, description="Positive whole number of shares")
    price: float = Field(..., gt=0, description="Price per share")

    @model_validator(mode="before")
    @classmethod
    def _strip_symbol(cls, data):
        if isinstance(data, dict) and isinstance(data.get("symbol"), str):
            data = {**data, "symbol": data["symbol"].strip()}
        return data


# --- Cache diagnostics ---
class CacheStats(BaseModel):
    total_entries: int
    valid_entries: int
    expired_entries: int


class CacheStatsResponse(BaseModel):
    questions: CacheStats
    quotes: CacheStats


# --- Game sessions ---
class QuestionResult(BaseModel):
    question_id: str
    selected_answer: int
    is_correct: bool
    time_spent: float = Field(ge=0)


class GameSessionCreate(BaseModel):
    category_id: CategoryId
    total_questions: int = Field(ge=1, le=50)
    start_time: str
    score: int = Field(default=0, ge=0)
    correct_answers: int = Field(default=0, ge=0)
    end_time: str | None = None
    question_results: list[QuestionResult] | None = Field(default=None, max_length=100)


class GameSessionUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")
    score: int | None = Field(default=None, ge=0)
    correct_answers: int | None = Field(default=None, ge=0)
    end_time: str | None = None
    question_results: list[QuestionResult] | None = Field(default=None, max_length=100)


class GameSession(GameSessionCreate):
    id: str


# --- RSS ---
class RssPostResponse(BaseModel):
    success: bool = True
    message: str = "Post added!"


# --- Health payload ---
class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    as_of: str
    service: str = "triveast"


# --- Version payload ---
class VersionResponse(BaseModel):
    service: str  # "triveast-api:0.1.0"
    version: str


# --- Error taxonomy ---
class ErrorCode(str, Enum):
    UNKNOWN_CATEGORY = "UNKNOWN_CATEGORY"
    INVALID_SYMBOL = "INVALID_SYMBOL"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"
    RATE_LIMIT = "RATE_LIMIT"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    INSUFFICIENT_SHARES = "INSUFFICIENT_SHARES"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorDetail(BaseModel):
    code: ErrorCode
    message: str
    hint: str | None = None


class ErrorResponse(BaseModel):
    error: ErrorDetail
