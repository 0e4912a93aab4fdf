from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

from models.country import CountryPolicy


class ResultStatus(str, Enum):
    RECOMMENDED = "RECOMMENDED"
    EXCLUDED = "EXCLUDED"


class ScoreBreakdown(BaseModel):
    feasibility: int = Field(ge=0, le=40)
    stability: int = Field(ge=0, le=20)
    longterm: int = Field(ge=0, le=15)
    tax: int = Field(ge=0, le=15)
    lifestyle: int = Field(ge=0, le=10)

    model_config = {"frozen": True}

    @property
    def base(self) -> int:
        return self.feasibility + self.stability + self.longterm + self.tax + self.lifestyle


class Highlight(BaseModel):
    text: str
    field: str

    model_config = {"frozen": True}


class Risk(BaseModel):
    text: str
    field: str
    severity: Literal["high", "medium", "low"]

    model_config = {"frozen": True}


class CountryResult(BaseModel):
    country: CountryPolicy
    status: ResultStatus
    score: int | None = None
    tier: str | None = None
    breakdown: ScoreBreakdown | None = None
    highlights: list[Highlight] = []
    risks: list[Risk] = []
    exclude_reasons: list[str] = []

    model_config = {"frozen": True}

    @property
    def excluded(self) -> bool:
        return self.status == ResultStatus.EXCLUDED


class ScoreOverride(BaseModel):
    """Externally computed score bundle for one recommended country."""

    country_id: str
    score: int = Field(ge=0)
    tier: str | None = None
    breakdown: ScoreBreakdown
    highlights: list[Highlight] = []
    risks: list[Risk] = []


class RecommendationResponse(BaseModel):
    results: list[CountryResult]
    fallback: bool = True
