from datetime import date
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from models.answers import DocumentType, WorkType


class Level(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TriState(str, Enum):
    YES = "yes"
    NO = "no"
    UNKNOWN = "unknown"


class TaxType(str, Enum):
    ZERO = "zero"
    EXEMPT = "exempt"
    SPECIAL_REGIME = "special_regime"
    NO_BENEFIT = "no_benefit"


class Timezone(str, Enum):
    ASIA = "Asia"
    EUROPE = "Europe"
    MIDDLE_EAST = "MiddleEast"


class FamilySurcharge(BaseModel):
    spouse_pct: float = 0.0
    child_pct: float = 0.0

    model_config = {"frozen": True}


class MinIncome(BaseModel):
    amount: float
    currency: str = "USD"
    period: Literal["monthly", "yearly"] = "monthly"
    family_surcharge: FamilySurcharge = FamilySurcharge()

    model_config = {"frozen": True}


class TaxPolicy(BaseModel):
    type: TaxType
    foreign_income_exempt: bool = False
    # exemption exists but depends on conditions (remittance timing, residency tests, ...)
    foreign_income_conditional: bool = False
    local_rate_pct: float = 0.0
    exemption_fraction: float = 0.0
    benefit_duration_years: float = 0.0
    clarity: Level = Level.MEDIUM
    description: str = ""

    model_config = {"frozen": True}


class CostOfLiving(BaseModel):
    level: Level
    index_vs_nyc: float = 0.0

    model_config = {"frozen": True}


class LanguageEnv(BaseModel):
    english_friendly: Level
    primary_language: str

    model_config = {"frozen": True}


class Infrastructure(BaseModel):
    internet_quality: Level
    coworking_availability: Level = Level.MEDIUM

    model_config = {"frozen": True}


class CountryPolicy(BaseModel):
    country_id: str
    name: str
    flag: str = ""
    visa_name: str

    confidence_level: Level = Level.MEDIUM
    source_id: str = ""

    min_income: MinIncome
    allowed_work_types: frozenset[WorkType]
    business_owner_conditional: bool = False
    business_owner_restrictions: tuple[str, ...] = ()
    local_work_prohibited: bool = False
    family_allowed: TriState = TriState.UNKNOWN
    insurance_required: TriState = TriState.UNKNOWN
    education_required: bool = False
    min_experience_years: int = Field(default=0, ge=0)
    required_documents: tuple[DocumentType, ...] = ()

    max_stay_months: int
    initial_term_months: int
    renewable: bool = False
    path_to_pr: bool = False
    path_to_pr_explicit: bool = False
    years_to_pr: int | None = None

    tax_policy: TaxPolicy
    cost_of_living: CostOfLiving
    language_env: LanguageEnv
    timezone: Timezone
    infrastructure: Infrastructure

    public_healthcare: bool = False
    public_education: bool = False
    last_verified_at: date

    model_config = {"frozen": True}

    @field_validator("family_allowed", "insurance_required", mode="before")
    @classmethod
    def parse_tri_state(cls, v):
        # Source data records these as true / false / null
        if v is None:
            return TriState.UNKNOWN
        if isinstance(v, bool):
            return TriState.YES if v else TriState.NO
        return v
