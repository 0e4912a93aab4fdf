from enum import Enum

from pydantic import BaseModel, Field


class Nationality(str, Enum):
    CN = "CN"
    OTHER = "other"


class StayDuration(str, Enum):
    UNDER_90D = "<90d"
    BETWEEN_90_183D = "90-183d"
    OVER_183D = ">183d"
    UNCERTAIN = "uncertain"


class WorkType(str, Enum):
    OVERSEAS_REMOTE_EMPLOYEE = "overseas_remote_employee"
    DOMESTIC_REMOTE_EMPLOYEE = "domestic_remote_employee"
    FREELANCER = "freelancer"
    COMPANY_OWNER = "company_owner"


class DocumentType(str, Enum):
    EMPLOYMENT_CONTRACT = "employment_contract"
    BANK_STATEMENT = "bank_statement"
    CRIMINAL_RECORD = "criminal_record"
    EDUCATION_OR_EXPERIENCE = "education_or_experience"


class CostPreference(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    INSENSITIVE = "insensitive"


class LanguagePreference(str, Enum):
    ENGLISH_PRIORITY = "english_priority"
    CAN_LEARN = "can_learn"


class TimezonePreference(str, Enum):
    ASIA = "asia"
    EUROPE = "europe"
    ANY = "any"


class InfraRequirement(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"


class UserAnswers(BaseModel):
    """The questionnaire profile a recommendation is computed for."""

    nationality: Nationality
    has_spouse: bool = False
    num_children: int = Field(default=0, ge=0)
    planned_stay: StayDuration
    work_type: WorkType
    monthly_income_usd: float = Field(ge=0)
    income_stable: bool = True
    docs_available: frozenset[DocumentType] = frozenset()
    can_buy_insurance: bool = True
    accept_no_local_work: bool = True
    want_long_term: bool = False
    cost_preference: CostPreference = CostPreference.MEDIUM
    language_preference: LanguagePreference = LanguagePreference.ENGLISH_PRIORITY
    timezone_preference: TimezonePreference = TimezonePreference.ANY
    infra_requirement: InfraRequirement = InfraRequirement.MEDIUM

    model_config = {"frozen": True, "extra": "forbid"}

    @property
    def has_family(self) -> bool:
        return self.has_spouse or self.num_children > 0
