"""Human-readable labels for questionnaire enums."""

from models.answers import (
    CostPreference,
    DocumentType,
    InfraRequirement,
    LanguagePreference,
    StayDuration,
    TimezonePreference,
    WorkType,
)

WORK_TYPE_LABELS = {
    WorkType.OVERSEAS_REMOTE_EMPLOYEE: "remote employee of an overseas company",
    WorkType.DOMESTIC_REMOTE_EMPLOYEE: "remote employee of a home-country company",
    WorkType.FREELANCER: "freelancer",
    WorkType.COMPANY_OWNER: "owner of your own company",
}

DOCUMENT_LABELS = {
    DocumentType.EMPLOYMENT_CONTRACT: "employment contract",
    DocumentType.BANK_STATEMENT: "bank statements",
    DocumentType.CRIMINAL_RECORD: "criminal record certificate",
    DocumentType.EDUCATION_OR_EXPERIENCE: "proof of education or work experience",
}

STAY_LABELS = {
    StayDuration.UNDER_90D: "less than 90 days",
    StayDuration.BETWEEN_90_183D: "90-183 days",
    StayDuration.OVER_183D: "more than 183 days",
    StayDuration.UNCERTAIN: "not sure yet",
}

COST_LABELS = {
    CostPreference.LOW: "as low as possible",
    CostPreference.MEDIUM: "moderate is fine",
    CostPreference.INSENSITIVE: "does not matter",
}

LANGUAGE_LABELS = {
    LanguagePreference.ENGLISH_PRIORITY: "English first",
    LanguagePreference.CAN_LEARN: "willing to learn the local language",
}

TIMEZONE_LABELS = {
    TimezonePreference.ASIA: "Asian time zones",
    TimezonePreference.EUROPE: "European time zones",
    TimezonePreference.ANY: "no preference",
}

INFRA_LABELS = {
    InfraRequirement.HIGH: "high",
    InfraRequirement.MEDIUM: "medium",
}
