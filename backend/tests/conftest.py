from datetime import date

import pytest

from models.answers import UserAnswers
from models.country import CountryPolicy

TODAY = date(2026, 10, 1)

BASE_COUNTRY = {
    "country_id": "testland",
    "name": "Testland",
    "visa_name": "Remote Work Visa",
    "confidence_level": "high",
    "min_income": {
        "amount": 2762,
        "currency": "USD",
        "period": "monthly",
        "family_surcharge": {"spouse_pct": 0.0, "child_pct": 0.0},
    },
    "allowed_work_types": ["overseas_remote_employee", "freelancer"],
    "local_work_prohibited": False,
    "family_allowed": True,
    "insurance_required": False,
    "education_required": False,
    "min_experience_years": 0,
    "required_documents": ["employment_contract", "bank_statement", "criminal_record"],
    "max_stay_months": 60,
    "initial_term_months": 12,
    "renewable": True,
    "path_to_pr": True,
    "path_to_pr_explicit": True,
    "years_to_pr": 5,
    "tax_policy": {
        "type": "zero",
        "foreign_income_exempt": True,
        "local_rate_pct": 0,
        "exemption_fraction": 1,
        "benefit_duration_years": 99,
        "clarity": "high",
        "description": "No personal income tax",
    },
    "cost_of_living": {"level": "medium", "index_vs_nyc": 45},
    "language_env": {"english_friendly": "high", "primary_language": "English"},
    "timezone": "Europe",
    "infrastructure": {"internet_quality": "high", "coworking_availability": "high"},
    "public_healthcare": False,
    "public_education": False,
    "last_verified_at": "2026-09-01",
}

BASE_USER = {
    "nationality": "CN",
    "has_spouse": False,
    "num_children": 0,
    "planned_stay": ">183d",
    "work_type": "overseas_remote_employee",
    "monthly_income_usd": 8500,
    "income_stable": True,
    "docs_available": ["employment_contract", "bank_statement", "criminal_record"],
    "can_buy_insurance": True,
    "accept_no_local_work": True,
    "want_long_term": False,
    "cost_preference": "medium",
    "language_preference": "english_priority",
    "timezone_preference": "any",
    "infra_requirement": "medium",
}


def _merge(base: dict, changes: dict) -> dict:
    merged = dict(base)
    for key, value in changes.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def make_country(**changes) -> CountryPolicy:
    return CountryPolicy(**_merge(BASE_COUNTRY, changes))


def make_user(**changes) -> UserAnswers:
    return UserAnswers(**_merge(BASE_USER, changes))


@pytest.fixture
def country() -> CountryPolicy:
    return make_country()


@pytest.fixture
def user() -> UserAnswers:
    return make_user()
