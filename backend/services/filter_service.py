from pydantic import BaseModel

from models.answers import DocumentType, UserAnswers
from models.country import CountryPolicy, TriState
from services.income_service import required_income_usd
from utils.labels import DOCUMENT_LABELS, WORK_TYPE_LABELS
from utils.numbers import format_amount

# Missing any of these excludes a country; other documents only lower feasibility
CRITICAL_DOCUMENTS = (DocumentType.CRIMINAL_RECORD, DocumentType.BANK_STATEMENT)

_EDUCATION_PHRASE = "education or work experience"


class FilterResult(BaseModel):
    excluded: bool
    reasons: list[str] = []


def evaluate(user: UserAnswers, country: CountryPolicy) -> FilterResult:
    """Run every exclusion rule against a country and collect the reasons."""
    reasons: list[str] = []

    required = required_income_usd(country, user)
    if user.monthly_income_usd < required:
        reasons.append(
            f"Income below the minimum requirement (needs ${format_amount(required)}/month, "
            f"you have about ${format_amount(user.monthly_income_usd)}/month)"
        )

    if user.work_type not in country.allowed_work_types:
        reasons.append(
            f'This visa does not accept the work type "{WORK_TYPE_LABELS[user.work_type]}"'
        )

    if country.local_work_prohibited and not user.accept_no_local_work:
        reasons.append(
            "This country prohibits working for local companies or clients, "
            "but you cannot accept that restriction"
        )

    if country.insurance_required == TriState.YES and not user.can_buy_insurance:
        reasons.append("This visa requires private health insurance, but you cannot buy it")

    missing_critical = [
        d for d in country.required_documents
        if d in CRITICAL_DOCUMENTS and d not in user.docs_available
    ]
    if missing_critical:
        labels = ", ".join(DOCUMENT_LABELS[d] for d in missing_critical)
        reasons.append(f"Missing critical application documents: {labels}")

    has_proof = DocumentType.EDUCATION_OR_EXPERIENCE in user.docs_available
    if country.education_required and not has_proof:
        reasons.append(
            f"This country requires proof of {_EDUCATION_PHRASE}, but you cannot provide it"
        )
    if country.min_experience_years > 0 and not has_proof:
        if not any(_EDUCATION_PHRASE in r for r in reasons):
            years = country.min_experience_years
            reasons.append(
                f"This country requires proof of at least {years} "
                f"year{'s' if years != 1 else ''} of work experience"
            )

    return FilterResult(excluded=bool(reasons), reasons=reasons)
