from datetime import date

from models.answers import (
    CostPreference,
    LanguagePreference,
    StayDuration,
    UserAnswers,
    WorkType,
)
from models.country import CountryPolicy, Level, TaxType, TriState
from models.recommendation import Highlight, Risk, ScoreBreakdown
from services.modifier_service import STALE_AFTER_DAYS, days_since
from services.scoring_service import income_ratio
from utils.numbers import round_half_up

MAX_ITEMS = 3

_SEVERITY_ORDER = {"high": 0, "medium": 1, "low": 2}


def generate_highlights(
    user: UserAnswers, country: CountryPolicy, breakdown: ScoreBreakdown
) -> list[Highlight]:
    pool: list[Highlight] = []
    tax = country.tax_policy

    if breakdown.tax > 10:
        pool.append(Highlight(text=tax.description, field="tax_policy"))

    if breakdown.stability > 14:
        years = round_half_up(country.max_stay_months / 12)
        pool.append(Highlight(
            text=f"Stay up to {years} years in total, a stable long-term visa",
            field="max_stay_months",
        ))

    if user.has_family and country.public_education:
        pool.append(Highlight(
            text="Children can attend public schools and dependants share your residence rights",
            field="public_education",
        ))

    if breakdown.feasibility > 30:
        ratio = round_half_up(income_ratio(user, country) * 10) / 10
        pool.append(Highlight(
            text=f"Your income is {ratio:.1f}x the requirement, a comfortable margin",
            field="min_income",
        ))

    cost_level = country.cost_of_living.level
    if cost_level.value == user.cost_preference.value:
        adjective = "Low" if cost_level == Level.LOW else "Moderate"
        pool.append(Highlight(
            text=f"{adjective} cost of living that fits your budget preference",
            field="cost_of_living",
        ))

    if country.path_to_pr and user.want_long_term:
        if country.years_to_pr is not None:
            text = f"Permanent residency possible after {country.years_to_pr} years"
        else:
            text = "A path to permanent residency is available"
        pool.append(Highlight(text=text, field="path_to_pr"))

    if (
        country.language_env.english_friendly == Level.HIGH
        and user.language_preference == LanguagePreference.ENGLISH_PRIORITY
    ):
        pool.append(Highlight(
            text="English is widely spoken, everyday life works without the local language",
            field="language_env",
        ))

    if country.public_healthcare and user.has_family:
        pool.append(Highlight(
            text="Access to the public healthcare system keeps family medical costs low",
            field="public_healthcare",
        ))

    if tax.type in (TaxType.ZERO, TaxType.EXEMPT):
        pool.append(Highlight(
            text="Foreign income is tax-free, keeping the tax burden on remote work minimal",
            field="tax_policy",
        ))

    seen: set[str] = set()
    highlights = []
    for h in pool:
        if h.field in seen:
            continue
        seen.add(h.field)
        highlights.append(h)
    return highlights[:MAX_ITEMS]


def _caveats(user: UserAnswers, country: CountryPolicy) -> list[Risk]:
    """Low-severity notes about uncertain or conditional policy data."""
    caveats: list[Risk] = []

    if user.has_family and country.family_allowed == TriState.UNKNOWN:
        caveats.append(Risk(
            text="It is not confirmed whether dependants can join you on this visa",
            field="family_unknown",
            severity="low",
        ))

    if country.insurance_required == TriState.UNKNOWN:
        caveats.append(Risk(
            text="Health insurance requirements are unclear, budget for private cover",
            field="insurance_unknown",
            severity="low",
        ))

    if country.tax_policy.foreign_income_conditional:
        caveats.append(Risk(
            text="The foreign income exemption is conditional, check eligibility with a tax advisor",
            field="tax_conditional",
            severity="low",
        ))

    if country.path_to_pr and not country.path_to_pr_explicit and user.want_long_term:
        caveats.append(Risk(
            text="Permanent residency is possible but not guaranteed by this visa",
            field="path_to_pr_explicit",
            severity="low",
        ))

    if country.confidence_level == Level.LOW:
        caveats.append(Risk(
            text="Policy data for this country has low confidence, verify with official sources",
            field="confidence",
            severity="low",
        ))

    if user.work_type == WorkType.COMPANY_OWNER and country.business_owner_conditional:
        restrictions = "; ".join(country.business_owner_restrictions)
        text = "Company owners are accepted only under conditions"
        if restrictions:
            text += f": {restrictions}"
        caveats.append(Risk(text=text, field="business_owner", severity="low"))

    return caveats


def generate_risks(
    user: UserAnswers, country: CountryPolicy, today: date | None = None
) -> list[Risk]:
    pool: list[Risk] = []
    tax = country.tax_policy

    if user.planned_stay == StayDuration.OVER_183D and tax.type == TaxType.NO_BENEFIT:
        pool.append(Risk(
            text="Staying over 183 days makes you a tax resident, taxed on worldwide income at local rates",
            field="tax_policy",
            severity="high",
        ))

    if not country.path_to_pr and user.want_long_term:
        pool.append(Risk(
            text="This visa does not lead to permanent residency, a separate route is needed",
            field="path_to_pr",
            severity="medium",
        ))

    if country.insurance_required == TriState.YES:
        pool.append(Risk(
            text="Private health insurance is mandatory for the whole stay",
            field="insurance_required",
            severity="low",
        ))

    if country.language_env.english_friendly == Level.LOW:
        pool.append(Risk(
            text=f"Daily life runs mostly in {country.language_env.primary_language}, English services are limited",
            field="language_env",
            severity="medium",
        ))

    if not country.public_healthcare and user.has_family:
        pool.append(Risk(
            text="No access to public healthcare, family medical costs are fully out of pocket",
            field="public_healthcare",
            severity="medium",
        ))

    if country.cost_of_living.level == Level.HIGH and user.cost_preference == CostPreference.LOW:
        pool.append(Risk(
            text="High cost of living does not match your low budget preference",
            field="cost_of_living",
            severity="medium",
        ))

    if days_since(country.last_verified_at, today) > STALE_AFTER_DAYS:
        pool.append(Risk(
            text=f"Data last verified on {country.last_verified_at.isoformat()}, the policy may have changed",
            field="last_verified_at",
            severity="medium",
        ))

    pool.extend(_caveats(user, country))

    pool.sort(key=lambda r: _SEVERITY_ORDER[r.severity])
    return pool[:MAX_ITEMS]
