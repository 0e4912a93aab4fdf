from models.answers import (
    CostPreference,
    InfraRequirement,
    LanguagePreference,
    TimezonePreference,
    UserAnswers,
    WorkType,
)
from models.country import CountryPolicy, Level, TaxType, Timezone, TriState
from models.recommendation import ScoreBreakdown
from services.income_service import required_income_usd
from utils.numbers import round_half_up

_WORK_TYPE_POINTS = {
    WorkType.OVERSEAS_REMOTE_EMPLOYEE: 10,
    WorkType.FREELANCER: 8,
    WorkType.COMPANY_OWNER: 5,
    WorkType.DOMESTIC_REMOTE_EMPLOYEE: 2,
}

# (user preference, country level) -> points; pairs not listed score 0
_COST_POINTS = {
    (CostPreference.LOW, Level.LOW): 3,
    (CostPreference.LOW, Level.MEDIUM): 1,
    (CostPreference.MEDIUM, Level.MEDIUM): 3,
    (CostPreference.MEDIUM, Level.LOW): 2,
    (CostPreference.MEDIUM, Level.HIGH): 1,
}

_CLARITY_POINTS = {Level.HIGH: 3, Level.MEDIUM: 2, Level.LOW: 1}


def income_ratio(user: UserAnswers, country: CountryPolicy) -> float:
    required = required_income_usd(country, user)
    return user.monthly_income_usd / max(required, 1)


def score_feasibility(user: UserAnswers, country: CountryPolicy) -> int:
    """Income margin, document readiness, work type and income stability (0-40)."""
    ratio = income_ratio(user, country)
    if ratio >= 3:
        score = 15
    elif ratio >= 2:
        score = 12
    elif ratio >= 1.5:
        score = 9
    elif ratio >= 1.2:
        score = 6
    else:
        score = 3

    required_docs = country.required_documents
    matched = sum(1 for d in required_docs if d in user.docs_available)
    score += round_half_up(10 * matched / max(len(required_docs), 1))

    score += _WORK_TYPE_POINTS[user.work_type]
    score += 5 if user.income_stable else 2
    return score


def score_stability(country: CountryPolicy) -> int:
    """Maximum stay, initial term and renewability (0-20)."""
    max_stay = country.max_stay_months
    if max_stay >= 120:
        score = 10
    elif max_stay >= 60:
        score = 8
    elif max_stay >= 36:
        score = 6
    elif max_stay >= 24:
        score = 4
    else:
        score = 2

    initial = country.initial_term_months
    if initial >= 60:
        score += 5
    elif initial >= 36:
        score += 4
    elif initial >= 24:
        score += 3
    elif initial >= 12:
        score += 2
    else:
        score += 1

    if country.renewable:
        score += 3
        if max_stay > initial:
            score += 2
    return score


def score_longterm(user: UserAnswers, country: CountryPolicy) -> int:
    """Permanent-residency prospects (0-15); neutral 7 when the user is not interested."""
    if not user.want_long_term:
        return 7

    score = 0
    family_allowed = country.family_allowed == TriState.YES
    if country.path_to_pr:
        score += 8
        years = country.years_to_pr
        if years is not None:
            if years <= 3:
                score += 4
            elif years <= 5:
                score += 3
            elif years <= 7:
                score += 2
            else:
                score += 1
        if family_allowed:
            score += 3
    elif family_allowed:
        score += 1
    return score


def _effective_tax_rate(country: CountryPolicy) -> float:
    tax = country.tax_policy
    if tax.foreign_income_exempt:
        return 0.0
    return tax.local_rate_pct * (1 - tax.exemption_fraction)


def score_tax(country: CountryPolicy) -> int:
    """Exemption level, benefit duration and clarity (0-15)."""
    tax = country.tax_policy

    if tax.type == TaxType.ZERO:
        score = 8
    elif tax.type == TaxType.EXEMPT:
        score = 7
    elif tax.type == TaxType.SPECIAL_REGIME:
        effective = _effective_tax_rate(country)
        if effective <= 10:
            score = 6
        elif effective <= 20:
            score = 5
        elif effective <= 30:
            score = 4
        else:
            score = 2
    else:
        score = 0

    duration = tax.benefit_duration_years
    if tax.type in (TaxType.ZERO, TaxType.EXEMPT) or duration >= 10:
        score += 4
    elif duration >= 7:
        score += 3
    elif duration >= 5:
        score += 2
    elif duration > 0:
        score += 1

    score += _CLARITY_POINTS[tax.clarity]
    return score


def score_lifestyle(user: UserAnswers, country: CountryPolicy) -> int:
    """Cost, language, timezone and infrastructure fit (0-10)."""
    if user.cost_preference == CostPreference.INSENSITIVE:
        score = 2
    else:
        score = _COST_POINTS.get((user.cost_preference, country.cost_of_living.level), 0)

    if user.language_preference == LanguagePreference.ENGLISH_PRIORITY:
        english = country.language_env.english_friendly
        score += {Level.HIGH: 3, Level.MEDIUM: 1}.get(english, 0)
    else:
        score += 2

    tz = country.timezone
    if user.timezone_preference == TimezonePreference.ANY:
        score += 1
    elif tz == Timezone.MIDDLE_EAST:
        score += 1
    elif user.timezone_preference == TimezonePreference.ASIA and tz == Timezone.ASIA:
        score += 2
    elif user.timezone_preference == TimezonePreference.EUROPE and tz == Timezone.EUROPE:
        score += 2

    internet = country.infrastructure.internet_quality
    if user.infra_requirement == InfraRequirement.HIGH:
        score += {Level.HIGH: 2, Level.MEDIUM: 1}.get(internet, 0)
    else:
        score += 1 if internet == Level.LOW else 2
    return score


def score_country(user: UserAnswers, country: CountryPolicy) -> ScoreBreakdown:
    return ScoreBreakdown(
        feasibility=score_feasibility(user, country),
        stability=score_stability(country),
        longterm=score_longterm(user, country),
        tax=score_tax(country),
        lifestyle=score_lifestyle(user, country),
    )
