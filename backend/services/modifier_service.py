from datetime import date

from models.answers import Nationality, StayDuration, UserAnswers
from models.country import CountryPolicy, TaxType, TriState

# Editorial bonus for nationalities with strong ties to a destination
NATIONALITY_AFFINITY: dict[tuple[Nationality, str], int] = {
    (Nationality.CN, "malaysia"): 3,
    (Nationality.CN, "thailand"): 1,
    (Nationality.CN, "south_korea"): 1,
}

STALE_AFTER_DAYS = 90
VERY_STALE_AFTER_DAYS = 180

_LONG_STAY_TAX_DELTA = {
    TaxType.ZERO: 2,
    TaxType.EXEMPT: 1,
    TaxType.NO_BENEFIT: -5,
}


def days_since(verified: date, today: date | None = None) -> int:
    return ((today or date.today()) - verified).days


def family_delta(user: UserAnswers, country: CountryPolicy) -> int:
    if not user.has_family:
        return 0
    if country.family_allowed != TriState.YES:
        return -5
    delta = 0
    if country.public_education:
        delta += 3
    if country.public_healthcare:
        delta += 2
    return delta


def stay_tax_delta(user: UserAnswers, country: CountryPolicy) -> int:
    if user.planned_stay == StayDuration.OVER_183D:
        return _LONG_STAY_TAX_DELTA.get(country.tax_policy.type, 0)
    if user.planned_stay == StayDuration.UNDER_90D and country.max_stay_months >= 60:
        return -2
    return 0


def affinity_delta(user: UserAnswers, country: CountryPolicy) -> int:
    return NATIONALITY_AFFINITY.get((user.nationality, country.country_id), 0)


def freshness_delta(country: CountryPolicy, today: date | None = None) -> int:
    days = days_since(country.last_verified_at, today)
    if days > VERY_STALE_AFTER_DAYS:
        return -10
    if days > STALE_AFTER_DAYS:
        return -5
    return 0


def modifier_deltas(
    user: UserAnswers, country: CountryPolicy, today: date | None = None
) -> dict[str, int]:
    return {
        "family": family_delta(user, country),
        "stay_tax": stay_tax_delta(user, country),
        "affinity": affinity_delta(user, country),
        "freshness": freshness_delta(country, today),
    }


def apply_modifiers(
    base: int, user: UserAnswers, country: CountryPolicy, today: date | None = None
) -> int:
    """Adjust the summed dimension score; the result never drops below zero."""
    return max(0, base + sum(modifier_deltas(user, country, today).values()))
