from config import settings
from models.answers import UserAnswers
from models.country import CountryPolicy
from utils.numbers import round_half_up

EXCHANGE_RATES: dict[str, float] = {
    "USD": 1.0,
    "EUR": settings.eur_to_usd,
}


def to_usd_monthly(country: CountryPolicy) -> int:
    """Convert a country's minimum income requirement to USD per month."""
    rule = country.min_income
    rate = EXCHANGE_RATES.get(rule.currency.upper(), 1.0)
    monthly = rule.amount / 12 if rule.period == "yearly" else rule.amount
    return round_half_up(monthly * rate)


def required_income_usd(country: CountryPolicy, user: UserAnswers) -> int:
    """Monthly USD income the user must show, including family surcharges.

    The child surcharge is taken on the amount that already includes the
    spouse surcharge.
    """
    surcharge = country.min_income.family_surcharge
    required = to_usd_monthly(country)
    if user.has_spouse:
        required += round_half_up(required * surcharge.spouse_pct)
    required += round_half_up(required * surcharge.child_pct * user.num_children)
    return required
