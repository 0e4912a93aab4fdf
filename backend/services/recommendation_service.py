import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import date

from models.answers import UserAnswers
from models.country import CountryPolicy
from models.recommendation import CountryResult, ResultStatus, ScoreOverride
from services import filter_service
from services.explanation_service import MAX_ITEMS, generate_highlights, generate_risks
from services.modifier_service import apply_modifiers
from services.scoring_service import score_country

logger = logging.getLogger(__name__)

TIERS = (
    (75, "strongly recommended"),
    (55, "worth considering"),
    (35, "viable alternative"),
)
LOWEST_TIER = "low match"


def tier_label(score: int) -> str:
    for threshold, label in TIERS:
        if score >= threshold:
            return label
    return LOWEST_TIER


def evaluate_country(
    user: UserAnswers, country: CountryPolicy, today: date | None = None
) -> CountryResult:
    verdict = filter_service.evaluate(user, country)
    if verdict.excluded:
        return CountryResult(
            country=country,
            status=ResultStatus.EXCLUDED,
            exclude_reasons=verdict.reasons,
        )

    breakdown = score_country(user, country)
    score = apply_modifiers(breakdown.base, user, country, today)
    return CountryResult(
        country=country,
        status=ResultStatus.RECOMMENDED,
        score=score,
        tier=tier_label(score),
        breakdown=breakdown,
        highlights=generate_highlights(user, country, breakdown),
        risks=generate_risks(user, country, today),
    )


def sort_results(results: Iterable[CountryResult]) -> list[CountryResult]:
    """Recommended by score descending, then excluded; ties keep input order."""
    return sorted(
        results,
        key=lambda r: (r.excluded, -(r.score if r.score is not None else -1)),
    )


def recommend(
    user: UserAnswers, catalog: Sequence[CountryPolicy], today: date | None = None
) -> list[CountryResult]:
    today = today or date.today()
    results = [evaluate_country(user, country, today) for country in catalog]
    ranked = sort_results(results)
    logger.debug(
        "Recommended %d of %d countries",
        sum(1 for r in ranked if not r.excluded), len(ranked),
    )
    return ranked


def apply_overrides(
    results: Sequence[CountryResult], overrides: Mapping[str, ScoreOverride]
) -> list[CountryResult]:
    """Replace locally computed scores with external ones, keyed by country id.

    Excluded countries are never touched and countries missing from
    ``overrides`` keep their local scores.
    """
    merged = []
    for result in results:
        override = overrides.get(result.country.country_id)
        if result.excluded or override is None:
            merged.append(result)
            continue
        merged.append(result.model_copy(update={
            "score": override.score,
            "tier": override.tier or tier_label(override.score),
            "breakdown": override.breakdown,
            "highlights": override.highlights[:MAX_ITEMS],
            "risks": override.risks[:MAX_ITEMS],
        }))
    return sort_results(merged)
