import logging

from pydantic import ValidationError

from agents.base_agent import BaseAgent
from config import settings
from models.answers import Nationality, UserAnswers
from models.country import CountryPolicy, TriState
from models.recommendation import CountryResult, ScoreOverride
from services.income_service import to_usd_monthly
from services.recommendation_service import apply_overrides
from utils.json_helpers import parse_json_with_retry
from utils.labels import (
    COST_LABELS,
    INFRA_LABELS,
    LANGUAGE_LABELS,
    STAY_LABELS,
    TIMEZONE_LABELS,
    WORK_TYPE_LABELS,
)

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are an expert on digital nomad visas and immigration policy.

The {count} countries below have already passed the hard eligibility checks (income, work type, documents and so on). Your job is to score and rank them and list highlights and risks. Do NOT exclude any country.

Respond with ONLY a JSON array of length {count}, one element per country, no other text. Each element:
{{
  "country_id": "spain",
  "score": integer 0-100,
  "tier": "strongly recommended" | "worth considering" | "viable alternative" | "low match",
  "breakdown": {{"feasibility": 0-40, "stability": 0-20, "longterm": 0-15, "tax": 0-15, "lifestyle": 0-10}},
  "highlights": [{{"text": "...", "field": "..."}}] (at most 3),
  "risks": [{{"text": "...", "field": "...", "severity": "high" | "medium" | "low"}}] (at most 3)
}}

Dimensions:
- feasibility (0-40): income margin, document readiness, work type fit, income stability
- stability (0-20): maximum stay, initial term, renewability
- longterm (0-15): permanent residency path, years to PR, family eligibility
- tax (0-15): size of the tax benefit, its duration, policy clarity
- lifestyle (0-10): cost of living, language, timezone, infrastructure

Highlight fields: min_income, tax_policy, max_stay_months, public_education, public_healthcare, cost_of_living, path_to_pr, language_env
Risk fields: tax_policy, tax_conditional, path_to_pr, path_to_pr_explicit, insurance_required, insurance_unknown, family_unknown, language_env, public_healthcare, cost_of_living, confidence, last_verified_at, business_owner

The score should equal the sum of the breakdown (adjust by at most 3 points)."""

_TRI_STATE_TEXT = {TriState.YES: "yes", TriState.NO: "no", TriState.UNKNOWN: "unknown"}


def describe_profile(answers: UserAnswers) -> str:
    docs = ", ".join(sorted(d.value for d in answers.docs_available)) or "none"
    return "\n".join([
        f"Nationality: {'China' if answers.nationality == Nationality.CN else 'other non-EU'}",
        f"Spouse joining: {'yes' if answers.has_spouse else 'no'}, children: {answers.num_children}",
        f"Planned stay: {STAY_LABELS[answers.planned_stay]}",
        f"Work type: {WORK_TYPE_LABELS[answers.work_type]}",
        f"Monthly gross income (USD): {answers.monthly_income_usd:g}",
        f"Stable income: {'yes' if answers.income_stable else 'no'}",
        f"Documents available: {docs}",
        f"Can buy private insurance: {'yes' if answers.can_buy_insurance else 'no'}",
        f"Accepts no local work: {'yes' if answers.accept_no_local_work else 'no'}",
        f"Wants permanent residency: {'yes' if answers.want_long_term else 'no'}",
        f"Cost of living preference: {COST_LABELS[answers.cost_preference]}",
        f"Language preference: {LANGUAGE_LABELS[answers.language_preference]}",
        f"Timezone preference: {TIMEZONE_LABELS[answers.timezone_preference]}",
        f"Internet/infrastructure requirement: {INFRA_LABELS[answers.infra_requirement]}",
    ])


def describe_country(country: CountryPolicy) -> str:
    years_to_pr = country.years_to_pr if country.years_to_pr is not None else "n/a"
    return "\n".join([
        f"country_id: {country.country_id}",
        f"name: {country.name}",
        f"visa_name: {country.visa_name}",
        f"min_income_usd_month: {to_usd_monthly(country)}",
        f"allowed_work_types: {', '.join(sorted(w.value for w in country.allowed_work_types))}",
        f"family_allowed: {_TRI_STATE_TEXT[country.family_allowed]}",
        f"insurance_required: {_TRI_STATE_TEXT[country.insurance_required]}",
        f"path_to_pr: {str(country.path_to_pr).lower()}, years_to_pr: {years_to_pr}",
        f"max_stay_months: {country.max_stay_months}, initial_term_months: {country.initial_term_months}, "
        f"renewable: {str(country.renewable).lower()}",
        f"tax: {country.tax_policy.description}",
        f"cost_of_living: {country.cost_of_living.level.value}",
        f"language: {country.language_env.primary_language}, english: {country.language_env.english_friendly.value}",
        f"timezone: {country.timezone.value}",
    ])


def parse_overrides(items) -> dict[str, ScoreOverride]:
    """Validate raw LLM items, dropping any that do not fit the score schema."""
    if isinstance(items, dict):
        items = items.get("results", [])
    if not isinstance(items, list):
        raise ValueError("AI response is not a JSON array")

    overrides: dict[str, ScoreOverride] = {}
    for item in items:
        try:
            override = ScoreOverride.model_validate(item)
        except ValidationError as e:
            logger.warning("Dropping invalid AI score item: %s", e)
            continue
        overrides[override.country_id] = override
    return overrides


class AIScoringAgent(BaseAgent):
    """Re-scores recommended countries with an LLM, keeping local exclusions."""

    name = "ai_scoring"

    async def run(self, input_data: dict) -> dict:
        answers: UserAnswers = input_data["answers"]
        results: list[CountryResult] = input_data["results"]

        recommended = [r for r in results if not r.excluded]
        if not recommended:
            return {"results": results, "scored_ids": []}

        ids = [r.country.country_id for r in recommended]
        summaries = "\n".join(f"---\n{describe_country(r.country)}" for r in recommended)
        prompt = (
            f"## User profile\n{describe_profile(answers)}\n\n"
            f"## Countries to score ({len(ids)}: {', '.join(ids)})\n{summaries}\n\n"
            f"Output the JSON array (only the array):"
        )

        raw = await parse_json_with_retry(
            prompt=prompt,
            system=SYSTEM_PROMPT.format(count=len(ids)),
            temperature=settings.ai_temperature,
            max_tokens=settings.ai_max_tokens,
        )
        overrides = parse_overrides(raw)
        logger.info("AI scored %d of %d recommended countries", len(overrides), len(ids))

        return {
            "results": apply_overrides(results, overrides),
            "scored_ids": [i for i in ids if i in overrides],
        }
