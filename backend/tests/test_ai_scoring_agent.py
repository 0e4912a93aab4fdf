import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from conftest import TODAY, make_country, make_user

from agents.ai_scoring_agent import AIScoringAgent, describe_country, describe_profile, parse_overrides
from services.recommendation_service import recommend

BREAKDOWN = {"feasibility": 35, "stability": 15, "longterm": 10, "tax": 12, "lifestyle": 8}

CATALOG = [
    make_country(country_id="alpha"),
    make_country(country_id="bravo", tax_policy={"type": "no_benefit"}),
    make_country(country_id="blocked", allowed_work_types=["freelancer"]),
]


def _item(country_id, score, **extra):
    return {"country_id": country_id, "score": score, "breakdown": BREAKDOWN, **extra}


def test_describe_profile():
    text = describe_profile(make_user(has_spouse=True, num_children=1))
    assert "Nationality: China" in text
    assert "Spouse joining: yes, children: 1" in text
    assert "Planned stay: more than 183 days" in text
    assert "Monthly gross income (USD): 8500" in text
    assert "Documents available: bank_statement, criminal_record, employment_contract" in text


def test_describe_country():
    text = describe_country(make_country(min_income={"amount": 2762, "currency": "EUR"}))
    assert "country_id: testland" in text
    assert "min_income_usd_month: 2983" in text
    assert "family_allowed: yes" in text
    assert "path_to_pr: true, years_to_pr: 5" in text


def test_parse_overrides_drops_invalid_items():
    overrides = parse_overrides([
        _item("alpha", 90),
        _item("bravo", 70, breakdown={**BREAKDOWN, "feasibility": 55}),
        {"country_id": "charlie"},
    ])
    assert list(overrides) == ["alpha"]


def test_parse_overrides_accepts_wrapped_results():
    assert list(parse_overrides({"results": [_item("alpha", 90)]})) == ["alpha"]


def test_parse_overrides_rejects_non_list():
    with pytest.raises(ValueError):
        parse_overrides("nope")


@patch("agents.ai_scoring_agent.parse_json_with_retry", new_callable=AsyncMock)
def test_run_merges_ai_scores(mock_parse):
    mock_parse.return_value = [_item("bravo", 97, tier="strongly recommended")]
    local = recommend(make_user(), CATALOG, TODAY)

    result = asyncio.run(AIScoringAgent().run({"answers": make_user(), "results": local}))

    assert result["scored_ids"] == ["bravo"]
    ordered = [r.country.country_id for r in result["results"]]
    assert ordered == ["bravo", "alpha", "blocked"]
    assert result["results"][0].score == 97
    # alpha was not scored by the AI and keeps the local score
    assert result["results"][1] == local[0]

    prompt = mock_parse.call_args.kwargs["prompt"]
    assert "alpha, bravo" in prompt
    assert "country_id: blocked" not in prompt
    assert "2 countries" in mock_parse.call_args.kwargs["system"]


@patch("agents.ai_scoring_agent.parse_json_with_retry", new_callable=AsyncMock)
def test_run_skips_llm_when_everything_is_excluded(mock_parse):
    local = recommend(make_user(monthly_income_usd=10), CATALOG, TODAY)

    result = asyncio.run(AIScoringAgent().run({"answers": make_user(), "results": local}))

    mock_parse.assert_not_called()
    assert result["results"] == local
    assert result["scored_ids"] == []
