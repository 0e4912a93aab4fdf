import pytest

from conftest import TODAY, make_country, make_user

from models.recommendation import Highlight, ResultStatus, Risk, ScoreBreakdown, ScoreOverride
from services import country_service
from services.recommendation_service import apply_overrides, recommend, tier_label

MAX_DIMENSIONS = {"feasibility": 40, "stability": 20, "longterm": 15, "tax": 15, "lifestyle": 10}

PROFILES = [
    make_user(),
    make_user(nationality="other", has_spouse=True, num_children=2, monthly_income_usd=12000,
              want_long_term=True, docs_available=[
                  "employment_contract", "bank_statement", "criminal_record", "education_or_experience",
              ]),
    make_user(planned_stay="<90d", work_type="freelancer", monthly_income_usd=4250,
              income_stable=False, cost_preference="low", language_preference="can_learn",
              timezone_preference="asia", infra_requirement="high"),
    make_user(work_type="company_owner", monthly_income_usd=6000, can_buy_insurance=False),
    make_user(monthly_income_usd=1800, docs_available=[]),
]


@pytest.mark.parametrize("score,label", [
    (120, "strongly recommended"),
    (75, "strongly recommended"),
    (74, "worth considering"),
    (55, "worth considering"),
    (54, "viable alternative"),
    (35, "viable alternative"),
    (34, "low match"),
    (0, "low match"),
])
def test_tier_label(score, label):
    assert tier_label(score) == label


def test_reference_scenario(user, country):
    [result] = recommend(user, [country], TODAY)
    assert result.status == ResultStatus.RECOMMENDED
    assert result.breakdown.feasibility == 40
    assert result.breakdown.tax == 15
    # base 86, +2 for a long stay in a zero-tax country
    assert result.score == 88
    assert result.tier == "strongly recommended"
    assert result.exclude_reasons == []


def test_excluded_country_has_no_score(country):
    [result] = recommend(make_user(monthly_income_usd=1000), [country], TODAY)
    assert result.status == ResultStatus.EXCLUDED
    assert result.score is None
    assert result.tier is None
    assert result.breakdown is None
    assert result.highlights == []
    assert result.risks == []
    assert result.exclude_reasons and all(result.exclude_reasons)


def test_excluded_sort_after_recommended():
    catalog = [
        make_country(country_id="poor", min_income={"amount": 100000}),
        make_country(country_id="good"),
        make_country(country_id="stale", last_verified_at="2025-01-01"),
    ]
    results = recommend(make_user(), catalog, TODAY)
    assert [r.country.country_id for r in results] == ["good", "stale", "poor"]
    assert results[0].score - results[1].score == 10


def test_ties_keep_catalog_order():
    catalog = [make_country(country_id=name) for name in ("alpha", "bravo", "charlie")]
    results = recommend(make_user(), catalog, TODAY)
    assert [r.country.country_id for r in results] == ["alpha", "bravo", "charlie"]
    assert len({r.score for r in results}) == 1


@pytest.mark.parametrize("profile", PROFILES)
def test_catalog_invariants(profile):
    results = recommend(profile, country_service.get_all(), TODAY)
    assert len(results) == 10

    seen_excluded = False
    last_score = None
    for result in results:
        if result.excluded:
            seen_excluded = True
            assert result.score is None
            assert result.breakdown is None
            assert result.exclude_reasons
            continue
        assert not seen_excluded, "recommended entry after an excluded one"
        if last_score is not None:
            assert result.score <= last_score
        last_score = result.score

        for name, maximum in MAX_DIMENSIONS.items():
            assert 0 <= getattr(result.breakdown, name) <= maximum
        assert result.breakdown.base <= 100
        assert result.score >= 0
        assert len(result.highlights) <= 3
        assert len(result.risks) <= 3
        fields = [h.field for h in result.highlights]
        assert len(fields) == len(set(fields))


@pytest.mark.parametrize("profile", PROFILES)
def test_recommend_is_idempotent(profile):
    catalog = country_service.get_all()
    first = recommend(profile, catalog, TODAY)
    second = recommend(profile, catalog, TODAY)
    assert [r.model_dump() for r in first] == [r.model_dump() for r in second]


def _override(country_id, score, **extra):
    return ScoreOverride(
        country_id=country_id,
        score=score,
        breakdown=ScoreBreakdown(feasibility=30, stability=15, longterm=10, tax=10, lifestyle=5),
        **extra,
    )


def test_overrides_replace_recommended_scores_and_resort():
    catalog = [
        make_country(country_id="first"),
        make_country(country_id="second", tax_policy={"type": "no_benefit"}),
        make_country(country_id="blocked", allowed_work_types=["freelancer"]),
    ]
    local = recommend(make_user(), catalog, TODAY)
    assert [r.country.country_id for r in local] == ["first", "second", "blocked"]

    merged = apply_overrides(local, {
        "second": _override("second", 95, highlights=[
            Highlight(text=f"h{i}", field=f"f{i}") for i in range(5)
        ]),
        "blocked": _override("blocked", 99),
    })

    assert [r.country.country_id for r in merged] == ["second", "first", "blocked"]
    second = merged[0]
    assert second.score == 95
    assert second.tier == "strongly recommended"
    assert second.breakdown.feasibility == 30
    assert len(second.highlights) == 3
    # countries the override omits keep local values
    assert merged[1] == local[0]
    # excluded entries pass through untouched
    assert merged[2] == local[2]
    assert merged[2].score is None


def test_override_keeps_supplied_tier():
    local = recommend(make_user(), [make_country()], TODAY)
    merged = apply_overrides(local, {
        "testland": _override("testland", 40, tier="worth considering", risks=[
            Risk(text="r", field="tax_policy", severity="high"),
        ]),
    })
    assert merged[0].tier == "worth considering"
    assert merged[0].risks[0].severity == "high"


def test_empty_overrides_keep_local_results():
    local = recommend(make_user(), country_service.get_all(), TODAY)
    assert apply_overrides(local, {}) == local
