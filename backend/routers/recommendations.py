import logging

import httpx
from fastapi import APIRouter, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from agents.ai_scoring_agent import AIScoringAgent
from agents.scoring_agent import ScoringAgent
from config import settings
from models.answers import UserAnswers
from models.recommendation import RecommendationResponse
from services import country_service
from services.cache_service import cache

logger = logging.getLogger(__name__)

router = APIRouter(tags=["recommendations"])

limiter = Limiter(key_func=get_remote_address)

scorer = ScoringAgent()
ai_scorer = AIScoringAgent()


@router.post("/recommendations", response_model=RecommendationResponse)
@limiter.limit("30/minute")
async def get_recommendations(request: Request, answers: UserAnswers):
    # Step 1: Local engine always runs, hard filtering stays deterministic
    countries = country_service.get_all()
    local = await scorer.run({"answers": answers, "countries": countries})
    local_results = local["results"]

    if not settings.ai_scoring_available or all(r.excluded for r in local_results):
        return RecommendationResponse(results=local_results, fallback=True)

    cache_key = answers.model_dump_json()
    cached = cache.get(cache_key)
    if cached:
        return cached

    # Step 2: Let the AI re-score the countries that passed the filter
    try:
        scored = await ai_scorer.run({"answers": answers, "results": local_results})
    except (httpx.HTTPError, ValueError, KeyError):
        logger.exception("AI scoring failed, returning local results")
        return RecommendationResponse(results=local_results, fallback=True)

    response = RecommendationResponse(
        results=scored["results"],
        fallback=not scored["scored_ids"],
    )
    if scored["scored_ids"]:
        cache.set(cache_key, response)
    return response
