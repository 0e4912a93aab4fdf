from collections.abc import Sequence
from datetime import date

from agents.base_agent import BaseAgent
from models.answers import UserAnswers
from models.country import CountryPolicy
from services.recommendation_service import recommend


class ScoringAgent(BaseAgent):
    name = "scoring"

    async def run(self, input_data: dict) -> dict:
        answers: UserAnswers = input_data["answers"]
        countries: Sequence[CountryPolicy] = input_data["countries"]
        today: date | None = input_data.get("today")

        return {"results": recommend(answers, countries, today)}
