"""
Google Gemini Commentary Provider

Asks Gemini for a short expert analysis of a predicted match.
API Documentation: https://ai.google.dev/api/generate-content
"""

import asyncio
import logging
from typing import Any, Optional
import httpx

from moneyball.config import GEMINI_API_KEY, GEMINI_MODEL, COMMENTARY_MAX_RETRIES
from moneyball.domain.entities.entities import Team
from moneyball.domain.exceptions import CommentaryUnavailableException
from moneyball.domain.repositories.repositories import CommentaryProvider
from moneyball.domain.value_objects.value_objects import OutcomeProbabilities, TeamForm

logger = logging.getLogger(__name__)

# Statuses worth another attempt
RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


class GeminiCommentaryProvider(CommentaryProvider):
    """
    Commentary provider for the Gemini generateContent endpoint.
    """

    SOURCE_NAME = "Google Gemini"
    BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = GEMINI_MODEL,
        max_retries: int = COMMENTARY_MAX_RETRIES,
        retry_delay: float = 1.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key or GEMINI_API_KEY
        self.model = model
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay
        self._client = client or httpx.AsyncClient(timeout=30.0)

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @property
    def url(self) -> str:
        return f"{self.BASE_URL}/{self.model}:generateContent"

    async def close(self):
        await self._client.aclose()

    async def generate_commentary(
        self,
        home_team: Team,
        away_team: Team,
        home_form: TeamForm,
        away_form: TeamForm,
        probabilities: OutcomeProbabilities,
        home_xg: float,
        away_xg: float,
    ) -> str:
        if not self.is_configured:
            raise CommentaryUnavailableException("Gemini not configured (no API key)")

        prompt = self.build_prompt(
            home_team, away_team, home_form, away_form, probabilities, home_xg, away_xg
        )
        logger.info(f"Calling Gemini API for match: {home_team.name} vs {away_team.name}")

        data = await self._make_request(self._build_request_body(prompt))
        text = self._extract_text(data)
        logger.info("Successfully received Gemini analysis")
        return text

    @staticmethod
    def build_prompt(
        home_team: Team,
        away_team: Team,
        home_form: TeamForm,
        away_form: TeamForm,
        probabilities: OutcomeProbabilities,
        home_xg: float,
        away_xg: float,
    ) -> str:
        """Build the analysis prompt from the prediction numbers."""
        return (
            "You are a football analyst. Write EXACTLY 4 complete sentences analyzing this match. "
            "Do NOT stop mid-sentence.\n\n"
            f"{home_team.name} (Home, Form: {home_form.form_points:.1f} pts, xG: {home_form.avg_xg:.2f}) vs "
            f"{away_team.name} (Away, Form: {away_form.form_points:.1f} pts, xG: {away_form.avg_xg:.2f})\n"
            f"Prediction: Home {probabilities.home_win * 100:.1f}%, "
            f"Draw {probabilities.draw * 100:.1f}%, Away {probabilities.away_win * 100:.1f}%\n"
            f"Expected: {home_xg:.2f}-{away_xg:.2f}\n\n"
            "Write 4 complete sentences covering: 1) main advantage, 2) key stats, 3) risks, 4) likely outcome."
        )

    @staticmethod
    def _build_request_body(prompt: str) -> dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": 0.7,
                "maxOutputTokens": 2048,
                "topP": 0.95,
                "topK": 40,
            },
        }

    async def _make_request(self, body: dict[str, Any]) -> Any:
        last_error: Optional[Exception] = None

        for attempt in range(1, self.max_retries + 1):
            try:
                response = await self._client.post(
                    self.url,
                    params={"key": self.api_key},
                    json=body,
                )
                if response.status_code in RETRYABLE_STATUS_CODES:
                    raise httpx.HTTPStatusError(
                        f"Gemini returned {response.status_code}",
                        request=response.request,
                        response=response,
                    )
                response.raise_for_status()
                return response.json()
            except httpx.HTTPStatusError as e:
                last_error = e
                if e.response.status_code not in RETRYABLE_STATUS_CODES:
                    break
            except (httpx.TransportError, ValueError) as e:
                last_error = e

            logger.warning(f"Gemini request failed (attempt {attempt}/{self.max_retries}): {last_error}")
            if attempt < self.max_retries:
                await asyncio.sleep(self.retry_delay)

        logger.error(f"Error calling Gemini API: {last_error}")
        raise CommentaryUnavailableException(f"Gemini request failed: {last_error}")

    @staticmethod
    def _extract_text(data: Any) -> str:
        """
        Parse Gemini's response.
        Structure: { candidates: [{ content: { parts: [{ text: "..." }] } }] }
        """
        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            logger.warning("Gemini API returned unexpected response structure")
            raise CommentaryUnavailableException("Unexpected Gemini response structure")

        if not isinstance(text, str) or not text.strip():
            raise CommentaryUnavailableException("Gemini returned empty analysis")
        return text.strip()
