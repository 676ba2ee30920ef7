"""Gemini text generation client"""

import logging
from typing import Any, Dict, Optional

import httpx

from errors import GenerationFailed
from settings import CONNECT_TIMEOUT, GEMINI_API_BASE, GEMINI_MODEL, REQUEST_TIMEOUT

logger = logging.getLogger(__name__)


class GeminiGenerator:
    """Produces raw candidate post text for a prompt

    Talks to the ``generateContent`` REST endpoint directly. The output is
    unconstrained and must go through ``content.sanitize`` before posting.
    """

    def __init__(
        self,
        api_key: str,
        model: str = GEMINI_MODEL,
        http_client: Optional[httpx.AsyncClient] = None,
        api_base: str = GEMINI_API_BASE,
    ):
        self.api_key = api_key
        # Accept both "gemini-2.0-flash" and "models/gemini-2.0-flash"
        self.model = model[len("models/"):] if model.startswith("models/") else model
        self.api_base = api_base.rstrip("/")
        self._http = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(REQUEST_TIMEOUT, connect=CONNECT_TIMEOUT)
        )

    @property
    def endpoint(self) -> str:
        return f"{self.api_base}/models/{self.model}:generateContent"

    def build_request(self, prompt: str) -> Dict[str, Any]:
        return {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}

    async def generate(self, prompt: str) -> str:
        """Generate text for a prompt

        Args:
            prompt: Instruction sent to the model

        Returns:
            Raw response text (may span several lines and contain markdown)

        Raises:
            GenerationFailed: transport error, API error, or no text returned
        """
        try:
            response = await self._http.post(
                self.endpoint,
                json=self.build_request(prompt),
                headers={"x-goog-api-key": self.api_key, "content-type": "application/json"},
            )
        except httpx.HTTPError as e:
            logger.error(f"Gemini request failed: {e}")
            raise GenerationFailed(f"Gemini error: {e}", cause=e) from e

        if response.status_code != 200:
            logger.error(f"Gemini returned status {response.status_code}: {response.text}")
            raise GenerationFailed(f"Gemini error: {response.status_code} - {response.text}")

        try:
            payload = response.json()
        except ValueError as e:
            raise GenerationFailed("Gemini error: invalid JSON response", cause=e) from e

        text = self.extract_text(payload)
        logger.debug(f"Raw Gemini output: {text!r}")
        return text

    @staticmethod
    def extract_text(payload: Dict[str, Any]) -> str:
        """Concatenate the text parts of the first candidate"""
        if not isinstance(payload, dict):
            raise GenerationFailed("Gemini error: unexpected response")

        candidates = payload.get("candidates") or []
        if not candidates:
            block_reason = (payload.get("promptFeedback") or {}).get("blockReason")
            if block_reason:
                raise GenerationFailed(f"Gemini error: prompt blocked ({block_reason})")
            raise GenerationFailed("Gemini error: no candidates returned")

        candidate = candidates[0] if isinstance(candidates, list) else None
        if not isinstance(candidate, dict):
            raise GenerationFailed("Gemini error: unexpected candidate in response")

        content = candidate.get("content")
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list):
            parts = []
        text = "".join(
            part["text"] for part in parts
            if isinstance(part, dict) and isinstance(part.get("text"), str)
        )
        if not text:
            finish_reason = candidate.get("finishReason", "unknown")
            raise GenerationFailed(f"Gemini error: candidate contained no text (finishReason={finish_reason})")
        return text

    async def aclose(self) -> None:
        await self._http.aclose()
