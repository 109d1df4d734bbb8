"""HTTP client for an external text-analysis service."""

from __future__ import annotations

import logging
import os
from typing import Optional

import aiohttp

from topicmap.exceptions import AnalysisError

logger = logging.getLogger(__name__)

ANALYSIS_URL_ENV_VAR = "TOPICMAP_ANALYSIS_URL"
ANALYSIS_KEY_ENV_VAR = "TOPICMAP_ANALYSIS_API_KEY"


class HttpAnalyzer:
    """POST the document text to an analysis endpoint and return the response body.

    The endpoint receives ``{"text": ..., "language": ...}`` and is expected to
    answer with a JSON array of topics, optionally wrapped in prose.
    Timeouts and retries are owned by ``TopicSource``.
    """

    def __init__(self, url: str, api_key: Optional[str] = None, language: Optional[str] = None):
        self.url = url
        self.api_key = api_key
        self.language = language

    @classmethod
    def from_env(cls, language: Optional[str] = None) -> Optional["HttpAnalyzer"]:
        url = os.getenv(ANALYSIS_URL_ENV_VAR)
        if not url:
            return None
        return cls(url, api_key=os.getenv(ANALYSIS_KEY_ENV_VAR), language=language)

    async def __call__(self, text: str) -> str:
        headers = {"Authorization": f"Bearer {self.api_key}"} if self.api_key else {}
        payload = {"text": text}
        if self.language:
            payload["language"] = self.language
        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(self.url, json=payload, headers=headers) as response:
                    body = await response.text()
                    if response.status != 200:
                        raise AnalysisError(
                            f"Analysis request failed: status={response.status}, body={body[:250]}"
                        )
        except aiohttp.ClientError as exc:
            raise AnalysisError(f"Analysis request failed: {exc}") from exc
        if not body.strip():
            raise AnalysisError("Analysis response had no text payload")
        logger.debug("Analysis response: %d characters", len(body))
        return body
