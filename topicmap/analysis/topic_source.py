"""
Topic forest acquisition with retry and heuristic fallback.

The external analysis service is any async callable ``text -> str`` that
returns a JSON array of topics (possibly wrapped in prose or code fences).
Each call is bounded by a timeout and retried with jittered exponential
backoff. Once attempts run out the local heuristic takes over, so callers
always get a forest back.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from topicmap.analysis.response_parser import parse_topics_response
from topicmap.exceptions import AnalysisError
from topicmap.models import AnalysisSettings, Topic, TopicOrigin
from topicmap.preprocessing import SpellChecker, build_topic_hierarchy
from topicmap.utils.retry_strategies import RetryConfig, create_retry_decorator
from topicmap.validation import validate_topics

logger = logging.getLogger(__name__)

Analyzer = Callable[[str], Awaitable[str]]


@dataclass
class TopicSourceResult:
    topics: list[Topic]
    origin: TopicOrigin
    attempts: int = 0
    error: Optional[str] = None


class TopicSource:
    """Get a topic forest for a text, from the analysis service if possible."""

    def __init__(
        self,
        analyzer: Optional[Analyzer] = None,
        settings: Optional[AnalysisSettings] = None,
        spell_checker: Optional[SpellChecker] = None,
    ):
        self.analyzer = analyzer
        self.settings = settings or AnalysisSettings()
        self.spell_checker = spell_checker

    async def _attempt(self, text: str) -> list[Topic]:
        try:
            content = await asyncio.wait_for(self.analyzer(text), timeout=self.settings.timeout_seconds)
        except asyncio.TimeoutError:
            logger.warning("Analysis call timed out after %.1fs", self.settings.timeout_seconds)
            raise
        topics = validate_topics(parse_topics_response(content))
        if not topics:
            raise AnalysisError("Analysis response contained no valid topics")
        return topics

    async def _from_analyzer(self, text: str) -> tuple[list[Topic], int]:
        attempts = 0

        @create_retry_decorator(RetryConfig.from_settings(self.settings))
        async def attempt() -> list[Topic]:
            nonlocal attempts
            attempts += 1
            logger.debug("Analysis attempt %d/%d", attempts, self.settings.max_attempts)
            return await self._attempt(text)

        topics = await attempt()
        return topics, attempts

    def _heuristic(self, text: str) -> list[Topic]:
        return build_topic_hierarchy(text, spell_checker=self.spell_checker)

    async def topics_for(self, text: str) -> TopicSourceResult:
        """Return topics for ``text``.

        Any failure of the analysis call (transport, timeout, unparseable or
        invalid response) is retried and finally replaced by the heuristic
        result; cancellation still propagates.
        """
        if self.analyzer is None:
            logger.info("No analysis service configured; using heuristic extraction")
            return TopicSourceResult(topics=self._heuristic(text), origin=TopicOrigin.HEURISTIC)

        try:
            topics, attempts = await self._from_analyzer(text)
        except Exception as exc:
            message = str(exc) or type(exc).__name__
            logger.warning(
                "Analysis failed after %d attempt(s) (%s); falling back to heuristic extraction",
                self.settings.max_attempts,
                message,
            )
            return TopicSourceResult(
                topics=self._heuristic(text),
                origin=TopicOrigin.HEURISTIC,
                attempts=self.settings.max_attempts,
                error=message,
            )

        logger.info("Analysis service returned %d topic(s) in %d attempt(s)", len(topics), attempts)
        return TopicSourceResult(topics=topics, origin=TopicOrigin.AI, attempts=attempts)
