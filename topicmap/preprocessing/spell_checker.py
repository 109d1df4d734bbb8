"""
Dictionary-backed spelling correction.

The checker is an explicit, caller-owned handle: build it from a word list
(or fetch one with ``load_remote_dictionary``), use it as a context manager,
and pass it to ``correct_spelling`` / ``build_topic_hierarchy``. Nothing is
cached at module level.
"""

from __future__ import annotations

import logging
import re
from collections import defaultdict
from pathlib import Path
from typing import Iterable, Optional, Protocol, runtime_checkable

import aiohttp
from fuzzywuzzy import fuzz, process

from topicmap.models import PreprocessingSettings
from topicmap.utils.retry_strategies import RetryConfig, create_retry_decorator

logger = logging.getLogger(__name__)

# Alphabetic runs only; tokens mixing letters with digits or underscores are
# a single \w run and never match as a whole.
_WORD = re.compile(r"\b[^\W\d_]+\b")
_SUGGESTION_CUTOFF = 75
_LENGTH_TOLERANCE = 2


@runtime_checkable
class SpellChecker(Protocol):
    def check(self, word: str) -> bool: ...

    def suggest(self, word: str) -> list[str]: ...


class DictionarySpellChecker:
    """Word-list spell checker ranking suggestions with ``fuzzywuzzy``."""

    def __init__(self, words: Iterable[str], max_suggestions: int = 3):
        self.max_suggestions = max_suggestions
        self._words: Optional[set[str]] = set()
        # (first letter, length) -> words, to keep the fuzzy-match candidate pool small
        self._index: dict[tuple[str, int], list[str]] = defaultdict(list)
        for raw in words:
            word = raw.strip().lower()
            if not word or word.startswith("#") or word in self._words:
                continue
            self._words.add(word)
            self._index[(word[0], len(word))].append(word)
        logger.debug("Spell checker loaded %d words", len(self._words))

    @classmethod
    def from_file(cls, path: str, max_suggestions: int = 3) -> "DictionarySpellChecker":
        """Build from a newline-delimited word list."""
        with Path(path).open("r", encoding="utf-8") as file_obj:
            return cls(file_obj, max_suggestions=max_suggestions)

    @property
    def closed(self) -> bool:
        return self._words is None

    def _require_open(self) -> set[str]:
        if self._words is None:
            raise ValueError("Spell checker is closed")
        return self._words

    def __len__(self) -> int:
        return len(self._require_open())

    def check(self, word: str) -> bool:
        return word.lower() in self._require_open()

    def suggest(self, word: str) -> list[str]:
        self._require_open()
        lowered = word.lower()
        if not lowered:
            return []
        pool: list[str] = []
        for length in range(len(lowered) - _LENGTH_TOLERANCE, len(lowered) + _LENGTH_TOLERANCE + 1):
            pool.extend(self._index.get((lowered[0], length), ()))
        if not pool:
            return []
        matches = process.extractBests(
            lowered,
            pool,
            scorer=fuzz.ratio,
            score_cutoff=_SUGGESTION_CUTOFF,
            limit=self.max_suggestions,
        )
        return [candidate for candidate, _score in matches]

    def close(self) -> None:
        """Release the word index. Further lookups raise ``ValueError``."""
        self._words = None
        self._index = defaultdict(list)

    def __enter__(self) -> "DictionarySpellChecker":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def _match_case(original: str, replacement: str) -> str:
    if original.isupper() and len(original) > 1:
        return replacement.upper()
    if original[:1].isupper():
        return replacement[:1].upper() + replacement[1:]
    return replacement


def correct_spelling(text: str, checker: SpellChecker, min_word_length: int = 3) -> str:
    """
    Replace misspelled words with the checker's first suggestion.

    Words shorter than ``min_word_length`` and tokens containing digits or
    symbols are left untouched, as is any word without a suggestion.
    """
    if not text:
        return text

    def replace(match: re.Match) -> str:
        word = match.group(0)
        if len(word) < min_word_length or checker.check(word):
            return word
        suggestions = checker.suggest(word)
        if not suggestions:
            return word
        return _match_case(word, suggestions[0])

    return _WORD.sub(replace, text)


async def load_remote_dictionary(
    url: str,
    timeout: float = 30.0,
    max_attempts: int = 3,
    initial_delay: float = 1.0,
) -> DictionarySpellChecker:
    """
    Fetch a newline-delimited word list and build a checker from it.

    Raises:
        aiohttp.ClientError: the download still fails after ``max_attempts``
    """
    retry_config = RetryConfig(
        max_attempts=max_attempts,
        initial_delay=initial_delay,
        retryable_exceptions=(aiohttp.ClientError, TimeoutError),
    )

    @create_retry_decorator(retry_config)
    async def fetch() -> str:
        async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=timeout)) as session:
            async with session.get(url) as response:
                response.raise_for_status()
                return await response.text()

    body = await fetch()
    logger.info("Downloaded dictionary from %s (%d bytes)", url, len(body))
    return DictionarySpellChecker(body.splitlines())


async def open_spell_checker(settings: PreprocessingSettings) -> Optional[DictionarySpellChecker]:
    """Build the checker ``settings`` ask for, or None.

    A dictionary that cannot be read or downloaded disables correction
    with a warning rather than failing the run.
    """
    if not settings.correct_spelling:
        return None
    if settings.dictionary_path:
        try:
            return DictionarySpellChecker.from_file(settings.dictionary_path)
        except OSError as exc:
            logger.warning("Could not read dictionary %s: %s", settings.dictionary_path, exc)
    if settings.dictionary_url:
        try:
            return await load_remote_dictionary(settings.dictionary_url)
        except (aiohttp.ClientError, TimeoutError) as exc:
            logger.warning("Could not download dictionary %s: %s", settings.dictionary_url, exc)
    logger.warning("Spelling correction requested but no dictionary is available; skipping it")
    return None
