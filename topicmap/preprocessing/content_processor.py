"""
Local heuristic topic extraction.

Used when no analysis service is configured or it keeps failing. This is a
coarse keyword heuristic: on poor input it yields a shallow or uneven forest
(possibly empty), never an exception.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from topicmap.models import Topic
from topicmap.preprocessing.spell_checker import SpellChecker, correct_spelling
from topicmap.preprocessing.text_cleaner import normalize_text

logger = logging.getLogger(__name__)

_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_CAPITALISED_SEQUENCE = re.compile(r"\b(?:[A-Z][a-z]+\s+)+[A-Z][a-z]+\b|\b[A-Z][a-z]+\b")
_MARKER_PATTERNS = [
    re.compile(r"\b(?:is|are|was|were)\s+[^,.!?]+"),
    re.compile(r"\b(?:includes|contains|consists of)\s+[^,.!?]+"),
    re.compile(r"\b(?:such as|like|especially)\s+[^,.!?]+"),
]
MIN_KEYWORD_LENGTH = 4
MIN_GROUP_SIZE = 2


def extract_key_phrases(text: str) -> list[str]:
    """Candidate phrases in first-seen order, without duplicates."""
    phrases: list[str] = []
    for sentence in _SENTENCE_SPLIT.split(text or ""):
        if not sentence.strip():
            continue
        phrases.extend(_CAPITALISED_SEQUENCE.findall(sentence))
        for pattern in _MARKER_PATTERNS:
            phrases.extend(match.group(0).strip() for match in pattern.finditer(sentence))
    return list(dict.fromkeys(p for p in phrases if p))


def group_phrases(phrases: list[str]) -> dict[str, list[str]]:
    """Group phrases under each significant (4+ letter) lowercase word they contain."""
    groups: dict[str, list[str]] = {}
    for phrase in phrases:
        for word in phrase.lower().split():
            if len(word) < MIN_KEYWORD_LENGTH:
                continue
            members = groups.setdefault(word, [])
            if phrase not in members:
                members.append(phrase)
    return groups


def build_hierarchy_from_phrases(phrases: list[str]) -> list[Topic]:
    """
    Greedy clustering: largest groups first, each phrase used at most once.

    The first phrase of a group becomes a topic title and its unused
    remainder the subtopics. Groups smaller than two phrases, or whose
    leading phrase is already used, are skipped.
    """
    groups = group_phrases(phrases)
    ordered = sorted(groups.items(), key=lambda item: len(item[1]), reverse=True)

    used: set[str] = set()
    topics: list[Topic] = []
    for keyword, members in ordered:
        if len(members) < MIN_GROUP_SIZE:
            continue
        title = members[0]
        if title in used:
            continue
        subtopics = [Topic(title=phrase) for phrase in members[1:] if phrase not in used]
        used.add(title)
        used.update(sub.title for sub in subtopics)
        topics.append(Topic(title=title, subtopics=subtopics))
        logger.debug("Heuristic topic %r from keyword %r with %d subtopic(s)", title, keyword, len(subtopics))
    return topics


def build_topic_hierarchy(
    text: str,
    spell_checker: Optional[SpellChecker] = None,
    min_word_length: int = 3,
) -> list[Topic]:
    """Turn raw text into a topic forest without any external service."""
    processed = normalize_text(text)
    if spell_checker is not None:
        processed = correct_spelling(processed, spell_checker, min_word_length=min_word_length)

    phrases = extract_key_phrases(processed)
    topics = build_hierarchy_from_phrases(phrases)
    logger.info("Heuristic extraction: %d phrase(s) -> %d topic(s)", len(phrases), len(topics))
    return topics
