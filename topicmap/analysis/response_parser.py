"""Extract the topic array from a text-analysis service response."""

from __future__ import annotations

import json
import logging
import re

import json_repair

from topicmap.exceptions import ResponseParsingError

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"```(?:json)?\s*|\s*```")


def parse_topics_response(content: str) -> list[dict]:
    """
    Parse the JSON topic array out of a free-text model response.

    Code fences and any prose around the outermost ``[...]`` are ignored.
    Malformed JSON (trailing commas, single quotes, unquoted keys) is
    repaired before giving up. The returned items are still untrusted and
    must be validated.

    Raises:
        ResponseParsingError: no JSON array could be recovered
    """
    if not content or not content.strip():
        raise ResponseParsingError("Empty analysis response")

    cleaned = _CODE_FENCE.sub("", content).strip()
    start = cleaned.find("[")
    end = cleaned.rfind("]")
    if start == -1 or end <= start:
        raise ResponseParsingError("Analysis response contains no JSON array")

    snippet = cleaned[start : end + 1]
    try:
        data = json.loads(snippet)
    except json.JSONDecodeError as exc:
        logger.info("Analysis response is not strict JSON (%s); repairing it", exc)
        data = json_repair.loads(snippet)
        if data == "":
            raise ResponseParsingError(f"Analysis response is not valid JSON: {exc}") from exc

    if not isinstance(data, list):
        raise ResponseParsingError(f"Expected a JSON array of topics, got {type(data).__name__}")
    return data
