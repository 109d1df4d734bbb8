"""Per-build node id generation."""

from __future__ import annotations

import itertools
import re
import time
from typing import Callable, Optional

_ILLEGAL_ID_CHARS = re.compile(r"[^A-Za-z0-9_]")


def sanitize_identifier(value: str) -> str:
    """Restrict ``value`` to characters legal in flowchart node ids."""
    cleaned = _ILLEGAL_ID_CHARS.sub("_", value) or "node"
    if cleaned[0].isdigit():
        cleaned = f"n{cleaned}"
    return cleaned


def _wall_clock_ms() -> int:
    return int(time.time() * 1000)


class NodeIdGenerator:
    """
    Monotonic counter combined with a coarse timestamp under a namespace.

    One generator belongs to one build, so two builds in the same process
    never share counter state. Tests inject ``clock`` for reproducible ids.
    """

    def __init__(
        self,
        namespace: str = "node",
        clock: Optional[Callable[[], int]] = None,
        start: int = 0,
    ):
        self.namespace = sanitize_identifier(namespace)
        self._clock = clock or _wall_clock_ms
        self._counter = itertools.count(start)

    def next_id(self) -> str:
        return f"{self.namespace}_{next(self._counter)}_{self._clock()}"

    __call__ = next_id
