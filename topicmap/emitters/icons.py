"""Keyword-driven icon selection for topic labels."""

from __future__ import annotations

import re
from typing import Iterable, Optional

from topicmap.models import Topic

DEFAULT_ICON = "📝"

_KEYWORD_ICONS: dict[str, str] = {
    "introduction": "📚",
    "summary": "📋",
    "conclusion": "🏁",
    "overview": "🔍",
    "analysis": "📊",
    "research": "🔬",
    "data": "📈",
    "results": "✅",
    "methods": "🔧",
    "process": "⚙️",
    "benefits": "🌟",
    "advantages": "👍",
    "disadvantages": "👎",
    "challenges": "🧗",
    "solutions": "💡",
    "features": "✨",
    "examples": "📝",
    "case study": "📔",
    "implementation": "🛠️",
    "future": "🔮",
    "history": "📜",
    "development": "🚀",
    "comparison": "⚖️",
    "evaluation": "📋",
    "recommendation": "👉",
    "strategy": "♟️",
    "technology": "💻",
    "business": "💼",
    "education": "🎓",
    "health": "❤️",
    "environment": "🌍",
    "science": "🔭",
    "art": "🎨",
    "design": "✏️",
    "marketing": "📢",
    "finance": "💰",
    "legal": "⚖️",
    "social": "👥",
    "communication": "💬",
    "management": "👔",
    "leadership": "👑",
    "innovation": "💡",
    "creativity": "🌈",
    "productivity": "⏱️",
    "quality": "🏆",
    "security": "🔒",
    "performance": "📈",
    "efficiency": "⚡",
    "sustainability": "♻️",
    "growth": "📈",
    "impact": "💥",
    "value": "💎",
    "risk": "⚠️",
    "opportunity": "🚪",
    "planning": "📅",
    "schedule": "🗓️",
    "organization": "📂",
    "collaboration": "🤝",
    "feedback": "📣",
    "training": "🏋️",
    "learning": "📚",
    "knowledge": "🧠",
    "skills": "🛠️",
    "insights": "💡",
    "trends": "📊",
    "patterns": "🔄",
    "principles": "📜",
    "guidelines": "📏",
    "standards": "📐",
    "requirements": "📋",
    "architecture": "🏛️",
    "infrastructure": "🏗️",
    "components": "🧩",
    "modules": "📦",
    "integration": "🔄",
    "testing": "🧪",
    "deployment": "🚀",
    "maintenance": "🔧",
    "monitoring": "📡",
    "optimization": "⚡",
    "migration": "🚚",
    "backup": "💾",
    "privacy": "🔐",
    "compliance": "📜",
    "governance": "🏛️",
    "ethics": "⚖️",
    "accessibility": "♿",
    "usability": "👆",
    "interface": "🖥️",
    "service": "🛎️",
    "satisfaction": "😄",
    "engagement": "🔄",
    "retention": "🧲",
    "revenue": "💰",
    "profit": "💵",
    "cost": "💸",
    "investment": "📈",
    "budget": "💼",
    "forecast": "🔮",
    "metrics": "📊",
    "measurement": "📏",
    "assessment": "📋",
    "review": "👁️",
    "audit": "🔍",
    "verification": "✅",
}

# Pictographs, arrows, dingbats, misc symbols and the legacy codepoints that
# render as emoji.
_ICON_RANGES = [
    (0x1F000, 0x1FAFF),
    (0x2190, 0x21FF),
    (0x2300, 0x23FF),
    (0x2460, 0x24FF),
    (0x25A0, 0x27BF),
    (0x2900, 0x297F),
    (0x2B00, 0x2BFF),
]
_ICON_SINGLES = [0x00A9, 0x00AE, 0x203C, 0x2049, 0x2122, 0x2139, 0x3030, 0x303D, 0x3297, 0x3299]
_ICON_CLASS = "".join(f"{chr(lo)}-{chr(hi)}" for lo, hi in _ICON_RANGES) + "".join(map(chr, _ICON_SINGLES))
# Variation selector, keycap and skin-tone modifiers.
_MODIFIER_CLASS = f"{chr(0xFE0F)}{chr(0x20E3)}{chr(0x1F3FB)}-{chr(0x1F3FF)}"
_ZWJ = chr(0x200D)

_LEADING_ICON = re.compile(
    rf"^\s*([{_ICON_CLASS}](?:[{_MODIFIER_CLASS}]|{_ZWJ}[{_ICON_CLASS}])*)\s*(.*)$",
    re.DOTALL,
)


def split_leading_icon(label: str) -> tuple[Optional[str], str]:
    """Split ``label`` into (leading icon or None, remaining text)."""
    match = _LEADING_ICON.match(label or "")
    if not match:
        return None, label
    return match.group(1), match.group(2)


def has_leading_icon(label: str) -> bool:
    return split_leading_icon(label)[0] is not None


def find_icon(text: str) -> Optional[str]:
    """Look up the icon for the longest table keyword contained in ``text``."""
    lowered = (text or "").lower()
    best: Optional[str] = None
    best_length = 0
    for keyword, icon in _KEYWORD_ICONS.items():
        if keyword in lowered and len(keyword) > best_length:
            best, best_length = icon, len(keyword)
    return best


def icon_for(text: str) -> str:
    return find_icon(text) or DEFAULT_ICON


def ensure_icon(label: str) -> str:
    """Prefix ``label`` with a matching icon unless it already leads with one."""
    if has_leading_icon(label):
        return label
    return f"{icon_for(label)} {label}"


def enhance_topic_icons(topics: Iterable[Topic]) -> list[Topic]:
    """Return deep copies of ``topics`` with ``icon`` filled in from the keyword table.

    Topics that already carry an icon, or whose title leads with one, keep it.
    """

    def enhance(topic: Topic) -> Topic:
        enhanced = topic.model_copy(deep=True)
        if not enhanced.icon:
            leading, _ = split_leading_icon(enhanced.title)
            enhanced.icon = leading or icon_for(f"{enhanced.title} {enhanced.description or ''}")
        enhanced.subtopics = [enhance(sub) for sub in topic.subtopics]
        return enhanced

    return [enhance(topic) for topic in topics]
