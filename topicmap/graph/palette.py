"""Depth-keyed color palette shared by the graph builder and flowchart emitter."""

from topicmap.models import NodeColors

ROOT_COLORS = NodeColors(background="#FEF3C7", border="#D97706", text="#92400E")
LEVEL1_COLORS = NodeColors(background="#E0F2FE", border="#0EA5E9", text="#0C4A6E")
LEVEL2_COLORS = NodeColors(background="#FCE7F3", border="#EC4899", text="#831843")
LEVEL3_COLORS = NodeColors(background="#F3E8FF", border="#A855F7", text="#6B21A8")

# Tier name -> colors, in depth order; levels past 3 reuse the last tier.
PALETTE: dict[str, NodeColors] = {
    "root": ROOT_COLORS,
    "level1": LEVEL1_COLORS,
    "level2": LEVEL2_COLORS,
    "level3": LEVEL3_COLORS,
}

_TIERS = list(PALETTE)


def tier_for_level(level: int) -> str:
    return _TIERS[min(max(level, 0), len(_TIERS) - 1)]


def colors_for_level(level: int) -> NodeColors:
    return PALETTE[tier_for_level(level)]
