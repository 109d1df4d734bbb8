"""
Pytest configuration and fixtures.
"""

from typing import Any, Dict, List

import pytest

from topicmap.graph import NodeIdGenerator
from topicmap.models import AnalysisSettings, LayoutSettings, PipelineSettings

FIXED_CLOCK_MS = 1_700_000_000_000


@pytest.fixture
def planning_topics() -> List[Dict[str, Any]]:
    """One root with two leaf subtopics."""
    return [
        {
            "title": "Planning",
            "subtopics": [
                {"title": "Budget"},
                {"title": "Schedule"},
            ],
        }
    ]


@pytest.fixture
def project_topics() -> List[Dict[str, Any]]:
    """Three levels deep, with backward and forward cross-references."""
    return [
        {
            "title": "Project",
            "description": "A software project",
            "subtopics": [
                {
                    "title": "Design",
                    "description": "How it is built",
                    "subtopics": [
                        {"title": "Architecture", "relationships": [{"to": "Design", "type": "part-of"}]},
                        {"title": "Interface"},
                    ],
                },
                {
                    "title": "Testing",
                    "relationships": [
                        {"to": "Design", "type": "depends", "description": "verifies"},
                        {"to": "Release", "type": "influences"},
                    ],
                },
                {"title": "Release"},
            ],
        }
    ]


@pytest.fixture
def fixed_clock():
    """Clock returning a constant timestamp, for reproducible node ids."""
    return lambda: FIXED_CLOCK_MS


@pytest.fixture
def id_generator(fixed_clock) -> NodeIdGenerator:
    return NodeIdGenerator("node", clock=fixed_clock)


@pytest.fixture
def layout_settings() -> LayoutSettings:
    return LayoutSettings()


@pytest.fixture
def fast_analysis_settings() -> AnalysisSettings:
    """Analysis settings without backoff delays."""
    return AnalysisSettings(timeout_seconds=1.0, max_attempts=3, initial_delay=0.0, max_delay=0.0)


@pytest.fixture
def pipeline_settings(fast_analysis_settings) -> PipelineSettings:
    return PipelineSettings(analysis=fast_analysis_settings)


@pytest.fixture
def heuristic_text() -> str:
    """Text the keyword heuristic turns into two topics."""
    return (
        "Solar Power is growing. Solar Energy is cheap. "
        "Wind Farm output rises. Wind Turbine blades spin."
    )
