"""Configuration models loaded from YAML."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from topicmap.models.enums import OutputFormat, RankDirection


class GraphSettings(BaseModel):
    namespace: str = Field(default="node", min_length=1)
    max_label_length: int = Field(ge=4, default=50)


class LayoutSettings(BaseModel):
    enabled: bool = True
    rank_dir: RankDirection = RankDirection.TB
    node_sep: float = Field(ge=0.0, default=80.0)
    rank_sep: float = Field(ge=0.0, default=120.0)
    padding: float = Field(ge=0.0, default=50.0)
    spacing_factor: float = Field(gt=0.0, default=1.2)
    hierarchy_weight: float = Field(gt=0.0, default=2.0)
    cross_weight: float = Field(gt=0.0, default=1.0)
    node_height: float = Field(gt=0.0, default=40.0)
    char_width: float = Field(gt=0.0, default=8.0)
    min_node_width: float = Field(gt=0.0, default=60.0)


class AnalysisSettings(BaseModel):
    timeout_seconds: float = Field(gt=0.0, default=30.0)
    max_attempts: int = Field(ge=1, le=10, default=3)
    initial_delay: float = Field(ge=0.0, default=1.0)
    max_delay: float = Field(ge=0.0, default=10.0)


class PreprocessingSettings(BaseModel):
    correct_spelling: bool = False
    dictionary_path: Optional[str] = Field(
        default=None,
        description="Newline-delimited word list used by the spell checker when correct_spelling is on.",
    )
    dictionary_url: Optional[str] = None
    min_word_length: int = Field(ge=1, default=3)


class OutputSettings(BaseModel):
    formats: List[OutputFormat] = Field(default_factory=lambda: [OutputFormat.ALL])
    enhance_with_icons: bool = True


class PipelineSettings(BaseModel):
    language: str = "en"
    graph: GraphSettings = Field(default_factory=GraphSettings)
    layout: LayoutSettings = Field(default_factory=LayoutSettings)
    analysis: AnalysisSettings = Field(default_factory=AnalysisSettings)
    preprocessing: PreprocessingSettings = Field(default_factory=PreprocessingSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)
