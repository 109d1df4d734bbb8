"""Topic forest models.

A topic is the unit of meaning handed to every downstream stage. Instances
arrive either from an external analysis service (as untrusted JSON, checked
by ``topicmap.validation`` first) or from the local heuristic preprocessor.
Field aliases keep the camelCase wire shape used by those producers.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from topicmap.models.enums import RelationshipType


class TopicRelationship(BaseModel):
    """Cross-reference from one topic to another by title."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    to: str = Field(..., min_length=1)
    type: RelationshipType
    description: Optional[str] = None
    strength: Optional[float] = None
    bidirectional: Optional[bool] = None


class Topic(BaseModel):
    """A titled node with optional rich content and owned subtopics."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    context: Optional[str] = None
    examples: list[str] = Field(default_factory=list)
    icon: Optional[str] = None
    color: Optional[str] = None
    citations: list[str] = Field(default_factory=list)
    related_topics: list[str] = Field(default_factory=list, alias="relatedTopics")
    subtopics: list["Topic"] = Field(default_factory=list)
    relationships: list[TopicRelationship] = Field(default_factory=list)
    metadata: Optional[dict[str, Any]] = None
    styling: Optional[dict[str, Any]] = None

    @field_validator("subtopics", "relationships", mode="before")
    @classmethod
    def _null_list_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("examples", "citations", "related_topics", mode="before")
    @classmethod
    def _text_items(cls, value: Any) -> Any:
        # Producers send years and ids as numbers; keep them as text.
        if value is None:
            return []
        if isinstance(value, list):
            return [item if isinstance(item, str) else str(item) for item in value]
        return value

    def to_wire(self) -> dict[str, Any]:
        """Dump to the camelCase JSON shape, dropping unset optionals."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def walk(self):
        """Yield this topic and every transitive subtopic in pre-order."""
        yield self
        for subtopic in self.subtopics:
            yield from subtopic.walk()


Topic.model_rebuild()
