"""
Custom exceptions for topic map construction and upstream analysis.
"""


class TopicMapError(Exception):
    """Base exception for topicmap errors."""

    pass


class GraphConstructionError(TopicMapError):
    """Raised when a graph build cannot proceed (empty forest, duplicate id)."""

    pass


class ResponseParsingError(TopicMapError):
    """Raised when an analysis response cannot be turned into a topic list."""

    pass


class AnalysisError(TopicMapError):
    """Raised when the external analysis call fails or returns nothing usable."""

    pass


class SettingsError(TopicMapError):
    """Raised when a settings file is malformed."""

    pass
