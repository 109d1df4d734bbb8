from .http_analyzer import HttpAnalyzer
from .response_parser import parse_topics_response
from .topic_source import Analyzer, TopicSource, TopicSourceResult

__all__ = ["Analyzer", "HttpAnalyzer", "TopicSource", "TopicSourceResult", "parse_topics_response"]
