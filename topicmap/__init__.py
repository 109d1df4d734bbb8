"""Topic forest to flowchart, JSON tree and radial mind-map conversion."""

__version__ = "0.1.0"
