"""Bulk writer that ships JMX metric samples to Elasticsearch."""

__all__ = [
    "config",
    "writer",
]
