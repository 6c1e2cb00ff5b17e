"""archive-harvester: merge and deduplicate archived URLs for a domain."""

__version__ = "0.1.0"
