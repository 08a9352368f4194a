from .query_source import (
    ExpansionPath,
    IConsistentQuerySource,
    IQuerySource,
    supports_consistent_read,
)

__all__ = [
    "ExpansionPath",
    "IConsistentQuerySource",
    "IQuerySource",
    "supports_consistent_read",
]
