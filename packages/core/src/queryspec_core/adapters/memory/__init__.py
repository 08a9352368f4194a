from .query_source import InMemoryQuerySource
from .repository import InMemoryRepository

__all__ = [
    "InMemoryQuerySource",
    "InMemoryRepository",
]
