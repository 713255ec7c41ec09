"""
Repository protocols and implementations.

Implementation packages:
- memory: In-memory implementations for testing
- postgresql: asyncpg based implementations for production
"""

from .base import BaseRepository
from .binding import BindingRepository
from .memory import MemoryBindingRepository

__all__ = [
    "BaseRepository",
    "BindingRepository",
    "MemoryBindingRepository",
]
