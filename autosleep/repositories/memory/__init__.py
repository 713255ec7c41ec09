"""
Memory repository implementations for autosleep.

These implementations use Python dictionaries for storage and are ideal
for testing scenarios where external dependencies should be avoided.
"""

from .binding import MemoryBindingRepository

__all__ = [
    "MemoryBindingRepository",
]
