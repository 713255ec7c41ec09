"""PostgreSQL implementations of autosleep repositories."""

from .binding import PostgreSQLBindingRepository

__all__ = [
    "PostgreSQLBindingRepository",
]
