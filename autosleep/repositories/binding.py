"""
Application binding repository interface defined as Protocol.

The repository stores ApplicationBinding records keyed by their service
binding id. Beyond the generic keyed-record operations it can list the
bindings of one service instance, which is how the broker finds the
applications watched by an autosleep service instance.
"""

from typing import List, Protocol, runtime_checkable

from autosleep.domain import ApplicationBinding
from .base import BaseRepository


@runtime_checkable
class BindingRepository(BaseRepository[ApplicationBinding], Protocol):
    """Handles application binding storage and retrieval."""

    async def find_by_service_instance(
        self, service_instance_id: str
    ) -> List[ApplicationBinding]:
        """List the bindings of a service instance.

        Args:
            service_instance_id: Identifier of the autosleep service instance

        Returns:
            Bindings referencing that service instance, possibly empty
        """
        ...
