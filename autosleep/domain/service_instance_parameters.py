"""
Typed parameters of an autosleep service instance.

This is the result of reading the raw parameters of a provisioning or
update request. A field left to None was absent from the request and had
no default applied.
"""

import re
from datetime import timedelta
from typing import Optional

from pydantic import BaseModel

from .enrollment import Enrollment


class ServiceInstanceParameters(BaseModel):
    """Validated parameters of a service instance."""

    auto_enrollment: Optional[Enrollment] = None
    exclude_from_auto_enrollment: Optional[re.Pattern] = None
    idle_duration: Optional[timedelta] = None
    ignore_route_service_error: Optional[bool] = None
    secret: Optional[str] = None

    def excludes(self, application_name: str) -> bool:
        """Tell whether an application is excluded from auto-enrollment."""
        if self.exclude_from_auto_enrollment is None:
            return False
        return (
            self.exclude_from_auto_enrollment.fullmatch(application_name)
            is not None
        )
