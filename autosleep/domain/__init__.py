"""
Domain layer for autosleep.

Domain models are framework-independent Pydantic models and enumerations.
Import them from this package, e.g.:
    from autosleep.domain import ApplicationBinding, Enrollment
"""

from .application_binding import ApplicationBinding
from .enrollment import Enrollment, EnrollmentState
from .service_instance_parameters import ServiceInstanceParameters

__all__ = [
    "ApplicationBinding",
    "Enrollment",
    "EnrollmentState",
    "ServiceInstanceParameters",
]
