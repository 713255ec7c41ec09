"""
Enrollment enumerations for autosleep policies.

Member values are the exact tokens accepted in provisioning requests.
"""

from enum import Enum


class Enrollment(str, Enum):
    """Auto-enrollment mode of a service instance.

    With ``standard`` enrollment, applications of the space are enrolled
    automatically but may opt out. With ``forced`` enrollment, opting out is
    refused by the broker.
    """

    STANDARD = "standard"
    FORCED = "forced"


class EnrollmentState(str, Enum):
    """Enrollment state of an application under an autosleep policy."""

    ENROLLED = "enrolled"
    BACKOFFICE_ENROLLED = "backoffice_enrolled"
    BACKOFFICE_OPTED_OUT = "backoffice_opted_out"
