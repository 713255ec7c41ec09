"""
Application binding domain model.

An application binding links an autosleep service instance to the
application it watches. Bindings are keyed by their service binding id.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, field_validator


class ApplicationBinding(BaseModel):
    """Association between a service instance and a bound application.

    Equality is structural: two bindings with the same field values are
    equal whatever their origin (freshly built or read back from a
    repository).
    """

    service_binding_id: str
    service_instance_id: str
    credentials: Optional[Dict[str, Any]] = None
    syslog_drain_url: Optional[str] = None
    application_id: str

    @field_validator("service_binding_id", "service_instance_id", "application_id")
    @classmethod
    def identifiers_must_not_be_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Identifiers cannot be empty")
        return v.strip()
