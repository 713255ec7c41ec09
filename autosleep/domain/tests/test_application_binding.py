"""
Tests for the ApplicationBinding domain model.

Design decisions documented:
- Equality is structural, never based on object identity
- Identifiers must be non-blank and are stripped
- Credentials and syslog drain url are optional
"""

import pytest
from pydantic import ValidationError

from autosleep.domain import ApplicationBinding
from .factories import APP_GUID, ApplicationBindingFactory


class TestApplicationBindingInstantiation:
    """Test ApplicationBinding creation with various field combinations."""

    def test_minimal_binding(self) -> None:
        binding = ApplicationBinding(
            service_binding_id="binding-1",
            service_instance_id="instance-1",
            application_id=APP_GUID,
        )

        assert binding.credentials is None
        assert binding.syslog_drain_url is None

    @pytest.mark.parametrize(
        "field",
        ["service_binding_id", "service_instance_id", "application_id"],
    )
    @pytest.mark.parametrize("value", ["", "   "])
    def test_blank_identifiers_are_rejected(self, field: str, value: str) -> None:
        with pytest.raises(ValidationError):
            ApplicationBindingFactory.build(**{field: value})

    def test_identifiers_are_stripped(self) -> None:
        binding = ApplicationBindingFactory.build(service_binding_id="  b-1 ")

        assert binding.service_binding_id == "b-1"


class TestApplicationBindingEquality:
    """Bindings compare by value."""

    def test_same_fields_are_equal(self) -> None:
        first = ApplicationBinding(
            service_binding_id="bidingIdEquality",
            service_instance_id="serviceIdEquality",
            application_id=APP_GUID,
        )
        second = ApplicationBinding(
            service_binding_id="bidingIdEquality",
            service_instance_id="serviceIdEquality",
            application_id=APP_GUID,
        )

        assert first is not second
        assert first == second

    def test_different_fields_are_not_equal(self) -> None:
        binding = ApplicationBindingFactory.build()
        other = binding.model_copy(update={"application_id": "other-app"})

        assert binding != other

    def test_json_round_trip_preserves_equality(self) -> None:
        binding = ApplicationBindingFactory.build(
            credentials={"user": "u", "port": 8080},
            syslog_drain_url="syslog://logs.example.com:514",
        )

        restored = ApplicationBinding.model_validate_json(
            binding.model_dump_json()
        )

        assert restored == binding
