"""
Readers converting raw request parameters into domain values.

Each reader takes the raw value of one parameter (None when the request did
not carry it) and a ``with_default`` flag, and returns the typed value or
raises InvalidParameterError. Provisioning reads with defaults applied;
updates read without them so that an absent parameter comes back as None
and leaves the current setting untouched.

Readers are plain functions held in a table keyed by parameter name. The
table is built once per process from the configuration, which supplies the
configurable defaults.
"""

import logging
import re
from datetime import timedelta
from enum import Enum
from functools import lru_cache
from typing import Any, Callable, Dict, Optional, Pattern, Type, TypeVar

from pydantic import TypeAdapter

from autosleep.config import AutosleepConfig
from autosleep.domain import Enrollment, EnrollmentState
from . import names
from .errors import InvalidParameterError

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

ParameterReader = Callable[[Optional[Any], bool], Any]

# PnDTnHnMn.nS, optionally signed; the calendar based units are refused
_ISO_8601_DURATION = re.compile(
    r"[-+]?P(?:\d+D)?(?:T(?:\d+H)?(?:\d+M)?(?:\d+(?:[.,]\d+)?S)?)?",
    re.IGNORECASE,
)
_DURATION_ADAPTER = TypeAdapter(timedelta)


def read_enum(enum_class: Type[E], parameter_name: str, value: Any) -> E:
    """Convert a raw token into a member of ``enum_class``.

    Raises:
        InvalidParameterError: listing every accepted token when ``value``
            is not one of them
    """
    try:
        return enum_class(value)
    except ValueError as e:
        available_values = ", ".join(str(member.value) for member in enum_class)
        logger.error(
            "Wrong value for parameter",
            extra={
                "parameter_name": parameter_name,
                "value": value,
                "available_values": available_values,
            },
        )
        raise InvalidParameterError(
            parameter_name, f"choose one between: {available_values}"
        ) from e


def parse_iso8601_duration(value: str) -> timedelta:
    """Parse an ISO-8601 duration such as ``PT15M`` or ``P1DT2H``.

    Raises:
        ValueError: if the value is not an ISO-8601 duration
    """
    if not _ISO_8601_DURATION.fullmatch(value) or value.upper().endswith(
        ("P", "T")
    ):
        raise ValueError(f"Not an ISO-8601 duration: {value!r}")
    return _DURATION_ADAPTER.validate_python(value.upper().replace(",", "."))


def read_auto_enrollment(
    parameter: Optional[Any], with_default: bool
) -> Optional[Enrollment]:
    if parameter is not None:
        logger.debug(
            "Reading auto enrollment", extra={"auto_enrollment": parameter}
        )
        return read_enum(Enrollment, names.AUTO_ENROLLMENT, parameter)
    if with_default:
        return Enrollment.STANDARD
    return None


def read_exclude_from_auto_enrollment(
    parameter: Optional[Any], with_default: bool
) -> Optional[Pattern[str]]:
    """Compile the exclusion pattern. A blank pattern means no exclusion."""
    if parameter is None:
        return None
    if not isinstance(parameter, str):
        raise InvalidParameterError(
            names.EXCLUDE_FROM_AUTO_ENROLLMENT, "should be a valid regexp"
        )
    if not parameter.strip():
        return None
    logger.debug(
        "Reading exclusion pattern",
        extra={"exclude_from_auto_enrollment": parameter},
    )
    try:
        return re.compile(parameter)
    except (re.error, OverflowError) as e:
        logger.error(
            "Wrong format for exclusion - cannot be compiled to a valid "
            "regexp",
            extra={"exclude_from_auto_enrollment": parameter, "error": str(e)},
        )
        raise InvalidParameterError(
            names.EXCLUDE_FROM_AUTO_ENROLLMENT, "should be a valid regexp"
        ) from e


def idle_duration_reader(default: timedelta) -> ParameterReader:
    """Build the idle duration reader falling back to ``default``."""

    def read_idle_duration(
        parameter: Optional[Any], with_default: bool
    ) -> Optional[timedelta]:
        if parameter is not None:
            logger.debug(
                "Reading idle duration", extra={"idle_duration": parameter}
            )
            try:
                if not isinstance(parameter, str):
                    raise ValueError(f"Not a string: {parameter!r}")
                return parse_iso8601_duration(parameter)
            except (ValueError, OverflowError) as e:
                logger.error(
                    "Wrong format for idle duration - format should respect "
                    "ISO-8601 duration format PnDTnHnMn",
                    extra={"idle_duration": parameter},
                )
                raise InvalidParameterError(
                    names.IDLE_DURATION,
                    'param badly formatted (ISO-8601). Example: "PT15M" for '
                    "15mn",
                ) from e
        if with_default:
            return default
        return None

    return read_idle_duration


def ignore_route_service_error_reader(default: bool) -> ParameterReader:
    """Build the ignore-route-service-error reader.

    The default applies whenever the parameter is absent, whatever the
    ``with_default`` flag says.
    """

    def read_ignore_route_service_error(
        parameter: Optional[Any], with_default: bool
    ) -> bool:
        if parameter is None:
            return default
        if isinstance(parameter, bool):
            return parameter
        logger.debug(
            "Reading ignore route service error",
            extra={"ignore_route_service_error": parameter},
        )
        value = parameter.lower() if isinstance(parameter, str) else None
        if value == "true":
            return True
        if value == "false":
            return False
        logger.error(
            "Wrong value for ignore route service error",
            extra={"ignore_route_service_error": parameter},
        )
        raise InvalidParameterError(
            names.IGNORE_ROUTE_SERVICE_ERROR,
            "bad parameter value. Must be a boolean value.",
        )

    return read_ignore_route_service_error


def read_secret(parameter: Optional[Any], with_default: bool) -> Optional[str]:
    # never logged
    if parameter is None:
        return None
    return str(parameter)


def read_enrollment_state(
    parameter: Optional[Any], with_default: bool
) -> Optional[EnrollmentState]:
    if parameter is not None:
        logger.debug("Reading enrollment state", extra={"state": parameter})
        return read_enum(EnrollmentState, names.STATE, parameter)
    if with_default:
        return EnrollmentState.ENROLLED
    return None


def build_parameter_readers(
    config: AutosleepConfig,
) -> Dict[str, ParameterReader]:
    """Build the table of every known reader, keyed by parameter name.

    Args:
        config: Configuration supplying the default idle duration and the
            default ignore-route-service-error flag

    Returns:
        A new dictionary mapping parameter names to readers
    """
    readers: Dict[str, ParameterReader] = {
        names.AUTO_ENROLLMENT: read_auto_enrollment,
        names.EXCLUDE_FROM_AUTO_ENROLLMENT: read_exclude_from_auto_enrollment,
        names.IDLE_DURATION: idle_duration_reader(
            config.default_inactivity_period
        ),
        names.IGNORE_ROUTE_SERVICE_ERROR: ignore_route_service_error_reader(
            config.default_ignore_route_service_error
        ),
        names.SECRET: read_secret,
        names.STATE: read_enrollment_state,
    }
    logger.debug(
        "Built parameter readers",
        extra={"parameter_names": sorted(readers)},
    )
    return readers


@lru_cache(maxsize=None)
def _process_readers() -> Dict[str, ParameterReader]:
    return build_parameter_readers(AutosleepConfig.from_env())


def get_parameter_readers() -> Dict[str, ParameterReader]:
    """Return the process-wide reader table, built on first use."""
    return dict(_process_readers())


def get_parameter_reader(
    parameter_name: str,
    readers: Optional[Dict[str, ParameterReader]] = None,
) -> ParameterReader:
    """Look up the reader for ``parameter_name``.

    Raises:
        InvalidParameterError: if no reader is registered under that name
    """
    table = readers if readers is not None else _process_readers()
    try:
        return table[parameter_name]
    except KeyError:
        logger.error(
            "Unknown parameter", extra={"parameter_name": parameter_name}
        )
        raise InvalidParameterError(
            parameter_name, "unknown parameter"
        ) from None
