"""
Reading every parameter of a provisioning or update request at once.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from autosleep.domain import ServiceInstanceParameters
from . import names
from .errors import InvalidParameterError, InvalidParametersError
from .readers import ParameterReader, get_parameter_reader

logger = logging.getLogger(__name__)

_FIELD_NAMES = {
    names.AUTO_ENROLLMENT: "auto_enrollment",
    names.EXCLUDE_FROM_AUTO_ENROLLMENT: "exclude_from_auto_enrollment",
    names.IDLE_DURATION: "idle_duration",
    names.IGNORE_ROUTE_SERVICE_ERROR: "ignore_route_service_error",
    names.SECRET: "secret",
}


def read_service_instance_parameters(
    raw_parameters: Optional[Mapping[str, Any]],
    with_default: bool,
    readers: Optional[Dict[str, ParameterReader]] = None,
) -> ServiceInstanceParameters:
    """Validate the raw parameters of a service instance request.

    Every field is read, so that a rejected request reports all of its
    invalid parameters together.

    Args:
        raw_parameters: Decoded request parameters, None when the request
            carried none
        with_default: True when provisioning, False when updating
        readers: Reader table to use instead of the process-wide one

    Returns:
        ServiceInstanceParameters with every recognised field read

    Raises:
        InvalidParameterError: if exactly one parameter is invalid or unknown
        InvalidParametersError: if several parameters are invalid or unknown
    """
    raw_parameters = raw_parameters or {}
    errors: List[InvalidParameterError] = []

    for parameter_name in raw_parameters:
        if parameter_name not in _FIELD_NAMES:
            errors.append(
                InvalidParameterError(parameter_name, "unknown parameter")
            )

    values: Dict[str, Any] = {}
    for parameter_name in names.SERVICE_INSTANCE_PARAMETERS:
        try:
            reader = get_parameter_reader(parameter_name, readers)
            values[_FIELD_NAMES[parameter_name]] = reader(
                raw_parameters.get(parameter_name), with_default
            )
        except InvalidParameterError as e:
            errors.append(e)

    if len(errors) == 1:
        raise errors[0]
    if errors:
        logger.error(
            "Rejecting service instance parameters",
            extra={"parameter_names": [e.parameter_name for e in errors]},
        )
        raise InvalidParametersError(errors)

    return ServiceInstanceParameters(**values)
