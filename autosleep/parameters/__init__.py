"""
Service parameter readers.

Readers validate raw parameter values from broker requests and convert
them into domain values, raising InvalidParameterError on bad input.
"""

from . import names
from .errors import InvalidParameterError, InvalidParametersError
from .readers import (
    ParameterReader,
    build_parameter_readers,
    get_parameter_reader,
    get_parameter_readers,
    parse_iso8601_duration,
    read_enum,
)
from .service_instance import read_service_instance_parameters

__all__ = [
    "names",
    "InvalidParameterError",
    "InvalidParametersError",
    "ParameterReader",
    "build_parameter_readers",
    "get_parameter_reader",
    "get_parameter_readers",
    "parse_iso8601_duration",
    "read_enum",
    "read_service_instance_parameters",
]
