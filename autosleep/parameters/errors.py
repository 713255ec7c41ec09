"""
Errors raised while reading service parameters.
"""

from typing import List, Sequence


class InvalidParameterError(ValueError):
    """Raised when a parameter value cannot be converted to its domain type.

    Carries the offending parameter name and a human readable hint about the
    accepted values or format, so callers can report it without knowing
    which reader raised it.
    """

    def __init__(self, parameter_name: str, hint: str) -> None:
        self.parameter_name = parameter_name
        self.hint = hint
        super().__init__(f"{parameter_name}: {hint}")


class InvalidParametersError(ValueError):
    """Raised when several parameters of one request are invalid."""

    def __init__(self, errors: Sequence[InvalidParameterError]) -> None:
        self.errors: List[InvalidParameterError] = list(errors)
        super().__init__("; ".join(str(error) for error in self.errors))

    @property
    def parameter_names(self) -> List[str]:
        return [error.parameter_name for error in self.errors]
