"""
Engine Errors

Validation and missing-route conditions are fatal to a single analysis and are
raised to the caller unmodified. Rule absence is not an error: states without
reference data flow through as zero-cost, informational line items.
"""


class RouteComplianceError(ValueError):
    """Base class for all errors raised by the engine."""


class ValidationError(RouteComplianceError):
    """
    Request data failed validation before any rule evaluation ran.

    Attributes:
        problems - Every problem found, in the order they were detected
    """

    def __init__(self, problems: list[str]):
        self.problems = list(problems)
        super().__init__("Invalid analysis request:\n  " + "\n  ".join(self.problems))


class MissingRouteDataError(RouteComplianceError):
    """The supplied route has no state segments and cannot be assessed."""


class ReferenceDataError(RouteComplianceError):
    """A reference table failed its integrity checks."""

    def __init__(self, problems: list[str]):
        self.problems = list(problems)
        super().__init__("Reference data errors:\n  " + "\n  ".join(self.problems))


__all__ = [
    "RouteComplianceError",
    "ValidationError",
    "MissingRouteDataError",
    "ReferenceDataError",
]
