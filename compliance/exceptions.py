"""
Exceptions raised by report generation.

NotFound and business-rule failures abort generation before any output is
built. Divide-by-zero conditions are never raised; the calculators return
"no value" or 0 instead.
"""

from typing import Any


class ComplianceError(Exception):
    """Base class for report generation errors."""


class EntityNotFoundError(ComplianceError):
    """A referenced facility, sprayfield or report does not exist."""

    def __init__(self, entity_name: str, key: Any):
        self.entity_name = entity_name
        self.key = key
        super().__init__(f"Entity '{entity_name}' with key '{key}' was not found.")


class BusinessRuleViolation(ComplianceError):
    """
    Recoverable, caller-facing rule violation.

    Raised for duplicate reports, periods with no irrigation activity and
    records that belong to another company.
    """
