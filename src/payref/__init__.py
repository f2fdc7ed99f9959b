"""Validation of Belgian and Dutch structured payment references."""

from payref.reference import ErrorKind, Scheme, ValidationOutcome, ValidationSettings, validate

__all__ = ["ErrorKind", "Scheme", "ValidationOutcome", "ValidationSettings", "validate"]
__version__ = "0.1.0"
