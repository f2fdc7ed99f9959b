from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class Scheme(str, Enum):
    BELGIUM = "Belgium"
    NETHERLANDS = "Netherlands"


class ErrorKind(str, Enum):
    CHECKSUM_MISMATCH = "checksum_mismatch"
    MALFORMED_INPUT = "malformed_input"
    UNEXPECTED_FAULT = "unexpected_fault"


MSG_INVALID_BELGIUM = "The payment reference is not a valid reference in Belgium"
MSG_INVALID_NETHERLANDS = "The payment reference is not a valid reference in the Netherlands"
MSG_UNKNOWN_ERROR = "An unknown error occurred when validating the payment reference: {error}"


class MalformedReference(ValueError):
    """Reference cannot be split into check value and body for its scheme."""

    def __init__(self, scheme: Scheme, reason: str):
        super().__init__(reason)
        self.scheme = scheme
        self.reason = reason


@dataclass(frozen=True)
class ValidationOutcome:
    valid: bool
    error_message: Optional[str] = None
    scheme: Optional[Scheme] = None
    error_kind: Optional[ErrorKind] = None

    def __bool__(self) -> bool:
        return self.valid

    @classmethod
    def ok(cls, scheme: Scheme) -> "ValidationOutcome":
        return cls(valid=True, scheme=scheme)

    @classmethod
    def mismatch(cls, scheme: Scheme) -> "ValidationOutcome":
        msg = MSG_INVALID_BELGIUM if scheme is Scheme.BELGIUM else MSG_INVALID_NETHERLANDS
        return cls(valid=False, error_message=msg, scheme=scheme, error_kind=ErrorKind.CHECKSUM_MISMATCH)

    @classmethod
    def malformed(cls, exc: MalformedReference) -> "ValidationOutcome":
        where = "Belgium" if exc.scheme is Scheme.BELGIUM else "the Netherlands"
        return cls(
            valid=False,
            error_message=f"The payment reference is malformed for {where}: {exc.reason}",
            scheme=exc.scheme,
            error_kind=ErrorKind.MALFORMED_INPUT,
        )

    @classmethod
    def fault(cls, exc: BaseException, scheme: Optional[Scheme] = None) -> "ValidationOutcome":
        return cls(
            valid=False,
            error_message=MSG_UNKNOWN_ERROR.format(error=exc),
            scheme=scheme,
            error_kind=ErrorKind.UNEXPECTED_FAULT,
        )

    def as_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.valid,
            "error_message": self.error_message,
            "scheme": self.scheme.value if self.scheme else None,
            "error_kind": self.error_kind.value if self.error_kind else None,
        }
