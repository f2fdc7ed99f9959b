"""Auto-detecting payment reference validator.

A reference starting with '+++' or '***' is Belgian, anything else is treated
as Dutch. The caller gets a ValidationOutcome back for every string input.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from payref.reference.belgium import MARKERS, validate_belgian
from payref.reference.netherlands import validate_dutch
from payref.reference.outcome import Scheme, ValidationOutcome
from payref.reference.settings import ValidationSettings

log = logging.getLogger(__name__)

_VALIDATORS = {
    Scheme.BELGIUM: validate_belgian,
    Scheme.NETHERLANDS: validate_dutch,
}


def detect_scheme(value: str) -> Scheme:
    # prefix test on the raw value, no trimming
    if value.startswith(MARKERS):
        return Scheme.BELGIUM
    return Scheme.NETHERLANDS


def validate(value: str, settings: Optional[ValidationSettings] = None) -> ValidationOutcome:
    if not isinstance(value, str):
        raise TypeError(f"payment reference must be str, not {type(value).__name__}")

    scheme = detect_scheme(value)
    log.debug("reference.detected scheme=%s", scheme.value)
    try:
        return _VALIDATORS[scheme](value, settings)
    except Exception as e:
        log.exception("Unexpected error while validating payment reference (scheme=%s)", scheme.value)
        return ValidationOutcome.fault(e, scheme)


def validate_many(values: Iterable[str], settings: Optional[ValidationSettings] = None) -> List[ValidationOutcome]:
    return [validate(v, settings) for v in values]
