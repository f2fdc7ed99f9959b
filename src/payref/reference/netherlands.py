"""Dutch payment reference ("betalingskenmerk"), 11-proof.

https://nl.wikipedia.org/wiki/Elfproef#Betalingskenmerk
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from payref.reference.outcome import MalformedReference, Scheme, ValidationOutcome
from payref.reference.settings import DEFAULT_SETTINGS, ValidationSettings

log = logging.getLogger(__name__)

BODY_LEN = 15

# weight per digit, position counted from the right (index 0 = rightmost)
WEIGHTS = (2, 4, 8, 5, 10, 9, 7, 3, 6, 1, 2, 4, 8, 5, 10)


class ReferenceForm(Enum):
    SHORT = 16  # 1 check digit + 15 body digits
    LONG = 17  # 2 check digits + 15 body digits

    @property
    def check_len(self) -> int:
        return self.value - BODY_LEN


@dataclass(frozen=True)
class DutchReference:
    form: ReferenceForm
    check: str
    body: str


def normalize_dutch(value: str) -> str:
    return value.replace(" ", "").strip()


def _digits(s: str) -> bool:
    return s.isdigit() and s.isascii()


def parse_dutch(value: str, settings: ValidationSettings = DEFAULT_SETTINGS) -> DutchReference:
    norm = normalize_dutch(value)
    if settings.strict_length and len(norm) not in (ReferenceForm.SHORT.value, ReferenceForm.LONG.value):
        raise MalformedReference(Scheme.NETHERLANDS, f"expected 16 or 17 digits, got {len(norm)}")

    form = ReferenceForm.SHORT if len(norm) == ReferenceForm.SHORT.value else ReferenceForm.LONG
    check = norm[: form.check_len]
    body = norm[form.check_len:]
    if not _digits(check):
        raise MalformedReference(Scheme.NETHERLANDS, f"check value {check!r} is not numeric")
    if body and not _digits(body):
        raise MalformedReference(Scheme.NETHERLANDS, f"non-digit characters in {body!r}")
    # only the rightmost 15 digits are weighted
    body = body[-BODY_LEN:].rjust(BODY_LEN, "0")
    return DutchReference(form=form, check=check, body=body)


def weighted_sum(body: str) -> int:
    if len(body) != BODY_LEN or not _digits(body):
        raise ValueError(f"body must be {BODY_LEN} digits: {body!r}")
    return sum(int(ch) * w for ch, w in zip(reversed(body), WEIGHTS))


def dutch_check_digit(body: str) -> int:
    """11 - (sum mod 11), where 10 maps to 1 and 11 maps to 0."""
    check = 11 - (weighted_sum(body) % 11)
    if check == 10:
        return 1
    if check == 11:
        return 0
    return check


def validate_dutch(value: str, settings: Optional[ValidationSettings] = None) -> ValidationOutcome:
    settings = settings or DEFAULT_SETTINGS
    try:
        ref = parse_dutch(value, settings)
    except MalformedReference as e:
        log.debug("dutch reference malformed: %s", e.reason)
        return ValidationOutcome.malformed(e)

    expected = dutch_check_digit(ref.body)
    if expected != int(ref.check):
        log.debug("dutch check mismatch: form=%s expected=%s given=%s", ref.form.name, expected, ref.check)
        return ValidationOutcome.mismatch(Scheme.NETHERLANDS)
    return ValidationOutcome.ok(Scheme.NETHERLANDS)
