"""Belgian structured communication ("gestructureerde mededeling").

Format: +++ddd/dddd/ddddd+++ (or *** markers). The first 10 digits are the
reference body, the last 2 digits are body mod 97, with 0 written as 97.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from payref.reference.outcome import MalformedReference, Scheme, ValidationOutcome
from payref.reference.settings import DEFAULT_SETTINGS, ValidationSettings

log = logging.getLogger(__name__)

MARKERS = ("+++", "***")
BODY_LEN = 10
CHECK_LEN = 2


@dataclass(frozen=True)
class BelgianReference:
    body: str
    check: str


def normalize_belgian(value: str) -> str:
    """Trim, then drop every marker and '/' separator (anywhere, not only at the ends)."""
    out = value.strip()
    for token in MARKERS + ("/",):
        out = out.replace(token, "")
    return out


def parse_belgian(value: str, settings: ValidationSettings = DEFAULT_SETTINGS) -> BelgianReference:
    norm = normalize_belgian(value)
    wanted = BODY_LEN + CHECK_LEN
    if len(norm) < wanted:
        raise MalformedReference(Scheme.BELGIUM, f"expected {wanted} digits, got {len(norm)}")
    if settings.strict_length and len(norm) > wanted:
        raise MalformedReference(Scheme.BELGIUM, f"expected {wanted} digits, got {len(norm)}")
    significant = norm[:wanted]
    if not significant.isdigit() or not significant.isascii():
        raise MalformedReference(Scheme.BELGIUM, f"non-digit characters in {significant!r}")
    return BelgianReference(body=significant[:BODY_LEN], check=significant[BODY_LEN:wanted])


def belgian_check_value(body: str) -> str:
    """Expected two-character check for a 10-digit body (remainder 0 -> '97')."""
    rest = int(body) % 97
    if rest == 0:
        rest = 97
    return f"{rest:02d}"


def validate_belgian(value: str, settings: Optional[ValidationSettings] = None) -> ValidationOutcome:
    settings = settings or DEFAULT_SETTINGS
    try:
        ref = parse_belgian(value, settings)
    except MalformedReference as e:
        log.debug("belgian reference malformed: %s", e.reason)
        return ValidationOutcome.malformed(e)

    expected = belgian_check_value(ref.body)
    if expected != ref.check:
        log.debug("belgian check mismatch: expected=%s given=%s", expected, ref.check)
        return ValidationOutcome.mismatch(Scheme.BELGIUM)
    return ValidationOutcome.ok(Scheme.BELGIUM)
