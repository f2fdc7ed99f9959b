from .belgium import belgian_check_value, validate_belgian
from .dispatch import detect_scheme, validate, validate_many
from .netherlands import ReferenceForm, dutch_check_digit, validate_dutch
from .outcome import ErrorKind, MalformedReference, Scheme, ValidationOutcome
from .settings import ValidationSettings, settings_from_config

__all__ = [
    "ErrorKind",
    "MalformedReference",
    "ReferenceForm",
    "Scheme",
    "ValidationOutcome",
    "ValidationSettings",
    "belgian_check_value",
    "detect_scheme",
    "dutch_check_digit",
    "settings_from_config",
    "validate",
    "validate_belgian",
    "validate_dutch",
    "validate_many",
]
