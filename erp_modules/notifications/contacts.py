"""
Contact format checks for notification recipients.

Phone numbers are Indonesian mobile numbers.  Accepted input prefixes
are ``+62``, ``62``, ``08`` and ``8``; spaces, dashes, dots and
parentheses are ignored.  The national part must start with ``8`` and
be 9-12 digits long.  Valid numbers normalize to ``+62...``.
"""

from __future__ import annotations

import re

from erp_modules.notifications.models import PhoneValidationResult

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

_PHONE_SEPARATORS = re.compile(r"[\s\-().]")
_DIGITS = re.compile(r"^\d+$")

COUNTRY_PREFIX = "+62"


def is_valid_email(email: str | None) -> bool:
    if not email or not isinstance(email, str):
        return False
    return EMAIL_PATTERN.match(email.strip()) is not None


def _is_mobile_digits(digits: str) -> bool:
    return (
        _DIGITS.match(digits) is not None
        and digits.startswith("8")
        and 9 <= len(digits) <= 12
    )


def validate_phone_number(phone: str | None) -> PhoneValidationResult:
    if not phone or not isinstance(phone, str):
        return PhoneValidationResult(valid=False, error="Phone number is required")

    cleaned = _PHONE_SEPARATORS.sub("", phone)
    if not cleaned:
        return PhoneValidationResult(valid=False, error="Phone number is required")

    if cleaned.startswith("+62"):
        digits = cleaned[3:]
    elif cleaned.startswith("62") and len(cleaned) >= 11:
        digits = cleaned[2:]
    elif cleaned.startswith("08"):
        digits = cleaned[1:]
    elif cleaned.startswith("8") and len(cleaned) >= 9:
        digits = cleaned
    else:
        return PhoneValidationResult(
            valid=False, error="Phone number must start with +62, 62, 08, or 8"
        )

    if not _is_mobile_digits(digits):
        return PhoneValidationResult(
            valid=False, error="Invalid Indonesian phone number format"
        )
    return PhoneValidationResult(valid=True, normalized=COUNTRY_PREFIX + digits)


def is_valid_indonesian_phone(phone: str | None) -> bool:
    return validate_phone_number(phone).valid


def format_phone_number(phone: str) -> str:
    """Display form ``+62 812-3456-7890``; invalid input is returned unchanged."""
    result = validate_phone_number(phone)
    if not result.valid or result.normalized is None:
        return phone
    digits = result.normalized[3:]
    if len(digits) >= 10:
        return f"+62 {digits[:3]}-{digits[3:7]}-{digits[7:]}"
    return f"+62 {digits[:3]}-{digits[3:6]}-{digits[6:]}"


def format_for_whatsapp(phone: str) -> str | None:
    """Normalized number without the leading ``+``, or None if invalid."""
    result = validate_phone_number(phone)
    if not result.valid or result.normalized is None:
        return None
    return result.normalized[1:]


def get_local_number(phone: str) -> str | None:
    result = validate_phone_number(phone)
    if not result.valid or result.normalized is None:
        return None
    return "0" + result.normalized[3:]


def phone_numbers_equal(first: str, second: str) -> bool:
    a = validate_phone_number(first)
    b = validate_phone_number(second)
    return a.valid and b.valid and a.normalized == b.normalized
