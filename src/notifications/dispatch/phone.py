"""Indian mobile number validation and canonical formatting."""

import re

_MOBILE = re.compile(r"^[6-9]\d{9}$")
_NON_DIGITS = re.compile(r"\D")


class InvalidPhoneNumberError(ValueError):
    pass


def validate_phone_number(phone: str) -> bool:
    """Accept 10-digit local numbers or 12-digit numbers with the 91 prefix."""
    cleaned = _NON_DIGITS.sub("", phone or "")
    if len(cleaned) == 10:
        return bool(_MOBILE.match(cleaned))
    if len(cleaned) == 12:
        return cleaned.startswith("91") and bool(_MOBILE.match(cleaned[2:]))
    return False


def format_phone_number(phone: str) -> str:
    """Return the number as ``91XXXXXXXXXX``.

    Raises:
        InvalidPhoneNumberError: when the number is not an Indian mobile number.
    """
    cleaned = _NON_DIGITS.sub("", phone or "")

    if cleaned.startswith("0"):
        cleaned = cleaned[1:]
    if len(cleaned) == 10:
        cleaned = "91" + cleaned

    if len(cleaned) != 12 or not cleaned.startswith("91"):
        raise InvalidPhoneNumberError(f"Invalid phone number format: {phone}")
    if not _MOBILE.match(cleaned[2:]):
        raise InvalidPhoneNumberError(f"Invalid Indian mobile number: {phone}")

    return cleaned
