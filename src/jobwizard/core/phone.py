from __future__ import annotations

import re

MOBILE_PREFIXES = tuple(f"05{digit}" for digit in range(10))


def phone_digits(phone: str) -> str:
    return re.sub(r"\D", "", phone)


def is_valid_mobile(phone: str) -> bool:
    digits = phone_digits(phone)
    return len(digits) == 10 and digits.startswith(MOBILE_PREFIXES)


def normalize_phone(phone: str) -> str:
    """Format a valid mobile number as ``050-1234567``; other input is returned unchanged."""
    if not is_valid_mobile(phone):
        return phone
    digits = phone_digits(phone)
    return f"{digits[:3]}-{digits[3:]}"
