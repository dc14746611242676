import re

from billshare.core.exceptions import InvalidPhoneNumberError

DEFAULT_COUNTRY_CODE = "91"
NATIONAL_NUMBER_LENGTH = 10


def normalize_phone_number(
    raw: str, default_country_code: str = DEFAULT_COUNTRY_CODE
) -> str:
    """
    Reduce a phone number to country code + national number digits.

    Examples (default country code "91"):
        "98765 43210"     -> "919876543210"
        "+91 98765 43210" -> "919876543210"
        "098765 43210"    -> "919876543210"
    """
    digits: str = re.sub(r"[^0-9]", "", raw)
    length: int = len(digits)

    if length == NATIONAL_NUMBER_LENGTH:
        return default_country_code + digits
    if length == NATIONAL_NUMBER_LENGTH + 2 and digits.startswith(default_country_code):
        return digits
    if length == NATIONAL_NUMBER_LENGTH + 1 and digits.startswith("0"):
        # Leading trunk prefix
        return default_country_code + digits[1:]
    if length >= NATIONAL_NUMBER_LENGTH:
        # Assume an international number that already carries its country code
        return digits

    raise InvalidPhoneNumberError(raw, digits)
