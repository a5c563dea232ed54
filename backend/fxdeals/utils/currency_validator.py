"""
Currency code validation.
Predicates and normalization over the fixed set of supported ISO 4217 codes.
"""

import re
from typing import FrozenSet, Optional

SUPPORTED_CURRENCIES: FrozenSet[str] = frozenset({
    "USD", "EUR", "GBP", "JPY", "CHF", "AUD", "CAD", "NZD", "SEK", "NOK", "DKK",
    "PLN", "CZK", "HUF", "BGN", "RON", "HRK", "RUB", "CNY", "HKD", "SGD", "KRW",
    "INR", "BRL", "MXN", "ZAR", "TRY", "THB", "MYR", "IDR", "PHP", "VND", "EGP",
    "SAR", "AED", "QAR", "KWD", "BHD", "OMR", "JOD", "LBP", "ILS", "DZD", "MAD",
    "TND", "LYD", "NGN", "GHS", "KES", "UGX", "TZS", "RWF", "ETB", "XOF", "XAF",
})

_CURRENCY_FORMAT = re.compile(r"^[A-Z]{3}$")


def is_valid_currency(currency_code: Optional[str]) -> bool:
    """
    Check whether a currency code is a supported ISO 4217 code.

    Args:
        currency_code: Code to check; case and surrounding whitespace are ignored

    Returns:
        True if the code is three letters and in the supported set
    """
    if not isinstance(currency_code, str) or not currency_code.strip():
        return False

    code = currency_code.strip().upper()
    if not _CURRENCY_FORMAT.fullmatch(code):
        return False

    return code in SUPPORTED_CURRENCIES


def is_valid_currency_pair(from_currency: Optional[str], to_currency: Optional[str]) -> bool:
    """Both codes are supported and they differ (case-insensitively)."""
    if not is_valid_currency(from_currency) or not is_valid_currency(to_currency):
        return False

    return from_currency.strip().upper() != to_currency.strip().upper()


def normalize_currency(currency_code: Optional[str]) -> Optional[str]:
    """
    Normalize a currency code to its canonical upper-case form.

    Returns:
        The trimmed upper-case code, or None if the code is not supported
    """
    if currency_code is None:
        return None

    if not is_valid_currency(currency_code):
        return None
    return currency_code.strip().upper()


def get_supported_currencies() -> FrozenSet[str]:
    return SUPPORTED_CURRENCIES
