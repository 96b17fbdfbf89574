"""
Display formatting for Brazilian prices and phone numbers, plus URL checks.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal
from urllib.parse import urlparse

from cardapio_shared.constants import (
    ALLOWED_IMAGE_PROTOCOLS,
    PHONE_MAX_DIGITS,
    PHONE_MIN_DIGITS,
)

_NON_DIGITS = re.compile(r"\D")


def format_price(value: float | int | Decimal | None) -> str:
    """12.5 -> 'R$ 12,50'; 1234.5 -> 'R$ 1.234,50'."""
    amount = Decimal(str(value or 0)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    integer, cents = f"{abs(amount):.2f}".split(".")
    grouped = f"{int(integer):,}".replace(",", ".")
    return f"{sign}R$ {grouped},{cents}"


def get_phone_digits(value: str | None) -> str:
    return _NON_DIGITS.sub("", value or "")


def is_valid_phone(value: str | None) -> bool:
    """Brazilian phone: 10 (landline) or 11 (mobile) digits."""
    return PHONE_MIN_DIGITS <= len(get_phone_digits(value)) <= PHONE_MAX_DIGITS


def format_phone(value: str | None) -> str:
    """Progressive mask used while typing: (XX) XXXXX-XXXX or (XX) XXXX-XXXX."""
    digits = get_phone_digits(value)[:PHONE_MAX_DIGITS]
    if len(digits) <= 2:
        return f"({digits}" if digits else ""
    if len(digits) <= 6:
        return f"({digits[:2]}) {digits[2:]}"
    if len(digits) <= 10:
        return f"({digits[:2]}) {digits[2:6]}-{digits[6:]}"
    return f"({digits[:2]}) {digits[2:7]}-{digits[7:]}"


def format_phone_display(value: str | None) -> str | None:
    """Format stored digits for display; other lengths are returned untouched."""
    if not value:
        return None
    digits = get_phone_digits(value)
    if len(digits) == 11:
        return f"({digits[:2]}) {digits[2:7]}-{digits[7:]}"
    if len(digits) == 10:
        return f"({digits[:2]}) {digits[2:6]}-{digits[6:]}"
    return value


def whatsapp_link(phone: str | None) -> str | None:
    if not phone:
        return None
    digits = get_phone_digits(phone)
    full = digits if digits.startswith("55") else f"55{digits}"
    return f"https://wa.me/{full}"


def is_allowed_image_url(url: str | None) -> bool:
    """Only secure-transport image URLs may be rendered; empty means no image."""
    if not url:
        return False
    parsed = urlparse(url)
    return parsed.scheme in ALLOWED_IMAGE_PROTOCOLS and bool(parsed.netloc)
