"""Shared validation utilities"""

import re
from typing import Optional


def validate_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate and normalize a Brazilian phone number to E.164 format.

    Args:
        phone: Phone number string in various formats, e.g. "(11) 98765-4321"

    Returns:
        Normalized phone number in E.164 format (+55XXXXXXXXXXX)

    Raises:
        ValueError: If phone number is invalid
    """
    if not phone:
        return phone

    # Remove all non-digit characters
    digits = re.sub(r"\D", "", phone)

    # Handle +55 prefix
    if digits.startswith("55") and len(digits) in (12, 13):
        digits = digits[2:]

    # Area code + 8 digit landline or 9 digit mobile
    if len(digits) not in (10, 11):
        raise ValueError("Phone number must have area code plus 8 or 9 digits")

    return f"+55{digits}"


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    # Basic email validation pattern
    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email
