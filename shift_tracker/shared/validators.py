"""Shared validation utilities"""

import re
from datetime import datetime
from typing import Optional

from ..exceptions import ValidationError

LATITUDE_RANGE = (-90.0, 90.0)
LONGITUDE_RANGE = (-180.0, 180.0)


def validate_coordinates(latitude: float, longitude: float) -> tuple[float, float]:
    """
    Check a latitude/longitude pair. Boundaries are inclusive; out-of-range
    values are rejected, never clamped.

    Raises:
        ValidationError: If either coordinate is missing or out of range
    """
    if latitude is None or longitude is None:
        raise ValidationError("latitude and longitude are required")

    if not LATITUDE_RANGE[0] <= latitude <= LATITUDE_RANGE[1]:
        raise ValidationError(f"latitude must be between -90 and 90, got {latitude}")
    if not LONGITUDE_RANGE[0] <= longitude <= LONGITUDE_RANGE[1]:
        raise ValidationError(f"longitude must be between -180 and 180, got {longitude}")

    return latitude, longitude


def require_text(value: Optional[str], field: str) -> str:
    """Return the stripped value, or raise if it is missing or whitespace only"""
    if value is None or not value.strip():
        raise ValidationError(f"{field} is required")
    return value.strip()


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

    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email


def to_local_naive(value: datetime) -> datetime:
    """
    Convert an offset-aware datetime to naive server-local time.

    Stored times and the service clock are naive local; naive input is
    assumed to be local already and returned unchanged.
    """
    if value.tzinfo is None or value.utcoffset() is None:
        return value
    return value.astimezone().replace(tzinfo=None)
