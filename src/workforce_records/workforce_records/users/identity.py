from __future__ import annotations

from ..core.constants import LOGIN_ID_PREFIX


def _two_letters(name: str) -> str:
    return (name or "")[:2].upper().ljust(2, "X")


def generate_login_id(first_name: str, last_name: str, year: int, serial: int) -> str:
    """Login id: "OI" + 2 letters of first name + 2 of last name + year + 4-digit serial.

    >>> generate_login_id("Jo", "Smith", 2024, 7)
    'OIJOSM20240007'
    """
    return f"{LOGIN_ID_PREFIX}{_two_letters(first_name)}{_two_letters(last_name)}{year}{serial:04d}"


def split_full_name(full_name: str) -> tuple[str, str]:
    """First and last word of a full name, with "US"/"ER" placeholders when missing."""
    names = full_name.strip().split()
    first = names[0] if names else "US"
    last = names[-1] if len(names) > 1 else "ER"
    return first, last
