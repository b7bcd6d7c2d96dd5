"""Normalization and validation helpers for addresses, phones and emails."""

import re
from typing import Optional


# =============================================================================
# US States
# =============================================================================

# 2-letter code -> display name, in lookup-list order
US_STATES: dict[str, str] = {
    "AL": "Alabama",
    "AK": "Alaska",
    "AZ": "Arizona",
    "AR": "Arkansas",
    "CA": "California",
    "CO": "Colorado",
    "CT": "Connecticut",
    "DE": "Delaware",
    "FL": "Florida",
    "GA": "Georgia",
    "HI": "Hawaii",
    "ID": "Idaho",
    "IL": "Illinois",
    "IN": "Indiana",
    "IA": "Iowa",
    "KS": "Kansas",
    "KY": "Kentucky",
    "LA": "Louisiana",
    "ME": "Maine",
    "MD": "Maryland",
    "MA": "Massachusetts",
    "MI": "Michigan",
    "MN": "Minnesota",
    "MS": "Mississippi",
    "MO": "Missouri",
    "MT": "Montana",
    "NE": "Nebraska",
    "NV": "Nevada",
    "NH": "New Hampshire",
    "NJ": "New Jersey",
    "NM": "New Mexico",
    "NY": "New York",
    "NC": "North Carolina",
    "ND": "North Dakota",
    "OH": "Ohio",
    "OK": "Oklahoma",
    "OR": "Oregon",
    "PA": "Pennsylvania",
    "RI": "Rhode Island",
    "SC": "South Carolina",
    "SD": "South Dakota",
    "TN": "Tennessee",
    "TX": "Texas",
    "UT": "Utah",
    "VT": "Vermont",
    "VA": "Virginia",
    "WA": "Washington",
    "WV": "West Virginia",
    "WI": "Wisconsin",
    "WY": "Wyoming",
}

_STATE_NAME_TO_CODE = {name.lower(): code for code, name in US_STATES.items()}

ZIP_CODE_PATTERN = re.compile(r"^\d{5}(-\d{4})?$")
PHONE_PATTERN = re.compile(r"^\(\d{3}\) \d{3}-\d{4}$")


def normalize_state(state: Optional[str]) -> Optional[str]:
    """
    Normalize state input to 2-letter uppercase code.

    Accepts a code (``ca``) or a full name (``California``).

    Raises:
        ValueError: If state is not one of the 50 US states
    """
    if not state:
        return None

    normalized = state.strip()
    upper = normalized.upper()
    if upper in US_STATES:
        return upper

    code = _STATE_NAME_TO_CODE.get(normalized.lower())
    if code:
        return code

    raise ValueError(
        f"Invalid state '{state}'. Use 2-letter code (e.g., CA) or full name (e.g., California)."
    )


def validate_zip_code(zip_code: Optional[str]) -> Optional[str]:
    """Check a ZIP or ZIP+4 code; returns it stripped."""
    if zip_code is None:
        return None
    cleaned = zip_code.strip()
    if not ZIP_CODE_PATTERN.match(cleaned):
        raise ValueError("Invalid ZIP code format")
    return cleaned


def validate_phone(phone: Optional[str]) -> Optional[str]:
    """
    Check a US phone number in ``(555) 123-4567`` form.

    Empty input is allowed and returns None. The value is stored as entered
    so that search by the displayed number keeps working.
    """
    if not phone or not phone.strip():
        return None
    cleaned = phone.strip()
    if not PHONE_PATTERN.match(cleaned):
        raise ValueError("Phone number must be in format (555) 123-4567")
    return cleaned


def normalize_email(email: Optional[str]) -> Optional[str]:
    """Normalize email to lowercase; None if empty."""
    if not email:
        return None
    return email.strip().lower()


def escape_like(value: str, escape: str = "\\") -> str:
    """Escape LIKE wildcards so a search term matches literally."""
    return (
        value.replace(escape, escape * 2)
        .replace("%", f"{escape}%")
        .replace("_", f"{escape}_")
    )
