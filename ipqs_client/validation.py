"""Input validation performed before any request is sent.

Format checks return booleans; the list helpers return an `ApiError` (or
None when the input is acceptable) so the client can hand them straight back
to the caller.
"""

from __future__ import annotations

import ipaddress
import re
from datetime import datetime
from typing import Optional
from urllib.parse import urlparse

from email_validator import EmailNotValidError, validate_email

from .errors import ApiError

# type -> allowed value_types; None accepts any value_type.
ENTRYLIST_TYPES: dict[str, Optional[tuple[str, ...]]] = {
    "proxy": ("ip", "cidr", "isp"),
    "devicetracker": ("deviceid", "ip", "cidr", "isp"),
    "mobiletracker": ("deviceid", "ip", "cidr", "isp"),
    "email": ("email",),
    "url": ("domain",),
    "phone": ("phone",),
    "custom": None,
}

LEAK_TYPES = ("email", "password", "username")
REQUEST_LIST_TYPES = ("proxy", "email", "devicetracker", "mobiletracker")

_PHONE_RE = re.compile(r"^\+?[\d\s-]{9,20}$")
_SHA256_RE = re.compile(r"^[a-fA-F0-9]{64}$")
_LABEL_RE = re.compile(r"^[A-Za-z0-9_](?:[A-Za-z0-9_-]{0,61}[A-Za-z0-9_])?$")
_DATE_FORMAT = "%Y-%m-%d"


def is_valid_ip(value: str) -> bool:
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


def is_valid_cidr(value: str) -> bool:
    if value.count("/") != 1:
        return False
    ip, mask = value.split("/")
    if not is_valid_ip(ip) or not (mask.isascii() and mask.isdigit()):
        return False
    return 0 <= int(mask) <= 32


def is_valid_email(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_valid_domain(value: str) -> bool:
    """Syntactic hostname check: 1-63 char labels, 253 chars total."""
    if not value:
        return False
    domain = value[:-1] if value.endswith(".") else value
    if not domain or len(domain) > 253:
        return False
    return all(_LABEL_RE.match(label) for label in domain.split("."))


def is_valid_phone(value: str) -> bool:
    return bool(_PHONE_RE.match(value))


def is_valid_url(value: str) -> bool:
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc) and " " not in value


def is_valid_sha256(value: str) -> bool:
    return bool(_SHA256_RE.match(value))


def is_valid_date(value: str) -> bool:
    """Strict YYYY-MM-DD (zero padded, real calendar date)."""
    try:
        parsed = datetime.strptime(value, _DATE_FORMAT)
    except (TypeError, ValueError):
        return False
    return parsed.strftime(_DATE_FORMAT) == value


def is_valid_country_code(value: str) -> bool:
    """Two-letter inputs must be alphabetic; longer names are passed through."""
    if len(value) != 2:
        return True
    return value.isascii() and value.isalpha()


def validate_list_value(value: str, value_type: str) -> bool:
    if value_type == "ip":
        return is_valid_ip(value)
    if value_type == "cidr":
        return is_valid_cidr(value)
    if value_type == "email":
        return is_valid_email(value)
    if value_type == "domain":
        return is_valid_domain(value)
    if value_type == "phone":
        return is_valid_phone(value)
    if value_type in ("isp", "deviceid"):
        return bool(value)
    # custom value types
    return True


def validate_list_params(type_: str, value_type: str, list_name: str) -> Optional[ApiError]:
    if type_ not in ENTRYLIST_TYPES:
        return ApiError(
            "invalid_type",
            f"Invalid {list_name} type. Must be one of: {', '.join(ENTRYLIST_TYPES)}",
        )

    allowed = ENTRYLIST_TYPES[type_]
    if allowed is not None and value_type not in allowed:
        return ApiError(
            "invalid_value_type",
            f"Invalid value type for {type_}. Must be one of: {', '.join(allowed)}",
        )
    return None


def validate_list_entry(value: str, type_: str, value_type: str, list_name: str) -> Optional[ApiError]:
    """Full check for creating an allow/block list entry."""
    err = validate_list_params(type_, value_type, list_name)
    if err:
        return err
    if not validate_list_value(value, value_type):
        return ApiError("invalid_value", f"Invalid format for value type: {value_type}")
    return None
