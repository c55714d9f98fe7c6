"""Endpoint registry.

Maps logical operation names to the rules used to build their requests.
Unknown operations fall back to a plain `base/operation/api_key` POST.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

API_BASE = "https://ipqualityscore.com/api/json/"
COUNTRY_LIST_BASE = "https://www.ipqualityscore.com/api/countries/"

HttpMethod = Literal["GET", "POST"]

# Placeholders: {base}, {operation}, {api_key}, {type}, {value}
KEY_ONLY = "{base}{operation}/{api_key}"
KEY_VALUE = "{base}{operation}/{api_key}/{value}"


@dataclass(frozen=True)
class Endpoint:
    pattern: str = KEY_ONLY
    method: HttpMethod = "POST"

    # Parameters lifted out of the query/body and substituted into the path.
    type_param: Optional[str] = None
    value_param: Optional[str] = None
    encode_value: bool = False

    # Omit user agent/language and scoring options (list/history endpoints).
    skip_common_params: bool = False
    multipart: bool = False
    # Path value is a secret (leaked passwords) and is masked in logs.
    redact_value: bool = False


DEFAULT_ENDPOINT = Endpoint()

ENDPOINTS: dict[str, Endpoint] = {
    # Lookups: value goes straight into the path.
    "phone": Endpoint(KEY_VALUE, "GET", value_param="phone"),
    "ip": Endpoint(KEY_VALUE, "GET", value_param="ip"),
    "url": Endpoint(KEY_VALUE, "GET", value_param="url", encode_value=True),
    "leaked": Endpoint(
        "{base}{operation}/{type}/{api_key}/{value}",
        "GET",
        type_param="type",
        value_param="value",
        encode_value=True,
        redact_value=True,
    ),
    "account": Endpoint(KEY_ONLY, "GET"),
    # Lists and history
    "requests": Endpoint("{base}{operation}/{api_key}/list", "GET", skip_common_params=True),
    "allowlist/list": Endpoint(KEY_ONLY, "GET", skip_common_params=True),
    "blocklist/list": Endpoint(KEY_ONLY, "GET", skip_common_params=True),
    "allowlist/create": Endpoint(KEY_ONLY, "POST"),
    "allowlist/delete": Endpoint(KEY_ONLY, "POST"),
    "blocklist/create": Endpoint(KEY_ONLY, "POST"),
    "blocklist/delete": Endpoint(KEY_ONLY, "POST"),
    "transaction": Endpoint(KEY_ONLY, "POST"),
    # Malware scanner
    "malware/scan": Endpoint(KEY_ONLY, "POST", multipart=True),
    "malware/lookup": Endpoint(KEY_ONLY, "POST"),
}


def get_endpoint(operation: str) -> Endpoint:
    return ENDPOINTS.get(operation, DEFAULT_ENDPOINT)


def country_list_url(raw: bool = False) -> str:
    return COUNTRY_LIST_BASE + ("raw" if raw else "json")
