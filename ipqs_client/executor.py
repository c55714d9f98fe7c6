"""Request executor.

Turns an operation name plus a parameter mapping into one HTTP call, using the
rule from `endpoints.ENDPOINTS`, and normalizes the outcome into either the
decoded JSON mapping or an `ApiError`. A single attempt is made; there are no
retries.
"""

from __future__ import annotations

import os
import urllib.parse
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, Union

import requests
import structlog

from .endpoints import API_BASE, Endpoint, country_list_url, get_endpoint
from .errors import ApiError
from .logging import mask_api_key

logger = structlog.get_logger()

DEFAULT_TIMEOUT = 15
REDACTED = "***"

Params = dict[str, Any]
Result = Union[dict[str, Any], ApiError]


@dataclass(frozen=True)
class FileUpload:
    """A local file to send as the multipart `file` field."""

    path: str

    @property
    def filename(self) -> str:
        return os.path.basename(self.path)


@dataclass(frozen=True)
class PreparedCall:
    method: str
    url: str
    data: list[tuple[str, str]] = field(default_factory=list)
    upload: Optional[FileUpload] = None
    # URL with the API key and any secret path value masked.
    log_url: str = ""
    secrets: tuple[str, ...] = ()

    def redact(self, text: str) -> str:
        for secret in self.secrets:
            text = mask_api_key(text, secret)
        return text


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def flatten_params(params: Mapping[str, Any], prefix: str = "") -> Iterator[tuple[str, str]]:
    """Flatten nested params to form fields: `a[b]=1`, `c[]=x&c[]=y`.

    None values are dropped.
    """
    for key, value in params.items():
        name = f"{prefix}[{key}]" if prefix else str(key)
        if value is None:
            continue
        if isinstance(value, Mapping):
            yield from flatten_params(value, name)
        elif isinstance(value, (list, tuple)):
            for item in value:
                if item is not None:
                    yield f"{name}[]", _scalar(item)
        else:
            yield name, _scalar(value)


def build_call(
    operation: str,
    params: Optional[Params],
    *,
    api_key: str,
    common_params: Optional[Params] = None,
    base: str = API_BASE,
) -> PreparedCall:
    """Build the URL and body for an operation without sending anything."""
    endpoint: Endpoint = get_endpoint(operation)
    remaining: Params = dict(params or {})

    if common_params and not endpoint.skip_common_params:
        # Caller-supplied values win over the common defaults.
        merged = dict(common_params)
        merged.update(remaining)
        remaining = merged

    path = {"base": base, "operation": operation, "api_key": api_key, "type": "", "value": ""}
    if endpoint.type_param and remaining.get(endpoint.type_param) is not None:
        path["type"] = str(remaining.pop(endpoint.type_param))
    if endpoint.value_param and remaining.get(endpoint.value_param) is not None:
        value = str(remaining.pop(endpoint.value_param))
        if endpoint.encode_value:
            value = urllib.parse.quote_plus(value)
        path["value"] = value

    url = endpoint.pattern.format(**path)
    masked = dict(path, api_key=REDACTED)
    if endpoint.redact_value and path["value"]:
        masked["value"] = REDACTED
    log_url = endpoint.pattern.format(**masked)
    secrets = (api_key, path["value"]) if masked["value"] == REDACTED else (api_key,)

    if endpoint.method == "GET":
        fields = list(flatten_params(remaining))
        if fields:
            query = urllib.parse.urlencode(fields)
            url += ("&" if "?" in url else "?") + query
            log_url += ("&" if "?" in log_url else "?") + query
        return PreparedCall(method="GET", url=url, log_url=log_url, secrets=secrets)

    upload = None
    if endpoint.multipart and isinstance(remaining.get("file"), FileUpload):
        upload = remaining.pop("file")

    return PreparedCall(
        method="POST",
        url=url,
        data=list(flatten_params(remaining)),
        upload=upload,
        log_url=log_url,
        secrets=secrets,
    )


def _send(call: PreparedCall, headers: dict[str, str], timeout: float) -> requests.Response:
    if call.upload is not None:
        with open(call.upload.path, "rb") as fh:
            return requests.request(
                call.method,
                call.url,
                data=call.data,
                files={"file": (call.upload.filename, fh)},
                headers=headers,
                timeout=timeout,
            )
    return requests.request(
        call.method,
        call.url,
        data=call.data or None,
        headers=headers,
        timeout=timeout,
    )


def handle_response(response: requests.Response) -> Result:
    if response.status_code != 200:
        return ApiError(
            "api_error",
            f"IPQualityScore API returned status code {response.status_code}",
        )

    try:
        data = response.json()
    except ValueError:
        return ApiError("json_error", "Failed to parse IPQualityScore API response")

    if not isinstance(data, dict):
        return ApiError("json_error", "Unexpected IPQualityScore API response shape")

    errors = data.get("errors")
    if errors:
        if isinstance(errors, (list, tuple)):
            detail = " ".join(str(e) for e in errors)
        else:
            detail = str(errors)
        return ApiError("api_error", detail)

    return data


@dataclass
class RequestExecutor:
    api_key: str
    timeout: float = DEFAULT_TIMEOUT
    base: str = API_BASE

    def execute(
        self,
        operation: str,
        params: Optional[Params] = None,
        *,
        common_params: Optional[Params] = None,
    ) -> Result:
        call = build_call(
            operation,
            params,
            api_key=self.api_key,
            common_params=common_params,
            base=self.base,
        )
        log = logger.bind(operation=operation, method=call.method)
        log.debug("ipqs request", url=call.log_url)

        try:
            response = _send(call, {"Accept": "application/json"}, self.timeout)
        except (requests.RequestException, OSError) as e:
            message = call.redact(str(e))
            log.warning("ipqs request failed", error=message)
            return ApiError("api_error", f"IPQualityScore API request failed: {message}")

        result = handle_response(response)
        if isinstance(result, ApiError):
            log.warning("ipqs error response", code=result.code, error=result.message)
        else:
            log.debug("ipqs response", status=response.status_code)
        return result

    def fetch_countries(self, raw: bool = False) -> Union[dict[str, Any], str, ApiError]:
        """Country list lives outside the keyed API and needs no API key."""
        url = country_list_url(raw)
        headers = {"Accept": "text/plain" if raw else "application/json"}
        logger.debug("ipqs request", operation="countries", method="GET", url=url)

        try:
            response = requests.request("GET", url, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("country list request failed", error=str(e))
            return ApiError("api_error", f"Country list request failed: {e}")

        if response.status_code != 200:
            return ApiError(
                "api_error",
                f"Country list API returned status code {response.status_code}",
            )

        if raw:
            return response.text

        try:
            data = response.json()
        except ValueError:
            return ApiError("json_error", "Failed to parse country list response")
        if not isinstance(data, dict):
            return ApiError("json_error", "Unexpected country list response shape")
        return data
