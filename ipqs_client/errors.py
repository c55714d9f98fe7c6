"""Error values returned by client operations.

Client operations never raise for per-call failures; they return an
`ApiError` and leave it to the caller to branch on it. The only raised error
is `ConfigurationError`, for a client that cannot be built at all.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# code -> kind. Any code not listed here is a validation failure.
_KIND_BY_CODE = {
    "api_error": "api_error",
    "json_error": "json_error",
    "missing_field": "missing_field",
    "missing_parameter": "missing_parameter",
}


@dataclass(frozen=True)
class ApiError:
    code: str
    message: str

    @property
    def kind(self) -> str:
        return _KIND_BY_CODE.get(self.code, "validation_error")

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "kind": self.kind, "message": self.message}

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


def is_error(result: Any) -> bool:
    return isinstance(result, ApiError)


class ConfigurationError(Exception):
    """Raised when a client cannot be configured (e.g. no API key)."""
