"""Base response model.

A response wraps the decoded JSON mapping of one API call and exposes typed,
null-safe accessors. Field presence differs between plans, so a missing or
malformed field yields None (or False/[] for flags and lists), never an
exception.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any, Optional

# Placeholder some endpoints use instead of omitting a field.
NOT_AVAILABLE = "N/A"


def to_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None


def to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def to_bool(value: Any) -> Optional[bool]:
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes"):
            return True
        if lowered in ("false", "0", "no", ""):
            return False
    return None


class BaseResponse:
    """Read-only view over one raw response mapping."""

    # Ordered (field key, label) pairs read by `risk_factors()`.
    RISK_FACTORS: tuple[tuple[str, str], ...] = ()

    def __init__(self, data: Mapping[str, Any]):
        self._data: dict[str, Any] = copy.deepcopy(dict(data))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(success={self.is_success()!r}, request_id={self.get_request_id()!r})"

    def __contains__(self, key: str) -> bool:
        return self._data.get(key) is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BaseResponse):
            return NotImplemented
        return type(self) is type(other) and self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    def get(self, key: str, default: Any = None) -> Any:
        """Raw field passthrough (copy for nested values)."""
        value = self._data.get(key)
        if value is None:
            return default
        return copy.deepcopy(value)

    def get_raw_data(self) -> dict[str, Any]:
        return copy.deepcopy(self._data)

    def is_success(self) -> bool:
        return bool(to_bool(self._data.get("success")))

    def get_request_id(self) -> Optional[str]:
        return self._str("request_id")

    def get_message(self) -> Optional[str]:
        return self._str("message")

    def get_errors(self) -> list[Any]:
        errors = self._data.get("errors")
        if errors is None:
            return []
        if isinstance(errors, (list, tuple)):
            return list(errors)
        return [errors]

    def risk_factors(self) -> list[tuple[str, bool]]:
        """(label, flag) pairs for the risk factors this response carries."""
        out: list[tuple[str, bool]] = []
        for key, label in self.RISK_FACTORS:
            flag = to_bool(self._data.get(key))
            if flag is not None:
                out.append((label, flag))
        return out

    def active_risk_factors(self) -> list[str]:
        return [label for label, flag in self.risk_factors() if flag]

    # Typed field helpers

    def _bool(self, key: str) -> bool:
        return bool(to_bool(self._data.get(key)))

    def _opt_bool(self, key: str) -> Optional[bool]:
        return to_bool(self._data.get(key))

    def _int(self, key: str) -> Optional[int]:
        return to_int(self._data.get(key))

    def _float(self, key: str) -> Optional[float]:
        return to_float(self._data.get(key))

    def _str(self, key: str, *, na_is_none: bool = False) -> Optional[str]:
        value = self._data.get(key)
        if value is None or isinstance(value, (dict, list)):
            return None
        text = str(value)
        if na_is_none and text == NOT_AVAILABLE:
            return None
        return text

    def _list(self, key: str) -> list[Any]:
        value = self._data.get(key)
        if isinstance(value, (list, tuple)):
            return copy.deepcopy(list(value))
        return []

    def _dict(self, key: str) -> Optional[dict[str, Any]]:
        value = self._data.get(key)
        return copy.deepcopy(value) if isinstance(value, dict) else None

    def _nested(self, *keys: str) -> Any:
        value: Any = self._data
        for key in keys:
            if not isinstance(value, dict):
                return None
            value = value.get(key)
        return value
