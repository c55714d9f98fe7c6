"""Malware file scanner response (file upload, remote file, hash lookup)."""

from __future__ import annotations

from typing import Any, Optional

from .base import BaseResponse, to_bool, to_int


class MalwareCheck(BaseResponse):
    def get_status(self) -> Optional[str]:
        """"cached", "pending" or "complete" style scan state."""
        return self._str("status")

    def is_pending(self) -> bool:
        return (self.get_status() or "").lower() == "pending"

    def get_result(self) -> Optional[dict[str, Any]]:
        return self._dict("result")

    def is_malicious(self) -> bool:
        detected = to_bool(self._nested("result", "detected"))
        if detected is None:
            detected = to_bool(self._data.get("detected"))
        return bool(detected)

    def get_detected_scans(self) -> Optional[int]:
        value = self._nested("result", "detected_scans")
        if value is None:
            value = self._data.get("detected_scans")
        return to_int(value)

    def get_total_scans(self) -> Optional[int]:
        value = self._nested("result", "total_scans")
        if value is None:
            value = self._data.get("total_scans")
        return to_int(value)

    def get_file_hash(self) -> Optional[str]:
        return self._str("file_hash")

    def get_file_name(self) -> Optional[str]:
        return self._str("file_name")

    def get_file_type(self) -> Optional[str]:
        return self._str("type")

    def get_update_url(self) -> Optional[str]:
        return self._str("update_url")
