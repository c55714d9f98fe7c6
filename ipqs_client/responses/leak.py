"""Dark web leak lookup response."""

from __future__ import annotations

from typing import Any, Optional

from .base import BaseResponse, to_int


class LeakCheck(BaseResponse):
    def is_exposed(self) -> bool:
        return self._bool("exposed")

    def get_sources(self) -> list[Any]:
        return self._list("source")

    def get_first_seen(self) -> Optional[dict[str, Any]]:
        return self._dict("first_seen")

    def get_first_seen_human(self) -> Optional[str]:
        value = self._nested("first_seen", "human")
        return None if value is None else str(value)

    def get_first_seen_timestamp(self) -> Optional[int]:
        return to_int(self._nested("first_seen", "timestamp"))

    def get_first_seen_iso(self) -> Optional[str]:
        value = self._nested("first_seen", "iso")
        return None if value is None else str(value)

    def has_plain_text_password(self) -> bool:
        return self._bool("plain_text_password")
