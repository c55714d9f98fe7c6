"""List-shaped responses: allow/block list entries, request history, countries."""

from __future__ import annotations

from typing import Any, Optional

from .base import BaseResponse, to_int


class ListResponse(BaseResponse):
    """Response whose payload is a list of entry mappings under ITEMS_KEY."""

    ITEMS_KEY = "data"

    def items(self) -> list[dict[str, Any]]:
        return [item for item in self._list(self.ITEMS_KEY) if isinstance(item, dict)]

    def __len__(self) -> int:
        return len(self.items())

    def filter_by(self, field: str, value: Any) -> list[dict[str, Any]]:
        return [item for item in self.items() if item.get(field) == value]

    def find_by(self, field: str, value: Any) -> Optional[dict[str, Any]]:
        for item in self.items():
            if item.get(field) == value:
                return item
        return None

    # Pagination

    def get_current_page(self) -> int:
        page = self._int("current_page")
        return 1 if page is None else page

    def get_total_pages(self) -> int:
        return self._int("total_pages") or 0

    def get_total_records(self) -> int:
        return self._int("total_records") or 0

    def has_next_page(self) -> bool:
        return self.get_current_page() < self.get_total_pages()


class EntryList(ListResponse):
    """Allowlist/blocklist entries: value, type, value_type, reason, created."""

    def get_entries(self) -> list[dict[str, Any]]:
        return self.items()

    def get_entries_by_type(self, type_: str) -> list[dict[str, Any]]:
        return self.filter_by("type", type_)

    def get_entries_by_value_type(self, value_type: str) -> list[dict[str, Any]]:
        return self.filter_by("value_type", value_type)

    def find_entry(self, value: str) -> Optional[dict[str, Any]]:
        return self.find_by("value", value)


class RequestList(ListResponse):
    ITEMS_KEY = "requests"

    def get_requests(self) -> list[dict[str, Any]]:
        return self.items()

    def get_request_count(self) -> int:
        return self._int("request_count") or 0

    def get_max_records_per_page(self) -> int:
        per_page = self._int("max_records_per_page")
        return 25 if per_page is None else per_page

    def get_requests_by_type(self, type_: str) -> list[dict[str, Any]]:
        return self.filter_by("type", type_)

    def get_request_by_id(self, request_id: str) -> Optional[dict[str, Any]]:
        return self.find_by("request_id", request_id)


class CountryList(ListResponse):
    """Country code -> name mapping, also viewable as {code, name} entries."""

    ITEMS_KEY = "countries"

    def get_countries(self) -> dict[str, str]:
        countries = self._data.get(self.ITEMS_KEY)
        if not isinstance(countries, dict):
            return {}
        return {str(code): str(name) for code, name in countries.items()}

    def items(self) -> list[dict[str, Any]]:
        return [{"code": code, "name": name} for code, name in self.get_countries().items()]

    def get_country_name(self, code: str) -> Optional[str]:
        return self.get_countries().get(code.upper())

    def get_country_code(self, name: str) -> Optional[str]:
        entry = self.find_by("name", name)
        return entry["code"] if entry else None

    def has_country_code(self, code: str) -> bool:
        return code.upper() in self.get_countries()

    def has_country_name(self, name: str) -> bool:
        return self.find_by("name", name) is not None

    def get_country_codes(self) -> list[str]:
        return list(self.get_countries())

    def get_country_names(self) -> list[str]:
        return list(self.get_countries().values())

    def count(self) -> int:
        return len(self.get_countries())


def page_of(response: ListResponse) -> dict[str, Optional[int]]:
    """Pagination summary suitable for JSON output."""
    return {
        "current_page": response.get_current_page(),
        "total_pages": response.get_total_pages(),
        "total_records": response.get_total_records(),
        "per_page": to_int(response.get("max_records_per_page")),
    }
