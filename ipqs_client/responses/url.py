"""Malicious URL scanner response."""

from __future__ import annotations

from typing import Any, Optional

from .base import BaseResponse, to_int


class URLScan(BaseResponse):
    RISK_FACTORS = (
        ("unsafe", "Unsafe"),
        ("suspicious", "Suspicious"),
        ("phishing", "Phishing"),
        ("malware", "Malware"),
        ("spamming", "Spamming"),
        ("parking", "Parked Domain"),
        ("adult", "Adult Content"),
    )

    def is_unsafe(self) -> bool:
        return self._bool("unsafe")

    def is_suspicious(self) -> bool:
        return self._bool("suspicious")

    def is_phishing(self) -> bool:
        return self._bool("phishing")

    def is_malware(self) -> bool:
        return self._bool("malware")

    def is_parking(self) -> bool:
        return self._bool("parking")

    def is_spamming(self) -> bool:
        return self._bool("spamming")

    def is_adult(self) -> bool:
        return self._bool("adult")

    def is_dns_valid(self) -> bool:
        return self._bool("dns_valid")

    def get_risk_score(self) -> Optional[int]:
        return self._int("risk_score")

    def get_domain(self) -> Optional[str]:
        return self._str("domain")

    def get_ip_address(self) -> Optional[str]:
        return self._str("ip_address")

    def get_domain_age(self) -> Optional[int]:
        """Domain age in days."""
        return to_int(self._nested("domain_age", "days"))

    def get_domain_rank(self) -> Optional[int]:
        return self._int("domain_rank")

    def get_category(self) -> Optional[str]:
        return self._str("category")

    def get_server_details(self) -> Optional[dict[str, Any]]:
        return self._dict("server")

    def get_risk_factors(self) -> list[Any]:
        return self._list("risk_factors")

    def get_redirected_url(self) -> Optional[str]:
        return self._str("redirected_url")

    def get_final_url(self) -> Optional[str]:
        return self._str("final_url")

    def get_content_type(self) -> Optional[str]:
        return self._str("content_type")

    def get_status_code(self) -> Optional[int]:
        return self._int("status_code")
