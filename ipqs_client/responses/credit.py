"""Account credit usage response."""

from __future__ import annotations

from typing import Optional

from .base import BaseResponse


class CreditUsage(BaseResponse):
    # (field key, label) for the per-service counters.
    SERVICE_USAGE = (
        ("proxy_usage", "Proxy Detection"),
        ("email_usage", "Email Validation"),
        ("phone_usage", "Phone Validation"),
        ("url_usage", "URL Scanning"),
        ("mobile_sdk_usage", "Mobile SDK"),
        ("fingerprint_usage", "Device Fingerprint"),
    )

    def get_credits(self) -> Optional[int]:
        return self._int("credits")

    def get_usage(self) -> Optional[int]:
        """Total usage for the current billing period."""
        return self._int("usage")

    def get_proxy_usage(self) -> Optional[int]:
        return self._int("proxy_usage")

    def get_email_usage(self) -> Optional[int]:
        return self._int("email_usage")

    def get_phone_usage(self) -> Optional[int]:
        return self._int("phone_usage")

    def get_url_usage(self) -> Optional[int]:
        return self._int("url_usage")

    def get_mobile_sdk_usage(self) -> Optional[int]:
        return self._int("mobile_sdk_usage")

    def get_fingerprint_usage(self) -> Optional[int]:
        return self._int("fingerprint_usage")

    def service_usage(self) -> list[tuple[str, int]]:
        out: list[tuple[str, int]] = []
        for key, label in self.SERVICE_USAGE:
            value = self._int(key)
            if value is not None:
                out.append((label, value))
        return out

    def get_remaining_credits(self) -> Optional[int]:
        credits, usage = self.get_credits(), self.get_usage()
        if credits is None or usage is None or credits == 0:
            return None
        return max(0, credits - usage)

    def get_usage_percentage(self) -> Optional[float]:
        """Percentage of credits used (0-100), two decimals."""
        credits, usage = self.get_credits(), self.get_usage()
        if credits is None or usage is None or credits == 0:
            return None
        return round(usage / credits * 100, 2)
