"""Phone validation response.

The phone endpoint reports unknown values as the string "N/A" rather than
omitting them; string accessors map that to None.
"""

from __future__ import annotations

from typing import Any, Optional

from .base import BaseResponse


class PhoneValidation(BaseResponse):
    RISK_FACTORS = (
        ("VOIP", "VOIP"),
        ("prepaid", "Prepaid"),
        ("risky", "Risky"),
        ("recent_abuse", "Recent Abuse"),
        ("leaked", "Found in Data Leaks"),
        ("spammer", "Spammer"),
        ("do_not_call", "Do Not Call"),
    )

    def is_valid(self) -> bool:
        return self._bool("valid")

    def get_fraud_score(self) -> Optional[int]:
        return self._int("fraud_score")

    def get_formatted(self) -> Optional[str]:
        return self._str("formatted", na_is_none=True)

    def get_local_format(self) -> Optional[str]:
        return self._str("local_format", na_is_none=True)

    def has_recent_abuse(self) -> Optional[bool]:
        return self._opt_bool("recent_abuse")

    def is_voip(self) -> Optional[bool]:
        return self._opt_bool("VOIP")

    def is_prepaid(self) -> Optional[bool]:
        return self._opt_bool("prepaid")

    def is_risky(self) -> Optional[bool]:
        return self._opt_bool("risky")

    def is_active(self) -> Optional[bool]:
        return self._opt_bool("active")

    def is_do_not_call(self) -> Optional[bool]:
        return self._opt_bool("do_not_call")

    def is_leaked(self) -> Optional[bool]:
        return self._opt_bool("leaked")

    def is_spammer(self) -> Optional[bool]:
        return self._opt_bool("spammer")

    def get_active_status(self) -> Optional[str]:
        return self._str("active_status", na_is_none=True)

    def get_user_activity(self) -> Optional[str]:
        return self._str("user_activity", na_is_none=True)

    def get_name(self) -> Optional[str]:
        return self._str("name", na_is_none=True)

    def get_carrier(self) -> Optional[str]:
        return self._str("carrier", na_is_none=True)

    def get_line_type(self) -> Optional[str]:
        return self._str("line_type", na_is_none=True)

    def get_country(self) -> Optional[str]:
        return self._str("country", na_is_none=True)

    def get_region(self) -> Optional[str]:
        return self._str("region", na_is_none=True)

    def get_city(self) -> Optional[str]:
        return self._str("city", na_is_none=True)

    def get_timezone(self) -> Optional[str]:
        return self._str("timezone", na_is_none=True)

    def get_zip_code(self) -> Optional[str]:
        return self._str("zip_code", na_is_none=True)

    def has_accurate_country_code(self) -> bool:
        return self._bool("accurate_country_code")

    def get_dialing_code(self) -> Optional[int]:
        return self._int("dialing_code")

    def get_mnc(self) -> Optional[str]:
        return self._str("mnc", na_is_none=True)

    def get_mcc(self) -> Optional[str]:
        return self._str("mcc", na_is_none=True)

    def get_associated_email_addresses(self) -> list[Any]:
        emails = self._nested("associated_email_addresses", "emails")
        return list(emails) if isinstance(emails, list) else []
