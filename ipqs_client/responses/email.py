"""Email validation response."""

from __future__ import annotations

from typing import Any, Optional

from .base import BaseResponse


class EmailValidation(BaseResponse):
    RISK_FACTORS = (
        ("disposable", "Disposable Email"),
        ("honeypot", "Honeypot"),
        ("catch_all", "Catch-all Domain"),
        ("generic", "Generic Email"),
        ("common", "Common Email Pattern"),
        ("suspect", "Suspicious"),
        ("recent_abuse", "Recent Abuse"),
        ("leaked", "Found in Data Leaks"),
        ("frequent_complainer", "Frequent Complainer"),
    )

    # (field key, label) for the numeric scores shown alongside the flags.
    SCORES = (
        ("smtp_score", "SMTP Score"),
        ("overall_score", "Overall Score"),
        ("fraud_score", "Fraud Score"),
    )

    def is_valid(self) -> bool:
        return self._bool("valid")

    def is_timed_out(self) -> bool:
        return self._bool("timed_out")

    def is_disposable(self) -> bool:
        return self._bool("disposable")

    def is_catch_all(self) -> bool:
        return self._bool("catch_all")

    def is_generic(self) -> bool:
        return self._bool("generic")

    def is_common(self) -> bool:
        return self._bool("common")

    def is_dns_valid(self) -> bool:
        return self._bool("dns_valid")

    def is_honeypot(self) -> bool:
        return self._bool("honeypot")

    def is_frequent_complainer(self) -> bool:
        return self._bool("frequent_complainer")

    def is_suspect(self) -> bool:
        return self._bool("suspect")

    def is_leaked(self) -> bool:
        return self._bool("leaked")

    def has_recent_abuse(self) -> bool:
        return self._bool("recent_abuse")

    def has_risky_tld(self) -> bool:
        return self._bool("risky_tld")

    def has_spf_record(self) -> bool:
        return self._bool("spf_record")

    def has_dmarc_record(self) -> bool:
        return self._bool("dmarc_record")

    def get_fraud_score(self) -> Optional[int]:
        return self._int("fraud_score")

    def get_smtp_score(self) -> Optional[int]:
        return self._int("smtp_score")

    def get_overall_score(self) -> Optional[int]:
        return self._int("overall_score")

    def scores(self) -> list[tuple[str, int]]:
        out: list[tuple[str, int]] = []
        for key, label in self.SCORES:
            score = self._int(key)
            if score is not None:
                out.append((label, score))
        return out

    def get_deliverability(self) -> Optional[str]:
        return self._str("deliverability")

    def get_first_name(self) -> Optional[str]:
        return self._str("first_name")

    def get_sanitized_email(self) -> Optional[str]:
        return self._str("sanitized_email")

    def get_suggested_domain(self) -> Optional[str]:
        value = self._str("suggested_domain")
        return None if value in (None, "", "N/A") else value

    def get_domain_velocity(self) -> Optional[str]:
        return self._str("domain_velocity")

    def get_domain_trust(self) -> Optional[str]:
        return self._str("domain_trust")

    def get_user_activity(self) -> Optional[str]:
        return self._str("user_activity")

    def get_spam_trap_score(self) -> Optional[str]:
        return self._str("spam_trap_score")

    def get_associated_names(self) -> list[Any]:
        names = self._nested("associated_names", "names")
        return list(names) if isinstance(names, list) else self._list("associated_names")

    def get_associated_phone_numbers(self) -> list[Any]:
        numbers = self._nested("associated_phone_numbers", "phone_numbers")
        return list(numbers) if isinstance(numbers, list) else self._list("associated_phone_numbers")

    def get_first_seen(self) -> Optional[dict[str, Any]]:
        return self._dict("first_seen")

    def get_domain_age(self) -> Optional[dict[str, Any]]:
        return self._dict("domain_age")

    def get_mx_records(self) -> list[Any]:
        return self._list("mx_records")

    def get_a_records(self) -> list[Any]:
        return self._list("a_records")
