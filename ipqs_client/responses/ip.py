"""IP reputation (proxy detection) response."""

from __future__ import annotations

from typing import Any, Optional

from .base import BaseResponse

FREQUENT_ABUSE_SCORE = 90
HIGH_RISK_SCORE = 85
SUSPICIOUS_SCORE = 75


class IPReputation(BaseResponse):
    RISK_FACTORS = (
        ("proxy", "Proxy/VPN"),
        ("vpn", "VPN"),
        ("tor", "TOR"),
        ("is_crawler", "Crawler"),
        ("bot_status", "Bot"),
        ("active_vpn", "Active VPN"),
        ("active_tor", "Active TOR"),
        ("frequent_abuser", "Frequent Abuser"),
        ("security_scanner", "Security Scanner"),
        ("mobile", "Mobile Device"),
        ("recent_abuse", "Recent Abuse"),
        ("high_risk_attacks", "High Risk Attacks"),
    )

    def get_fraud_score(self) -> Optional[float]:
        """0-100; 75+ is suspicious and 90+ high risk."""
        return self._float("fraud_score")

    def is_proxy(self) -> bool:
        return self._bool("proxy")

    def is_vpn(self) -> bool:
        return self._bool("vpn")

    def is_tor(self) -> bool:
        return self._bool("tor")

    def is_active_vpn(self) -> bool:
        return self._bool("active_vpn")

    def is_active_tor(self) -> bool:
        return self._bool("active_tor")

    def is_crawler(self) -> bool:
        return self._bool("is_crawler")

    def is_bot(self) -> bool:
        return self._bool("bot_status")

    def is_mobile(self) -> bool:
        return self._bool("mobile")

    def has_recent_abuse(self) -> bool:
        return self._bool("recent_abuse")

    def get_abuse_velocity(self) -> Optional[str]:
        return self._str("abuse_velocity")

    # Enterprise data points

    def is_frequent_abuser(self) -> bool:
        return self._bool("frequent_abuser")

    def has_high_risk_attacks(self) -> bool:
        return self._bool("high_risk_attacks")

    def is_shared_connection(self) -> bool:
        return self._bool("shared_connection")

    def is_dynamic_connection(self) -> bool:
        return self._bool("dynamic_connection")

    def is_security_scanner(self) -> bool:
        return self._bool("security_scanner")

    def is_trusted_network(self) -> bool:
        return self._bool("trusted_network")

    # Network and location

    def get_host(self) -> Optional[str]:
        return self._str("host")

    def get_isp(self) -> Optional[str]:
        return self._str("ISP")

    def get_organization(self) -> Optional[str]:
        return self._str("organization")

    def get_asn(self) -> Optional[int]:
        return self._int("ASN")

    def get_connection_type(self) -> Optional[str]:
        return self._str("connection_type")

    def get_country_code(self) -> Optional[str]:
        return self._str("country_code")

    def get_region(self) -> Optional[str]:
        return self._str("region")

    def get_city(self) -> Optional[str]:
        return self._str("city")

    def get_zip_code(self) -> Optional[str]:
        return self._str("zip_code")

    def get_timezone(self) -> Optional[str]:
        return self._str("timezone")

    def get_latitude(self) -> Optional[float]:
        return self._float("latitude")

    def get_longitude(self) -> Optional[float]:
        return self._float("longitude")

    # Device details (populated when a user agent was sent)

    def get_operating_system(self) -> Optional[str]:
        return self._str("operating_system")

    def get_browser(self) -> Optional[str]:
        return self._str("browser")

    def get_device_brand(self) -> Optional[str]:
        return self._str("device_brand")

    def get_device_model(self) -> Optional[str]:
        return self._str("device_model")

    def get_transaction_details(self) -> Optional[dict[str, Any]]:
        return self._dict("transaction_details")

    def get_risk_level(self) -> str:
        score = self.get_fraud_score()
        if score is None:
            return "Unknown"
        if score >= FREQUENT_ABUSE_SCORE:
            return "Frequent Abuse"
        if score >= HIGH_RISK_SCORE:
            return "High Risk"
        if score >= SUSPICIOUS_SCORE:
            return "Suspicious"
        return "Low Risk"

    def is_high_risk(self) -> bool:
        score = self.get_fraud_score()
        return (
            (score is not None and score >= FREQUENT_ABUSE_SCORE)
            or self.has_high_risk_attacks()
            or (self.is_proxy() and self.has_recent_abuse())
        )
