"""Transaction scoring and fraud reporting responses."""

from __future__ import annotations

from typing import Any, Optional

from .base import BaseResponse


class Transaction(BaseResponse):
    RISK_FACTORS = (
        ("proxy", "Proxy/VPN"),
        ("high_risk", "High Risk"),
        ("risky_billing_address", "Risky Billing Address"),
        ("risky_shipping_address", "Risky Shipping Address"),
    )

    def get_fraud_score(self) -> Optional[int]:
        return self._int("fraud_score")

    def get_risk_score(self) -> Optional[int]:
        return self._int("risk_score")

    def get_payment_risk_score(self) -> Optional[int]:
        return self._int("payment_risk_score")

    def get_confidence_score(self) -> Optional[float]:
        return self._float("confidence_score")

    def get_status(self) -> Optional[str]:
        return self._str("status")

    def is_proxy(self) -> bool:
        return self._bool("proxy")

    def is_high_risk(self) -> bool:
        return self._bool("high_risk")

    def is_country_match(self) -> bool:
        return self._bool("country_match")

    def has_risky_billing_address(self) -> bool:
        return self._bool("risky_billing_address")

    def has_risky_shipping_address(self) -> bool:
        return self._bool("risky_shipping_address")

    def get_risk_factors(self) -> list[Any]:
        return self._list("risk_factors")

    def get_risk_factors_description(self) -> list[Any]:
        return self._list("risk_factors_description")

    def get_transaction_features(self) -> list[Any]:
        return self._list("transaction_features")

    def get_bin_details(self) -> Optional[dict[str, Any]]:
        return self._dict("bin_details")

    def get_transaction_details(self) -> Optional[dict[str, Any]]:
        return self._dict("transaction_details")


class FraudReport(BaseResponse):
    """Acknowledgement for a fraud report; only the common fields apply."""
