"""Transaction payload builder.

Each `with_*` call returns a new builder; only allow-listed fields are copied
from the mappings passed in. `build()` returns the flat payload expected by
the transaction scoring endpoint, e.g.::

    payload = (
        TransactionBuilder()
        .with_ip_address("8.8.8.8")
        .with_billing({"first_name": "Ada", "country": "GB"})
        .with_payment({"amount": 12.5, "currency": "GBP", "card": {"bin": "411111"}})
        .build()
    )
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

USER_CONTEXT_FIELDS = (
    "user_agent",
    "language",
    "username",
    "user_email",
    "password_hash",
    "user_phone",
    "user_fingerprint",
    "account_creation_date",
    "last_login",
    "total_logins",
)

ADDRESS_FIELDS = (
    "first_name",
    "last_name",
    "company",
    "email",
    "phone",
    "address1",
    "address2",
    "city",
    "region",
    "country",
    "zipcode",
    "region_code",
    "country_code",
)

CARD_FIELDS = (
    "bin",
    "last4",
    "expiry_month",
    "expiry_year",
    "card_hash",
    "avs_code",
    "cvv_code",
)

PAYMENT_FIELDS = ("amount", "currency", "time", "gateway", "payment_method")

ORDER_FIELDS = (
    "order_id",
    "transaction_id",
    "affiliate_id",
    "subaffiliate_id",
    "source",
    "referrer",
    "product_sku",
    "product_name",
    "product_url",
    "product_category",
    "quantity",
    "has_digital_goods",
    "has_physical_goods",
    "shipping_method",
    "shipping_speed",
    "recurring_order",
    "recurring_order_count",
    "gift_order",
)

CUSTOMER_FIELDS = (
    "customer_id",
    "is_guest",
    "has_note",
    "loyalty_level",
    "total_orders",
    "total_spent",
    "first_order_date",
    "first_seen",
    "last_seen",
    "previous_purchases",
)

MERCHANT_FIELDS = (
    "store_id",
    "store_name",
    "store_domain",
    "business_name",
    "business_domain",
    "business_type",
    "business_id",
)

SCORING_FIELDS = ("strictness", "fast", "lighter_penalties", "allow_public_access_points")


def _pick(source: Mapping[str, Any], allowed: tuple[str, ...], prefix: str = "") -> dict[str, Any]:
    return {prefix + name: source[name] for name in allowed if source.get(name) is not None}


@dataclass(frozen=True)
class TransactionBuilder:
    fields: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def _with(self, updates: Mapping[str, Any]) -> TransactionBuilder:
        merged = dict(self.fields)
        merged.update(updates)
        return replace(self, fields=MappingProxyType(merged))

    def with_ip_address(self, ip_address: str) -> TransactionBuilder:
        return self._with({"ip_address": ip_address})

    def with_user_context(self, context: Mapping[str, Any]) -> TransactionBuilder:
        return self._with(_pick(context, USER_CONTEXT_FIELDS))

    def with_billing(self, billing: Mapping[str, Any]) -> TransactionBuilder:
        return self._with(_pick(billing, ADDRESS_FIELDS, "billing_"))

    def with_shipping(self, shipping: Mapping[str, Any]) -> TransactionBuilder:
        return self._with(_pick(shipping, ADDRESS_FIELDS, "shipping_"))

    def with_payment(self, payment: Mapping[str, Any]) -> TransactionBuilder:
        updates: dict[str, Any] = {}
        card = payment.get("card")
        if isinstance(card, Mapping):
            updates.update(_pick(card, CARD_FIELDS, "credit_card_"))
        updates.update(_pick(payment, PAYMENT_FIELDS, "transaction_"))
        return self._with(updates)

    def with_order(self, order: Mapping[str, Any]) -> TransactionBuilder:
        return self._with(_pick(order, ORDER_FIELDS))

    def with_customer(self, customer: Mapping[str, Any]) -> TransactionBuilder:
        return self._with(_pick(customer, CUSTOMER_FIELDS))

    def with_device_fingerprint(self, fingerprint: str) -> TransactionBuilder:
        return self._with({"device_fingerprint": fingerprint})

    def with_merchant(self, merchant: Mapping[str, Any]) -> TransactionBuilder:
        return self._with(_pick(merchant, MERCHANT_FIELDS))

    def with_scoring_options(self, options: Mapping[str, Any]) -> TransactionBuilder:
        return self._with(_pick(options, SCORING_FIELDS))

    def with_variables(self, variables: Mapping[str, Any]) -> TransactionBuilder:
        current = dict(self.fields.get("variables") or {})
        current.update(variables)
        return self._with({"variables": current})

    def build(self) -> dict[str, Any]:
        payload = dict(self.fields)
        if "variables" in payload:
            payload["variables"] = dict(payload["variables"])
        return payload
