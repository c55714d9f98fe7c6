"""IPQualityScore client facade.

One method per API operation. Each call validates its input, consults the
cache, performs at most one HTTP request and wraps the decoded mapping in the
matching response model. Failures are returned as `ApiError` values.

Scoring options (strictness, allow_public_access_points, lighter_penalties)
are sticky: once set they are sent with every following request made by the
instance until changed again.
"""

from __future__ import annotations

import hashlib
import os
import re
from collections.abc import Mapping
from datetime import date, timedelta
from typing import Any, Callable, Optional, TypeVar, Union

import structlog

from .cache import CacheStore, MemoryCache, SqliteCache, make_cache_key, params_digest
from .config import DEFAULT_CACHE_TTL, ClientConfig, clamp_strictness
from .errors import ApiError
from .executor import DEFAULT_TIMEOUT, FileUpload, RequestExecutor
from .responses import (
    BaseResponse,
    CountryList,
    CreditUsage,
    EmailValidation,
    EntryList,
    FraudReport,
    IPReputation,
    LeakCheck,
    MalwareCheck,
    PhoneValidation,
    RequestList,
    Transaction,
    URLScan,
)
from .transaction import TransactionBuilder
from .validation import (
    LEAK_TYPES,
    REQUEST_LIST_TYPES,
    is_valid_country_code,
    is_valid_date,
    is_valid_email,
    is_valid_ip,
    is_valid_phone,
    is_valid_sha256,
    is_valid_url,
    validate_list_entry,
    validate_list_params,
)

logger = structlog.get_logger()

R = TypeVar("R", bound=BaseResponse)

# Volatile data (credit usage, request history) is never kept longer than this.
VOLATILE_TTL = 300
# Country list rarely changes.
COUNTRY_LIST_TTL = 86400
MAX_SCAN_FILE_BYTES = 100 * 1024 * 1024
REQUEST_LIST_DEFAULT_DAYS = 30

_NON_DIGITS = re.compile(r"[^0-9]")


def _file_digest(path: str) -> str:
    h = hashlib.sha256()
    with open(path, "rb") as fh:
        for chunk in iter(lambda: fh.read(1024 * 1024), b""):
            h.update(chunk)
    return h.hexdigest()


class Client:
    def __init__(
        self,
        api_key: str,
        enable_cache: bool = True,
        cache_expiration: int = DEFAULT_CACHE_TTL,
        *,
        cache: Optional[CacheStore] = None,
        executor: Optional[RequestExecutor] = None,
        user_agent: str = "",
        user_language: str = "",
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.api_key = api_key
        self.enable_cache = enable_cache
        self.cache_expiration = cache_expiration
        self.cache = cache if cache is not None else MemoryCache()
        self.executor = executor or RequestExecutor(api_key=api_key, timeout=timeout)
        self.user_agent = user_agent
        self.user_language = user_language

        self.strictness = 0
        self.allow_public_access_points = False
        self.lighter_penalties = False

    @classmethod
    def from_config(cls, config: ClientConfig) -> Client:
        cache: CacheStore = SqliteCache(config.cache_path) if config.cache_path else MemoryCache()
        client = cls(
            config.api_key,
            enable_cache=config.cache_enabled,
            cache_expiration=config.cache_ttl_seconds,
            cache=cache,
            user_agent=config.user_agent,
            user_language=config.user_language,
            timeout=config.timeout,
        )
        client.set_strictness(config.strictness)
        client.set_allow_public_access_points(config.allow_public_access_points)
        client.set_lighter_penalties(config.lighter_penalties)
        return client

    # Scoring options and cache policy

    def set_strictness(self, strictness: int) -> None:
        """Level 0-3; out of range values are clamped."""
        self.strictness = clamp_strictness(strictness)

    def set_allow_public_access_points(self, allow: bool) -> None:
        self.allow_public_access_points = bool(allow)

    def set_lighter_penalties(self, use_lighter: bool) -> None:
        self.lighter_penalties = bool(use_lighter)

    def set_cache_enabled(self, enabled: bool) -> None:
        self.enable_cache = bool(enabled)

    def set_cache_expiration(self, seconds: int) -> None:
        self.cache_expiration = max(0, int(seconds))

    def common_params(self) -> dict[str, Any]:
        return {
            "strictness": self.strictness,
            "user_agent": self.user_agent,
            "user_language": self.user_language,
            "allow_public_access_points": self.allow_public_access_points,
            "lighter_penalties": self.lighter_penalties,
            "fast": False,
        }

    def _scoring_digest(self, params: Optional[Mapping[str, Any]]) -> str:
        # Scoring options change the answer, so they are part of the key.
        keyed = {
            "strictness": self.strictness,
            "allow_public_access_points": self.allow_public_access_points,
            "lighter_penalties": self.lighter_penalties,
        }
        keyed.update(params or {})
        return params_digest(keyed)

    # Cache helpers

    def get_cache_key(self, identifier: str) -> str:
        return make_cache_key(identifier, self.api_key)

    def _cache_get(self, identifier: str) -> Optional[Any]:
        if not self.enable_cache:
            return None
        value = self.cache.get(self.get_cache_key(identifier))
        if value is not None:
            logger.debug("cache hit", key=identifier.split("_", 1)[0])
        return value

    def _cache_set(self, identifier: str, value: Any, ttl: int) -> None:
        if self.enable_cache:
            self.cache.set(self.get_cache_key(identifier), value, ttl)

    def clear_cache(self, identifier: Optional[str] = None) -> bool:
        """Clear one cached identifier, or every ipqs cache entry."""
        if identifier is not None:
            return self.cache.delete(self.get_cache_key(identifier))
        removed = self.cache.delete_by_prefix("ipqs_")
        logger.info("cache cleared", entries=removed)
        return True

    def _call(
        self,
        operation: str,
        params: dict[str, Any],
        model: Callable[[dict[str, Any]], R],
        *,
        identifier: Optional[str] = None,
        ttl: Optional[int] = None,
    ) -> Union[R, ApiError]:
        if identifier is not None:
            cached = self._cache_get(identifier)
            if cached is not None:
                return model(cached)

        result = self.executor.execute(operation, params, common_params=self.common_params())
        if isinstance(result, ApiError):
            return result

        if identifier is not None:
            self._cache_set(identifier, result, self.cache_expiration if ttl is None else ttl)
        return model(result)

    # Core checks

    def check_ip(
        self, ip: str, additional_params: Optional[Mapping[str, Any]] = None
    ) -> Union[IPReputation, ApiError]:
        if not is_valid_ip(ip):
            return ApiError("invalid_ip", f"Invalid IP address: {ip}")

        extra = dict(additional_params or {})
        return self._call(
            "ip",
            {**extra, "ip": ip},
            IPReputation,
            identifier=f"ip_{ip}{self._scoring_digest(extra)}",
        )

    def validate_email(
        self, email: str, additional_params: Optional[Mapping[str, Any]] = None
    ) -> Union[EmailValidation, ApiError]:
        if not is_valid_email(email):
            return ApiError("invalid_email", f"Invalid email format: {email}")

        extra = dict(additional_params or {})
        return self._call(
            "email",
            {**extra, "email": email},
            EmailValidation,
            identifier=f"email_{email}{self._scoring_digest(extra)}",
        )

    def validate_phone(
        self, phone: str, additional_params: Optional[Mapping[str, Any]] = None
    ) -> Union[PhoneValidation, ApiError]:
        """Validate a phone number.

        additional_params may carry `country` (a list of preferred country
        codes, e.g. ["US", "GB"]) and a phone specific `strictness`.
        """
        if not phone or len(phone) < 10:
            return ApiError("invalid_phone", "Phone number must be at least 10 digits long")

        digits = _NON_DIGITS.sub("", phone)
        extra = dict(additional_params or {})
        return self._call(
            "phone",
            {**extra, "phone": digits},
            PhoneValidation,
            identifier=f"phone_{digits}{self._scoring_digest(extra)}",
        )

    def check_leaked_data(
        self,
        value: str,
        type_: str = "email",
        additional_params: Optional[Mapping[str, Any]] = None,
    ) -> Union[LeakCheck, ApiError]:
        """Look up an email, password or username in dark web breach data."""
        if type_ not in LEAK_TYPES:
            return ApiError(
                "invalid_type",
                f"Invalid leak check type. Must be one of: {', '.join(LEAK_TYPES)}",
            )
        if type_ == "email":
            if not is_valid_email(value):
                return ApiError("invalid_email", "Invalid email format")
        elif not value:
            return ApiError(f"invalid_{type_}", f"{type_} cannot be empty")

        extra = dict(additional_params or {})
        return self._call(
            "leaked",
            {**extra, "type": type_, "value": value},
            LeakCheck,
            identifier=f"leak_{type_}_{value}{self._scoring_digest(extra)}",
        )

    # Malware and URL scanning

    def scan_url(
        self, url: str, additional_params: Optional[Mapping[str, Any]] = None
    ) -> Union[URLScan, ApiError]:
        if not is_valid_url(url):
            return ApiError("invalid_url", f"Invalid URL format: {url}")

        extra = dict(additional_params or {})
        return self._call(
            "url",
            {**extra, "url": url},
            URLScan,
            identifier=f"url_{url}{self._scoring_digest(extra)}",
        )

    def scan_file_for_malware(
        self, file_path: str, additional_params: Optional[Mapping[str, Any]] = None
    ) -> Union[MalwareCheck, ApiError]:
        """Upload a local file (max 100 MiB) to the malware scanner."""
        if not os.path.isfile(file_path) or not os.access(file_path, os.R_OK):
            return ApiError("invalid_file", f"File not found or not readable: {file_path}")
        if os.path.getsize(file_path) > MAX_SCAN_FILE_BYTES:
            return ApiError("file_too_large", "File size exceeds 100MB limit")

        extra = dict(additional_params or {})
        return self._call(
            "malware/scan",
            {**extra, "file": FileUpload(file_path)},
            MalwareCheck,
            identifier=f"malware_file_{_file_digest(file_path)}{params_digest(extra)}",
        )

    def lookup_malware_hash(
        self, file_hash: str, additional_params: Optional[Mapping[str, Any]] = None
    ) -> Union[MalwareCheck, ApiError]:
        """Check whether a SHA256 file hash is known to the malware database."""
        if not is_valid_sha256(file_hash):
            return ApiError("invalid_hash", "Invalid SHA256 hash format")

        extra = dict(additional_params or {})
        return self._call(
            "malware/lookup",
            {"hash": file_hash, **extra},
            MalwareCheck,
            identifier=f"malware_hash_{file_hash}{params_digest(extra)}",
        )

    def scan_remote_file(
        self, url: str, additional_params: Optional[Mapping[str, Any]] = None
    ) -> Union[MalwareCheck, ApiError]:
        if not is_valid_url(url):
            return ApiError("invalid_url", f"Invalid URL format: {url}")

        extra = dict(additional_params or {})
        url_digest = hashlib.md5(url.encode("utf-8")).hexdigest()
        return self._call(
            "malware/scan",
            {"url": url, **extra},
            MalwareCheck,
            identifier=f"malware_url_{url_digest}{params_digest(extra)}",
        )

    # Transactions

    def validate_transaction(
        self, transaction: Union[TransactionBuilder, Mapping[str, Any]]
    ) -> Union[Transaction, ApiError]:
        """Score a transaction. Requires at least `ip_address`; never cached."""
        if isinstance(transaction, TransactionBuilder):
            payload = transaction.build()
        else:
            payload = dict(transaction)

        if payload.get("ip_address") is None:
            return ApiError("missing_field", "Missing required field: ip_address")

        return self._call("transaction", payload, Transaction)

    # Account

    def get_credit_usage(
        self, additional_params: Optional[Mapping[str, Any]] = None
    ) -> Union[CreditUsage, ApiError]:
        extra = dict(additional_params or {})
        return self._call(
            "account",
            extra,
            CreditUsage,
            identifier=f"credit_usage_{params_digest(extra)}",
            ttl=min(VOLATILE_TTL, self.cache_expiration),
        )

    def get_request_list(
        self, type_: str, additional_params: Optional[Mapping[str, Any]] = None
    ) -> Union[RequestList, ApiError]:
        """List previous API requests of one type.

        additional_params: start_date / stop_date (YYYY-MM-DD, default last 30
        days), ip_address, device_id, page, plus any custom tracking variables.
        """
        if type_ not in REQUEST_LIST_TYPES:
            return ApiError(
                "invalid_type",
                f"Invalid request type. Must be one of: {', '.join(REQUEST_LIST_TYPES)}",
            )

        filters = dict(additional_params or {})
        today = date.today()
        filters.setdefault("start_date", (today - timedelta(days=REQUEST_LIST_DEFAULT_DAYS)).isoformat())
        filters.setdefault("stop_date", today.isoformat())

        for date_field in ("start_date", "stop_date"):
            if not is_valid_date(str(filters[date_field])):
                return ApiError(
                    "invalid_date",
                    f"Invalid date format for {date_field}. Use YYYY-MM-DD",
                )

        ip_address = filters.get("ip_address")
        if ip_address is not None and not is_valid_ip(str(ip_address)):
            return ApiError("invalid_ip", f"Invalid IP address: {ip_address}")

        return self._call(
            "requests",
            {"type": type_, **filters},
            RequestList,
            identifier=f"request_list_{type_}_{params_digest(filters)}",
            ttl=min(VOLATILE_TTL, self.cache_expiration),
        )

    def get_country_list(self, raw: bool = False) -> Union[CountryList, str, ApiError]:
        """Country codes and names; raw=True returns the plain text listing."""
        identifier = "countries_" + ("raw" if raw else "json")

        cached = self._cache_get(identifier)
        if cached is not None:
            return cached if raw else CountryList(cached)

        result = self.executor.fetch_countries(raw)
        if isinstance(result, ApiError):
            return result

        self._cache_set(identifier, result, COUNTRY_LIST_TTL)
        if raw:
            return result
        return CountryList(result)

    # Fraud reporting

    def report_fraud(
        self, data: Mapping[str, Any], additional_params: Optional[Mapping[str, Any]] = None
    ) -> Union[FraudReport, ApiError]:
        """Report an ip, email, phone (with country) or request_id as fraudulent."""
        if not any(data.get(name) for name in ("ip", "email", "request_id", "phone")):
            return ApiError(
                "missing_parameter",
                "Must provide at least one of: ip, email, request_id, or phone",
            )

        ip = data.get("ip")
        if ip is not None and not is_valid_ip(str(ip)):
            return ApiError("invalid_ip", f"Invalid IP address: {ip}")

        email = data.get("email")
        if email is not None and not is_valid_email(str(email)):
            return ApiError("invalid_email", f"Invalid email format: {email}")

        phone = data.get("phone")
        if phone is not None:
            country = str(data.get("country") or "")
            if not country:
                return ApiError(
                    "missing_country", "Country is required when reporting a phone number"
                )
            if not is_valid_phone(str(phone)):
                return ApiError("invalid_phone", f"Invalid phone number format: {phone}")
            if not is_valid_country_code(country):
                return ApiError("invalid_country", f"Invalid country code: {country}")

        params = {**data, **(additional_params or {})}
        return self._call("report", params, FraudReport)

    def report_ip(
        self, ip: str, additional_params: Optional[Mapping[str, Any]] = None
    ) -> Union[FraudReport, ApiError]:
        return self.report_fraud({"ip": ip}, additional_params)

    def report_email(
        self, email: str, additional_params: Optional[Mapping[str, Any]] = None
    ) -> Union[FraudReport, ApiError]:
        return self.report_fraud({"email": email}, additional_params)

    def report_phone(
        self, phone: str, country: str, additional_params: Optional[Mapping[str, Any]] = None
    ) -> Union[FraudReport, ApiError]:
        return self.report_fraud({"phone": phone, "country": country}, additional_params)

    def report_request(
        self, request_id: str, additional_params: Optional[Mapping[str, Any]] = None
    ) -> Union[FraudReport, ApiError]:
        return self.report_fraud({"request_id": request_id}, additional_params)

    # Allowlist / blocklist

    def get_allowlist_entries(self) -> Union[EntryList, ApiError]:
        return self._call("allowlist/list", {}, EntryList)

    def create_allowlist_entry(
        self, value: str, type_: str, value_type: str, reason: Optional[str] = None
    ) -> Union[EntryList, ApiError]:
        return self._create_entry("allowlist", value, type_, value_type, reason)

    def delete_allowlist_entry(
        self, value: str, type_: str, value_type: str
    ) -> Union[EntryList, ApiError]:
        return self._delete_entry("allowlist", value, type_, value_type)

    def get_blocklist_entries(self) -> Union[EntryList, ApiError]:
        return self._call("blocklist/list", {}, EntryList)

    def create_blocklist_entry(
        self, value: str, type_: str, value_type: str, reason: Optional[str] = None
    ) -> Union[EntryList, ApiError]:
        return self._create_entry("blocklist", value, type_, value_type, reason)

    def delete_blocklist_entry(
        self, value: str, type_: str, value_type: str
    ) -> Union[EntryList, ApiError]:
        return self._delete_entry("blocklist", value, type_, value_type)

    def _create_entry(
        self, list_name: str, value: str, type_: str, value_type: str, reason: Optional[str]
    ) -> Union[EntryList, ApiError]:
        err = validate_list_entry(value, type_, value_type, list_name)
        if err:
            return err

        params: dict[str, Any] = {"value": value, "type": type_, "value_type": value_type}
        if reason is not None:
            params["reason"] = reason
        return self._call(f"{list_name}/create", params, EntryList)

    def _delete_entry(
        self, list_name: str, value: str, type_: str, value_type: str
    ) -> Union[EntryList, ApiError]:
        err = validate_list_params(type_, value_type, list_name)
        if err:
            return err

        params = {"value": value, "type": type_, "value_type": value_type}
        return self._call(f"{list_name}/delete", params, EntryList)
