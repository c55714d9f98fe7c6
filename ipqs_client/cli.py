#!/usr/bin/env python3
"""
IPQualityScore client - admin CLI entry point
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Optional

from .client import Client
from .config import ClientConfig
from .errors import ApiError, ConfigurationError
from .logging import setup_logging
from .responses import (
    BaseResponse,
    CountryList,
    CreditUsage,
    EmailValidation,
    EntryList,
    IPReputation,
    LeakCheck,
    PhoneValidation,
    RequestList,
    URLScan,
)
from .responses.lists import page_of
from .validation import LEAK_TYPES, REQUEST_LIST_TYPES


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ipqs", description="Query the IPQualityScore fraud detection API"
    )
    parser.add_argument(
        "--json", "-j", action="store_true", help="Print the raw API response as JSON"
    )
    parser.add_argument(
        "--strictness", type=int, default=None, help="Scoring strictness 0-3 (default: env or 0)"
    )
    parser.add_argument(
        "--cache",
        nargs="?",
        const="default",
        default=None,
        help="Use the sqlite cache (optionally provide path). If set without value, uses default path.",
    )
    parser.add_argument("--cache-ttl", default=None, help="Cache TTL (e.g. 3600, 10m, 24h, 7d)")
    parser.add_argument("--no-cache", action="store_true", help="Disable response caching")
    parser.add_argument("--timeout", "-t", type=float, default=None, help="HTTP timeout in seconds")
    parser.add_argument("--log-level", default="WARNING", help="Log level (default: WARNING)")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("ip", help="IP address reputation")
    p.add_argument("ip")

    p = sub.add_parser("email", help="Email validation")
    p.add_argument("email")

    p = sub.add_parser("phone", help="Phone number validation")
    p.add_argument("phone")
    p.add_argument("--country", action="append", help="Preferred country code (repeatable)")

    p = sub.add_parser("leak", help="Dark web leak lookup")
    p.add_argument("value")
    p.add_argument("--type", dest="leak_type", choices=LEAK_TYPES, default="email")

    p = sub.add_parser("url", help="Malicious URL scan")
    p.add_argument("url")

    sub.add_parser("credits", help="Account credit usage")

    p = sub.add_parser("countries", help="Supported country list")
    p.add_argument("--raw", action="store_true", help="Print the plain text listing")

    for list_name in ("allowlist", "blocklist"):
        p = sub.add_parser(list_name, help=f"Manage the {list_name}")
        actions = p.add_subparsers(dest="action", required=True)
        actions.add_parser("list", help="Show entries")
        for action in ("add", "remove"):
            a = actions.add_parser(action, help=f"{action.capitalize()} an entry")
            a.add_argument("value")
            a.add_argument("--type", dest="entry_type", required=True, help="proxy, email, url, phone, ...")
            a.add_argument("--value-type", required=True, help="ip, cidr, isp, deviceid, email, ...")
            if action == "add":
                a.add_argument("--reason", default=None)

    p = sub.add_parser("requests", help="Request history")
    p.add_argument("--type", dest="request_type", choices=REQUEST_LIST_TYPES, default="proxy")
    p.add_argument("--start-date", default=None, help="YYYY-MM-DD (default: 30 days ago)")
    p.add_argument("--stop-date", default=None, help="YYYY-MM-DD (default: today)")
    p.add_argument("--page", type=int, default=None)

    p = sub.add_parser("report", help="Report fraud")
    p.add_argument("--ip", default=None)
    p.add_argument("--email", default=None)
    p.add_argument("--phone", default=None)
    p.add_argument("--country", default=None, help="Required with --phone")
    p.add_argument("--request-id", default=None)

    p = sub.add_parser(
        "clear-cache",
        help="Remove cached responses from the sqlite cache (--cache PATH, IPQS_CACHE_PATH or the default path)",
    )
    p.add_argument("identifier", nargs="?", default=None)

    return parser


def make_client(args: argparse.Namespace) -> Client:
    """Build a client from IPQS_* settings, with command line overrides."""
    from .cache import default_cache_path, parse_ttl

    config = ClientConfig.from_env()
    overrides: dict[str, Any] = {}
    if args.strictness is not None:
        overrides["strictness"] = args.strictness
    if args.timeout is not None:
        overrides["timeout"] = args.timeout
    if args.cache:
        overrides["cache_path"] = default_cache_path() if args.cache == "default" else args.cache
    if args.cache_ttl:
        try:
            overrides["cache_ttl_seconds"] = parse_ttl(args.cache_ttl)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
    if args.command == "clear-cache" and not (overrides.get("cache_path") or config.cache_path):
        # Only the sqlite store outlives the process.
        overrides["cache_path"] = default_cache_path()
    if args.no_cache:
        overrides["cache_enabled"] = False

    return Client.from_config(config.with_overrides(**overrides))


def run_command(client: Client, args: argparse.Namespace) -> Any:
    cmd = args.command
    if cmd == "ip":
        return client.check_ip(args.ip)
    if cmd == "email":
        return client.validate_email(args.email)
    if cmd == "phone":
        extra = {"country": args.country} if args.country else None
        return client.validate_phone(args.phone, extra)
    if cmd == "leak":
        return client.check_leaked_data(args.value, args.leak_type)
    if cmd == "url":
        return client.scan_url(args.url)
    if cmd == "credits":
        return client.get_credit_usage()
    if cmd == "countries":
        return client.get_country_list(raw=args.raw)
    if cmd in ("allowlist", "blocklist"):
        return _run_list_command(client, cmd, args)
    if cmd == "requests":
        filters = {
            "start_date": args.start_date,
            "stop_date": args.stop_date,
            "page": args.page,
        }
        return client.get_request_list(
            args.request_type, {k: v for k, v in filters.items() if v is not None}
        )
    if cmd == "report":
        data = {
            "ip": args.ip,
            "email": args.email,
            "phone": args.phone,
            "country": args.country,
            "request_id": args.request_id,
        }
        return client.report_fraud({k: v for k, v in data.items() if v is not None})
    if cmd == "clear-cache":
        return client.clear_cache(args.identifier)
    raise ValueError(f"Unknown command: {cmd}")


def _run_list_command(client: Client, list_name: str, args: argparse.Namespace) -> Any:
    actions = {
        "allowlist": (
            client.get_allowlist_entries,
            client.create_allowlist_entry,
            client.delete_allowlist_entry,
        ),
        "blocklist": (
            client.get_blocklist_entries,
            client.create_blocklist_entry,
            client.delete_blocklist_entry,
        ),
    }
    list_entries, create, delete = actions[list_name]

    if args.action == "list":
        return list_entries()
    if args.action == "add":
        return create(args.value, args.entry_type, args.value_type, args.reason)
    return delete(args.value, args.entry_type, args.value_type)


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level)

    try:
        client = make_client(args)
    except ConfigurationError as e:
        print(f"configuration_error: {e}", file=sys.stderr)
        raise SystemExit(2)

    result = run_command(client, args)

    if isinstance(result, ApiError):
        print(str(result), file=sys.stderr)
        raise SystemExit(1)

    if args.json:
        print(json.dumps(to_jsonable(result), indent=2, ensure_ascii=False))
    else:
        print_summary(result)

    raise SystemExit(0)


def to_jsonable(result: Any) -> Any:
    if isinstance(result, BaseResponse):
        return result.get_raw_data()
    if isinstance(result, bool):
        return {"success": result}
    return result


def _yes_no(value: Optional[bool]) -> str:
    if value is None:
        return "unknown"
    return "yes" if value else "no"


def print_summary(result: Any) -> None:
    """Print a short human-readable summary of a response."""
    if isinstance(result, str):
        print(result)
        return
    if isinstance(result, bool):
        print("Cache cleared" if result else "Nothing to clear")
        return

    if isinstance(result, IPReputation):
        print(f"Fraud score: {result.get_fraud_score()} ({result.get_risk_level()})")
        print(f"Location:    {result.get_city()}, {result.get_country_code()}")
        print(f"ISP:         {result.get_isp()}")
        print(f"Proxy: {_yes_no(result.is_proxy())}  VPN: {_yes_no(result.is_vpn())}  "
              f"TOR: {_yes_no(result.is_tor())}")
    elif isinstance(result, EmailValidation):
        print(f"Valid:       {_yes_no(result.is_valid())}")
        print(f"Fraud score: {result.get_fraud_score()}")
        print(f"Disposable:  {_yes_no(result.is_disposable())}")
        print(f"Deliverability: {result.get_deliverability()}")
    elif isinstance(result, PhoneValidation):
        print(f"Valid:       {_yes_no(result.is_valid())}")
        print(f"Fraud score: {result.get_fraud_score()}")
        print(f"Carrier:     {result.get_carrier()}")
        print(f"Line type:   {result.get_line_type()}")
    elif isinstance(result, LeakCheck):
        print(f"Found in leaks: {_yes_no(result.is_exposed())}")
        for source in result.get_sources():
            print(f"  - {source}")
    elif isinstance(result, URLScan):
        print(f"Unsafe:     {_yes_no(result.is_unsafe())}")
        print(f"Risk score: {result.get_risk_score()}")
        print(f"Domain:     {result.get_domain()}")
    elif isinstance(result, CreditUsage):
        print(f"Credits:   {result.get_credits()}")
        print(f"Usage:     {result.get_usage()} ({result.get_usage_percentage()}%)")
        print(f"Remaining: {result.get_remaining_credits()}")
    elif isinstance(result, CountryList):
        print(f"{result.count()} countries")
        for code, name in sorted(result.get_countries().items()):
            print(f"  {code}  {name}")
    elif isinstance(result, EntryList):
        entries = result.get_entries()
        print(f"{len(entries)} entries")
        for entry in entries:
            print(f"  {entry.get('value')}  [{entry.get('type')}/{entry.get('value_type')}]"
                  f"  {entry.get('reason') or ''}".rstrip())
        if not entries and result.get_message():
            print(result.get_message())
    elif isinstance(result, RequestList):
        page = page_of(result)
        print(f"Page {page['current_page']}/{page['total_pages']}, "
              f"{page['total_records']} records")
        for request in result.get_requests():
            print(f"  {request.get('request_id')}  {request.get('type', '')}  "
                  f"{request.get('fraud_score', '')}".rstrip())
    elif isinstance(result, BaseResponse):
        print(result.get_message() or ("OK" if result.is_success() else "Failed"))
    else:
        print(result)


if __name__ == "__main__":
    main()
