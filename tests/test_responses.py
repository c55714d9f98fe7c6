"""
Tests for response models.
"""

import unittest

from ipqs_client.responses import (
    CountryList,
    CreditUsage,
    EmailValidation,
    EntryList,
    IPReputation,
    LeakCheck,
    MalwareCheck,
    PhoneValidation,
    RequestList,
    Transaction,
    URLScan,
)
from ipqs_client.responses.base import BaseResponse, to_bool, to_float, to_int
from ipqs_client.responses.lists import page_of


class TestConverters(unittest.TestCase):
    def test_to_int(self):
        self.assertEqual(to_int("42"), 42)
        self.assertEqual(to_int(42.9), 42)
        self.assertIsNone(to_int(True))
        self.assertIsNone(to_int("abc"))
        self.assertIsNone(to_int(None))

    def test_to_float(self):
        self.assertEqual(to_float("1.5"), 1.5)
        self.assertIsNone(to_float(False))

    def test_to_bool(self):
        self.assertTrue(to_bool("true"))
        self.assertTrue(to_bool(1))
        self.assertFalse(to_bool("false"))
        self.assertIsNone(to_bool("maybe"))
        self.assertIsNone(to_bool(None))


class TestBaseResponse(unittest.TestCase):
    def test_common_fields(self):
        r = BaseResponse({"success": True, "message": "Success.", "request_id": "abc"})
        self.assertTrue(r.is_success())
        self.assertEqual(r.get_message(), "Success.")
        self.assertEqual(r.get_request_id(), "abc")
        self.assertEqual(r.get_errors(), [])

    def test_missing_fields_are_none(self):
        r = BaseResponse({})
        self.assertFalse(r.is_success())
        self.assertIsNone(r.get_request_id())
        self.assertIsNone(r.get("anything"))
        self.assertEqual(r.get("anything", "default"), "default")

    def test_raw_data_is_a_copy(self):
        source = {"nested": {"a": 1}}
        r = BaseResponse(source)
        source["nested"]["a"] = 2
        raw = r.get_raw_data()
        raw["nested"]["a"] = 3
        self.assertEqual(r.get_raw_data(), {"nested": {"a": 1}})

    def test_equality(self):
        self.assertEqual(IPReputation({"a": 1}), IPReputation({"a": 1}))
        self.assertNotEqual(IPReputation({"a": 1}), EmailValidation({"a": 1}))


class TestIPReputation(unittest.TestCase):
    def test_accessors(self):
        r = IPReputation(
            {
                "success": True,
                "fraud_score": 88,
                "proxy": True,
                "vpn": False,
                "ISP": "Example ISP",
                "ASN": "15169",
                "latitude": "37.4",
                "country_code": "US",
            }
        )
        self.assertEqual(r.get_fraud_score(), 88.0)
        self.assertTrue(r.is_proxy())
        self.assertFalse(r.is_vpn())
        self.assertEqual(r.get_isp(), "Example ISP")
        self.assertEqual(r.get_asn(), 15169)
        self.assertEqual(r.get_latitude(), 37.4)
        self.assertEqual(r.get_risk_level(), "High Risk")

    def test_risk_levels(self):
        cases = [(95, "Frequent Abuse"), (90, "Frequent Abuse"), (85, "High Risk"),
                 (75, "Suspicious"), (10, "Low Risk")]
        for score, level in cases:
            self.assertEqual(IPReputation({"fraud_score": score}).get_risk_level(), level)
        self.assertEqual(IPReputation({}).get_risk_level(), "Unknown")

    def test_is_high_risk(self):
        self.assertTrue(IPReputation({"fraud_score": 91}).is_high_risk())
        self.assertTrue(IPReputation({"high_risk_attacks": True}).is_high_risk())
        self.assertTrue(IPReputation({"proxy": True, "recent_abuse": True}).is_high_risk())
        self.assertFalse(IPReputation({"fraud_score": 50, "proxy": True}).is_high_risk())

    def test_risk_factors(self):
        r = IPReputation({"proxy": True, "tor": False, "recent_abuse": True})
        self.assertIn(("TOR", False), r.risk_factors())
        self.assertEqual(r.active_risk_factors(), ["Proxy/VPN", "Recent Abuse"])


class TestEmailValidation(unittest.TestCase):
    def test_accessors(self):
        r = EmailValidation(
            {
                "valid": True,
                "disposable": False,
                "fraud_score": "12",
                "smtp_score": 3,
                "overall_score": 4,
                "associated_names": {"status": "Enterprise Plus", "names": ["Ada"]},
            }
        )
        self.assertTrue(r.is_valid())
        self.assertFalse(r.is_disposable())
        self.assertEqual(r.get_fraud_score(), 12)
        self.assertEqual(r.scores(), [("SMTP Score", 3), ("Overall Score", 4), ("Fraud Score", 12)])
        self.assertEqual(r.get_associated_names(), ["Ada"])


class TestPhoneValidation(unittest.TestCase):
    def test_not_available_is_none(self):
        r = PhoneValidation({"valid": True, "formatted": "N/A", "VOIP": False})
        self.assertIsNone(r.get_formatted())
        self.assertFalse(r.is_voip())
        self.assertIsNone(r.is_prepaid())


class TestURLScan(unittest.TestCase):
    def test_accessors(self):
        r = URLScan({"unsafe": True, "risk_score": 100, "domain": "evil.test",
                     "domain_age": {"days": 3}})
        self.assertTrue(r.is_unsafe())
        self.assertEqual(r.get_risk_score(), 100)
        self.assertEqual(r.get_domain_age(), 3)
        self.assertEqual(r.active_risk_factors(), ["Unsafe"])


class TestMalwareCheck(unittest.TestCase):
    def test_nested_result(self):
        r = MalwareCheck({"status": "cached", "result": {"detected": True, "detected_scans": 4,
                                                         "total_scans": 60}})
        self.assertTrue(r.is_malicious())
        self.assertEqual(r.get_detected_scans(), 4)
        self.assertEqual(r.get_total_scans(), 60)
        self.assertFalse(r.is_pending())

    def test_pending(self):
        r = MalwareCheck({"status": "pending", "update_url": "https://example.com/poll"})
        self.assertTrue(r.is_pending())
        self.assertFalse(r.is_malicious())
        self.assertEqual(r.get_update_url(), "https://example.com/poll")


class TestLeakCheck(unittest.TestCase):
    def test_accessors(self):
        r = LeakCheck({"exposed": True, "source": ["breach-a"],
                       "first_seen": {"human": "2 years ago", "timestamp": 1600000000}})
        self.assertTrue(r.is_exposed())
        self.assertEqual(r.get_sources(), ["breach-a"])
        self.assertEqual(r.get_first_seen_human(), "2 years ago")
        self.assertEqual(r.get_first_seen_timestamp(), 1600000000)


class TestCreditUsage(unittest.TestCase):
    def test_remaining_and_percentage(self):
        r = CreditUsage({"credits": 5000, "usage": 1250, "email_usage": 50})
        self.assertEqual(r.get_remaining_credits(), 3750)
        self.assertEqual(r.get_usage_percentage(), 25.0)
        self.assertEqual(r.service_usage(), [("Email Validation", 50)])

    def test_zero_credits(self):
        r = CreditUsage({"credits": 0, "usage": 10})
        self.assertIsNone(r.get_remaining_credits())
        self.assertIsNone(r.get_usage_percentage())

    def test_overused_floors_at_zero(self):
        self.assertEqual(CreditUsage({"credits": 10, "usage": 20}).get_remaining_credits(), 0)


class TestLists(unittest.TestCase):
    def test_entry_list(self):
        r = EntryList(
            {
                "success": True,
                "data": [
                    {"value": "8.8.8.8", "type": "proxy", "value_type": "ip"},
                    {"value": "a@b.com", "type": "email", "value_type": "email"},
                    "junk",
                ],
            }
        )
        self.assertEqual(len(r), 2)
        self.assertEqual(len(r.get_entries_by_type("proxy")), 1)
        self.assertEqual(r.find_entry("a@b.com")["type"], "email")
        self.assertIsNone(r.find_entry("missing"))

    def test_request_list_pagination(self):
        r = RequestList(
            {
                "requests": [{"request_id": "r1", "type": "proxy"}],
                "current_page": 1,
                "total_pages": 3,
                "total_records": 60,
            }
        )
        self.assertTrue(r.has_next_page())
        self.assertEqual(r.get_request_by_id("r1")["type"], "proxy")
        self.assertEqual(r.get_max_records_per_page(), 25)
        self.assertEqual(
            page_of(r),
            {"current_page": 1, "total_pages": 3, "total_records": 60, "per_page": None},
        )

    def test_pagination_defaults(self):
        r = RequestList({"requests": [{"request_id": "r1"}]})
        self.assertEqual(r.get_current_page(), 1)
        self.assertEqual(r.get_total_pages(), 0)
        self.assertEqual(r.get_total_records(), 0)
        self.assertFalse(r.has_next_page())

    def test_country_list(self):
        r = CountryList({"success": True, "countries": {"US": "United States", "GB": "United Kingdom"}})
        self.assertEqual(r.count(), 2)
        self.assertEqual(r.get_country_name("us"), "United States")
        self.assertEqual(r.get_country_code("United Kingdom"), "GB")
        self.assertTrue(r.has_country_code("gb"))
        self.assertFalse(r.has_country_name("Atlantis"))


class TestTransaction(unittest.TestCase):
    def test_accessors(self):
        r = Transaction({"fraud_score": 70, "proxy": False, "risky_billing_address": True,
                         "transaction_details": {"valid_billing_address": True}})
        self.assertEqual(r.get_fraud_score(), 70)
        self.assertTrue(r.has_risky_billing_address())
        self.assertEqual(r.active_risk_factors(), ["Risky Billing Address"])
        self.assertEqual(r.get_transaction_details(), {"valid_billing_address": True})


if __name__ == "__main__":
    unittest.main()
