"""
Tests for the endpoint registry and request executor.
"""

import os
import tempfile
import unittest
from unittest.mock import MagicMock, patch

import requests

from ipqs_client.endpoints import DEFAULT_ENDPOINT, ENDPOINTS, country_list_url, get_endpoint
from ipqs_client.errors import ApiError
from ipqs_client.executor import (
    FileUpload,
    RequestExecutor,
    build_call,
    flatten_params,
    handle_response,
)

KEY = "testkey"
BASE = "https://ipqualityscore.com/api/json/"


def _response(status=200, payload=None, text=""):
    resp = MagicMock()
    resp.status_code = status
    resp.text = text
    if isinstance(payload, Exception):
        resp.json.side_effect = payload
    else:
        resp.json.return_value = payload
    return resp


class TestRegistry(unittest.TestCase):
    def test_unknown_operation_falls_back_to_post(self):
        self.assertIs(get_endpoint("email"), DEFAULT_ENDPOINT)
        self.assertEqual(DEFAULT_ENDPOINT.method, "POST")

    def test_lookup_endpoints_are_get(self):
        for op in ("ip", "phone", "url", "leaked", "account", "requests"):
            self.assertEqual(ENDPOINTS[op].method, "GET", op)

    def test_malware_scan_is_multipart(self):
        self.assertTrue(ENDPOINTS["malware/scan"].multipart)
        self.assertFalse(ENDPOINTS["malware/lookup"].multipart)

    def test_country_list_url(self):
        self.assertTrue(country_list_url().endswith("/countries/json"))
        self.assertTrue(country_list_url(raw=True).endswith("/countries/raw"))


class TestBuildCall(unittest.TestCase):
    def test_ip_value_in_path(self):
        call = build_call("ip", {"ip": "8.8.8.8"}, api_key=KEY)
        self.assertEqual(call.method, "GET")
        self.assertEqual(call.url, f"{BASE}ip/{KEY}/8.8.8.8")

    def test_url_value_is_encoded(self):
        call = build_call("url", {"url": "https://example.com/a?b=c"}, api_key=KEY)
        self.assertEqual(call.url, f"{BASE}url/{KEY}/https%3A%2F%2Fexample.com%2Fa%3Fb%3Dc")

    def test_leaked_type_and_value_in_path(self):
        call = build_call("leaked", {"type": "email", "value": "a@b.com"}, api_key=KEY)
        self.assertEqual(call.url, f"{BASE}leaked/email/{KEY}/a%40b.com")

    def test_log_url_masks_key_and_leaked_password(self):
        call = build_call(
            "leaked", {"type": "password", "value": "hunter2"}, api_key=KEY, common_params={"fast": True}
        )
        self.assertIn("hunter2", call.url)
        self.assertNotIn("hunter2", call.log_url)
        self.assertNotIn(KEY, call.log_url)
        self.assertEqual(call.log_url, f"{BASE}leaked/password/***/***?fast=true")

    def test_log_url_keeps_ip(self):
        call = build_call("ip", {"ip": "8.8.8.8"}, api_key=KEY)
        self.assertEqual(call.log_url, f"{BASE}ip/***/8.8.8.8")

    def test_common_params_merged_into_query(self):
        call = build_call(
            "ip",
            {"ip": "8.8.8.8", "strictness": 2},
            api_key=KEY,
            common_params={"strictness": 0, "fast": False, "user_agent": ""},
        )
        self.assertIn("strictness=2", call.url)
        self.assertIn("fast=false", call.url)
        self.assertNotIn("strictness=0", call.url)

    def test_list_endpoint_skips_common_params(self):
        call = build_call(
            "allowlist/list", {}, api_key=KEY, common_params={"strictness": 1}
        )
        self.assertEqual(call.url, f"{BASE}allowlist/list/{KEY}")

    def test_requests_endpoint_path(self):
        call = build_call("requests", {"type": "proxy", "page": 2}, api_key=KEY)
        self.assertTrue(call.url.startswith(f"{BASE}requests/{KEY}/list?"))
        self.assertIn("type=proxy", call.url)

    def test_post_params_in_body(self):
        call = build_call("email", {"email": "a@b.com", "fast": True}, api_key=KEY)
        self.assertEqual(call.method, "POST")
        self.assertEqual(call.url, f"{BASE}email/{KEY}")
        self.assertIn(("email", "a@b.com"), call.data)
        self.assertIn(("fast", "true"), call.data)

    def test_multipart_pops_file(self):
        call = build_call(
            "malware/scan", {"file": FileUpload("/tmp/sample.bin"), "x": 1}, api_key=KEY
        )
        self.assertEqual(call.upload.filename, "sample.bin")
        self.assertEqual(call.data, [("x", "1")])

    def test_flatten_nested(self):
        fields = list(flatten_params({"a": {"b": 1}, "c": ["x", "y"], "d": None}))
        self.assertEqual(fields, [("a[b]", "1"), ("c[]", "x"), ("c[]", "y")])


class TestHandleResponse(unittest.TestCase):
    def test_ok(self):
        self.assertEqual(handle_response(_response(200, {"success": True})), {"success": True})

    def test_status_error(self):
        err = handle_response(_response(503, {}))
        self.assertEqual(err.code, "api_error")
        self.assertIn("503", err.message)

    def test_invalid_json(self):
        err = handle_response(_response(200, ValueError("bad")))
        self.assertEqual(err.code, "json_error")

    def test_non_mapping_body(self):
        err = handle_response(_response(200, ["a"]))
        self.assertEqual(err.code, "json_error")

    def test_errors_field(self):
        err = handle_response(_response(200, {"success": False, "errors": ["Invalid key.", "Try again."]}))
        self.assertEqual(err, ApiError("api_error", "Invalid key. Try again."))

    def test_empty_errors_is_not_error(self):
        self.assertEqual(handle_response(_response(200, {"errors": []})), {"errors": []})


class TestRequestExecutor(unittest.TestCase):
    @patch("ipqs_client.executor.requests.request")
    def test_execute_get(self, mock_request):
        mock_request.return_value = _response(200, {"success": True, "fraud_score": 10})
        result = RequestExecutor(KEY, timeout=5).execute("ip", {"ip": "8.8.8.8"})

        self.assertEqual(result["fraud_score"], 10)
        args, kwargs = mock_request.call_args
        self.assertEqual(args[0], "GET")
        self.assertEqual(args[1], f"{BASE}ip/{KEY}/8.8.8.8")
        self.assertEqual(kwargs["timeout"], 5)

    @patch("ipqs_client.executor.requests.request")
    def test_transport_error_is_returned(self, mock_request):
        mock_request.side_effect = requests.ConnectionError(f"cannot reach {KEY}")
        result = RequestExecutor(KEY).execute("ip", {"ip": "8.8.8.8"})

        self.assertIsInstance(result, ApiError)
        self.assertEqual(result.code, "api_error")
        self.assertNotIn(KEY, result.message)

    @patch("ipqs_client.executor.logger")
    @patch("ipqs_client.executor.requests.request")
    def test_leaked_password_never_logged(self, mock_request, mock_logger):
        url = f"{BASE}leaked/password/{KEY}/hunter2"
        mock_request.side_effect = requests.ConnectionError(f"Max retries exceeded with url: {url}")
        result = RequestExecutor(KEY).execute("leaked", {"type": "password", "value": "hunter2"})

        self.assertNotIn("hunter2", result.message)
        self.assertNotIn(KEY, result.message)
        log = mock_logger.bind.return_value
        self.assertEqual(log.debug.call_args.kwargs["url"], f"{BASE}leaked/password/***/***")
        self.assertNotIn("hunter2", log.warning.call_args.kwargs["error"])

    @patch("ipqs_client.executor.requests.request")
    def test_multipart_upload(self, mock_request):
        mock_request.return_value = _response(200, {"success": True, "status": "pending"})
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "sample.bin")
            with open(path, "wb") as fh:
                fh.write(b"data")
            result = RequestExecutor(KEY).execute("malware/scan", {"file": FileUpload(path)})

        self.assertEqual(result["status"], "pending")
        _, kwargs = mock_request.call_args
        self.assertEqual(kwargs["files"]["file"][0], "sample.bin")

    @patch("ipqs_client.executor.requests.request")
    def test_fetch_countries_raw(self, mock_request):
        mock_request.return_value = _response(200, None, text="US United States")
        result = RequestExecutor(KEY).fetch_countries(raw=True)

        self.assertEqual(result, "US United States")
        _, kwargs = mock_request.call_args
        self.assertEqual(kwargs["headers"]["Accept"], "text/plain")

    @patch("ipqs_client.executor.requests.request")
    def test_fetch_countries_status_error(self, mock_request):
        mock_request.return_value = _response(500, None)
        result = RequestExecutor(KEY).fetch_countries()
        self.assertEqual(result.code, "api_error")


if __name__ == "__main__":
    unittest.main()
