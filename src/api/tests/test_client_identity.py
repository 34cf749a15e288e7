"""Tests for client identity dependencies."""

import unittest
from unittest.mock import MagicMock

from api.dependencies import MAX_CLIENT_ID_LENGTH, get_client_address, get_client_id
from utils.config import Settings


def _request(headers=None, host="203.0.113.9"):
    request = MagicMock()
    request.headers = {k.lower(): v for k, v in (headers or {}).items()}
    request.client.host = host
    return request


class TestClientAddress(unittest.TestCase):

    def test_address_from_peer(self):
        self.assertEqual(get_client_address(_request()), "203.0.113.9")

    def test_forwarded_header_ignored_without_trusted_proxy(self):
        request = _request({"X-Forwarded-For": "198.51.100.7"})
        self.assertEqual(get_client_address(request), "203.0.113.9")

    def test_one_trusted_proxy_uses_last_hop(self):
        request = _request({"X-Forwarded-For": "6.6.6.6, 198.51.100.7"})
        self.assertEqual(get_client_address(request, trusted_proxy_hops=1), "198.51.100.7")

    def test_two_trusted_proxies(self):
        request = _request({"X-Forwarded-For": " 6.6.6.6 , 198.51.100.7 , 10.0.0.1"})
        self.assertEqual(get_client_address(request, trusted_proxy_hops=2), "198.51.100.7")

    def test_short_forwarded_header_falls_back_to_peer(self):
        request = _request({"X-Forwarded-For": "198.51.100.7"})
        self.assertEqual(get_client_address(request, trusted_proxy_hops=2), "203.0.113.9")

    def test_missing_forwarded_header_falls_back_to_peer(self):
        self.assertEqual(get_client_address(_request(), trusted_proxy_hops=1), "203.0.113.9")

    def test_address_unknown(self):
        request = _request()
        request.client = None
        self.assertEqual(get_client_address(request), "unknown")


class TestClientId(unittest.TestCase):

    def test_client_id_header(self):
        request = _request({"X-Client-Id": " device-42 "})
        self.assertEqual(get_client_id(request, Settings()), "device-42")

    def test_client_id_falls_back_to_address(self):
        self.assertEqual(get_client_id(_request(), Settings()), "203.0.113.9")

    def test_client_id_fallback_honors_trusted_proxy(self):
        request = _request({"X-Forwarded-For": "198.51.100.7"})
        self.assertEqual(get_client_id(request, Settings(trusted_proxy_hops=1)), "198.51.100.7")

    def test_client_id_truncated(self):
        client_id = get_client_id(_request({"X-Client-Id": "x" * 500}), Settings())
        self.assertEqual(len(client_id), MAX_CLIENT_ID_LENGTH)


if __name__ == '__main__':
    unittest.main()
