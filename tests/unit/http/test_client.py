"""
Tests for the HTTP transport.
"""

from unittest.mock import Mock, patch

import pytest
import requests

from storefront.exceptions import RequestTimeoutError, TransportError
from storefront.http import HttpClient

from tests.conftest import make_response


@pytest.mark.unit
class TestHttpClient:
    def setup_method(self):
        self.client = HttpClient("http://shop.test/", timeout=7)

    def test_initialization(self):
        """Test HTTP client initialization."""
        assert self.client.base_url == "http://shop.test"
        assert self.client.timeout == 7
        assert isinstance(self.client.session, requests.Session)
        assert self.client.session.headers["Accept"] == "application/json"

    def test_uses_provided_session(self):
        session = requests.Session()
        client = HttpClient("http://shop.test", session=session)
        assert client.session is session

    @pytest.mark.parametrize("endpoint,expected", [
        ("/api/orders", "http://shop.test/api/orders"),
        ("api/orders", "http://shop.test/api/orders"),
        ("https://other.test/x", "https://other.test/x"),
    ])
    def test_build_url(self, endpoint, expected):
        assert self.client._build_url(endpoint) == expected

    @patch("requests.Session.request")
    def test_send_passes_everything_through(self, mock_request):
        mock_request.return_value = make_response(200, {"ok": True})

        response = self.client.send("POST", "/api/contact", headers={"X": "1"}, data="{}")

        assert response.status_code == 200
        mock_request.assert_called_once_with(
            "POST", "http://shop.test/api/contact",
            headers={"X": "1"}, data="{}", files=None, timeout=7,
        )

    @patch("requests.Session.request")
    def test_per_call_timeout(self, mock_request):
        mock_request.return_value = make_response(204)

        self.client.send("GET", "/api/orders", timeout=1.5)

        assert mock_request.call_args.kwargs["timeout"] == 1.5

    @patch("requests.Session.request")
    def test_error_statuses_are_returned(self, mock_request):
        mock_request.return_value = make_response(500, {"message": "boom"})

        assert self.client.send("GET", "/api/orders").status_code == 500

    @patch("requests.Session.request", side_effect=requests.exceptions.ConnectTimeout("slow"))
    def test_timeout(self, mock_request):
        with pytest.raises(RequestTimeoutError) as exc_info:
            self.client.send("GET", "/api/orders")

        assert exc_info.value.method == "GET"
        assert exc_info.value.path == "/api/orders"

    @patch("requests.Session.request", side_effect=requests.exceptions.ConnectionError("refused"))
    def test_connection_error(self, mock_request):
        with pytest.raises(TransportError) as exc_info:
            self.client.send("GET", "/api/orders")

        assert not isinstance(exc_info.value, RequestTimeoutError)
        assert "refused" in exc_info.value.technical_details
        assert exc_info.value.status_code is None

    def test_context_manager_closes_session(self):
        session = Mock(spec=requests.Session)
        with HttpClient("http://shop.test", session=session):
            pass
        session.close.assert_called_once()
