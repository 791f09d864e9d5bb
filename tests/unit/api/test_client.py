"""
Tests for the authenticated request client.
"""

import json
from dataclasses import FrozenInstanceError
from decimal import Decimal

import pytest

from storefront.api.client import ApiClient, Multipart, RequestDescriptor
from storefront.core.config import StorefrontConfig
from storefront.exceptions import (
    ApiRequestError,
    AuthorizationError,
    RequestTimeoutError,
    ResponseParseError,
)
from storefront.resilience import RetryStrategy

from tests.conftest import BASE_URL, in_sequence, make_response, requires_token, respond


@pytest.mark.unit
class TestRequestDescriptor:
    def test_as_retry_marks_copy_only(self):
        descriptor = RequestDescriptor("GET", "/api/orders")
        retry = descriptor.as_retry()

        assert retry.is_retry is True
        assert descriptor.is_retry is False
        assert (retry.method, retry.path) == ("GET", "/api/orders")

    def test_descriptor_is_immutable(self):
        descriptor = RequestDescriptor("GET", "/api/orders")
        with pytest.raises(FrozenInstanceError):
            descriptor.is_retry = True


@pytest.mark.unit
class TestHeaders:
    def test_bearer_header_from_store(self, client, fake_api, logged_in):
        """Authenticated sends carry the stored access token."""
        fake_api.route("GET", "/api/products", json_body=[])

        client.get("/api/products")

        assert fake_api.calls[0].headers["Authorization"] == "Bearer T1"

    def test_token_read_at_send_time(self, client, fake_api, logged_in, store):
        fake_api.route("GET", "/api/products", json_body=[])

        client.get("/api/products")
        store.save_auth("T9", None, "R9")
        client.get("/api/products")

        assert [c.headers["Authorization"] for c in fake_api.calls] == ["Bearer T1", "Bearer T9"]

    def test_no_authorization_without_token(self, client, fake_api):
        fake_api.route("GET", "/api/products", json_body=[])

        client.get("/api/products")

        assert "Authorization" not in fake_api.calls[0].headers

    def test_extra_headers_override_defaults(self, client, fake_api, logged_in):
        fake_api.route("GET", "/api/products", json_body=[])

        client.get("/api/products", extra_headers={"Authorization": "Basic abc", "X-Trace": "1"})

        headers = fake_api.calls[0].headers
        assert headers["Authorization"] == "Basic abc"
        assert headers["X-Trace"] == "1"

    def test_json_body_sets_content_type(self, client, fake_api):
        fake_api.route("POST", "/api/contact", json_body={"message": "ok"})

        client.post("/api/contact", {"name": "A", "amount": Decimal("12.50")})

        call = fake_api.calls[0]
        assert call.headers["Content-Type"] == "application/json"
        assert call.json == {"name": "A", "amount": 12.5}

    def test_multipart_body_has_no_json_content_type(self, client, fake_api):
        fake_api.route("POST", "/api/upload", json_body={"url": "/uploads/a.png"})
        form = Multipart(files={"image": ("a.png", b"\x89PNG", "image/png")})

        client.upload("/api/upload", form)

        call = fake_api.calls[0]
        assert "Content-Type" not in call.headers
        assert call.files == {"image": ("a.png", b"\x89PNG", "image/png")}

    def test_raw_bytes_sent_as_is(self, client, fake_api):
        fake_api.route("PUT", "/api/blob", status_code=204)

        client.put("/api/blob", b"raw-bytes")

        call = fake_api.calls[0]
        assert call.data == b"raw-bytes"
        assert "Content-Type" not in call.headers

    def test_every_send_has_a_deadline(self, client, fake_api):
        fake_api.route("GET", "/api/products", json_body=[])

        client.get("/api/products")

        assert fake_api.calls[0].timeout == 5


@pytest.mark.unit
class TestResults:
    def test_returns_parsed_json(self, client, fake_api):
        fake_api.route("GET", "/api/pages", json_body=[{"slug": "about"}])

        assert client.get("/api/pages") == [{"slug": "about"}]

    @pytest.mark.parametrize("status", [200, 204])
    def test_empty_body_returns_none(self, client, fake_api, status):
        fake_api.route("DELETE", "/api/products/1", status_code=status)

        assert client.delete("/api/products/1") is None

    def test_non_json_success_raises_parse_error(self, client, fake_api):
        fake_api.route("GET", "/api/settings", body="<html>oops</html>")

        with pytest.raises(ResponseParseError) as exc_info:
            client.get("/api/settings")

        assert exc_info.value.status_code == 200
        assert isinstance(exc_info.value, ApiRequestError)

    def test_error_message_from_json_body(self, client, fake_api):
        fake_api.route("POST", "/api/orders", status_code=400,
                       json_body={"message": "Cart is empty", "field": "items"})

        with pytest.raises(ApiRequestError) as exc_info:
            client.post("/api/orders", {"items": []})

        error = exc_info.value
        assert error.message == "Cart is empty"
        assert error.status_code == 400
        assert error.payload == {"message": "Cart is empty", "field": "items"}

    def test_error_message_falls_back_to_status(self, client, fake_api):
        fake_api.route("GET", "/api/orders/9", status_code=404, json_body={"error": "nope"})

        with pytest.raises(ApiRequestError) as exc_info:
            client.get("/api/orders/9")

        assert exc_info.value.message == "HTTP 404"

    def test_error_message_from_reason_for_non_json(self, client, fake_api):
        fake_api.route("GET", "/api/orders", status_code=502, body="Bad gateway page")

        with pytest.raises(ApiRequestError) as exc_info:
            client.get("/api/orders")

        assert exc_info.value.message == "Bad Gateway"
        assert exc_info.value.status_code == 502

    def test_timeout_raises_request_timeout(self, client, session):
        import requests
        session.request.side_effect = requests.exceptions.ReadTimeout("slow")

        with pytest.raises(RequestTimeoutError) as exc_info:
            client.get("/api/orders")

        assert exc_info.value.timeout == 5


@pytest.mark.unit
class TestRetryBound:
    def test_401_after_successful_refresh_is_retried_once(self, client, fake_api, logged_in):
        """A request still rejected after refresh fails instead of looping."""
        fake_api.route("GET", "/api/orders", status_code=401, json_body={"message": "Denied"})
        fake_api.route("POST", "/api/auth/refresh",
                       json_body={"token": "T2", "refreshToken": "R2", "user": None})

        with pytest.raises(AuthorizationError) as exc_info:
            client.get("/api/orders")

        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "Denied"
        assert len(fake_api.calls_to("GET", "/api/orders")) == 2
        assert len(fake_api.calls_to("POST", "/api/auth/refresh")) == 1

    def test_retry_carries_new_token_and_same_body(self, client, fake_api, logged_in):
        fake_api.route("PUT", "/api/users/profile", in_sequence(
            respond(401, {"message": "expired"}),
            requires_token("T2", {"id": "u1", "name": "New"}),
        ))
        fake_api.route("POST", "/api/auth/refresh", json_body={"token": "T2", "refreshToken": "R2"})

        assert client.put("/api/users/profile", {"name": "New"}) == {"id": "u1", "name": "New"}

        first, second = fake_api.calls_to("PUT", "/api/users/profile")
        assert first.headers["Authorization"] == "Bearer T1"
        assert second.headers["Authorization"] == "Bearer T2"
        assert first.data == second.data == json.dumps({"name": "New"})

    def test_non_401_errors_never_trigger_refresh(self, client, fake_api, logged_in):
        fake_api.route("GET", "/api/orders", status_code=403, json_body={"message": "Admins only"})

        with pytest.raises(ApiRequestError) as exc_info:
            client.get("/api/orders")

        assert not isinstance(exc_info.value, AuthorizationError)
        assert fake_api.calls_to("POST", "/api/auth/refresh") == []


@pytest.mark.unit
class TestFromConfig:
    def test_client_follows_configuration(self, session):
        config = StorefrontConfig(
            api={"base_url": "https://api.shop.example/", "timeout": 12},
            refresh={"max_attempts": 5, "strategy": "fixed_delay", "base_delay": 0.1},
        )

        client = ApiClient.from_config(config, session=session)

        assert client.base_url == "https://api.shop.example"
        assert client.http.timeout == 12
        policy = client.refresher.retry_policy
        assert policy.max_attempts == 5
        assert policy.strategy == RetryStrategy.FIXED_DELAY

    def test_separate_clients_do_not_share_refresh_state(self, session):
        first = ApiClient(BASE_URL, session=session)
        second = ApiClient(BASE_URL, session=session)

        assert first.refresher.flight is not second.refresher.flight
