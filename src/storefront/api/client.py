"""
Authenticated request client.

Every call runs the same fixed sequence:

    Send -> (401 and not yet retried?) Refresh -> (refreshed?) Send again once

The bearer token is read from the credential store at send time, so a retry
after a refresh always carries the new token. Concurrent 401s share a single
refresh call through the refresher's SingleFlight.
"""

import json
from dataclasses import asdict, dataclass, field, is_dataclass, replace
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

import requests

from storefront.auth.credentials import CredentialStore, MemoryCredentialStore
from storefront.auth.refresher import TokenRefresher
from storefront.constants import DEFAULT_TIMEOUT_SECONDS, DEFAULT_USER_AGENT
from storefront.exceptions.api import ApiRequestError, AuthorizationError
from storefront.http.client import HttpClient
from storefront.http.responses import error_message, error_payload, is_success, parse_json
from storefront.logging import get_logger
from storefront.resilience.retry import RetryPolicy

logger = get_logger(__name__)

UNAUTHORIZED = 401


@dataclass
class Multipart:
    """A multipart/form-data body.

    ``files`` maps a field name to a ``(filename, content, content_type)``
    tuple, as accepted by requests.
    """

    fields: Dict[str, Any] = field(default_factory=dict)
    files: Dict[str, Tuple[str, Any, str]] = field(default_factory=dict)


@dataclass(frozen=True)
class RequestDescriptor:
    """One logical API call; ``is_retry`` marks the re-issued send."""

    method: str
    path: str
    body: Any = None
    extra_headers: Optional[Mapping[str, str]] = None
    is_retry: bool = False

    def as_retry(self) -> "RequestDescriptor":
        return replace(self, is_retry=True)


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_json(value: Any) -> str:
    return json.dumps(value, default=_json_default)


class ApiClient:
    """Sends API calls on behalf of the session held in a credential store."""

    def __init__(
        self,
        base_url: str,
        store: Optional[CredentialStore] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
        retry_policy: Optional[RetryPolicy] = None,
        sleep: Optional[Callable[[float], None]] = None,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        """Initialize the client.

        Args:
            base_url: API base URL, e.g. ``http://localhost:5000``
            store: Credential store; an in-memory store when omitted
            timeout: Per-request deadline in seconds
            session: Optional requests session (cookies persist on it)
            retry_policy: Backoff for transport failures of the refresh call
            sleep: Sleep function used between refresh attempts
            user_agent: User-Agent header value
        """
        self.store = store if store is not None else MemoryCredentialStore()
        self.http = HttpClient(base_url, session=session, timeout=timeout, user_agent=user_agent)
        self.refresher = TokenRefresher(self.http, self.store, retry_policy, sleep=sleep)

    @classmethod
    def from_config(cls, config, store: Optional[CredentialStore] = None,
                    session: Optional[requests.Session] = None) -> "ApiClient":
        """Build a client from a loaded ``StorefrontConfig``."""
        policy = RetryPolicy(
            max_attempts=config.refresh.max_attempts,
            strategy=config.refresh.strategy,
            base_delay=config.refresh.base_delay,
            max_delay=config.refresh.max_delay,
        )
        return cls(
            config.api.base_url,
            store=store,
            timeout=config.api.timeout,
            session=session,
            retry_policy=policy,
            user_agent=config.api.user_agent,
        )

    @property
    def base_url(self) -> str:
        return self.http.base_url

    def request(self, method: str, path: str, body: Any = None,
                extra_headers: Optional[Mapping[str, str]] = None) -> Any:
        """Perform one API call and return its parsed JSON body.

        Returns None for an empty or 204 response.

        Raises:
            AuthorizationError: 401 after the refresh path
            ApiRequestError: any other non-2xx status
            ResponseParseError: a 2xx body that is not JSON
            TransportError: no response (RequestTimeoutError on deadline)
        """
        descriptor = RequestDescriptor(method.upper(), path, body, extra_headers)

        response = self._send(descriptor)
        if self._should_refresh(descriptor, response):
            if self._refresh(descriptor):
                response = self._send(descriptor.as_retry())

        return self._result(descriptor, response)

    def refresh(self) -> bool:
        """Renew the stored session; shared with any refresh already running."""
        return self.refresher.refresh()

    def _send(self, descriptor: RequestDescriptor) -> requests.Response:
        headers = self._build_headers(descriptor)
        data, files = self._encode_body(descriptor.body)
        logger.debug(f"Sending {descriptor.method} {descriptor.path}",
                     retry=descriptor.is_retry,
                     authenticated="Authorization" in headers)
        return self.http.send(descriptor.method, descriptor.path,
                              headers=headers, data=data, files=files)

    def _should_refresh(self, descriptor: RequestDescriptor,
                        response: requests.Response) -> bool:
        return response.status_code == UNAUTHORIZED and not descriptor.is_retry

    def _refresh(self, descriptor: RequestDescriptor) -> bool:
        logger.info(f"{descriptor.method} {descriptor.path} got 401; refreshing session")
        refreshed = self.refresher.refresh()
        if refreshed:
            logger.info(f"Retrying {descriptor.method} {descriptor.path} with renewed token")
        else:
            logger.warning(f"Session refresh failed; {descriptor.method} "
                           f"{descriptor.path} stays unauthorized")
        return refreshed

    def _result(self, descriptor: RequestDescriptor, response: requests.Response) -> Any:
        if is_success(response.status_code):
            return parse_json(response, descriptor.method, descriptor.path)

        message = error_message(response)
        payload = error_payload(response)
        if response.status_code == UNAUTHORIZED:
            raise AuthorizationError(message, method=descriptor.method,
                                     path=descriptor.path, payload=payload)
        raise ApiRequestError(message, status_code=response.status_code,
                              method=descriptor.method, path=descriptor.path,
                              payload=payload)

    def _build_headers(self, descriptor: RequestDescriptor) -> Dict[str, str]:
        headers: Dict[str, str] = {}
        token = self.store.get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if descriptor.extra_headers:
            headers.update(descriptor.extra_headers)
        if self._is_structured(descriptor.body):
            headers["Content-Type"] = "application/json"
        return headers

    @staticmethod
    def _is_structured(body: Any) -> bool:
        return body is not None and not isinstance(body, (Multipart, bytes, bytearray))

    def _encode_body(self, body: Any) -> Tuple[Any, Optional[Dict[str, Any]]]:
        if body is None:
            return None, None
        if isinstance(body, Multipart):
            return body.fields or None, body.files
        if isinstance(body, (bytes, bytearray)):
            return bytes(body), None
        return encode_json(body), None

    def get(self, path: str, extra_headers: Optional[Mapping[str, str]] = None) -> Any:
        return self.request("GET", path, extra_headers=extra_headers)

    def post(self, path: str, body: Any = None,
             extra_headers: Optional[Mapping[str, str]] = None) -> Any:
        return self.request("POST", path, body, extra_headers)

    def put(self, path: str, body: Any = None,
            extra_headers: Optional[Mapping[str, str]] = None) -> Any:
        return self.request("PUT", path, body, extra_headers)

    def patch(self, path: str, body: Any = None,
              extra_headers: Optional[Mapping[str, str]] = None) -> Any:
        return self.request("PATCH", path, body, extra_headers)

    def delete(self, path: str, extra_headers: Optional[Mapping[str, str]] = None) -> Any:
        return self.request("DELETE", path, extra_headers=extra_headers)

    def upload(self, path: str, form: Multipart) -> Any:
        """POST a multipart form; no JSON content type is set."""
        return self.request("POST", path, form)

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
