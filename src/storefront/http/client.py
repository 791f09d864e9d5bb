"""
HTTP transport over a requests session.

Keeps URL building, deadlines and transport-error translation out of the
request client. Cookies set by the API persist on the session, so every call
is sent with credentials included.
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import urljoin

import requests

from storefront.constants import DEFAULT_TIMEOUT_SECONDS, DEFAULT_USER_AGENT
from storefront.exceptions.api import RequestTimeoutError, TransportError


class HttpClient:
    """Thin wrapper around ``requests.Session`` bound to one base URL."""

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        """Initialize HTTP client.

        Args:
            base_url: Base URL for all requests
            session: Optional existing session to use
            timeout: Per-request deadline in seconds
            user_agent: User-Agent sent on every request
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.session = session or self._create_session(user_agent)

    def _create_session(self, user_agent: str) -> requests.Session:
        session = requests.Session()
        session.headers.update({'User-Agent': user_agent, 'Accept': 'application/json'})
        return session

    def send(
        self,
        method: str,
        endpoint: str,
        headers: Optional[Dict[str, str]] = None,
        data: Any = None,
        files: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> requests.Response:
        """Send one request and return the response, whatever its status.

        Raises:
            RequestTimeoutError: the deadline expired
            TransportError: no HTTP response was received
        """
        url = self._build_url(endpoint)
        deadline = timeout if timeout is not None else self.timeout

        self.logger.debug(f"{method} {url}")

        try:
            response = self.session.request(
                method,
                url,
                headers=headers,
                data=data,
                files=files,
                timeout=deadline,
            )
        except requests.exceptions.Timeout as e:
            raise RequestTimeoutError(url, deadline, method=method, path=endpoint) from e
        except requests.exceptions.RequestException as e:
            raise TransportError(url, str(e), method=method, path=endpoint) from e

        self._log_response(response)
        return response

    def _build_url(self, endpoint: str) -> str:
        if endpoint.startswith('http'):
            return endpoint
        return urljoin(self.base_url + '/', endpoint.lstrip('/'))

    def _log_response(self, response: requests.Response) -> None:
        self.logger.debug(
            f"Response: {response.status_code} - "
            f"{len(response.content or b'')} bytes"
        )

    def close(self) -> None:
        """Close the HTTP session."""
        if self.session:
            self.session.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
