"""
Access-token refresh.

``TokenRefresher.refresh`` exchanges the stored refresh token for a new
credential pair. Concurrent callers share one refresh call through a
SingleFlight. Any failure logs the session out.
"""

import json
from typing import Any, Callable, Dict, Optional

from storefront.constants import Endpoints
from storefront.exceptions.api import ApiRequestError, ResponseParseError
from storefront.http.client import HttpClient
from storefront.http.responses import error_message, error_payload, is_success, parse_json
from storefront.logging import LoggingContext, get_logger
from storefront.resilience.retry import RetryManager, RetryPolicy

from .credentials import CredentialStore, mask_token
from .single_flight import SingleFlight

logger = get_logger(__name__)


class TokenRefresher:
    """Single-flight refresh of the stored credential pair."""

    def __init__(
        self,
        http: HttpClient,
        store: CredentialStore,
        retry_policy: Optional[RetryPolicy] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        self.http = http
        self.store = store
        self.retry_policy = retry_policy or RetryPolicy()
        self._sleep = sleep
        self.flight = SingleFlight("token-refresh")

    def refresh(self) -> bool:
        """Renew the session. True when a new pair was stored."""
        return self.flight.run_exclusive(self._perform_refresh)

    def _perform_refresh(self) -> bool:
        refresh_token = self.store.get_refresh_token()
        if not refresh_token:
            logger.info("No refresh token stored; session cannot be renewed")
            self.store.clear_auth()
            return False

        retry = RetryManager(self.retry_policy, sleep=self._sleep)

        try:
            with LoggingContext(entry_msg="Refreshing access token",
                                success_msg="Access token refreshed",
                                logger=logger):
                payload = retry.execute_with_retry(self._request_new_pair, refresh_token)
        except ApiRequestError as e:
            logger.warning("Token refresh failed; clearing stored session",
                           reason=e.message, status_code=e.status_code)
            self.store.clear_auth()
            return False

        new_refresh_token = payload.get("refreshToken") or refresh_token
        self.store.save_auth(payload["token"], payload.get("user"), new_refresh_token)
        logger.debug("Stored refreshed session",
                     token=mask_token(payload["token"]),
                     refresh_token=mask_token(new_refresh_token))
        return True

    def _request_new_pair(self, refresh_token: str) -> Dict[str, Any]:
        method, path = "POST", Endpoints.REFRESH
        response = self.http.send(
            method,
            path,
            headers={"Content-Type": "application/json"},
            data=json.dumps({"refreshToken": refresh_token}),
        )

        if not is_success(response.status_code):
            raise ApiRequestError(
                error_message(response),
                status_code=response.status_code,
                method=method,
                path=path,
                payload=error_payload(response),
            )

        payload = parse_json(response, method, path)
        if not isinstance(payload, dict) or not payload.get("token"):
            raise ResponseParseError(method, path, response.status_code,
                                     "refresh response carries no token")
        return payload
