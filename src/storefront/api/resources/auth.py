"""
Login, registration and logout.
"""

from typing import Any, Dict, Mapping, Optional

from storefront.constants import Endpoints
from storefront.exceptions.api import ResponseParseError
from storefront.logging import LoggingContext, get_logger
from storefront.models import AuthResponse, UserProfile, auth_response_from_api, user_from_api

from .base import Resource, without_none

logger = get_logger(__name__)


class AuthResource(Resource):
    """Creates and ends the session held in the client's credential store."""

    def login(self, email: str, password: str) -> AuthResponse:
        with LoggingContext(entry_msg=f"Logging in as {email}",
                            success_msg="Login successful",
                            failure_msg="Login failed",
                            logger=logger):
            payload = self.client.post(Endpoints.LOGIN, {"email": email, "password": password})
            return self._start_session(Endpoints.LOGIN, payload)

    def register(self, name: str, email: str, password: str,
                 phone: Optional[str] = None) -> AuthResponse:
        body = without_none({"name": name, "email": email, "password": password, "phone": phone})
        with LoggingContext(entry_msg=f"Registering {email}",
                            success_msg="Registration successful",
                            failure_msg="Registration failed",
                            logger=logger):
            payload = self.client.post(Endpoints.REGISTER, body)
            return self._start_session(Endpoints.REGISTER, payload)

    def logout(self) -> None:
        """Forget the stored session. The API keeps no server-side session."""
        with LoggingContext(entry_msg="Logging out", success_msg="Logged out", logger=logger):
            self.client.store.clear_auth()

    def current_user(self) -> Optional[UserProfile]:
        user = self.client.store.get_user()
        return user_from_api(user) if isinstance(user, Mapping) else None

    def _start_session(self, path: str, payload: Any) -> AuthResponse:
        if not isinstance(payload, Mapping) or not payload.get("token"):
            raise ResponseParseError("POST", path, 200, "response carries no token")
        auth = auth_response_from_api(payload)
        user: Optional[Dict[str, Any]] = auth.raw_user
        self.client.store.save_auth(auth.token, user, auth.refresh_token)
        return auth
