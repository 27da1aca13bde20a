"""
Strava API client.

Covers the three calls the publisher needs: refresh-token exchange,
athlete lookup (to verify credentials) and activity creation.
"""

import logging
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)


class StravaServiceError(RuntimeError):
    """Raised when a Strava API call fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class StravaClient:
    """Thin wrapper over the Strava REST API using requests."""

    TOKEN_URL = "https://www.strava.com/oauth/token"
    API_BASE_URL = "https://www.strava.com/api/v3"
    ACTIVITY_URL_TEMPLATE = "https://www.strava.com/activities/{activity_id}"

    # Timeout for HTTP requests
    REQUEST_TIMEOUT = 30

    def __init__(self, session: Optional[requests.Session] = None):
        self.session = session or requests.Session()

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            return response.reason or f"HTTP {response.status_code}"
        if isinstance(data, dict) and data.get("message"):
            return str(data["message"])
        return response.reason or f"HTTP {response.status_code}"

    def refresh_access_token(self, credentials: Dict[str, str]) -> Dict[str, Any]:
        """
        Exchange a refresh token for a short-lived access token.

        Args:
            credentials: client_id, client_secret and refresh_token

        Returns:
            Token response (access_token, expires_at, refresh_token, ...)

        Raises:
            StravaServiceError: On network errors or a non-2xx response
        """
        logger.info("Getting fresh Strava token...")
        try:
            response = self.session.post(
                self.TOKEN_URL,
                json={
                    "client_id": credentials["client_id"],
                    "client_secret": credentials["client_secret"],
                    "refresh_token": credentials["refresh_token"],
                    "grant_type": "refresh_token",
                },
                timeout=self.REQUEST_TIMEOUT,
            )
        except requests.RequestException as e:
            raise StravaServiceError(f"Failed to get Strava access token: {e}") from e

        if not response.ok:
            raise StravaServiceError(
                f"Failed to refresh token: {self._error_message(response)}",
                status_code=response.status_code,
            )

        token_data = response.json()
        if not token_data.get("access_token"):
            raise StravaServiceError("Failed to refresh token: response had no access_token")
        return token_data

    def get_athlete(self, access_token: str) -> Dict[str, Any]:
        """Fetch the authenticated athlete's profile."""
        try:
            response = self.session.get(
                f"{self.API_BASE_URL}/athlete",
                headers={"Authorization": f"Bearer {access_token}"},
                timeout=self.REQUEST_TIMEOUT,
            )
        except requests.RequestException as e:
            raise StravaServiceError(f"Token verification failed: {e}") from e

        if not response.ok:
            raise StravaServiceError(
                f"Token verification failed: {self._error_message(response)}",
                status_code=response.status_code,
            )
        return response.json()

    def create_activity(self, access_token: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a manual activity.

        Returns:
            The created activity; contains at least "id"
        """
        try:
            response = self.session.post(
                f"{self.API_BASE_URL}/activities",
                headers={
                    "Authorization": f"Bearer {access_token}",
                    "Content-Type": "application/json",
                },
                json=payload,
                timeout=self.REQUEST_TIMEOUT,
            )
        except requests.RequestException as e:
            raise StravaServiceError(f"Strava API error: {e}") from e

        if not response.ok:
            raise StravaServiceError(
                f"Strava API error: {self._error_message(response)}",
                status_code=response.status_code,
            )

        activity = response.json()
        if "id" not in activity:
            raise StravaServiceError("Strava API error: created activity has no id")
        return activity

    @classmethod
    def activity_url(cls, activity_id: Any) -> str:
        return cls.ACTIVITY_URL_TEMPLATE.format(activity_id=activity_id)
