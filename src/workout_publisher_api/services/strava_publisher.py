"""Publishes workouts to Strava as activities."""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from workout_publisher_api.models import StravaPostResult, WorkoutRecord
from workout_publisher_api.services.strava_client import StravaClient
from workout_publisher_api.services.strava_payload import build_activity_payload

logger = logging.getLogger(__name__)

CredentialsResolver = Callable[[Optional[str]], Dict[str, str]]


class StravaPublisher:
    """
    Token exchange + activity creation for one workout.

    There are no retries: the first failure is returned to the caller.
    """

    def __init__(
        self,
        client: StravaClient,
        resolve_credentials: CredentialsResolver,
        hashtag: str,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.client = client
        self.resolve_credentials = resolve_credentials
        self.hashtag = hashtag
        self.clock = clock

    def publish(self, workout: WorkoutRecord, account: Optional[str] = None) -> StravaPostResult:
        """
        Post a workout to Strava. Never raises.

        Args:
            workout: Workout to publish
            account: Named credential set; default account when None

        Returns:
            StravaPostResult with the activity id and URL, or an error
        """
        try:
            credentials = self.resolve_credentials(account)
            token_data = self.client.refresh_access_token(credentials)

            payload = build_activity_payload(workout, self.hashtag, now=self.clock())
            logger.info(f'Posting "{payload.name}" to Strava...')

            activity = self.client.create_activity(token_data["access_token"], payload.model_dump())
            activity_id = activity["id"]
            logger.info(f"Successfully posted to Strava! Activity ID: {activity_id}")

            return StravaPostResult(
                success=True,
                strava_id=activity_id,
                url=self.client.activity_url(activity_id),
            )
        except Exception as e:
            logger.error(f"Error posting to Strava: {e}")
            return StravaPostResult(success=False, error=f"Failed to post to Strava: {e}")

    def verify(self, account: Optional[str] = None) -> Dict[str, Any]:
        """
        Check that an account's credentials work.

        Raises:
            StravaConfigError: If the credential set is incomplete
            StravaServiceError: If Strava rejects the token exchange or lookup
        """
        credentials = self.resolve_credentials(account)
        token_data = self.client.refresh_access_token(credentials)
        athlete = self.client.get_athlete(token_data["access_token"])
        logger.info(
            f"Token verified for athlete: {athlete.get('firstname')} {athlete.get('lastname')}"
        )
        return athlete
