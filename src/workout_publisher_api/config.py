"""Configuration settings for the workout publisher API."""
import os
from datetime import date
from typing import Dict, List, Literal, Optional


EnvironmentType = Literal["development", "staging", "production"]


class StravaConfigError(RuntimeError):
    """Raised when a Strava credential set is missing or incomplete."""


class Settings:
    """Application settings."""

    # Environment
    ENVIRONMENT: EnvironmentType = "development"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Google Sheets
    SPREADSHEET_ID: Optional[str] = None
    GOOGLE_CLIENT_EMAIL: Optional[str] = None
    GOOGLE_PRIVATE_KEY: Optional[str] = None
    GOOGLE_PROJECT_ID: Optional[str] = None

    # Local .xlsx workbook used instead of Google Sheets when set
    WORKBOOK_PATH: Optional[str] = None

    # Year applied to sheet dates that carry no year, and the activity hashtag
    CAMPAIGN_YEAR: int = date.today().year
    CAMPAIGN_HASHTAG: str = ""

    # Strava
    STRAVA_DEFAULT_ACCOUNT: Optional[str] = None

    def __init__(self):
        # Environment
        env = os.getenv("ENVIRONMENT", "development").lower()
        if env in ("development", "staging", "production"):
            self.ENVIRONMENT = env  # type: ignore
        else:
            self.ENVIRONMENT = "development"

        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

        origins = os.getenv("CORS_ORIGINS")
        if origins:
            self.CORS_ORIGINS = [o.strip() for o in origins.split(",") if o.strip()]

        # Google Sheets
        self.SPREADSHEET_ID = os.getenv("SPREADSHEET_ID")
        self.GOOGLE_CLIENT_EMAIL = os.getenv("GOOGLE_CLIENT_EMAIL")
        # Keys pasted into env files usually carry literal "\n" sequences
        private_key = os.getenv("GOOGLE_PRIVATE_KEY")
        self.GOOGLE_PRIVATE_KEY = private_key.replace("\\n", "\n") if private_key else None
        self.GOOGLE_PROJECT_ID = os.getenv("GOOGLE_PROJECT_ID")
        self.WORKBOOK_PATH = os.getenv("WORKBOOK_PATH") or None

        # Resolved once per process so a long-running deployment stays consistent
        year = os.getenv("CAMPAIGN_YEAR", "").strip()
        self.CAMPAIGN_YEAR = int(year) if year.isdigit() else date.today().year
        self.CAMPAIGN_HASHTAG = os.getenv(
            "CAMPAIGN_HASHTAG", f"{self.CAMPAIGN_YEAR}FitnessJourney"
        ).lstrip("#")

        # Strava
        default_account = os.getenv("STRAVA_DEFAULT_ACCOUNT", "").strip()
        self.STRAVA_DEFAULT_ACCOUNT = default_account.upper() or None

    def get_strava_credentials(self, account: Optional[str] = None) -> Dict[str, str]:
        """
        Return the Strava credential set for an account.

        Named accounts read STRAVA_CLIENT_ID_<ACCOUNT>, STRAVA_CLIENT_SECRET_<ACCOUNT>
        and STRAVA_REFRESH_TOKEN_<ACCOUNT>. Without an account (and without
        STRAVA_DEFAULT_ACCOUNT) the unsuffixed variables are used.

        Raises:
            StravaConfigError: If any of the three values is missing
        """
        account = (account or self.STRAVA_DEFAULT_ACCOUNT or "").strip().upper()
        suffix = f"_{account}" if account else ""

        credentials = {
            "client_id": os.getenv(f"STRAVA_CLIENT_ID{suffix}"),
            "client_secret": os.getenv(f"STRAVA_CLIENT_SECRET{suffix}"),
            "refresh_token": os.getenv(f"STRAVA_REFRESH_TOKEN{suffix}"),
        }
        missing = [k for k, v in credentials.items() if not v]
        if missing:
            names = ", ".join(f"STRAVA_{k.upper()}{suffix}" for k in missing)
            raise StravaConfigError(f"Missing Strava credentials. Please set {names}.")

        return credentials  # type: ignore[return-value]


settings = Settings()
