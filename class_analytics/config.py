"""
Configuration management for the class attendance analytics.

Loads environment variables and validates required settings.
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    """Configuration class for the dashboard aggregations."""

    # Supabase credentials (required only when reading from Supabase)
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
    SUPABASE_SERVICE_ROLE_KEY: str = os.getenv("SUPABASE_SERVICE_ROLE_KEY", "")

    # Source tables
    SESSIONS_TABLE: str = os.getenv("SESSIONS_TABLE", "class_sessions")
    NOTES_TABLE: str = os.getenv("NOTES_TABLE", "dashboard_notes")

    # Session classification thresholds (fraction of capacity)
    LOW_ATTENDANCE_THRESHOLD: float = 0.5  # Below this a session is "low attendance"
    FULL_THRESHOLD: float = 0.9  # At or above this a session is "full"

    @classmethod
    def validate(cls) -> None:
        """
        Validate that the Supabase configuration is present.

        Raises:
            ValueError: If required configuration is missing.
        """
        missing = []

        if not cls.SUPABASE_URL:
            missing.append("SUPABASE_URL")
        if not cls.SUPABASE_SERVICE_ROLE_KEY:
            missing.append("SUPABASE_SERVICE_ROLE_KEY")

        if missing:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing)}. "
                f"Please create a .env file with these values (see .env.example)."
            )

    @classmethod
    def validate_thresholds(cls) -> None:
        """
        Validate the session classification thresholds.

        Raises:
            ValueError: If a threshold is outside 0-1 or low >= full.
        """
        for name in ("LOW_ATTENDANCE_THRESHOLD", "FULL_THRESHOLD"):
            value = getattr(cls, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be between 0 and 1, got {value}")

        if cls.LOW_ATTENDANCE_THRESHOLD >= cls.FULL_THRESHOLD:
            raise ValueError(
                f"LOW_ATTENDANCE_THRESHOLD ({cls.LOW_ATTENDANCE_THRESHOLD}) must be "
                f"below FULL_THRESHOLD ({cls.FULL_THRESHOLD})"
            )
