"""Load Cardmarket credentials from the environment (.env supported)."""

import os

from dotenv import load_dotenv

from .errors import ConfigError
from .signature import Credentials


def credentials_from_env(prefix: str = "CARDMARKET") -> Credentials:
    """Read Cardmarket credentials from environment variables.

    Args:
        prefix: Variable prefix, e.g. 'CARDMARKET' reads CARDMARKET_APP_TOKEN

    Returns:
        Credentials with empty strings for missing secrets
    """
    load_dotenv()

    app_token = os.getenv(f"{prefix}_APP_TOKEN")
    access_token = os.getenv(f"{prefix}_ACCESS_TOKEN")

    if not app_token or not access_token:
        raise ConfigError(
            f"Missing {prefix}_APP_TOKEN or {prefix}_ACCESS_TOKEN in .env file"
        )

    return Credentials(
        consumer_key=app_token,
        consumer_secret=os.getenv(f"{prefix}_APP_SECRET", ""),
        access_token=access_token,
        access_token_secret=os.getenv(f"{prefix}_ACCESS_TOKEN_SECRET", ""),
    )


def debug_from_env(prefix: str = "CARDMARKET") -> bool:
    return os.getenv(f"{prefix}_DEBUG", "").lower() in ("1", "true", "yes")
