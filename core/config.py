# =============================================================================
# core/config.py  —  Runtime configuration
# =============================================================================
#
# Every setting comes from the process environment.  Entry points call
# python-dotenv's load_dotenv() first, so a local .env file works too.
#
# Settings are passed explicitly into each adapter rather than read ad hoc,
# which lets tests hand in a Settings with or without credentials.
# The dispatcher calls load_settings() per request when none is injected,
# so a token rotated in the environment is picked up on the next call.
# =============================================================================

from dataclasses import dataclass
import logging
import os


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """Configuration consumed by the adapters and the transports."""

    kakao_rest_api_key: str = ""        # Place search auth (KakaoAK scheme)
    kakao_access_token: str = ""        # Calendar/message auth (Bearer scheme)
    host: str = "0.0.0.0"
    port: int = 3000                    # HTTP mode only
    transport: str = "stdio"            # "stdio" or "http"
    environment: str = "development"
    log_level: str = "INFO"

    @property
    def has_rest_api_key(self) -> bool:
        return bool(self.kakao_rest_api_key)

    @property
    def has_access_token(self) -> bool:
        return bool(self.kakao_access_token)


def _parse_port(raw: str, default: int) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        logger.warning(f"Invalid PORT value {raw!r}; falling back to {default}")
        return default


def load_settings(environ=None) -> Settings:
    """Build Settings from an environment mapping (defaults to os.environ)."""
    env = os.environ if environ is None else environ

    return Settings(
        kakao_rest_api_key=env.get("KAKAO_REST_API_KEY", "").strip(),
        kakao_access_token=env.get("KAKAO_ACCESS_TOKEN", "").strip(),
        host=env.get("HOST", "0.0.0.0"),
        port=_parse_port(env.get("PORT", "3000"), 3000),
        transport=env.get("TRANSPORT", "stdio").strip().lower() or "stdio",
        environment=env.get("APP_ENV") or env.get("NODE_ENV") or "development",
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
    )


def warn_missing_credentials(settings: Settings) -> None:
    """Log startup warnings for credentials that are absent.

    Missing credentials are never fatal: the affected tools answer with an
    auth-required failure instead.
    """
    if not settings.has_rest_api_key:
        logger.warning("KAKAO_REST_API_KEY not set. Place search will not work.")
    if not settings.has_access_token:
        logger.warning(
            "KAKAO_ACCESS_TOKEN not set. Calendar and message tools will ask for login."
        )
