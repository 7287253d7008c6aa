import os

from dotenv import load_dotenv

load_dotenv()

COLLABORATOR_API_URL = os.getenv("COLLABORATOR_API_URL", "http://localhost:5000").strip()
COLLABORATOR_API_TOKEN = os.getenv("COLLABORATOR_API_TOKEN", "").strip()
REQUEST_TIMEOUT_SECONDS = int(os.getenv("REQUEST_TIMEOUT_SECONDS", "12"))

CACHE_ENABLED = os.getenv("CACHE_ENABLED", "true").lower() in {"1", "true", "yes"}
REDIS_URL = os.getenv("REDIS_URL")
CACHE_NAMESPACE = os.getenv("CACHE_NAMESPACE", "matchcenter")
CACHE_VERSION = os.getenv("CACHE_VERSION", "v1")

MATCH_LIST_TTL = int(os.getenv("MATCH_LIST_TTL", "30"))    # live scores move every ball
PLAYER_LIST_TTL = int(os.getenv("PLAYER_LIST_TTL", "300"))  # roster edits are rare

DISPLAY_TIMEZONE = os.getenv("DISPLAY_TIMEZONE", "UTC")
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def validate_config() -> None:
    if not COLLABORATOR_API_URL.startswith("http"):
        raise RuntimeError("COLLABORATOR_API_URL must start with http/https")

    if REQUEST_TIMEOUT_SECONDS <= 0:
        raise RuntimeError("REQUEST_TIMEOUT_SECONDS must be positive")

    if MATCH_LIST_TTL <= 0 or PLAYER_LIST_TTL <= 0:
        raise RuntimeError("MATCH_LIST_TTL and PLAYER_LIST_TTL must be positive")
