import logging
from typing import Any, Dict, List

import requests

from matchcenter.cache import cache
from matchcenter.config import (
    COLLABORATOR_API_TOKEN,
    COLLABORATOR_API_URL,
    MATCH_LIST_TTL,
    PLAYER_LIST_TTL,
    REQUEST_TIMEOUT_SECONDS,
)

logger = logging.getLogger(__name__)


class UpstreamError(Exception):
    """Raised when the match/player store cannot be reached or answers badly."""
    pass


def _headers() -> Dict[str, str]:
    headers = {"Accept": "application/json"}
    if COLLABORATOR_API_TOKEN:
        headers["Authorization"] = f"Bearer {COLLABORATOR_API_TOKEN}"
    return headers


def _get_list(endpoint: str) -> List[Dict[str, Any]]:
    url = f"{COLLABORATOR_API_URL.rstrip('/')}/{endpoint.lstrip('/')}"
    try:
        response = requests.get(url, headers=_headers(), timeout=REQUEST_TIMEOUT_SECONDS)
    except requests.RequestException as e:
        logger.error("Network error fetching %s: %s", url, e)
        raise UpstreamError(f"Network error: {e}") from e

    if response.status_code != 200:
        logger.error("Error fetching %s: %s", url, response.status_code)
        raise UpstreamError(f"HTTP {response.status_code} from {endpoint}")

    try:
        data = response.json()
    except ValueError as e:
        logger.error("Invalid JSON from %s: %s", url, e)
        raise UpstreamError(f"Invalid JSON response from {endpoint}: {e}") from e

    if not isinstance(data, list):
        logger.error("Expected a list from %s, got %s", url, type(data).__name__)
        raise UpstreamError(f"Expected a list from {endpoint}, got {type(data).__name__}")

    logger.info("Fetched %d records from %s", len(data), endpoint)
    return data


def _cached_list(endpoint: str, ttl: int) -> List[Dict[str, Any]]:
    return cache.get_or_set(endpoint, ttl, lambda: _get_list(endpoint))


def fetch_matches() -> List[Dict[str, Any]]:
    """Live and cached recent fixtures from the collaborator store."""
    return _cached_list("/api/matches", MATCH_LIST_TTL)


def fetch_players() -> List[Dict[str, Any]]:
    return _cached_list("/api/players", PLAYER_LIST_TTL)
