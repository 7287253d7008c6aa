from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence, Tuple


class MatchStatusCategory(str, Enum):
    LIVE = "live"
    UPCOMING = "upcoming"
    COMPLETED = "completed"


# Checked in order; the first bucket with a matching keyword wins.
COMPLETED_MARKERS = ("won", "lost", "abandon", "no result", "draw", "tie")
LIVE_MARKERS = ("live", "stumps", "lunch", "tea", "session", "trail", "lead", "innings")
UPCOMING_MARKERS = ("scheduled", "upcoming", "start", "match not started")

DEFAULT_RULES: Tuple[Tuple[MatchStatusCategory, Sequence[str]], ...] = (
    (MatchStatusCategory.COMPLETED, COMPLETED_MARKERS),
    (MatchStatusCategory.LIVE, LIVE_MARKERS),
    (MatchStatusCategory.UPCOMING, UPCOMING_MARKERS),
)


class StatusClassifier:
    """Substring classifier for free-text match status lines.

    Unrecognised text falls into ``fallback`` (live by default) so an odd
    status like "rain delay" still shows the live badge. Empty text means the
    match has no status yet and is treated as upcoming.
    """

    def __init__(
        self,
        rules: Sequence[Tuple[MatchStatusCategory, Sequence[str]]] = DEFAULT_RULES,
        fallback: MatchStatusCategory = MatchStatusCategory.LIVE,
    ):
        self.rules = tuple(rules)
        self.fallback = fallback

    def classify(self, status_text: Optional[str]) -> MatchStatusCategory:
        s = (status_text or "").lower()
        if not s:
            return MatchStatusCategory.UPCOMING
        for category, markers in self.rules:
            if any(marker in s for marker in markers):
                return category
        return self.fallback


_default = StatusClassifier()


def classify(status_text: Optional[str]) -> MatchStatusCategory:
    return _default.classify(status_text)
