from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Optional, Sequence

from matchcenter.schemas import InningsScore, WinProbabilityResult

logger = logging.getLogger(__name__)

T20_OVERS = 20
ODI_OVERS = 50

MIN_OVERS_DIVISOR = 0.1
WICKET_WEIGHT = 0.08
NEUTRAL_WICKETS = 5
ADVANTAGE_SCALE = 0.25
MIN_CHASE_PROB = 0.03
MAX_CHASE_PROB = 0.97


class MatchFormat(str, Enum):
    T20 = "t20"
    ODI = "odi"
    OTHER = "other"

    @classmethod
    def from_match_type(cls, match_type: Optional[str]) -> "MatchFormat":
        t = (match_type or "").lower()
        if "t20" in t:
            return cls.T20
        if "odi" in t or "one day" in t:
            return cls.ODI
        return cls.OTHER

    @property
    def total_overs(self) -> int:
        return ODI_OVERS if self is MatchFormat.ODI else T20_OVERS


def total_overs_for_format(match_type: Optional[str]) -> int:
    return MatchFormat.from_match_type(match_type).total_overs


def _round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; percentages round .5 upwards.
    return int(math.floor(value + 0.5))


def estimate(scores: Optional[Sequence[InningsScore]], match_format: Optional[str]) -> Optional[WinProbabilityResult]:
    """Chasing side's win chance from the first two innings.

    Returns None when there is nothing to compare (fewer than two innings or
    a missing run count). A reached target or exhausted overs are decided
    outright; otherwise a run-rate and wickets-in-hand heuristic is clamped
    to [3%, 97%].
    """
    if not scores or len(scores) < 2:
        return None
    first, second = scores[0], scores[1]
    if first.runs is None or second.runs is None:
        return None

    total_overs = total_overs_for_format(match_format)
    target = first.runs + 1
    runs_needed = target - second.runs
    overs_played = second.overs or 0
    overs_remaining = max(total_overs - overs_played, 0)

    if runs_needed <= 0:
        return WinProbabilityResult(batting_win=100, bowling_win=0)
    if overs_remaining <= 0:
        return WinProbabilityResult(batting_win=0, bowling_win=100)

    cur_rr = second.runs / max(overs_played, MIN_OVERS_DIVISOR)
    req_rr = runs_needed / max(overs_remaining, MIN_OVERS_DIVISOR)
    wickets_in_hand = 10 - (second.wickets or 0)

    advantage = (cur_rr - req_rr) / (req_rr + MIN_OVERS_DIVISOR) + WICKET_WEIGHT * (wickets_in_hand - NEUTRAL_WICKETS)
    chasing_win = min(MAX_CHASE_PROB, max(MIN_CHASE_PROB, 0.5 + ADVANTAGE_SCALE * advantage))

    logger.debug(
        "Chase estimate: target=%d needed=%d overs_left=%.1f crr=%.3f rrr=%.3f wih=%d p=%.4f",
        target, runs_needed, overs_remaining, cur_rr, req_rr, wickets_in_hand, chasing_win,
    )

    return WinProbabilityResult(
        batting_win=_round_half_up(chasing_win * 100),
        bowling_win=_round_half_up((1 - chasing_win) * 100),
    )
