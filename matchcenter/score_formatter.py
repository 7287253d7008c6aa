from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Union

import pytz

from matchcenter.config import DISPLAY_TIMEZONE
from matchcenter.schemas import InningsScore, MatchRecord
from matchcenter.utils import parse_timestamp, to_local

logger = logging.getLogger(__name__)

FRAGMENT_SEPARATOR = " • "
INNINGS_SEPARATOR = " | "
MAX_INNINGS_SHOWN = 2

ScoreEntry = Union[InningsScore, Dict[str, Any]]


def _fields(entry: ScoreEntry):
    if isinstance(entry, InningsScore):
        return entry.inning, entry.runs, entry.wickets, entry.overs
    if isinstance(entry, dict):
        return entry.get("inning"), entry.get("r"), entry.get("w"), entry.get("o")
    return None, None, None, None


def _format_number(value) -> str:
    # 20.0 renders as "20", 12.4 stays "12.4"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _format_innings(entry: ScoreEntry) -> str:
    inning, runs, wickets, overs = _fields(entry)
    parts: List[str] = []
    if inning:
        parts.append(str(inning))
    if runs is not None and wickets is not None:
        parts.append(f"{_format_number(runs)}/{_format_number(wickets)}")
    if overs is not None:
        parts.append(f"{_format_number(overs)} ov")
    return FRAGMENT_SEPARATOR.join(parts)


def format_score(scores: Optional[Sequence[ScoreEntry]]) -> Optional[str]:
    """Compact display text for the first two innings, e.g. ``IND-1 • 180/5 • 20 ov | ...``."""
    if not isinstance(scores, (list, tuple)) or len(scores) == 0:
        return None
    rendered = [_format_innings(entry) for entry in scores[:MAX_INNINGS_SHOWN]]
    return INNINGS_SEPARATOR.join(text for text in rendered if text)


def format_teams(record: MatchRecord) -> str:
    if record.teams:
        return " vs ".join(record.teams)
    if record.team_a or record.team_b:
        return f"{record.team_a or 'TBD'} vs {record.team_b or 'TBD'}"
    return record.name or "Match"


def format_start_time(value: Optional[Union[str, int, float]], tz_name: str = DISPLAY_TIMEZONE) -> str:
    if not value:
        return "TBD"
    moment = parse_timestamp(value)
    if moment is None:
        return str(value)
    try:
        local = to_local(moment, tz_name)
    except pytz.UnknownTimeZoneError:
        logger.warning("Unknown display timezone %r, falling back to UTC", tz_name)
        local = moment
    # day without zero padding: "Dec 6", not "Dec 06"
    return f"{local.strftime('%a, %b')} {local.day}, {local.strftime('%I:%M %p')}"
