from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic import ValidationError

from matchcenter.schemas import MatchCard, MatchRecord, WinProbabilityResult
from matchcenter.score_formatter import format_score, format_start_time, format_teams
from matchcenter.status_classifier import MatchStatusCategory, classify
from matchcenter.utils import EPOCH, parse_timestamp
from matchcenter.win_probability import estimate

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "all"


def _probability_label(record: MatchRecord, prob: WinProbabilityResult) -> str:
    chasing = record.team_b or (record.teams[1] if record.teams and len(record.teams) > 1 else None) or "Chasing"
    defending = record.team_a or (record.teams[0] if record.teams else None) or "Defending"
    return f"{chasing} {prob.batting_win}% – {defending} {prob.bowling_win}%"


def present_match(record: MatchRecord) -> MatchCard:
    category = classify(record.status)
    card = MatchCard(
        category=category,
        id=record.record_id,
        title=format_teams(record),
        venue=record.venue,
        start_time=format_start_time(record.start_time or record.date),
        status_label=record.status or category.value,
        result=record.result,
        match_format=record.match_type.upper() if record.match_type else None,
    )

    try:
        card.score_text = format_score(record.score)
    except (TypeError, ValueError) as e:
        logger.warning("Score text omitted for match %s: %s", record.record_id, e)

    if category is MatchStatusCategory.LIVE:
        try:
            prob = estimate(record.score, record.match_type)
        except (TypeError, ValueError, ZeroDivisionError) as e:
            logger.warning("Win probability omitted for match %s: %s", record.record_id, e)
            prob = None
        if prob is not None:
            card.win_probability = prob
            card.win_probability_label = _probability_label(record, prob)

    return card


def present_raw_match(raw: Dict[str, Any]) -> MatchCard:
    try:
        record = MatchRecord.model_validate(raw)
    except ValidationError as e:
        # Drop only the top-level keys that failed; "score" survives unless it is one of them.
        bad_keys = {err["loc"][0] for err in e.errors() if err.get("loc")}
        logger.warning(
            "Match %s has malformed fields %s, omitting them: %s",
            raw.get("_id") or raw.get("id"), sorted(map(str, bad_keys)), e,
        )
        cleaned = {k: v for k, v in raw.items() if k not in bad_keys}
        try:
            record = MatchRecord.model_validate(cleaned)
        except ValidationError:
            record = MatchRecord(status=raw.get("status") if isinstance(raw.get("status"), str) else None)
    return present_match(record)


def _start_of(item: Union[MatchRecord, Dict[str, Any]]) -> datetime:
    if isinstance(item, MatchRecord):
        value = item.start_time or item.date
    else:
        value = item.get("startTime") or item.get("date")
    return parse_timestamp(value) or EPOCH


def present_matches(
    records: Iterable[Union[MatchRecord, Dict[str, Any]]],
    category: Optional[str] = ALL_CATEGORIES,
) -> List[MatchCard]:
    """Cards ordered by start time (nearest first), optionally one category only.

    Records without a usable start time sort as the epoch, i.e. first.
    """
    usable = []
    for item in records:
        if isinstance(item, (MatchRecord, dict)):
            usable.append(item)
        else:
            logger.warning("Skipping match entry of type %s", type(item).__name__)
    ordered = sorted(usable, key=_start_of)
    cards = [
        present_match(item) if isinstance(item, MatchRecord) else present_raw_match(item)
        for item in ordered
    ]
    if category and category != ALL_CATEGORIES:
        wanted = MatchStatusCategory(category)
        cards = [card for card in cards if card.category is wanted]
    return cards
