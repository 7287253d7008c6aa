"""
Tests for status classification, score formatting and match-card assembly.
"""

from __future__ import annotations

import pytest

from matchcenter.match_presenter import present_match, present_matches, present_raw_match
from matchcenter.schemas import InningsScore, MatchRecord
from matchcenter.score_formatter import format_score, format_start_time, format_teams
from matchcenter.status_classifier import MatchStatusCategory, StatusClassifier, classify


def _make_record(
    status: str = "Live",
    match_type: str = "odi",
    score: list | None = None,
    teams: list | None = None,
    start_time: str | None = "2024-10-15T09:30:00Z",
    **extra,
) -> dict:
    """Return a raw match dict shaped like the collaborator /api/matches output."""
    record = {
        "_id": extra.pop("_id", "m-1"),
        "status": status,
        "matchType": match_type,
        "teams": teams if teams is not None else ["India", "Australia"],
        "venue": "Melbourne Cricket Ground",
        "startTime": start_time,
    }
    if score is not None:
        record["score"] = score
    record.update(extra)
    return record


ODI_CHASE = [
    {"inning": "India Inning 1", "r": 300, "w": 5, "o": 50},
    {"inning": "Australia Inning 1", "r": 150, "w": 2, "o": 25},
]


# ---------------------------------------------------------------------------
# StatusClassifier
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "status, expected",
    [
        ("", MatchStatusCategory.UPCOMING),
        (None, MatchStatusCategory.UPCOMING),
        ("rain delay", MatchStatusCategory.LIVE),
        ("India won by 5 wkts", MatchStatusCategory.COMPLETED),
        ("Match abandoned due to rain", MatchStatusCategory.COMPLETED),
        ("No Result", MatchStatusCategory.COMPLETED),
        ("Match tied (India won the super over)", MatchStatusCategory.COMPLETED),
        ("Stumps - Day 2", MatchStatusCategory.LIVE),
        ("Innings Break", MatchStatusCategory.LIVE),
        ("England lead by 45 runs", MatchStatusCategory.LIVE),
        ("Scheduled", MatchStatusCategory.UPCOMING),
        ("Match starts at 14:00 local", MatchStatusCategory.UPCOMING),
        ("Match not started", MatchStatusCategory.UPCOMING),
    ],
)
def test_classify(status, expected):
    assert classify(status) is expected


def test_completed_markers_take_precedence_over_live_ones():
    assert classify("Live: India won the toss and elected to bat") is MatchStatusCategory.COMPLETED
    assert classify("Australia trail by 20 runs, match drawn") is MatchStatusCategory.COMPLETED


def test_live_markers_take_precedence_over_upcoming_ones():
    assert classify("Live - start delayed") is MatchStatusCategory.LIVE


def test_custom_fallback_bucket():
    classifier = StatusClassifier(fallback=MatchStatusCategory.UPCOMING)
    assert classifier.classify("rain delay") is MatchStatusCategory.UPCOMING
    assert classifier.classify("") is MatchStatusCategory.UPCOMING


# ---------------------------------------------------------------------------
# ScoreFormatter
# ---------------------------------------------------------------------------

def test_format_score_two_innings():
    scores = [
        {"inning": "IND-1", "r": 180, "w": 5, "o": 20},
        {"inning": "AUS-1", "r": 90, "w": 6, "o": 15},
    ]
    assert format_score(scores) == "IND-1 • 180/5 • 20 ov | AUS-1 • 90/6 • 15 ov"


def test_format_score_accepts_models():
    scores = [
        InningsScore(inning="IND-1", runs=180, wickets=5, overs=20),
        InningsScore(inning="AUS-1", runs=90, wickets=6, overs=12.4),
    ]
    assert format_score(scores) == "IND-1 • 180/5 • 20 ov | AUS-1 • 90/6 • 12.4 ov"


def test_format_score_only_first_two_innings():
    scores = [{"inning": "A", "r": 1, "w": 0}, {"inning": "B", "r": 2, "w": 0}, {"inning": "C", "r": 3, "w": 0}]
    assert format_score(scores) == "A • 1/0 | B • 2/0"


def test_format_score_needs_both_runs_and_wickets():
    assert format_score([{"inning": "A", "r": 50, "o": 5}]) == "A • 5 ov"
    assert format_score([{"w": 3, "o": 5.3}]) == "5.3 ov"


def test_format_score_drops_empty_innings():
    assert format_score([{}, {"inning": "B"}]) == "B"
    assert format_score([{}, {}]) == ""


@pytest.mark.parametrize("scores", [None, [], "180/5", {"r": 1}])
def test_format_score_rejects_empty_or_non_sequence(scores):
    assert format_score(scores) is None


def test_format_teams_fallbacks():
    assert format_teams(MatchRecord(teams=["India", "Australia"])) == "India vs Australia"
    assert format_teams(MatchRecord.model_validate({"teamA": "IND"})) == "IND vs TBD"
    assert format_teams(MatchRecord.model_validate({"teamB": "AUS"})) == "TBD vs AUS"
    assert format_teams(MatchRecord(name="Final")) == "Final"
    assert format_teams(MatchRecord()) == "Match"


def test_format_start_time():
    assert format_start_time("2024-12-26T07:30:00Z", "UTC") == "Thu, Dec 26, 07:30 AM"
    assert format_start_time("2024-12-26T07:30:00Z", "Asia/Kolkata") == "Thu, Dec 26, 01:00 PM"
    assert format_start_time(None) == "TBD"
    assert format_start_time("next week") == "next week"


# ---------------------------------------------------------------------------
# MatchPresenter
# ---------------------------------------------------------------------------

def test_live_card_carries_win_probability():
    card = present_raw_match(_make_record(score=ODI_CHASE))

    assert card.category is MatchStatusCategory.LIVE
    assert card.score_text == "India Inning 1 • 300/5 • 50 ov | Australia Inning 1 • 150/2 • 25 ov"
    assert (card.win_probability.batting_win, card.win_probability.bowling_win) == (56, 44)
    assert card.win_probability_label == "Australia 56% – India 44%"
    assert card.match_format == "ODI"

    payload = card.to_payload()
    assert payload["winProbability"] == {"battingWin": 56, "bowlingWin": 44}
    assert payload["category"] == "live"
    assert payload["scoreText"] == card.score_text


def test_legacy_team_fields_in_probability_label():
    raw = _make_record(score=ODI_CHASE, teams=[], teamA="IND", teamB="AUS")
    assert present_raw_match(raw).win_probability_label == "AUS 56% – IND 44%"


def test_probability_label_defaults_without_teams():
    raw = _make_record(score=ODI_CHASE, teams=[])
    assert present_raw_match(raw).win_probability_label == "Chasing 56% – Defending 44%"


def test_completed_card_has_no_win_probability():
    card = present_raw_match(_make_record(status="Australia won by 3 wkts", score=ODI_CHASE))

    assert card.category is MatchStatusCategory.COMPLETED
    assert card.win_probability is None
    payload = card.to_payload()
    assert "winProbability" not in payload
    assert payload["scoreText"] is not None


def test_live_card_without_second_innings_omits_probability():
    card = present_raw_match(_make_record(score=ODI_CHASE[:1]))
    assert card.category is MatchStatusCategory.LIVE
    assert card.score_text == "India Inning 1 • 300/5 • 50 ov"
    assert card.win_probability is None


def test_upcoming_card_without_status_or_score():
    card = present_raw_match(_make_record(status=None, start_time=None))
    payload = card.to_payload()

    assert card.category is MatchStatusCategory.UPCOMING
    assert payload["scoreText"] is None
    assert payload["statusLabel"] == "upcoming"
    assert payload["startTime"] == "TBD"
    assert payload["title"] == "India vs Australia"


def test_malformed_score_degrades_instead_of_failing():
    bad = [{"r": 100, "w": 15, "o": 20}, {"r": "lots", "w": 2}]
    card = present_raw_match(_make_record(score=bad))

    assert card.category is MatchStatusCategory.LIVE
    assert card.score_text is None
    assert card.win_probability is None
    assert card.title == "India vs Australia"


def test_non_list_score_is_ignored():
    card = present_raw_match(_make_record(score="n/a"))
    assert card.score_text is None


def test_present_match_accepts_validated_record():
    record = MatchRecord.model_validate(_make_record(score=ODI_CHASE))
    assert present_match(record).win_probability.batting_win == 56


def test_present_matches_sorts_by_start_time():
    records = [
        _make_record(_id="late", start_time="2024-12-26T07:30:00Z"),
        _make_record(_id="early", start_time="2024-08-02T11:30:00Z"),
        _make_record(_id="unknown", start_time=None),
        _make_record(_id="by-date", start_time=None, date="2024-10-01T00:00:00Z"),
    ]
    cards = present_matches(records)
    assert [c.id for c in cards] == ["unknown", "early", "by-date", "late"]


def test_present_matches_filters_by_category():
    records = [
        _make_record(_id="live", status="Live"),
        _make_record(_id="done", status="India won by 10 runs"),
        _make_record(_id="next", status="Scheduled"),
    ]
    assert [c.id for c in present_matches(records, category="completed")] == ["done"]
    assert [c.id for c in present_matches(records, category="live")] == ["live"]
    assert len(present_matches(records, category="all")) == 3


def test_bad_unrelated_field_keeps_live_probability():
    card = present_raw_match(_make_record(score=ODI_CHASE, venue=123))

    assert card.category is MatchStatusCategory.LIVE
    assert card.venue is None
    assert card.title == "India vs Australia"
    assert card.score_text == "India Inning 1 • 300/5 • 50 ov | Australia Inning 1 • 150/2 • 25 ov"
    assert (card.win_probability.batting_win, card.win_probability.bowling_win) == (56, 44)


def test_bad_team_list_only_loses_team_names():
    card = present_raw_match(_make_record(score=ODI_CHASE, teams=["India", None]))

    assert card.title == "Match"
    assert card.venue == "Melbourne Cricket Ground"
    assert card.win_probability_label == "Chasing 56% – Defending 44%"


def test_format_score_renders_integral_floats_without_decimal():
    assert format_score([{"r": 180.0, "w": 5.0, "o": 20}]) == "180/5 • 20 ov"


def test_format_start_time_day_is_not_zero_padded():
    assert format_start_time("2024-12-06T07:30:00Z", "UTC") == "Fri, Dec 6, 07:30 AM"
