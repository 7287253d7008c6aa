"""
Boundary models for match-centre payloads.

Upstream records arrive with camelCase and single-letter keys
(``matchType``, ``r``/``w``/``o``); the models accept those aliases and
expose snake_case attributes to the rest of the package. Output models
serialise back to the camelCase keys the presentation layer reads.
"""
from __future__ import annotations

from typing import Any, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from matchcenter.status_classifier import MatchStatusCategory

RecordId = Union[str, int]
Timestamp = Union[str, int, float]


class InningsScore(BaseModel):
    """One batting innings snapshot. ``overs`` 12.4 means 12 overs and 4 balls."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    inning: Optional[str] = None
    runs: Optional[int] = Field(None, alias="r", ge=0)
    wickets: Optional[int] = Field(None, alias="w", ge=0, le=10)
    overs: Optional[float] = Field(None, alias="o", ge=0)


class MatchRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    record_id: Optional[RecordId] = Field(None, validation_alias=AliasChoices("_id", "id"))
    status: Optional[str] = None
    match_type: Optional[str] = Field(None, alias="matchType")
    score: Optional[List[InningsScore]] = None

    # Normalised team list; older documents only carry teamA/teamB or a name.
    teams: Optional[List[str]] = None
    team_a: Optional[str] = Field(None, alias="teamA")
    team_b: Optional[str] = Field(None, alias="teamB")
    name: Optional[str] = None

    venue: Optional[str] = None
    # ISO-8601 text or epoch milliseconds
    start_time: Optional[Timestamp] = Field(None, alias="startTime")
    date: Optional[Timestamp] = None
    result: Optional[str] = None

    @field_validator("score", mode="before")
    @classmethod
    def _score_must_be_sequence(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return value
        return None


class WinProbabilityResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    batting_win: int = Field(alias="battingWin", ge=0, le=100)
    bowling_win: int = Field(alias="bowlingWin", ge=0, le=100)


class MatchCard(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    category: MatchStatusCategory
    score_text: Optional[str] = Field(None, alias="scoreText")
    win_probability: Optional[WinProbabilityResult] = Field(None, alias="winProbability")

    id: Optional[RecordId] = None
    title: str = "Match"
    venue: Optional[str] = None
    start_time: str = Field("TBD", alias="startTime")
    status_label: str = Field("", alias="statusLabel")
    result: Optional[str] = None
    match_format: Optional[str] = Field(None, alias="format")
    win_probability_label: Optional[str] = Field(None, alias="winProbabilityLabel")

    def to_payload(self) -> dict:
        payload = self.model_dump(by_alias=True, mode="json")
        if self.win_probability is None:
            payload.pop("winProbability", None)
            payload.pop("winProbabilityLabel", None)
        return payload


class WinProbabilityRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    score: Optional[List[InningsScore]] = None
    match_type: Optional[str] = Field(None, alias="matchType")


class PlayerSummary(BaseModel):
    id: Optional[RecordId] = None
    name: Optional[str] = None
    team: Optional[str] = None
    role: Optional[str] = None


class MetricRow(BaseModel):
    metric: str
    left: Any = None
    right: Any = None


class PlayerComparison(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    left: Optional[PlayerSummary] = None
    right: Optional[PlayerSummary] = None
    metrics: List[str]
    left_shape: List[float] = Field(alias="leftShape")
    right_shape: List[float] = Field(alias="rightShape")
    left_points: str = Field(alias="leftPoints")
    right_points: str = Field(alias="rightPoints")
    table: List[MetricRow]
