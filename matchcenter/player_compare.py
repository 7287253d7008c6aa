from __future__ import annotations

import math
from typing import Any, Dict, List, Optional

import pandas as pd

from matchcenter.schemas import MetricRow, PlayerComparison, PlayerSummary

METRICS = ["runs", "hundreds", "fifties", "battingAverage", "wickets", "strikeRate"]
MIN_RADIUS = 0.05
DEFAULT_RADIUS = 110


class PlayerNotFound(Exception):
    pass


def _player_id(player: Dict[str, Any]):
    return player.get("_id", player.get("id"))


def filter_by_role(players: List[Dict[str, Any]], role: Optional[str] = "all") -> List[Dict[str, Any]]:
    if not role or role.lower() == "all":
        return list(players)
    return [p for p in players if (p.get("role") or "").lower() == role.lower()]


def _metric_frame(players: List[Dict[str, Any]]) -> pd.DataFrame:
    frame = pd.DataFrame([{m: p.get(m) for m in METRICS} for p in players], columns=METRICS)
    return frame.apply(pd.to_numeric, errors="coerce").fillna(0).astype(float)


def metric_maxima(players: List[Dict[str, Any]]) -> Dict[str, float]:
    """Per-metric roster maximum, never below 1 so shapes stay finite."""
    maxima = _metric_frame(players).max().fillna(0).clip(lower=1)
    return {m: float(maxima[m]) for m in METRICS}


def radar_shape(player: Optional[Dict[str, Any]], maxima: Dict[str, float]) -> List[float]:
    values = _metric_frame([player or {}]).iloc[0]
    return [max(MIN_RADIUS, float(values[m]) / maxima[m]) for m in METRICS]


def radar_points(shape: List[float], radius: float = 120) -> str:
    """SVG polygon points, first axis pointing straight up, centred at (radius, radius)."""
    if not shape:
        return ""
    step = (2 * math.pi) / len(shape)
    points = []
    for idx, r in enumerate(shape):
        angle = step * idx - math.pi / 2
        x = radius * r * math.cos(angle) + radius
        y = radius * r * math.sin(angle) + radius
        points.append(f"{x:.2f},{y:.2f}")
    return " ".join(points)


def _find(players: List[Dict[str, Any]], player_id) -> Dict[str, Any]:
    for p in players:
        if str(_player_id(p)) == str(player_id):
            return p
    raise PlayerNotFound(f"No player with id {player_id}.")


def _summary(player: Optional[Dict[str, Any]]) -> Optional[PlayerSummary]:
    if player is None:
        return None
    return PlayerSummary(
        id=_player_id(player),
        name=player.get("name"),
        team=player.get("team"),
        role=player.get("role"),
    )


def compare_players(
    players: List[Dict[str, Any]],
    left_id=None,
    right_id=None,
    radius: float = DEFAULT_RADIUS,
    role: Optional[str] = "all",
) -> PlayerComparison:
    """Radar data for two roster players.

    Shapes are normalised against the whole roster so both polygons share a
    scale. Omitted ids default to the first and second players matching
    ``role``; explicit ids are looked up in the whole roster.
    """
    candidates = filter_by_role(players, role)
    left = _find(players, left_id) if left_id is not None else (candidates[0] if candidates else None)
    if right_id is not None:
        right = _find(players, right_id)
    elif len(candidates) > 1:
        right = candidates[1]
    else:
        right = candidates[0] if candidates else None

    maxima = metric_maxima(players)
    left_shape = radar_shape(left, maxima)
    right_shape = radar_shape(right, maxima)

    return PlayerComparison(
        left=_summary(left),
        right=_summary(right),
        metrics=list(METRICS),
        left_shape=left_shape,
        right_shape=right_shape,
        left_points=radar_points(left_shape, radius),
        right_points=radar_points(right_shape, radius),
        table=[
            MetricRow(
                metric=m,
                left=left.get(m) if left else None,
                right=right.get(m) if right else None,
            )
            for m in METRICS
        ],
    )
