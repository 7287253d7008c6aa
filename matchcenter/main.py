import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional

from fastapi import Body, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from matchcenter.config import CORS_ORIGINS, LOG_LEVEL, validate_config
from matchcenter.data_provider import UpstreamError, fetch_matches, fetch_players
from matchcenter.match_presenter import present_matches
from matchcenter.player_compare import PlayerNotFound, compare_players
from matchcenter.schemas import WinProbabilityRequest
from matchcenter.win_probability import estimate

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

CategoryFilter = Literal["all", "live", "upcoming", "completed"]

app = FastAPI(title="Cricket Match Centre", version="1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup():
    validate_config()


@app.get("/health")
def health_check():
    return {"status": "ok", "time": datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z"}


@app.get("/matches")
def list_match_cards(category: CategoryFilter = "all"):
    try:
        records = fetch_matches()
    except UpstreamError as e:
        raise HTTPException(status_code=502, detail=f"Unable to load matches: {e}")
    cards = present_matches(records, category=category)
    logger.info("Serving %d match cards (category=%s)", len(cards), category)
    return [card.to_payload() for card in cards]


@app.post("/matches/cards")
def build_match_cards(records: List[Dict[str, Any]] = Body(...), category: CategoryFilter = "all"):
    return [card.to_payload() for card in present_matches(records, category=category)]


@app.post("/win-probability")
def win_probability(request: WinProbabilityRequest):
    result = estimate(request.score, request.match_type)
    if result is None:
        return None
    return result.model_dump(by_alias=True)


@app.get("/players/compare")
def compare(
    left_id: Optional[str] = None,
    right_id: Optional[str] = None,
    role: str = Query("all"),
):
    try:
        players = fetch_players()
    except UpstreamError as e:
        raise HTTPException(status_code=502, detail=f"Unable to load players: {e}")

    try:
        comparison = compare_players(players, left_id=left_id, right_id=right_id, role=role)
    except PlayerNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return comparison.model_dump(by_alias=True)
