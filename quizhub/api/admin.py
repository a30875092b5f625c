"""
Coordinator endpoints for round and leaderboard control
"""
from typing import Optional

from fastapi import APIRouter, Depends

from quizhub.models import ShowLeaderboardRequest, StartRoundRequest
from quizhub.state import EventServices, get_services


router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/start")
async def start_round(request: StartRoundRequest, services: EventServices = Depends(get_services)):
    """
    Coordinator: Start a round with timer

    Request:
        {
            "text": "Name the capital of Peru",
            "schema": "single word",
            "duration": 300,     # optional, default from settings
            "round": "round2"    # optional, default "round1"
        }
    """
    duration = request.duration
    if duration is None:
        duration = services.settings.default_duration_seconds

    descriptor = services.session.start_round(
        request.text, request.answer_schema, duration, request.round
    )

    return {
        "status": "started",
        "round": descriptor.round_label,
        "startTimestamp": descriptor.start_timestamp,
        "durationSeconds": descriptor.duration_seconds,
    }


@router.post("/clear-submissions")
def clear_submissions(services: EventServices = Depends(get_services)):
    """Coordinator: Remove every submission for a fresh slate"""
    removed = services.submissions.clear_all()
    return {"status": "cleared", "removed": removed}


@router.post("/show-leaderboard")
async def show_leaderboard(
    request: Optional[ShowLeaderboardRequest] = None,
    services: EventServices = Depends(get_services),
):
    """
    Coordinator: Reveal the leaderboard to every viewer

    Request (optional):
        {"round": "round1"}
    """
    label = services.session.show_leaderboard(request.round if request else None)
    return {"status": "shown", "round": label}


@router.post("/hide-leaderboard")
async def hide_leaderboard(services: EventServices = Depends(get_services)):
    services.session.hide_leaderboard()
    return {"status": "hidden"}


@router.get("/status")
async def session_status(services: EventServices = Depends(get_services)):
    """Get status of the current round"""
    status = services.session.status()
    status["totalTeams"] = len(services.teams)
    status["totalSubmissions"] = len(services.submissions)
    return status
