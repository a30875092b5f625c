"""
Leaderboard endpoints
"""
from typing import Optional

from fastapi import APIRouter, Depends

from quizhub.services.leaderboard import (
    get_leaderboard_data,
    project_leaderboard,
    resolve_leaderboard_round,
)
from quizhub.state import EventServices, get_services


router = APIRouter(tags=["leaderboard"])


@router.get("/leaderboard")
async def get_leaderboard(round: Optional[str] = None, services: EventServices = Depends(get_services)):
    """
    Ranked marked submissions for a round

    Without ?round= the revealed round is used, then the active one.
    """
    label = resolve_leaderboard_round(services.session, round)
    return [e.model_dump(by_alias=True) for e in project_leaderboard(services.submissions, label)]


@router.get("/api/leaderboard-data")
async def leaderboard_data(round: Optional[str] = None, services: EventServices = Depends(get_services)):
    """Leaderboard with round label and team count, for dashboards"""
    return get_leaderboard_data(services.submissions, services.session, round)
