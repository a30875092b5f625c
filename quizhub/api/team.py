"""Team registration endpoints"""
from fastapi import APIRouter, Depends

from quizhub.models import RegisterTeamRequest
from quizhub.state import EventServices, get_services


router = APIRouter(tags=["teams"])


@router.post("/register-team")
def register(payload: RegisterTeamRequest, services: EventServices = Depends(get_services)):
    team = services.teams.register(payload.to_team())
    return {"status": "registered", "teamId": team.team_id}


@router.get("/teams")
async def list_teams(services: EventServices = Depends(get_services)):
    return [t.model_dump(by_alias=True) for t in services.teams.list_all()]
