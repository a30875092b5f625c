"""
Health check and system status endpoints
"""
from fastapi import APIRouter, Depends

from quizhub.state import EventServices, get_services


router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(services: EventServices = Depends(get_services)):
    """Health check endpoint"""
    return {
        "status": "ok",
        "message": "QuizHub Contest Server",
        "version": "1.0.0",
        "totalTeams": len(services.teams),
        "totalSubmissions": len(services.submissions),
    }
