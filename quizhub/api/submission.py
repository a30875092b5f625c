"""
Student poll, answer submission and judge marking endpoints
"""
import logging

from fastapi import APIRouter, Depends, Request

from quizhub.models import SetMarksRequest, SubmitRequest
from quizhub.services.admission import admit_submission
from quizhub.services.leaderboard import project_leaderboard
from quizhub.state import EventServices, get_services


router = APIRouter(tags=["submission"])
logger = logging.getLogger(__name__)


@router.get("/question")
async def poll_question(services: EventServices = Depends(get_services)):
    """
    Student poll

    Response is one of:
        {"leaderboardVisible": true, "round": "round1", "standings": [...]}
        {"active": false}
        {"active": true, "text": ..., "schema": ..., "remainingSeconds": 120, "round": "round1"}
    """
    view = services.session.query_public_view()
    if view.get("leaderboardVisible"):
        view["standings"] = [
            e.model_dump(by_alias=True)
            for e in project_leaderboard(services.submissions, view["round"])
        ]
    return view


@router.post("/submit")
def submit_answer(
    payload: SubmitRequest,
    request: Request,
    services: EventServices = Depends(get_services),
):
    """
    Submit an answer for the active round

    Request:
        {
            "teamId": "T-07",      # "roll" also accepted
            "answer": "Lima"
        }
    """
    client_ip = request.client.host if request.client else "unknown"
    logger.info(f"📥 Submission from {client_ip} | team={payload.team_id}")

    submission = admit_submission(
        services.session,
        services.teams,
        services.submissions,
        payload.team_id,
        payload.answer,
        services.clock(),
    )

    return {
        "status": "submitted",
        "id": submission.id,
        "round": submission.round_label,
        "timeTakenSeconds": round(submission.time_taken_seconds, 2),
    }


@router.get("/submissions")
async def list_submissions(services: EventServices = Depends(get_services)):
    """Judge: every submission, in arrival order"""
    return [s.model_dump(by_alias=True) for s in services.submissions.list_all()]


@router.post("/update-marks")
def update_marks(payload: SetMarksRequest, services: EventServices = Depends(get_services)):
    """
    Judge: set marks on one submission

    Request:
        {"submissionId": "<id>", "marks": 80}
    """
    submission = services.submissions.set_marks(payload.submission_id, payload.marks)
    return {"status": "updated", "id": submission.id, "marks": submission.marks}
