"""
Submission admission - the submit business rule

Checks run against one session snapshot, so the window test and the round
label copied onto the submission always come from the same round.
"""
import logging
from typing import Any

from quizhub.core.errors import NoActiveRound, UnknownTeam, WindowClosed
from quizhub.core.session import SessionState, window_is_open
from quizhub.models import Submission
from quizhub.services.submission_store import SubmissionStore
from quizhub.services.team_registry import TeamRegistry


logger = logging.getLogger(__name__)


def admit_submission(
    session: SessionState,
    teams: TeamRegistry,
    store: SubmissionStore,
    team_id: str,
    answer: Any,
    now: float,
) -> Submission:
    """
    Validate and record a team's answer

    Args:
        session: Event session holding the active round
        teams: Team registry
        store: Submission store
        team_id: Submitting team
        answer: Answer payload, stored as-is
        now: Submission timestamp

    Returns:
        The stored Submission

    Raises:
        NoActiveRound: No round has been started
        WindowClosed: now is past the round's window
        UnknownTeam: team_id is not registered
    """
    descriptor = session.snapshot().round

    if descriptor is None:
        raise NoActiveRound()

    if not window_is_open(descriptor, now):
        raise WindowClosed(
            descriptor.round_label,
            now - descriptor.start_timestamp,
            descriptor.duration_seconds,
        )

    team = teams.lookup(team_id)
    if team is None:
        raise UnknownTeam(team_id)

    # Multiple submissions per team and round are kept
    submission = Submission(
        team_id=team.team_id,
        team_name=team.team_name,
        leader_name=team.leader_name,
        college=team.college,
        answer=answer,
        round_label=descriptor.round_label,
        submitted_at=now,
        time_taken_seconds=now - descriptor.start_timestamp,
    )
    stored = store.append(submission)

    logger.info(
        f"📥 Team {team.team_id} | {descriptor.round_label} | "
        f"Time: {stored.time_taken_seconds:.2f}s | id={stored.id}"
    )
    return stored
