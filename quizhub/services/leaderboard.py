"""
Leaderboard service - Rank marked submissions for a round
"""
from typing import Dict, List, Optional

from quizhub.core.session import SessionState
from quizhub.models import LeaderboardEntry
from quizhub.services.submission_store import SubmissionStore


def project_leaderboard(store: SubmissionStore, round_label: str) -> List[LeaderboardEntry]:
    """
    Get leaderboard for a round

    Only submissions with marks set are included.

    Returns:
        Entries sorted by marks (desc), then submission time (asc)
    """
    marked = [
        s for s in store.list_all()
        if s.round_label == round_label and s.marks is not None
    ]
    marked.sort(key=lambda s: (-s.marks, s.submitted_at))

    return [
        LeaderboardEntry(
            rank=idx + 1,
            team_id=s.team_id,
            team_name=s.team_name,
            leader=s.leader_name,
            college=s.college,
            marks=s.marks,
            time_taken_seconds=s.time_taken_seconds,
            submitted_at=s.submitted_at,
        )
        for idx, s in enumerate(marked)
    ]


def resolve_leaderboard_round(session: SessionState, requested: Optional[str] = None) -> str:
    """Requested round, else the revealed one, else the active one, else the default"""
    if requested and requested.strip():
        return requested.strip()

    snap = session.snapshot()
    if snap.leaderboard_round:
        return snap.leaderboard_round
    if snap.round:
        return snap.round.round_label
    return session.default_round_label


def get_leaderboard_data(store: SubmissionStore, session: SessionState, round_label: Optional[str] = None) -> Dict:
    """Leaderboard payload for display"""
    label = resolve_leaderboard_round(session, round_label)
    entries = project_leaderboard(store, label)

    return {
        "round": label,
        "teams": [e.model_dump(by_alias=True) for e in entries],
        "totalTeams": len(entries),
    }
