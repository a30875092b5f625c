"""
Event services container
Built once at startup and attached to app.state; routers reach it through
the get_services dependency.
"""
import time
from typing import Callable

from fastapi import Request

from quizhub.config import Settings
from quizhub.core.persistence import SnapshotFile
from quizhub.core.session import SessionState
from quizhub.services.submission_store import SubmissionStore
from quizhub.services.team_registry import TeamRegistry


class EventServices:
    """Session, team registry and submission store for one event"""

    def __init__(self, settings: Settings, clock: Callable[[], float] = time.time):
        self.settings = settings
        self.clock = clock
        self.session = SessionState(
            clock=clock, default_round_label=settings.default_round_label
        )
        self.teams = TeamRegistry(SnapshotFile(settings.teams_path))
        self.submissions = SubmissionStore(
            SnapshotFile(settings.submissions_path),
            marks_min=settings.marks_min,
            marks_max=settings.marks_max,
        )

    def load(self) -> None:
        """Load persisted teams and submissions"""
        self.teams.load()
        self.submissions.load()


def get_services(request: Request) -> EventServices:
    return request.app.state.services
