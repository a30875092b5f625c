"""Team registration: append-only, persisted on every write"""
import logging
import threading
from typing import Dict, List, Optional

import pydantic

from quizhub.core.errors import DuplicateTeam, PersistenceFailure
from quizhub.core.persistence import SnapshotFile
from quizhub.models import Team


logger = logging.getLogger(__name__)


class TeamRegistry:

    def __init__(self, snapshot_file: SnapshotFile):
        self._file = snapshot_file
        self._lock = threading.Lock()
        self._teams: Dict[str, Team] = {}

    def load(self) -> int:
        """Load teams from disk, return how many were loaded"""
        teams = {}
        for position, record in enumerate(self._file.load()):
            try:
                team = Team.model_validate(record)
            except pydantic.ValidationError as e:
                raise PersistenceFailure(
                    f"Invalid team record at position {position}",
                    {"errors": [err["msg"] for err in e.errors()]},
                ) from e
            if team.team_id in teams:
                raise PersistenceFailure(f"Duplicate team id {team.team_id} in stored teams")
            teams[team.team_id] = team
        with self._lock:
            self._teams = teams
        return len(teams)

    def register(self, team: Team) -> Team:
        with self._lock:
            if team.team_id in self._teams:
                raise DuplicateTeam(team.team_id)

            updated = dict(self._teams)
            updated[team.team_id] = team
            self._file.save([t.model_dump(by_alias=True) for t in updated.values()])
            self._teams = updated

        logger.info(f"📝 Registered team {team.team_id} ({team.team_name})")
        return team

    def lookup(self, team_id: str) -> Optional[Team]:
        return self._teams.get(team_id)

    def list_all(self) -> List[Team]:
        return list(self._teams.values())

    def __len__(self) -> int:
        return len(self._teams)
