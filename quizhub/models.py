"""
Data models for the contest server
"""
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """snake_case in Python, camelCase on the wire"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        coerce_numbers_to_str=True,
    )


class FrozenWireModel(WireModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        coerce_numbers_to_str=True,
        frozen=True,
    )


# ==================== DOMAIN ====================

class Team(FrozenWireModel):
    """Registered team, immutable after registration"""
    team_id: str = Field(
        min_length=1, validation_alias=AliasChoices("teamId", "team_id", "outlawNo")
    )
    team_name: str = ""
    leader_name: str = Field(
        default="", validation_alias=AliasChoices("leaderName", "leader_name", "leader")
    )
    college: str = ""


class RoundDescriptor(FrozenWireModel):
    """The single active question/round"""
    text: str
    answer_schema: Any = Field(
        default="", validation_alias=AliasChoices("answerSchema", "answer_schema", "schema")
    )
    duration_seconds: float          # > 0, checked by SessionState.start_round
    start_timestamp: float           # Unix timestamp, never mutated
    round_label: str


class SessionSnapshot(FrozenWireModel):
    """Round descriptor and leaderboard flags, swapped as one unit"""
    round: Optional[RoundDescriptor] = None
    leaderboard_visible: bool = False
    leaderboard_round: Optional[str] = None


class Submission(FrozenWireModel):
    """One accepted answer. Only marks changes, via a copy."""
    id: str = ""
    team_id: str
    team_name: str = ""
    leader_name: str = ""
    college: str = ""
    answer: Any = None
    round_label: str
    submitted_at: float
    time_taken_seconds: float
    marks: Optional[float] = None    # None = not yet marked


class LeaderboardEntry(WireModel):
    rank: int
    team_id: str
    team_name: str
    leader: str
    college: str
    marks: float
    time_taken_seconds: float
    submitted_at: float

    @field_serializer("time_taken_seconds")
    def round_time_taken(self, value: float) -> float:
        return round(value, 2)


# ==================== REQUESTS ====================

class StartRoundRequest(WireModel):
    text: str = ""
    answer_schema: Any = Field(
        default="", validation_alias=AliasChoices("schema", "answerSchema", "answer_schema")
    )
    duration: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("duration", "durationSeconds", "duration_seconds"),
    )
    round: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("round", "roundLabel", "round_label")
    )


class ShowLeaderboardRequest(WireModel):
    round: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("round", "roundLabel", "round_label")
    )


class SubmitRequest(WireModel):
    team_id: str = Field(
        min_length=1, validation_alias=AliasChoices("teamId", "team_id", "roll")
    )
    answer: Any = None


class SetMarksRequest(WireModel):
    submission_id: str = Field(
        min_length=1, validation_alias=AliasChoices("submissionId", "submission_id", "id")
    )
    marks: Any = None


class RegisterTeamRequest(WireModel):
    team_id: str = Field(
        min_length=1, validation_alias=AliasChoices("teamId", "team_id", "outlawNo")
    )
    team_name: str = Field(
        min_length=1, validation_alias=AliasChoices("teamName", "team_name")
    )
    leader_name: str = Field(
        default="", validation_alias=AliasChoices("leaderName", "leader_name", "leader")
    )
    college: str = ""

    def to_team(self) -> Team:
        return Team(
            team_id=self.team_id,
            team_name=self.team_name,
            leader_name=self.leader_name,
            college=self.college,
        )
