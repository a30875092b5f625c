"""
Error hierarchy for the contest server

Every error carries a machine-readable code and the HTTP status the
gateway maps it to. Client faults are 4xx, persistence failures are 500.
"""
from typing import Dict, Optional


class QuizHubError(Exception):
    """Base exception for all contest domain and storage errors"""

    code = "INTERNAL_ERROR"
    category = "internal"
    http_status = 500

    def __init__(self, message: str, details: Optional[Dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_response(self) -> Dict:
        """Convert to the REST error envelope"""
        error = {
            "code": self.code,
            "message": self.message,
            "category": self.category,
        }
        if self.details:
            error["details"] = self.details
        return {"error": error}


class ValidationError(QuizHubError):
    """Malformed or missing input"""
    code = "VALIDATION_ERROR"
    category = "validation"
    http_status = 400


class DuplicateTeam(QuizHubError):
    code = "DUPLICATE_TEAM"
    category = "conflict"
    http_status = 409

    def __init__(self, team_id: str):
        super().__init__(f"Team {team_id} already registered", {"team_id": team_id})
        self.team_id = team_id


class UnknownTeam(QuizHubError):
    code = "UNKNOWN_TEAM"
    category = "resource_not_found"
    http_status = 404

    def __init__(self, team_id: str):
        super().__init__(f"Team {team_id} is not registered", {"team_id": team_id})
        self.team_id = team_id


class NoActiveRound(QuizHubError):
    code = "NO_ACTIVE_ROUND"
    category = "business_rule"
    http_status = 409

    def __init__(self):
        super().__init__("No active round. Coordinator must start a round first.")


class WindowClosed(QuizHubError):
    code = "WINDOW_CLOSED"
    category = "business_rule"
    http_status = 409

    def __init__(self, round_label: str, elapsed: float, duration: float):
        super().__init__(
            f"Submission window for {round_label} is closed",
            {
                "round": round_label,
                "elapsed_seconds": round(elapsed, 2),
                "duration_seconds": duration,
            },
        )


class SubmissionNotFound(QuizHubError):
    code = "SUBMISSION_NOT_FOUND"
    category = "resource_not_found"
    http_status = 404

    def __init__(self, submission_id: str):
        super().__init__(
            f"Submission {submission_id} not found", {"submission_id": submission_id}
        )
        self.submission_id = submission_id


class PersistenceFailure(QuizHubError):
    """Durable write failed; nothing was applied"""
    code = "PERSISTENCE_FAILURE"
    category = "storage"
    http_status = 500
