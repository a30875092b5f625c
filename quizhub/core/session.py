"""
Round/session state machine for the live event

The active round and the leaderboard flags live in one frozen
SessionSnapshot. Writers build a new snapshot under the lock and swap the
reference; readers take the current reference and never see a torn mix.
"""
import logging
import math
import threading
import time
from typing import Any, Callable, Dict, Optional

from quizhub.core.errors import ValidationError
from quizhub.models import RoundDescriptor, SessionSnapshot


logger = logging.getLogger(__name__)

DEFAULT_ROUND_LABEL = "round1"


def window_is_open(descriptor: Optional[RoundDescriptor], now: float) -> bool:
    """True iff a round exists and elapsed <= duration"""
    if descriptor is None:
        return False
    elapsed = now - descriptor.start_timestamp
    return elapsed <= descriptor.duration_seconds


def remaining_seconds(descriptor: RoundDescriptor, now: float) -> float:
    """Whole seconds left in the window, never negative"""
    elapsed = math.floor(now - descriptor.start_timestamp)
    return max(descriptor.duration_seconds - elapsed, 0)


class SessionState:
    """Owns the active round descriptor and leaderboard visibility"""

    def __init__(
        self,
        clock: Callable[[], float] = time.time,
        default_round_label: str = DEFAULT_ROUND_LABEL,
    ):
        self._clock = clock
        self._default_round_label = default_round_label
        self._lock = threading.Lock()
        self._snapshot = SessionSnapshot()

    def snapshot(self) -> SessionSnapshot:
        return self._snapshot

    @property
    def current_round(self) -> Optional[RoundDescriptor]:
        return self._snapshot.round

    @property
    def default_round_label(self) -> str:
        return self._default_round_label

    def start_round(
        self,
        text: str,
        answer_schema: Any,
        duration_seconds: float,
        round_label: Optional[str] = None,
    ) -> RoundDescriptor:
        """
        Start a round, replacing any previous one

        Args:
            text: Question text shown to teams
            answer_schema: Expected answer shape, passed through to clients
            duration_seconds: Submission window length, must be > 0
            round_label: Round identifier (default "round1")

        Returns:
            The new RoundDescriptor

        Raises:
            ValidationError: If duration_seconds is not a positive number
        """
        duration = _positive_duration(duration_seconds)
        label = (round_label or "").strip() or self._default_round_label

        with self._lock:
            descriptor = RoundDescriptor(
                text=text or "",
                answer_schema=answer_schema if answer_schema is not None else "",
                duration_seconds=duration,
                start_timestamp=self._clock(),
                round_label=label,
            )
            # New round always hides the leaderboard
            self._snapshot = SessionSnapshot(round=descriptor)

        logger.info(f"✅ Round {label} started, window {duration}s")
        return descriptor

    def show_leaderboard(self, round_label: Optional[str] = None) -> str:
        """Reveal the leaderboard, return the round being projected"""
        with self._lock:
            current = self._snapshot
            label = (round_label or "").strip()
            if not label:
                label = current.round.round_label if current.round else self._default_round_label
            self._snapshot = current.model_copy(
                update={"leaderboard_visible": True, "leaderboard_round": label}
            )

        logger.info(f"🏆 Leaderboard shown for {label}")
        return label

    def hide_leaderboard(self) -> None:
        with self._lock:
            self._snapshot = self._snapshot.model_copy(
                update={"leaderboard_visible": False, "leaderboard_round": None}
            )
        logger.info("🙈 Leaderboard hidden")

    def is_within_submission_window(self, now: Optional[float] = None) -> bool:
        now = self._clock() if now is None else now
        return window_is_open(self._snapshot.round, now)

    def query_public_view(self, now: Optional[float] = None) -> Dict:
        """
        Student poll view

        Returns one of:
            {"leaderboardVisible": True, "round": ...}
            {"active": False}
            {"active": True, "text", "schema", "remainingSeconds", "round"}
        """
        snap = self._snapshot
        now = self._clock() if now is None else now

        if snap.leaderboard_visible:
            return {"leaderboardVisible": True, "round": snap.leaderboard_round}

        descriptor = snap.round
        if descriptor is None:
            return {"active": False}

        return {
            "active": True,
            "text": descriptor.text,
            "schema": descriptor.answer_schema,
            "remainingSeconds": remaining_seconds(descriptor, now),
            "round": descriptor.round_label,
        }

    def status(self, now: Optional[float] = None) -> Dict:
        """Coordinator view of the session"""
        snap = self._snapshot
        now = self._clock() if now is None else now
        descriptor = snap.round

        status = {
            "round": descriptor.round_label if descriptor else None,
            "isOpen": window_is_open(descriptor, now),
            "elapsedSeconds": None,
            "remainingSeconds": None,
            "leaderboardVisible": snap.leaderboard_visible,
            "leaderboardRound": snap.leaderboard_round,
        }
        if descriptor:
            status["elapsedSeconds"] = round(now - descriptor.start_timestamp, 2)
            status["remainingSeconds"] = remaining_seconds(descriptor, now)
        return status


def _positive_duration(value: Any) -> float:
    if isinstance(value, bool):
        raise ValidationError("duration must be a positive number")
    try:
        duration = float(value)
    except (TypeError, ValueError):
        raise ValidationError("duration must be a positive number")
    if not math.isfinite(duration) or duration <= 0:
        raise ValidationError("duration must be a positive number", {"duration": value})
    return duration
