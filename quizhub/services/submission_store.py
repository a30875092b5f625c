"""
Submission store - concurrency-safe collection of answer entries

The in-memory dict is authoritative. Every mutation copies it under the
lock, writes the copy to disk, then publishes it. A failed write leaves
both memory and disk at the previous state.
"""
import logging
import math
import threading
import uuid
from typing import Any, Dict, List, Optional

import pydantic

from quizhub.core.errors import PersistenceFailure, SubmissionNotFound, ValidationError
from quizhub.core.persistence import SnapshotFile
from quizhub.models import Submission


logger = logging.getLogger(__name__)


def generate_submission_id() -> str:
    return uuid.uuid4().hex


class SubmissionStore:

    def __init__(
        self,
        snapshot_file: SnapshotFile,
        marks_min: Optional[float] = None,
        marks_max: Optional[float] = None,
    ):
        self._file = snapshot_file
        self._marks_min = marks_min
        self._marks_max = marks_max
        self._lock = threading.Lock()
        self._entries: Dict[str, Submission] = {}

    def load(self) -> int:
        """
        Load submissions from disk, return how many were loaded

        Records without an id get a fresh one.

        Raises:
            PersistenceFailure: If a record is not a valid submission
        """
        entries = {}
        for position, record in enumerate(self._file.load()):
            try:
                submission = Submission.model_validate(record)
            except pydantic.ValidationError as e:
                raise PersistenceFailure(
                    f"Invalid submission record at position {position}",
                    {"errors": [err["msg"] for err in e.errors()]},
                ) from e
            if not submission.id or submission.id in entries:
                submission = submission.model_copy(update={"id": generate_submission_id()})
            entries[submission.id] = submission
        with self._lock:
            self._entries = entries
        return len(entries)

    def _commit(self, entries: Dict[str, Submission]) -> None:
        """Persist then publish; caller holds the lock"""
        self._file.save([s.model_dump(by_alias=True) for s in entries.values()])
        self._entries = entries

    def append(self, submission: Submission) -> Submission:
        """
        Store a new submission under a fresh id

        Any id on the incoming entry is ignored.

        Returns:
            The stored Submission
        """
        with self._lock:
            entry_id = generate_submission_id()
            while entry_id in self._entries:
                entry_id = generate_submission_id()

            stored = submission.model_copy(update={"id": entry_id})
            updated = dict(self._entries)
            updated[entry_id] = stored
            self._commit(updated)

        return stored

    def find_by_id(self, submission_id: str) -> Optional[Submission]:
        return self._entries.get(submission_id)

    def set_marks(self, submission_id: str, marks: Any) -> Submission:
        """
        Overwrite the marks of one submission

        Raises:
            ValidationError: If marks is not a finite number or is out of range
            SubmissionNotFound: If no submission has that id
        """
        value = self._coerce_marks(marks)

        with self._lock:
            current = self._entries.get(submission_id)
            if current is None:
                raise SubmissionNotFound(submission_id)

            stored = current.model_copy(update={"marks": value})
            updated = dict(self._entries)
            updated[submission_id] = stored
            self._commit(updated)

        logger.info(f"🧮 Marks {value} set on submission {submission_id} ({stored.team_id})")
        return stored

    def clear_all(self) -> int:
        """Empty the store, return how many entries were removed"""
        with self._lock:
            removed = len(self._entries)
            self._commit({})

        logger.info(f"🔄 Cleared {removed} submissions")
        return removed

    def list_all(self) -> List[Submission]:
        return list(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def _coerce_marks(self, marks: Any) -> float:
        if isinstance(marks, bool) or marks is None:
            raise ValidationError("marks must be a number", {"marks": marks})
        try:
            value = float(marks)
        except (TypeError, ValueError):
            raise ValidationError("marks must be a number", {"marks": marks})
        if not math.isfinite(value):
            raise ValidationError("marks must be a finite number", {"marks": marks})

        if self._marks_min is not None and value < self._marks_min:
            raise ValidationError(
                f"marks must be >= {self._marks_min}", {"marks": value}
            )
        if self._marks_max is not None and value > self._marks_max:
            raise ValidationError(
                f"marks must be <= {self._marks_max}", {"marks": value}
            )
        return value
