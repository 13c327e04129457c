"""In-process SubmissionRepository for the contact form."""

import itertools
import logging
from contextlib import AbstractAsyncContextManager
from dataclasses import replace
from datetime import datetime, timezone

from recordhub.application.interfaces import SubmissionRepository
from recordhub.domain.entities import Submission
from recordhub.domain.validation import normalize_email
from recordhub.infrastructure.storage.write_lock import WriteLock

logger = logging.getLogger(__name__)


class InMemorySubmissionRepository(SubmissionRepository):
    """Implements the SubmissionRepository port; cleared on restart."""

    def __init__(self) -> None:
        self._submissions: dict[int, Submission] = {}
        self._ids = itertools.count(1)
        self._lock = WriteLock()

    def transaction(self) -> AbstractAsyncContextManager[None]:
        return self._lock.hold()

    async def get_by_id(self, submission_id: int) -> Submission | None:
        submission = self._submissions.get(submission_id)
        return replace(submission) if submission else None

    async def get_all(self) -> list[Submission]:
        return [replace(s) for s in self._submissions.values()]

    async def email_exists(self, email: str) -> bool:
        wanted = normalize_email(email)
        return any(normalize_email(s.email) == wanted for s in self._submissions.values())

    async def create(self, submission: Submission) -> Submission:
        async with self._lock.hold():
            stored = replace(
                submission, id=next(self._ids), timestamp=datetime.now(timezone.utc)
            )
            self._submissions[stored.id] = stored
            logger.debug("Stored submission %d", stored.id)
            return replace(stored)

    async def delete(self, submission_id: int) -> Submission | None:
        async with self._lock.hold():
            return self._submissions.pop(submission_id, None)

    async def delete_all(self) -> int:
        async with self._lock.hold():
            count = len(self._submissions)
            self._submissions.clear()
            logger.info("Cleared %d submissions", count)
            return count
