"""Application service for the contact-form submission API."""

import logging

from recordhub.application.interfaces import SubmissionRepository
from recordhub.application.schemas.submission import SubmissionCreate
from recordhub.domain.entities import Submission
from recordhub.domain.exceptions import EntityNotFoundError, ValidationError
from recordhub.domain.validation import SUBMISSION_FIELDS, parse_age, validate_record

logger = logging.getLogger(__name__)


class SubmissionService:
    """Validates and stores submissions; read and delete operations for the admin view."""

    def __init__(self, repository: SubmissionRepository):
        self._repository = repository

    async def submit(self, data: SubmissionCreate) -> Submission:
        """Validate the whole form and store it.

        The duplicate-email check and the insert run under one write lock,
        so two submissions of the same address cannot both be accepted.
        """
        payload = data.model_dump(by_alias=True)
        async with self._repository.transaction():
            email_taken = isinstance(data.email, str) and await self._repository.email_exists(
                data.email
            )
            errors = validate_record(payload, SUBMISSION_FIELDS, email_taken=email_taken)
            if errors:
                logger.info("Submission rejected: %s", ", ".join(sorted(errors)))
                raise ValidationError(errors)

            website = data.website.strip() if isinstance(data.website, str) else None
            submission = Submission(
                full_name=data.full_name.strip(),
                email=data.email.strip(),
                phone=data.phone.strip(),
                age=parse_age(data.age),
                country=data.country.strip(),
                website=website or None,
                message=data.message.strip(),
                agreement=True,
            )
            created = await self._repository.create(submission)
        logger.info("Submission %d stored", created.id)
        return created

    async def get_submission(self, submission_id: int) -> Submission:
        submission = await self._repository.get_by_id(submission_id)
        if submission is None:
            raise EntityNotFoundError("Record", submission_id)
        return submission

    async def list_submissions(self) -> list[Submission]:
        return await self._repository.get_all()

    async def delete_submission(self, submission_id: int) -> Submission:
        removed = await self._repository.delete(submission_id)
        if removed is None:
            raise EntityNotFoundError("Record", submission_id)
        return removed

    async def clear_submissions(self) -> int:
        return await self._repository.delete_all()
