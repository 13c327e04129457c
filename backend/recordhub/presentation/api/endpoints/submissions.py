"""Contact-form submission endpoints (``/api/submit``, ``/api/data``)."""

from fastapi import APIRouter, Depends

from recordhub.application.schemas.submission import (
    SubmissionAccepted,
    SubmissionCreate,
    SubmissionDeleted,
    SubmissionEnvelope,
    SubmissionList,
    SubmissionResponse,
    SubmissionsCleared,
    SubmissionSummary,
)
from recordhub.application.services import SubmissionService
from recordhub.domain.entities import Submission
from recordhub.infrastructure.dependencies import get_submission_service

router = APIRouter(tags=["Submissions"])


def _summary(submission: Submission) -> SubmissionSummary:
    return SubmissionSummary(
        full_name=submission.full_name,
        email=submission.email,
        phone=submission.phone,
        age=submission.age,
        country=submission.country,
        website=submission.website or "(Not provided)",
        message=submission.message,
        agreement="Yes" if submission.agreement else "No",
    )


@router.post("/submit", response_model=SubmissionAccepted)
async def submit_form(
    data: SubmissionCreate,
    service: SubmissionService = Depends(get_submission_service),
) -> SubmissionAccepted:
    """Validate and store a submission. Failures return every field error at once."""
    submission = await service.submit(data)
    return SubmissionAccepted(data=_summary(submission), record_id=submission.id)


@router.get("/data", response_model=SubmissionList)
async def list_submissions(
    service: SubmissionService = Depends(get_submission_service),
) -> SubmissionList:
    submissions = await service.list_submissions()
    return SubmissionList(
        count=len(submissions),
        data=[SubmissionResponse.model_validate(s, from_attributes=True) for s in submissions],
    )


@router.get("/data/{record_id}", response_model=SubmissionEnvelope)
async def get_submission(
    record_id: int,
    service: SubmissionService = Depends(get_submission_service),
) -> SubmissionEnvelope:
    submission = await service.get_submission(record_id)
    return SubmissionEnvelope(data=SubmissionResponse.model_validate(submission, from_attributes=True))


@router.delete("/data/{record_id}", response_model=SubmissionDeleted)
async def delete_submission(
    record_id: int,
    service: SubmissionService = Depends(get_submission_service),
) -> SubmissionDeleted:
    submission = await service.delete_submission(record_id)
    return SubmissionDeleted(data=SubmissionResponse.model_validate(submission, from_attributes=True))


@router.delete("/data", response_model=SubmissionsCleared)
async def clear_submissions(
    service: SubmissionService = Depends(get_submission_service),
) -> SubmissionsCleared:
    count = await service.clear_submissions()
    return SubmissionsCleared(message=f"Cleared {count} records", count=count)
