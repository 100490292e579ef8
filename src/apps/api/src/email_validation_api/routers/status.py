"""Job status polling endpoint."""
from fastapi import APIRouter, Depends, HTTPException

from email_validation_api.dependencies import get_job_service
from email_validation_core.jobs import JobService, JobSnapshot
from email_validation_core.util import JobNotFoundError

router = APIRouter(tags=["status"])


@router.get("/status/{upload_id}", response_model=JobSnapshot)
def get_upload_status(upload_id: str, service: JobService = Depends(get_job_service)):
    """Get the current snapshot of an upload's validation job."""
    try:
        return service.get_status(upload_id)
    except JobNotFoundError as e:
        raise HTTPException(status_code=404, detail="Upload ID not found") from e
