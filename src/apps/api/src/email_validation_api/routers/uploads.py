"""File upload endpoint: decode the batch and start a validation job."""
import os
from pathlib import Path

import structlog
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from email_validation_api.dependencies import get_app_settings, get_job_service
from email_validation_api.settings import Settings
from email_validation_core.ingest import load_batch
from email_validation_core.jobs import JobService
from email_validation_core.util import EmptyBatchError, InvalidFormatError, generate_id

router = APIRouter(tags=["uploads"])
logger = structlog.get_logger()

CONTENT_TYPE_SUFFIXES = {
    "text/csv": ".csv",
    "text/tab-separated-values": ".tsv",
}
ALLOWED_SUFFIXES = set(CONTENT_TYPE_SUFFIXES.values())


class UploadAccepted(BaseModel):
    """Response for an accepted upload."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    upload_id: str
    message: str
    total_records: int


def _staging_suffix(file: UploadFile) -> str | None:
    """Pick the loader suffix from the filename, falling back to the content type."""
    suffix = Path(file.filename or "").suffix.lower()
    if suffix in ALLOWED_SUFFIXES:
        return suffix
    return CONTENT_TYPE_SUFFIXES.get((file.content_type or "").split(";")[0].strip())


def _remove_staged(path: str) -> None:
    try:
        os.remove(path)
    except OSError as e:
        logger.error("staged_file_cleanup_failed", path=path, error=str(e))


@router.post("/upload", status_code=202, response_model=UploadAccepted)
async def upload_file(
    file: UploadFile | None = File(default=None),
    settings: Settings = Depends(get_app_settings),
    service: JobService = Depends(get_job_service),
):
    """Upload a CSV of name/email rows and start validating it."""
    if file is None:
        raise HTTPException(status_code=400, detail="No file uploaded. Please upload a CSV file.")

    suffix = _staging_suffix(file)
    if suffix is None:
        raise HTTPException(status_code=400, detail="Only CSV or TSV files are allowed")

    max_bytes = settings.max_upload_mb * 1024 * 1024
    content = await file.read()
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=413, detail=f"File too large. Maximum size is {settings.max_upload_mb}MB."
        )

    os.makedirs(settings.upload_dir, exist_ok=True)
    save_path = os.path.join(settings.upload_dir, f"{generate_id()}{suffix}")
    with open(save_path, "wb") as f:
        f.write(content)
    logger.info(
        "file_upload_started",
        original_name=file.filename,
        size=len(content),
        content_type=file.content_type,
    )

    try:
        records = await run_in_threadpool(load_batch, save_path)
    except InvalidFormatError as e:
        logger.warning("upload_rejected_invalid_format", error=str(e))
        raise HTTPException(
            status_code=400,
            detail={"error": "Invalid CSV file format", "details": str(e)},
        ) from e
    except EmptyBatchError as e:
        logger.warning("upload_rejected_empty")
        raise HTTPException(status_code=400, detail="CSV file contains no valid records") from e
    finally:
        _remove_staged(save_path)

    result = service.submit(records)
    return UploadAccepted(
        upload_id=result.upload_id,
        message="File uploaded successfully. Processing started.",
        total_records=result.total_records,
    )
