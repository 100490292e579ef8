"""Health check and service banner endpoints."""
from fastapi import APIRouter

from email_validation_core.util import utc_now_iso

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    """Health check."""
    return {"status": "ok", "timestamp": utc_now_iso()}


@router.get("/")
def index():
    """Describe the service and its endpoints."""
    return {
        "message": "File Upload API with Email Validation",
        "version": "1.0.0",
        "status": "running",
        "endpoints": {
            "health": "GET /health",
            "upload": "POST /upload (multipart CSV or TSV file)",
            "status": "GET /status/{upload_id}",
        },
    }
