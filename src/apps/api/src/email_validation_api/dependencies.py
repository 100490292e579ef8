"""Request dependencies."""
from fastapi import Request

from email_validation_api.settings import Settings
from email_validation_core.jobs import JobService


def get_job_service(request: Request) -> JobService:
    """The job service owned by the running app."""
    return request.app.state.job_service


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
