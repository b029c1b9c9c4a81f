import os

from django.conf import settings

from apps.workflow.helpers import get_company_defaults  # noqa: F401


def get_job_folder_path(job_number):
    """Get the absolute path to the folder holding a job's files."""
    return os.path.join(settings.PORTAL_UPLOAD_FOLDER, f"Job-{job_number}")
