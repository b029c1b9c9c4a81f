from .job_file_serializer import JobFileSerializer
from .job_serializer import JobSummarySerializer

__all__ = ["JobFileSerializer", "JobSummarySerializer"]
