from .job import Job
from .job_event import JobEvent
from .job_file import JobFile

__all__ = ["Job", "JobEvent", "JobFile"]
