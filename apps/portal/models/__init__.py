from .job_portal import JobPortal

__all__ = ["JobPortal"]
