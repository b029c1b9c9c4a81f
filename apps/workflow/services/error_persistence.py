import traceback

from apps.workflow.models import AppError


def persist_app_error(exc: Exception):
    """Create and save a generic ``AppError`` instance."""
    AppError.objects.create(
        message=str(exc),
        data={
            "type": type(exc).__name__,
            "trace": "".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__)
            ),
        },
    )
