"""
Base REST View

Common plumbing for the staff and portal REST views:
- JSON body parsing with early return on bad input
- One place that maps service-layer errors onto HTTP responses
"""

import json
import logging
from typing import Any, Dict

from django.http import Http404
from django.utils.decorators import method_decorator
from django.views.decorators.csrf import csrf_exempt
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.workflow.exceptions import BrokerError, ValidationError
from apps.workflow.services.error_persistence import persist_app_error

logger = logging.getLogger(__name__)


class BaseRestView(APIView):
    """
    Base view for REST operations.
    Views stay thin: parse, delegate to a service, render.
    """

    @method_decorator(csrf_exempt)
    def dispatch(self, request, *args, **kwargs):
        return super().dispatch(request, *args, **kwargs)

    def parse_json_body(self, request) -> Dict[str, Any]:
        """
        Parse the JSON body of the request.
        An empty body is treated as an empty object.
        """
        if not request.body:
            return {}

        try:
            data = json.loads(request.body)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid JSON: {str(e)}")

        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        return data

    def handle_service_error(self, error: Exception) -> Response:
        """
        Centralise service layer error handling.
        """
        match error:
            case BrokerError():
                return Response({"error": error.message}, status=error.status_code)
            case Http404():
                return Response(
                    {"error": "Resource not found"}, status=status.HTTP_404_NOT_FOUND
                )
            case _:
                logger.exception(f"Unhandled error: {error}")
                persist_app_error(error)
                return Response(
                    {"error": "Internal server error"},
                    status=status.HTTP_500_INTERNAL_SERVER_ERROR,
                )
