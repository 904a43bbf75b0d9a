"""
JSON view helpers.

Usage:
    @api_view("GET", "POST")
    def job_list(request): ...

The decorator enforces login and allowed methods, parses a JSON body into
``request.json`` and turns service-layer errors into JSON error responses.
"""

import json
import logging
from functools import wraps

from django.http import JsonResponse

from .exceptions import GarageError

logger = logging.getLogger(__name__)


def error_response(message, status, errors=None):
    payload = {"message": message}
    if errors:
        payload["errors"] = errors
    return JsonResponse(payload, status=status)


def api_view(*methods):
    """Decorator for function-based JSON endpoints."""

    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if not request.user.is_authenticated:
                return error_response("Authentication required", 401)
            if methods and request.method not in methods:
                return error_response(f"Method {request.method} not allowed", 405)

            request.json = {}
            if request.body and request.method in ("POST", "PATCH", "PUT"):
                try:
                    request.json = json.loads(request.body)
                except ValueError:
                    return error_response("Request body must be valid JSON", 400)
                if not isinstance(request.json, dict):
                    return error_response("Request body must be a JSON object", 400)

            try:
                return view_func(request, *args, **kwargs)
            except GarageError as exc:
                if exc.status_code >= 500:
                    logger.error("%s failed: %s", view_func.__name__, exc)
                return error_response(str(exc), exc.status_code)

        return wrapper

    return decorator


def form_error_response(form):
    """400 response carrying a bound form's field errors."""
    return error_response("Invalid input", 400, errors=form.errors.get_json_data())
