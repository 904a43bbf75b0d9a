"""
Domain errors raised by the service layer.

Views translate these into HTTP responses through core.api.api_view;
services never build responses themselves.
"""


class GarageError(Exception):
    """Base class for every error the service layer raises on purpose."""

    status_code = 500


class NotFound(GarageError):
    """A referenced customer, job, invoice, appointment or item does not exist."""

    status_code = 404


class ValidationFailed(GarageError):
    """Input is malformed or insufficient (e.g. not enough stock, nothing billable)."""

    status_code = 400


class Conflict(GarageError):
    """The request contradicts the current state (e.g. stage change after invoicing)."""

    status_code = 409


class ExternalDispatchFailure(GarageError):
    """The outbound message transport rejected or could not take a message."""

    status_code = 502


def get_or_not_found(queryset, label, pk):
    """``queryset.get(pk=pk)`` raising NotFound instead of DoesNotExist."""
    try:
        return queryset.get(pk=pk)
    except queryset.model.DoesNotExist:
        raise NotFound(f"{label} {pk} not found")
