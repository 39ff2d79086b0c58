"""
Workflow-related domain exceptions.
"""

from typing import Any, Dict, Optional


class WorkflowError(Exception):
    """Base exception for job workflow errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ForbiddenError(WorkflowError):
    """Raised when the actor lacks authority for the requested action."""

    def __init__(self, message: str, actor_role: Optional[str] = None, **details):
        self.actor_role = actor_role
        if actor_role:
            details["actor_role"] = actor_role
        super().__init__(message, details)


class NotFoundError(WorkflowError):
    """Raised when a referenced entity does not exist."""

    def __init__(self, entity: str, entity_id: Any):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(
            f"{entity} {entity_id} not found",
            {"entity": entity, "id": entity_id},
        )


class ConflictError(WorkflowError):
    """Raised when a state precondition is not met."""

    pass


class InvalidTransitionError(ConflictError):
    """Raised when a status transition is not allowed from the current status."""

    def __init__(
        self,
        current_status: str,
        requested_status: str,
        actor_role: Optional[str] = None,
    ):
        self.current_status = current_status
        self.requested_status = requested_status
        self.actor_role = actor_role
        details = {
            "current_status": current_status,
            "requested_status": requested_status,
        }
        if actor_role:
            details["actor_role"] = actor_role
        super().__init__(
            f"Cannot move request from '{current_status}' to '{requested_status}'",
            details,
        )


class StaleRequestError(ConflictError):
    """Raised when an edit was based on an outdated copy of the request."""

    def __init__(self, request_id: int, expected_updated_at: Any, actual_updated_at: Any):
        self.request_id = request_id
        super().__init__(
            f"Service request {request_id} was modified by someone else; reload and retry",
            {
                "request_id": request_id,
                "expected_updated_at": str(expected_updated_at),
                "actual_updated_at": str(actual_updated_at),
            },
        )


class InvoiceAlreadyPaidError(ConflictError):
    """Raised when an invoice has already been paid."""

    def __init__(self, invoice_id: int):
        self.invoice_id = invoice_id
        super().__init__(
            f"Invoice {invoice_id} is already paid",
            {"invoice_id": invoice_id, "current_status": "paid", "requested_status": "paid"},
        )
