"""
Service request state machine.

Every mutating entry point consults ``authorize_transition`` before writing a
new status, so the table below is the only place that decides which moves are
legal.
"""

from typing import Dict, FrozenSet, Optional

from repairconnect.domain.entities.service_request import ServiceRequest
from repairconnect.domain.exceptions.workflow_error import (
    ForbiddenError,
    InvalidTransitionError,
)
from repairconnect.domain.value_objects.actor import Actor, ActorRole
from repairconnect.domain.value_objects.job_status import JobStatus

# role -> target status -> statuses the target may be reached from
TRANSITIONS: Dict[ActorRole, Dict[JobStatus, FrozenSet[JobStatus]]] = {
    ActorRole.PROVIDER: {
        JobStatus.TAKEN: frozenset({JobStatus.PENDING}),
        JobStatus.ONGOING: frozenset({JobStatus.TAKEN, JobStatus.PAUSED}),
        JobStatus.PAUSED: frozenset({JobStatus.ONGOING}),
        JobStatus.DONE: frozenset({JobStatus.ONGOING, JobStatus.TAKEN}),
        JobStatus.CLOSED: frozenset({JobStatus.DONE}),
    },
    ActorRole.CUSTOMER: {
        JobStatus.CANCELLED: frozenset({JobStatus.PENDING, JobStatus.TAKEN}),
    },
}


def is_allowed(role: ActorRole, current: JobStatus, target: JobStatus) -> bool:
    """Check a (role, current, target) triple against the transition table."""
    if role == ActorRole.ADMIN:
        return True
    return current in TRANSITIONS.get(role, {}).get(target, frozenset())


def is_party_to(actor: Actor, request: ServiceRequest) -> bool:
    """Check whether the actor has any standing on the request at all."""
    if actor.role == ActorRole.ADMIN:
        return True
    if actor.role == ActorRole.CUSTOMER:
        return request.is_owned_by(actor.id)
    if actor.role == ActorRole.PROVIDER:
        # An unclaimed request is open to every provider
        return request.is_unclaimed or request.is_assigned_to(actor.id)
    return False


def authorize_transition(
    actor: Actor, request: ServiceRequest, target: JobStatus
) -> Optional[int]:
    """
    Validate a transition and return the provider id to assign, if any.

    Raises:
        ForbiddenError: the actor has no standing on the request.
        InvalidTransitionError: the move is not in the table for the actor's role.
    """
    # Past pending, an unassigned request (left so by an admin) is nobody's to work
    orphaned = (
        actor.role == ActorRole.PROVIDER
        and request.is_unclaimed
        and request.status != JobStatus.PENDING
        and target != JobStatus.TAKEN
    )
    if orphaned or not is_party_to(actor, request):
        raise ForbiddenError(
            f"A {actor.role.value} who is not a party to request {request.id} "
            f"cannot change its status",
            actor_role=actor.role.value,
            request_id=request.id,
            current_status=request.status.value,
            requested_status=target.value,
        )

    if not is_allowed(actor.role, request.status, target):
        raise InvalidTransitionError(
            request.status.value, target.value, actor_role=actor.role.value
        )

    if (
        actor.role == ActorRole.PROVIDER
        and target == JobStatus.TAKEN
        and request.is_unclaimed
    ):
        return actor.id
    return None
