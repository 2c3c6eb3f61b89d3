"""
Approval state machine for travel and in-valley requests.

    pending --approver--> travel_approved --employee expenses--> pending_verification
    pending --approver--> rejected
    pending_verification --checker--> approved | rejected_by_checker

Admins may act as approver on pending requests and as checker on requests
awaiting verification.
"""
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from travelflow.core.exceptions import InvalidTransitionError, PermissionDeniedError
from travelflow.models.shared.enums import Decision, RequestKind, RequestStatus, UserRole


@dataclass(frozen=True)
class Transition:
    actor: UserRole                 # Authority the actor exercises (approver or checker)
    source: RequestStatus
    decision: Decision
    target: RequestStatus
    stamps_travel_approval: bool = False
    allocates_budget: bool = False


def _build_table(*transitions: Transition) -> Dict[Tuple[UserRole, RequestStatus, Decision], Transition]:
    return {(t.actor, t.source, t.decision): t for t in transitions}


TRANSITIONS = _build_table(
    Transition(UserRole.APPROVER, RequestStatus.PENDING, Decision.APPROVED, RequestStatus.TRAVEL_APPROVED,
               stamps_travel_approval=True),
    Transition(UserRole.APPROVER, RequestStatus.PENDING, Decision.REJECTED, RequestStatus.REJECTED),
    Transition(UserRole.CHECKER, RequestStatus.PENDING_VERIFICATION, Decision.APPROVED, RequestStatus.APPROVED,
               allocates_budget=True),
    Transition(UserRole.CHECKER, RequestStatus.PENDING_VERIFICATION, Decision.REJECTED,
               RequestStatus.REJECTED_BY_CHECKER),
)

# Roles allowed to decide on requests at all
DECIDING_ROLES = (UserRole.APPROVER, UserRole.CHECKER, UserRole.ADMIN)

# Where an admin acts, the authority it exercises for a given source status
_ADMIN_AUTHORITY = {
    RequestStatus.PENDING: UserRole.APPROVER,
    RequestStatus.PENDING_VERIFICATION: UserRole.CHECKER,
}

# Comment column written by each authority
COMMENT_FIELDS = {
    UserRole.APPROVER: "approver_comments",
    UserRole.CHECKER: "checker_comments",
}


def effective_authority(role: UserRole, current: RequestStatus) -> Optional[UserRole]:
    if role == UserRole.ADMIN:
        return _ADMIN_AUTHORITY.get(current)
    if role in (UserRole.APPROVER, UserRole.CHECKER):
        return role
    return None


def resolve_transition(role: UserRole, current: RequestStatus, decision: Decision) -> Transition:
    """Find the transition an actor with `role` may take, or raise"""
    role = UserRole(role)
    current = RequestStatus(current)
    decision = Decision(decision)

    if role not in DECIDING_ROLES:
        raise PermissionDeniedError("Only approvers, checkers and admins can decide on requests")

    authority = effective_authority(role, current)
    transition = TRANSITIONS.get((authority, current, decision)) if authority else None
    if transition is None:
        raise InvalidTransitionError(
            f"A {role.value} cannot mark a request in status '{current.value}' as {decision.value}"
        )
    return transition


def expense_submission_states(kind: RequestKind, enforce_gate: bool) -> Tuple[RequestStatus, ...]:
    """Statuses from which the owner may submit expenses"""
    if kind == RequestKind.TRAVEL and enforce_gate:
        return (RequestStatus.TRAVEL_APPROVED,)
    return (RequestStatus.PENDING, RequestStatus.TRAVEL_APPROVED)
