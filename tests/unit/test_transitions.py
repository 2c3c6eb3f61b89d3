import pytest

from travelflow.core.exceptions import InvalidTransitionError, PermissionDeniedError
from travelflow.models.shared.enums import Decision, RequestKind, RequestStatus, UserRole
from travelflow.services.workflow.transitions import (
    TRANSITIONS, effective_authority, expense_submission_states, resolve_transition
)


class TestResolveTransition:

    @pytest.mark.parametrize("role, current, decision, target", [
        (UserRole.APPROVER, RequestStatus.PENDING, Decision.APPROVED, RequestStatus.TRAVEL_APPROVED),
        (UserRole.APPROVER, RequestStatus.PENDING, Decision.REJECTED, RequestStatus.REJECTED),
        (UserRole.CHECKER, RequestStatus.PENDING_VERIFICATION, Decision.APPROVED, RequestStatus.APPROVED),
        (UserRole.CHECKER, RequestStatus.PENDING_VERIFICATION, Decision.REJECTED, RequestStatus.REJECTED_BY_CHECKER),
        (UserRole.ADMIN, RequestStatus.PENDING, Decision.APPROVED, RequestStatus.TRAVEL_APPROVED),
        (UserRole.ADMIN, RequestStatus.PENDING_VERIFICATION, Decision.REJECTED, RequestStatus.REJECTED_BY_CHECKER),
    ])
    def test_allowed(self, role, current, decision, target):
        assert resolve_transition(role, current, decision).target == target

    def test_only_checker_approval_allocates_budget(self):
        allocating = [t for t in TRANSITIONS.values() if t.allocates_budget]
        assert [(t.actor, t.target) for t in allocating] == [(UserRole.CHECKER, RequestStatus.APPROVED)]

    def test_travel_approval_is_stamped(self):
        transition = resolve_transition(UserRole.APPROVER, RequestStatus.PENDING, Decision.APPROVED)
        assert transition.stamps_travel_approval

    def test_accepts_plain_values(self):
        transition = resolve_transition("checker", "pending_verification", "approved")
        assert transition.target == RequestStatus.APPROVED

    def test_employee_cannot_decide(self):
        with pytest.raises(PermissionDeniedError):
            resolve_transition(UserRole.EMPLOYEE, RequestStatus.PENDING, Decision.APPROVED)

    @pytest.mark.parametrize("role, current", [
        (UserRole.CHECKER, RequestStatus.PENDING),
        (UserRole.APPROVER, RequestStatus.PENDING_VERIFICATION),
        (UserRole.APPROVER, RequestStatus.TRAVEL_APPROVED),
        (UserRole.ADMIN, RequestStatus.TRAVEL_APPROVED),
        (UserRole.CHECKER, RequestStatus.APPROVED),
        (UserRole.ADMIN, RequestStatus.REJECTED),
    ])
    def test_out_of_turn_decisions_conflict(self, role, current):
        with pytest.raises(InvalidTransitionError):
            resolve_transition(role, current, Decision.APPROVED)


class TestAuthority:

    def test_admin_authority_follows_status(self):
        assert effective_authority(UserRole.ADMIN, RequestStatus.PENDING) == UserRole.APPROVER
        assert effective_authority(UserRole.ADMIN, RequestStatus.PENDING_VERIFICATION) == UserRole.CHECKER
        assert effective_authority(UserRole.ADMIN, RequestStatus.APPROVED) is None

    def test_employee_has_no_authority(self):
        assert effective_authority(UserRole.EMPLOYEE, RequestStatus.PENDING) is None


class TestExpenseSubmissionStates:

    def test_travel_waits_for_approval(self):
        assert expense_submission_states(RequestKind.TRAVEL, True) == (RequestStatus.TRAVEL_APPROVED,)

    def test_travel_without_gate(self):
        assert RequestStatus.PENDING in expense_submission_states(RequestKind.TRAVEL, False)

    def test_valley_accepts_pending(self):
        states = expense_submission_states(RequestKind.VALLEY, True)
        assert states == (RequestStatus.PENDING, RequestStatus.TRAVEL_APPROVED)
