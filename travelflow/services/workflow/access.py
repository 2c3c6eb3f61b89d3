from travelflow.core.exceptions import PermissionDeniedError
from travelflow.models.shared.enums import PRIVILEGED_ROLES, UserRole


def is_privileged(user) -> bool:
    return UserRole(user.role) in PRIVILEGED_ROLES


def ensure_can_view(request, user) -> None:
    """Employees only see their own requests"""
    if is_privileged(user) or request.employee_id == user.id:
        return
    raise PermissionDeniedError("You do not have access to this request")


def ensure_owner(request, user) -> None:
    if request.employee_id != user.id:
        raise PermissionDeniedError("Only the employee who raised this request can change its expenses")
