from enum import Enum, IntEnum


def enum_values(enum_cls):
    """Persist enum values (not member names) in string columns"""
    return [member.value for member in enum_cls]


class UserRole(str, Enum):
    EMPLOYEE = "employee"
    APPROVER = "approver"
    CHECKER = "checker"
    ADMIN = "admin"

# Roles allowed to see every employee's requests
PRIVILEGED_ROLES = (UserRole.APPROVER, UserRole.CHECKER, UserRole.ADMIN)


# region Request Workflow Enums

class RequestKind(str, Enum):
    TRAVEL = "travel"
    VALLEY = "valley"

class RequestType(str, Enum):
    NORMAL = "normal"
    ADVANCE = "advance"
    EMERGENCY = "emergency"
    GROUP = "group"
    IN_VALLEY = "in-valley"

class RequestStatus(str, Enum):
    PENDING = "pending"
    TRAVEL_APPROVED = "travel_approved"
    PENDING_VERIFICATION = "pending_verification"
    APPROVED = "approved"
    REJECTED = "rejected"
    REJECTED_BY_CHECKER = "rejected_by_checker"

class RequestPhase(IntEnum):
    TRAVEL_DETAILS = 1
    EXPENSES = 2

class Decision(str, Enum):
    APPROVED = "approved"
    REJECTED = "rejected"


# endregion

# region Expense Enums

class ExpenseCategory(str, Enum):
    ACCOMMODATION = "accommodation"
    PER_DIEM = "per-diem"
    VEHICLE_HIRING = "vehicle-hiring"
    PROGRAM_COST = "program-cost"
    MEETING_COST = "meeting-cost"
    # In-valley categories
    RIDE_SHARE = "ride-share"
    TAXI = "taxi"
    FOOD = "food"
    MEETING_VENUE = "meeting-venue"
    STATIONERY = "stationery"
    PRINTING = "printing"
    COURIER = "courier"
    OTHER = "other"

class TransportMode(str, Enum):
    AIR = "air"
    BUS = "bus"
    CAR = "car"
    BIKE = "bike"
    OTHER = "other"

# endregion
