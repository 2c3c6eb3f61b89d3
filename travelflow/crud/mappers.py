"""
Row <-> record mapping for reimbursement entities.

Rows are ORM instances (or plain mappings) with snake_case attributes. Records
are the camelCase dictionaries served by the API. Reads fill missing values
with type defaults; writes drop unknown keys and encode JSON columns.
"""
import json
import logging
import re
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Mapping

from travelflow.models.shared.enums import (
    ExpenseCategory, RequestKind, RequestStatus, RequestType
)

logger = logging.getLogger(__name__)

# Field kinds
TEXT = "text"
NUMBER = "number"
INTEGER = "integer"
BOOLEAN = "boolean"
TIMESTAMP = "timestamp"
OPTIONAL_TIMESTAMP = "optional_timestamp"
DATE = "date"
JSON_LIST = "json_list"


def to_snake(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


_REQUEST_COMMON = {
    "id": TEXT,
    "employeeId": TEXT,
    "employeeName": TEXT,
    "department": TEXT,
    "designation": TEXT,
    "requestType": RequestType,
    "project": TEXT,
    "projectOther": TEXT,
    "purpose": TEXT,
    "purposeOther": TEXT,
    "location": TEXT,
    "locationOther": TEXT,
    "totalAmount": NUMBER,
    "previousOutstandingAdvance": NUMBER,
    "status": RequestStatus,
    "phase": INTEGER,
    "approverId": TEXT,
    "approverComments": TEXT,
    "checkerComments": TEXT,
    "financeComments": TEXT,
    "projectId": TEXT,
    "budgetDeductedAmount": NUMBER,
    "createdAt": TIMESTAMP,
    "updatedAt": TIMESTAMP,
    "travelDetailsApprovedAt": OPTIONAL_TIMESTAMP,
    "expensesSubmittedAt": OPTIONAL_TIMESTAMP,
}

TRAVEL_REQUEST_FIELDS = {
    **_REQUEST_COMMON,
    "travelDateFrom": DATE,
    "travelDateTo": DATE,
    "transportMode": TEXT,
    "stationPickDrop": TEXT,
    "localConveyance": TEXT,
    "rideShareUsed": BOOLEAN,
    "ownVehicleReimbursement": BOOLEAN,
    "emergencyReason": TEXT,
    "emergencyReasonOther": TEXT,
    "emergencyJustification": TEXT,
    "emergencyAmount": NUMBER,
    "estimatedAmount": NUMBER,
    "advanceNotes": TEXT,
    "isGroupTravel": BOOLEAN,
    "isGroupCaptain": BOOLEAN,
    "groupSize": INTEGER,
    "groupMembers": JSON_LIST,
    "groupDescription": TEXT,
}

VALLEY_REQUEST_FIELDS = {
    **_REQUEST_COMMON,
    "expenseDate": DATE,
    "travelDateFrom": DATE,
    "travelDateTo": DATE,
    "description": TEXT,
    "paymentMethod": TEXT,
    "paymentMethodOther": TEXT,
    "meetingType": TEXT,
    "meetingTypeOther": TEXT,
    "meetingParticipants": TEXT,
    "meetingParticipantsOther": TEXT,
}

EXPENSE_ITEM_FIELDS = {
    "id": TEXT,
    "requestId": TEXT,
    "requestKind": RequestKind,
    "category": ExpenseCategory,
    "amount": NUMBER,
    "description": TEXT,
    "createdAt": TIMESTAMP,
}

RECEIPT_FIELDS = {
    "id": TEXT,
    "expenseItemId": TEXT,
    "originalFilename": TEXT,
    "storedFilename": TEXT,
    "fileType": TEXT,
    "storagePath": TEXT,
    "publicUrl": TEXT,
    "uploadDate": TIMESTAMP,
}

NOTIFICATION_FIELDS = {
    "id": TEXT,
    "userId": TEXT,
    "requestId": TEXT,
    "message": TEXT,
    "read": BOOLEAN,
    "createdAt": TIMESTAMP,
}


# region ========== Value conversion ==========

def _read_value(value: Any, kind) -> Any:
    """Convert a stored value to its record form, defaulting nulls"""
    if isinstance(kind, type) and issubclass(kind, Enum):
        if value is None:
            return ""
        return value.value if isinstance(value, Enum) else str(value)

    if kind == TEXT:
        return "" if value is None else str(value)
    if kind == NUMBER:
        if value is None:
            return Decimal("0")
        return value if isinstance(value, Decimal) else Decimal(str(value))
    if kind == INTEGER:
        return 0 if value is None else int(value)
    if kind == BOOLEAN:
        return False if value is None else bool(value)
    if kind == TIMESTAMP:
        if value is None:
            return utc_now_iso()
        return value.isoformat() if isinstance(value, datetime) else str(value)
    if kind == OPTIONAL_TIMESTAMP:
        if value is None:
            return None
        return value.isoformat() if isinstance(value, datetime) else str(value)
    if kind == DATE:
        if value is None:
            return None
        return value.isoformat() if isinstance(value, date) else str(value)
    if kind == JSON_LIST:
        return _parse_json_list(value)
    return value


def _write_value(value: Any, kind) -> Any:
    """Convert a record value to what the column stores"""
    if value is None:
        return None

    if isinstance(kind, type) and issubclass(kind, Enum):
        return value if isinstance(value, kind) else kind(value)

    if kind == TEXT:
        return value.value if isinstance(value, Enum) else value
    if kind == NUMBER:
        return value if isinstance(value, Decimal) else Decimal(str(value))
    if kind == INTEGER:
        return int(value)
    if kind == BOOLEAN:
        return bool(value)
    if kind in (TIMESTAMP, OPTIONAL_TIMESTAMP):
        if isinstance(value, datetime):
            return value
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if kind == DATE:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        return date.fromisoformat(str(value)[:10])
    if kind == JSON_LIST:
        if isinstance(value, str):
            return value
        return json.dumps(list(value))
    return value


def _parse_json_list(value: Any) -> list:
    if value is None or value == "":
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    try:
        parsed = json.loads(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring malformed JSON list value: {value!r}")
        return []
    return parsed if isinstance(parsed, list) else []


def _get(row: Any, attr: str) -> Any:
    if isinstance(row, Mapping):
        return row.get(attr)
    return getattr(row, attr, None)

# endregion


def map_from_row(row: Any, fields: Dict[str, Any]) -> Dict[str, Any]:
    return {
        camel: _read_value(_get(row, to_snake(camel)), kind)
        for camel, kind in fields.items()
    }


def map_to_row(record: Mapping[str, Any], fields: Dict[str, Any]) -> Dict[str, Any]:
    row = {}
    for key, value in record.items():
        kind = fields.get(key)
        if kind is None:
            continue
        row[to_snake(key)] = _write_value(value, kind)
    return row


def travel_request_from_row(row: Any) -> Dict[str, Any]:
    return map_from_row(row, TRAVEL_REQUEST_FIELDS)


def travel_request_to_row(record: Mapping[str, Any]) -> Dict[str, Any]:
    return map_to_row(record, TRAVEL_REQUEST_FIELDS)


def valley_request_from_row(row: Any) -> Dict[str, Any]:
    return map_from_row(row, VALLEY_REQUEST_FIELDS)


def valley_request_to_row(record: Mapping[str, Any]) -> Dict[str, Any]:
    return map_to_row(record, VALLEY_REQUEST_FIELDS)


def expense_item_from_row(row: Any) -> Dict[str, Any]:
    return map_from_row(row, EXPENSE_ITEM_FIELDS)


def expense_item_to_row(record: Mapping[str, Any]) -> Dict[str, Any]:
    return map_to_row(record, EXPENSE_ITEM_FIELDS)


def receipt_from_row(row: Any) -> Dict[str, Any]:
    return map_from_row(row, RECEIPT_FIELDS)


def receipt_to_row(record: Mapping[str, Any]) -> Dict[str, Any]:
    return map_to_row(record, RECEIPT_FIELDS)


def notification_from_row(row: Any) -> Dict[str, Any]:
    return map_from_row(row, NOTIFICATION_FIELDS)


def notification_to_row(record: Mapping[str, Any]) -> Dict[str, Any]:
    return map_to_row(record, NOTIFICATION_FIELDS)


def request_from_row(row: Any, kind: RequestKind) -> Dict[str, Any]:
    if kind == RequestKind.VALLEY:
        return valley_request_from_row(row)
    return travel_request_from_row(row)


def request_to_row(record: Mapping[str, Any], kind: RequestKind) -> Dict[str, Any]:
    if kind == RequestKind.VALLEY:
        return valley_request_to_row(record)
    return travel_request_to_row(record)
