from dataclasses import dataclass
from typing import Any, Callable, Dict

from travelflow import crud
from travelflow.crud.mappers import (
    travel_request_from_row, travel_request_to_row,
    valley_request_from_row, valley_request_to_row,
)
from travelflow.crud.reimbursement_request import CRUDReimbursementRequest
from travelflow.models.shared.enums import RequestKind


@dataclass(frozen=True)
class RequestKindConfig:
    kind: RequestKind
    gateway: CRUDReimbursementRequest
    from_row: Callable[[Any], Dict[str, Any]]
    to_row: Callable[[Dict[str, Any]], Dict[str, Any]]
    label: str


REQUEST_KINDS = {
    RequestKind.TRAVEL: RequestKindConfig(
        kind=RequestKind.TRAVEL,
        gateway=crud.travel_request,
        from_row=travel_request_from_row,
        to_row=travel_request_to_row,
        label="travel request",
    ),
    RequestKind.VALLEY: RequestKindConfig(
        kind=RequestKind.VALLEY,
        gateway=crud.valley_request,
        from_row=valley_request_from_row,
        to_row=valley_request_to_row,
        label="in-valley request",
    ),
}


def get_kind_config(kind: RequestKind) -> RequestKindConfig:
    return REQUEST_KINDS[RequestKind(kind)]
