# travelflow/crud/valley_request.py
from travelflow.crud.reimbursement_request import CRUDReimbursementRequest
from travelflow.models.travel.valley_request import ValleyRequest


class CRUDValleyRequest(CRUDReimbursementRequest[ValleyRequest]):
    pass


valley_request = CRUDValleyRequest(ValleyRequest, "in-valley request")
