# travelflow/crud/travel_request.py
from travelflow.crud.reimbursement_request import CRUDReimbursementRequest
from travelflow.models.travel.travel_request import TravelRequest


class CRUDTravelRequest(CRUDReimbursementRequest[TravelRequest]):
    pass


travel_request = CRUDTravelRequest(TravelRequest, "travel request")
