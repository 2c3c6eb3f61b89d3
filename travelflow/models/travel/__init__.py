# travelflow/models/travel/__init__.py
from .travel_request import TravelRequest
from .valley_request import ValleyRequest
from .expense_item import ExpenseItem
from .receipt import Receipt

__all__ = ["TravelRequest", "ValleyRequest", "ExpenseItem", "Receipt"]
