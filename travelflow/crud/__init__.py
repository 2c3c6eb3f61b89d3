# travelflow/crud/__init__.py
from .travel_request import travel_request
from .valley_request import valley_request
from .expense_item import expense_item
from .receipt import receipt
from .notification import notification
from .user import user
from .project import project
from .budget import budget

__all__ = [
    "travel_request",
    "valley_request",
    "expense_item",
    "receipt",
    "notification",
    "user",
    "project",
    "budget",
]
