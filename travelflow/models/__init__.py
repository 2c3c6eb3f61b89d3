# travelflow/models/__init__.py
# Importing every model registers its table on Base.metadata

from .auth import User
from .travel import TravelRequest, ValleyRequest, ExpenseItem, Receipt
from .finance import Project, Budget
from .system import Notification

__all__ = [
    "User",
    "TravelRequest",
    "ValleyRequest",
    "ExpenseItem",
    "Receipt",
    "Project",
    "Budget",
    "Notification",
]
