# travelflow/models/system/__init__.py
from .notification import Notification

__all__ = ["Notification"]
