# travelflow/models/finance/__init__.py
from .project import Project
from .budget import Budget

__all__ = ["Project", "Budget"]
