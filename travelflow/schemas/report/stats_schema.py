from typing import Dict, List
from travelflow.schemas.common.base import Amount, CamelModel

class MonthlyRequestStats(CamelModel):
    month: str
    pending: int = 0
    approved: int = 0
    rejected: int = 0
    amount: Amount = 0

class DepartmentStats(CamelModel):
    department: str
    requests: int = 0
    amount: Amount = 0

class ProjectStats(CamelModel):
    project: str
    requests: int = 0
    amount: Amount = 0
    remaining_budget: Amount = 0

class AdminStatsResponse(CamelModel):
    total_users: int
    total_requests: int
    pending: int
    approved: int
    rejected: int
    total_amount: Amount
    users_by_role: Dict[str, int]
    requests_by_status: Dict[str, int]
    requests_by_month: List[MonthlyRequestStats]
    department_data: List[DepartmentStats]
    project_data: List[ProjectStats]
