from collections import Counter
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, List

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from travelflow.core.config import settings
from travelflow.models.auth.user import User
from travelflow.models.finance.budget import Budget
from travelflow.models.finance.project import Project
from travelflow.models.shared.enums import RequestStatus, UserRole
from travelflow.models.travel.travel_request import TravelRequest
from travelflow.models.travel.valley_request import ValleyRequest
from travelflow.schemas.report.stats_schema import (
    AdminStatsResponse, DepartmentStats, MonthlyRequestStats, ProjectStats
)


ZERO = Decimal("0")

PENDING_GROUP = (RequestStatus.PENDING, RequestStatus.TRAVEL_APPROVED, RequestStatus.PENDING_VERIFICATION)
REJECTED_GROUP = (RequestStatus.REJECTED, RequestStatus.REJECTED_BY_CHECKER)


def recent_months(now: datetime, count: int) -> List[str]:
    """Keys (YYYY-MM) for the last `count` months ending with the current one, oldest first"""
    year, month = now.year, now.month
    keys = []
    for _ in range(count):
        keys.append(f"{year:04d}-{month:02d}")
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(keys))


class StatsService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _request_rows(self):
        rows = []
        for model in (TravelRequest, ValleyRequest):
            result = await self.session.execute(
                select(
                    model.status,
                    model.total_amount,
                    model.department,
                    model.project,
                    model.project_id,
                    model.created_at,
                )
            )
            rows.extend(result.all())
        return rows

    async def get_admin_stats(self) -> AdminStatsResponse:
        users_result = await self.session.execute(
            select(User.role, func.count(User.id)).group_by(User.role)
        )
        users_by_role = {role.value: 0 for role in UserRole}
        for role, count in users_result.all():
            users_by_role[UserRole(role).value] = count

        projects = (await self.session.execute(select(Project))).scalars().all()
        project_names = {p.id: p.name for p in projects}

        rows = await self._request_rows()

        status_counts = Counter(RequestStatus(r.status) for r in rows)
        total_amount = sum((Decimal(str(r.total_amount or 0)) for r in rows), ZERO)

        month_keys = recent_months(datetime.now(timezone.utc), settings.STATS_MONTHS)
        monthly = {key: MonthlyRequestStats(month=key) for key in month_keys}
        departments: Dict[str, DepartmentStats] = {}
        by_project: Dict[str, ProjectStats] = {}

        for row in rows:
            amount = Decimal(str(row.total_amount or 0))
            status = RequestStatus(row.status)

            if row.created_at is not None:
                bucket = monthly.get(row.created_at.strftime("%Y-%m"))
                if bucket is not None:
                    if status in PENDING_GROUP:
                        bucket.pending += 1
                    elif status == RequestStatus.APPROVED:
                        bucket.approved += 1
                    else:
                        bucket.rejected += 1
                    bucket.amount += amount

            department = row.department or "Unassigned"
            dept = departments.setdefault(department, DepartmentStats(department=department))
            dept.requests += 1
            dept.amount += amount

            project = project_names.get(row.project_id) or row.project or "Unassigned"
            project_stats = by_project.setdefault(project, ProjectStats(project=project))
            project_stats.requests += 1
            project_stats.amount += amount

        # Remaining budget is the latest fiscal year's amount
        budgets = (await self.session.execute(
            select(Budget.project_id, Budget.amount).order_by(Budget.fiscal_year.desc())
        )).all()
        remaining: Dict[str, Decimal] = {}
        for project_id, amount in budgets:
            remaining.setdefault(project_id, Decimal(str(amount)))

        for project in projects:
            stats = by_project.setdefault(project.name, ProjectStats(project=project.name))
            stats.remaining_budget = remaining.get(project.id, ZERO)

        return AdminStatsResponse(
            total_users=sum(users_by_role.values()),
            total_requests=len(rows),
            pending=sum(status_counts[s] for s in PENDING_GROUP),
            approved=status_counts[RequestStatus.APPROVED],
            rejected=sum(status_counts[s] for s in REJECTED_GROUP),
            total_amount=total_amount,
            users_by_role=users_by_role,
            requests_by_status={s.value: status_counts[s] for s in RequestStatus},
            requests_by_month=[monthly[key] for key in month_keys],
            department_data=sorted(departments.values(), key=lambda d: d.requests, reverse=True),
            project_data=sorted(by_project.values(), key=lambda p: p.project),
        )
