from fastapi import APIRouter
from travelflow.api.v1.endpoints.admin import budgets as admin_budgets, requests as admin_requests, stats, users
from travelflow.api.v1.endpoints.auth import login
from travelflow.api.v1.endpoints.expenses import expenses, receipts
from travelflow.api.v1.endpoints.finance import budgets, projects
from travelflow.api.v1.endpoints.notification import notifications
from travelflow.api.v1.endpoints.requests import travel_requests, valley_requests
from travelflow.api.v1.endpoints.users import directory

api_router = APIRouter()

# Authentication routes
api_router.include_router(login.router, prefix="/auth", tags=["Authentication"])

# Request workflow routes
api_router.include_router(travel_requests.router, prefix="/requests", tags=["Travel Requests"])
api_router.include_router(valley_requests.router, prefix="/valley-requests", tags=["In-Valley Requests"])

# Expense routes
api_router.include_router(expenses.travel_router, prefix="/expenses", tags=["Expenses"])
api_router.include_router(expenses.valley_router, prefix="/valley-expenses", tags=["Expenses"])
api_router.include_router(receipts.router, prefix="/receipts", tags=["Receipts"])
api_router.include_router(receipts.router, prefix="/valley-receipts", tags=["Receipts"])

# Finance routes
api_router.include_router(projects.router, prefix="/projects", tags=["Finance"])
api_router.include_router(budgets.router, prefix="/budgets", tags=["Finance"])

# Notification routes
api_router.include_router(notifications.router, prefix="/notifications", tags=["Notifications"])

# Admin routes
api_router.include_router(users.router, prefix="/admin/users", tags=["Admin"])
api_router.include_router(stats.router, prefix="/admin/stats", tags=["Admin"])
api_router.include_router(admin_requests.router, prefix="/admin/requests", tags=["Admin"])
api_router.include_router(admin_budgets.router, prefix="/admin/budgets", tags=["Admin"])

# Directory routes
api_router.include_router(directory.router, tags=["Directory"])
