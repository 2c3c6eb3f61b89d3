from fastapi import HTTPException, status

class BaseAppException(HTTPException):
    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=detail)

class ValidationError(BaseAppException):
    def __init__(self, detail: str = "Validation error"):
        super().__init__(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)

class NotFoundError(BaseAppException):
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)

class PermissionDeniedError(BaseAppException):
    def __init__(self, detail: str = "You do not have permission to perform this action"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)

class InvalidTransitionError(BaseAppException):
    def __init__(self, detail: str = "Request cannot move to the requested status"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)

class InsufficientBudgetError(BaseAppException):
    def __init__(self, detail: str = "Insufficient budget available"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

class BudgetConflictError(BaseAppException):
    def __init__(self, detail: str = "Budget was modified concurrently, please retry"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)

class PersistenceError(BaseAppException):
    def __init__(self, detail: str = "Database operation failed"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
