from typing import Generic, List, TypeVar
from travelflow.schemas.common.base import CamelModel

T = TypeVar("T")

class PaginatedResponse(CamelModel, Generic[T]):
    page_index: int
    page_size: int
    count: int
    data: List[T]
