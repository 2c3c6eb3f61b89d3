from decimal import Decimal
from typing import Annotated
from pydantic import BaseModel, PlainSerializer
from pydantic.alias_generators import to_camel

# Decimal amounts go out as JSON numbers
Amount = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

class CamelModel(BaseModel):
    """Schemas exchanged with clients in camelCase"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
