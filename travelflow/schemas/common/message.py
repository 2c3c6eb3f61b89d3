from travelflow.schemas.common.base import CamelModel

class MessageResponse(CamelModel):
    message: str
