from uuid import UUID

from pydantic import BaseModel


class InternalBase(BaseModel):
    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
    }


class Base(BaseModel):
    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
        "validate_default": True,
    }


UserId = UUID
PlaceId = UUID
SpotId = UUID
WantToGoId = UUID
