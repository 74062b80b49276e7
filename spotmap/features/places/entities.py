from pydantic import field_validator, model_validator

from spotmap.core.types import Base, InternalBase, PlaceId


class Viewport(Base):
    """Rectangular map region in SRID 4326 degrees."""

    north: float
    south: float
    east: float
    west: float

    @field_validator("north", "south")
    @classmethod
    def validate_latitude(cls, latitude):
        if latitude < -90 or latitude > 90:
            raise ValueError("Invalid latitude")
        return latitude

    @field_validator("east", "west")
    @classmethod
    def validate_longitude(cls, longitude):
        if longitude < -180 or longitude > 180:
            raise ValueError("Invalid longitude")
        return longitude

    @model_validator(mode="after")
    def validate_bounds(self):
        if self.north <= self.south:
            raise ValueError("North must be greater than south")
        if self.east <= self.west:
            raise ValueError("East must be greater than west")
        return self


class PlacePoint(InternalBase):
    """Where a spot or want-to-go item is on the map."""

    place_id: PlaceId
    latitude: float
    longitude: float
