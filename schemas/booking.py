from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Any, Optional

class BookingBase(BaseModel):
    """Bookings keep a small typed core; anything else the client sends is stored alongside it."""
    model_config = ConfigDict(extra="allow")

    serviceId: Optional[str] = None
    userEmail: Optional[str] = None
    rating: Optional[float] = Field(None, ge=0, allow_inf_nan=False)

class BookingCreate(BookingBase):
    pass

class Booking(BookingBase):
    model_config = ConfigDict(extra="allow", populate_by_name=True, from_attributes=True)

    id: str = Field(alias="_id")
    # Other writers may have stored anything here
    rating: Optional[Any] = None

    @field_validator("serviceId", "userEmail", mode="before")
    @classmethod
    def stringify(cls, value):
        if value is None or isinstance(value, str):
            return value
        return str(value)

class BookingCreated(BaseModel):
    success: bool = True
    insertedId: str
