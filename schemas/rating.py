from pydantic import BaseModel, Field
from typing import Optional

class RatingUpdate(BaseModel):
    rating: Optional[float] = Field(None, ge=0, allow_inf_nan=False)

class RatingRecompute(BaseModel):
    serviceId: str
    rating: float
    ratedBookings: int
    totalBookings: int
