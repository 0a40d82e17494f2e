from pydantic import BaseModel, Field, ConfigDict, AliasChoices, field_validator
from typing import Any, Optional, Union
import math
import re

REQUIRED_SERVICE_FIELDS = (
    "service_name",
    "price",
    "description",
    "image",
    "provider_name",
    "provider_email",
    "provider_contact",
)

TEXT_SERVICE_FIELDS = (
    "service_name",
    "category",
    "description",
    "image",
    "provider_name",
    "provider_email",
)

# Fields the update path may never overwrite
PROTECTED_SERVICE_FIELDS = ("_id", "id", "rating", "createdAt")

TOP_RATED_LIMIT = 6

# Plain digits or comma-grouped thousands, optional decimal part: "25", "1,200.50"
PRICE_PATTERN = re.compile(r'^-?(?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d+)?$')

def parse_price(value) -> Optional[float]:
    """Turn a number or a currency-prefixed string ("$25", "1,200") into a float.

    Strings that do not read unambiguously as a price, such as "1.200,50",
    are rejected rather than guessed at.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError("Price must be a number")
    if isinstance(value, (int, float)):
        price = float(value)
    elif isinstance(value, str):
        if not value.strip():
            return None
        cleaned = re.sub(r'[^\d.,\-]', '', value)
        if not PRICE_PATTERN.match(cleaned):
            raise ValueError(f"Unrecognised price: {value!r}")
        price = float(cleaned.replace(",", ""))
    else:
        raise ValueError("Price must be a number")

    if not math.isfinite(price) or price < 0:
        raise ValueError("Price must be a finite, non-negative amount")
    return price

def provider_email_field():
    # Older clients post the provider address as "email"
    return Field(None, validation_alias=AliasChoices("provider_email", "email"))

class ServiceBase(BaseModel):
    service_name: Optional[str] = None
    category: Optional[str] = None
    price: Optional[float] = None
    description: Optional[str] = None
    image: Optional[str] = None
    provider_name: Optional[str] = None
    provider_email: Optional[str] = None
    provider_contact: Optional[Union[str, int]] = None
    duration: Optional[Union[str, int]] = None

    @field_validator("price", mode="before")
    @classmethod
    def normalise_price(cls, value):
        return parse_price(value)

class ServiceCreate(ServiceBase):
    provider_email: Optional[str] = provider_email_field()

    def missing_fields(self) -> list:
        return [name for name in REQUIRED_SERVICE_FIELDS if not getattr(self, name)]

class ServiceUpdate(ServiceBase):
    """Partial update; fields not sent are left untouched. Unknown fields are kept."""
    model_config = ConfigDict(extra="allow")

    provider_email: Optional[str] = provider_email_field()

class Service(ServiceBase):
    """A stored service as read back. Other writers may have stored anything, so nothing is strict."""
    model_config = ConfigDict(extra="allow", populate_by_name=True, from_attributes=True)

    id: str = Field(alias="_id")
    price: Optional[Any] = None
    provider_contact: Optional[Any] = None
    duration: Optional[Any] = None
    rating: Optional[Any] = None
    createdAt: Optional[Any] = None

    @field_validator("price", mode="before")
    @classmethod
    def normalise_price(cls, value):
        try:
            return parse_price(value)
        except ValueError:
            return value

    @field_validator(*TEXT_SERVICE_FIELDS, mode="before")
    @classmethod
    def stringify(cls, value):
        if value is None or isinstance(value, str):
            return value
        return str(value)

class ServiceCreated(BaseModel):
    message: str
    serviceId: str
