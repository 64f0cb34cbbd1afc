"""
Pydantic Schemas for Request/Response Validation

Every response is wrapped in the standard envelope: a ``success`` flag,
the domain payload (``menu``, ``restaurant``, ``orders``, ...) and a
``message`` where there is something to say.
"""

import json
from datetime import datetime, timezone
from typing import Annotated, Any, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class MenuUpdate(BaseModel):
    """
    Fields a menu edit may change.

    Only fields that were actually supplied are set on the model, so
    ``model_dump(exclude_unset=True)`` yields exactly the requested changes.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)


class OrderStatusUpdate(BaseModel):
    """Request body for moving an order to a new status."""
    status: str = Field(..., min_length=1, max_length=50, examples=["confirmed"])


def parse_cuisines(raw: str) -> list[str]:
    """
    Decode the JSON-encoded cuisine list sent in restaurant forms.

    Raises:
        ValueError: If ``raw`` is not a JSON array of strings
    """
    cuisines = json.loads(raw)
    if not isinstance(cuisines, list) or not all(isinstance(c, str) for c in cuisines):
        raise ValueError("cuisines must be a JSON array of strings")
    return cuisines


# =============================================================================
# RESOURCE SCHEMAS
# =============================================================================

def as_utc(value: datetime) -> datetime:
    """Timestamps are stored in UTC; some drivers return them naive."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UTCDateTime = Annotated[datetime, AfterValidator(as_utc)]


class MenuResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    restaurant_id: Optional[int]
    name: str
    description: str
    price: float
    image: str
    created_at: UTCDateTime
    updated_at: Optional[UTCDateTime]


class RestaurantResponse(BaseModel):
    """A restaurant profile without its menus."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    restaurant_name: str
    city: str
    country: str
    delivery_time: int
    cuisines: List[str]
    image_url: str
    created_at: UTCDateTime
    updated_at: Optional[UTCDateTime]


class RestaurantWithMenus(RestaurantResponse):
    """A restaurant profile with its menus resolved."""
    menus: List[MenuResponse]


class UserSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    fullname: str
    email: str
    contact: Optional[str]
    address: Optional[str]
    city: Optional[str]
    country: Optional[str]
    profile_picture: Optional[str]


class OrderResponse(BaseModel):
    """An order with its restaurant and user resolved."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    status: str
    delivery_details: dict[str, Any]
    cart_items: List[dict[str, Any]]
    total_amount: Optional[float]
    created_at: UTCDateTime
    updated_at: Optional[UTCDateTime]
    restaurant: RestaurantResponse
    user: UserSummary


# =============================================================================
# ENVELOPES
# =============================================================================

class MessageEnvelope(BaseModel):
    success: bool = True
    message: str


class MenuEnvelope(BaseModel):
    success: bool = True
    message: str
    menu: MenuResponse


class RestaurantEnvelope(BaseModel):
    success: bool = True
    message: Optional[str] = None
    restaurant: RestaurantResponse


class RestaurantWithMenusEnvelope(BaseModel):
    success: bool = True
    restaurant: RestaurantWithMenus


class OrderListEnvelope(BaseModel):
    success: bool = True
    orders: List[OrderResponse]


class OrderStatusEnvelope(BaseModel):
    success: bool = True
    status: str
    message: str


class RestaurantSearchEnvelope(BaseModel):
    success: bool = True
    data: List[RestaurantResponse]


class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    message: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    database: str
    image_service: str
    timestamp: datetime
