"""
Restaurant Endpoints

Owner-facing profile management, the owner's order queue, and
customer-facing search and restaurant pages.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.attributes import set_committed_value

from restaurant_api.api.deps import is_authenticated, read_image
from restaurant_api.core.config import Settings, get_settings
from restaurant_api.core.exceptions import (
    APIError,
    Conflict,
    InternalError,
    InvalidStatusTransition,
    MissingInput,
    NotFound,
)
from restaurant_api.database import get_db
from restaurant_api.models import Menu, Order, Restaurant, RestaurantCuisine, is_allowed_transition
from restaurant_api.schemas import (
    ErrorResponse,
    MessageEnvelope,
    OrderListEnvelope,
    OrderResponse,
    OrderStatusEnvelope,
    OrderStatusUpdate,
    RestaurantEnvelope,
    RestaurantResponse,
    RestaurantSearchEnvelope,
    RestaurantWithMenus,
    RestaurantWithMenusEnvelope,
    parse_cuisines,
)
from restaurant_api.services.images import BaseImageService, get_image_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/restaurant", tags=["Restaurants"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

async def get_restaurant_by_owner(
    db: AsyncSession,
    user_id: int,
    *options,
) -> Optional[Restaurant]:
    """Load the restaurant owned by ``user_id``, if any."""
    result = await db.execute(
        select(Restaurant).where(Restaurant.user_id == user_id).options(*options)
    )
    return result.scalar_one_or_none()


def _contains(text: str) -> str:
    """LIKE pattern matching ``text`` literally anywhere in a value."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def build_search_filters(
    search_text: str,
    search_query: str,
    selected_cuisines: list[str],
) -> list:
    """
    Build the WHERE clauses of a restaurant search.

    ``search_text`` matches name, city or country; ``search_query`` matches
    name or any cuisine. Only one of the two text clauses is applied: when
    both are given, ``search_query`` wins. ``selected_cuisines`` keeps
    restaurants offering at least one of the listed cuisines (exact match).
    """
    filters = []
    text_clause = None

    if search_text:
        pattern = _contains(search_text)
        text_clause = or_(
            Restaurant.restaurant_name.ilike(pattern, escape="\\"),
            Restaurant.city.ilike(pattern, escape="\\"),
            Restaurant.country.ilike(pattern, escape="\\"),
        )

    if search_query:
        pattern = _contains(search_query)
        text_clause = or_(
            Restaurant.restaurant_name.ilike(pattern, escape="\\"),
            Restaurant.cuisine_entries.any(RestaurantCuisine.name.ilike(pattern, escape="\\")),
        )

    if text_clause is not None:
        filters.append(text_clause)

    if selected_cuisines:
        filters.append(
            Restaurant.cuisine_entries.any(RestaurantCuisine.name.in_(selected_cuisines))
        )

    return filters


# =============================================================================
# OWNER ENDPOINTS
# =============================================================================

@router.post(
    "",
    status_code=201,
    response_model=MessageEnvelope,
    responses=ERROR_RESPONSES,
    summary="Create Restaurant",
)
async def create_restaurant(
    user_id: int = Depends(is_authenticated),
    restaurant_name: str = Form(..., min_length=1, max_length=100),
    city: str = Form(..., min_length=1, max_length=50),
    country: str = Form(..., min_length=1, max_length=50),
    delivery_time: int = Form(..., ge=0),
    cuisines: str = Form(..., description='JSON array, e.g. ["Italian", "Pizza"]'),
    image_file: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_db),
    image_service: BaseImageService = Depends(get_image_service),
) -> MessageEnvelope:
    """Create the caller's restaurant. A user may own only one."""
    logger.info(f"Creating restaurant '{restaurant_name}' for user #{user_id}")

    try:
        if await get_restaurant_by_owner(db, user_id):
            raise Conflict("Restaurant already exists for this user")

        image = await read_image(image_file)
        if image is None:
            raise MissingInput("Image is required")

        cuisine_list = parse_cuisines(cuisines)
        image_url = await image_service.upload(image)

        restaurant = Restaurant(
            user_id=user_id,
            restaurant_name=restaurant_name,
            city=city,
            country=country,
            delivery_time=delivery_time,
            cuisines=cuisine_list,
            image_url=image_url,
        )
        db.add(restaurant)

        try:
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            # Only a row created by a concurrent request is a conflict
            if await get_restaurant_by_owner(db, user_id) is None:
                raise
            logger.warning(f"Restaurant for user #{user_id} was created concurrently")
            raise Conflict("Restaurant already exists for this user") from e

        logger.info(f"Restaurant #{restaurant.id} created for user #{user_id}")
        return MessageEnvelope(message="Restaurant added successfully")

    except APIError:
        raise
    except Exception as e:
        logger.exception(f"Error creating restaurant: {e}")
        raise InternalError() from e


@router.get(
    "",
    response_model=RestaurantWithMenusEnvelope,
    responses=ERROR_RESPONSES,
    summary="Get Own Restaurant",
)
async def get_restaurant(
    user_id: int = Depends(is_authenticated),
    db: AsyncSession = Depends(get_db),
) -> RestaurantWithMenusEnvelope:
    """Return the caller's restaurant with its menus."""
    try:
        restaurant = await get_restaurant_by_owner(db, user_id, selectinload(Restaurant.menus))
        if restaurant is None:
            raise NotFound("Restaurant not found", restaurant=[])

        return RestaurantWithMenusEnvelope(
            restaurant=RestaurantWithMenus.model_validate(restaurant),
        )

    except APIError:
        raise
    except Exception as e:
        logger.exception(f"Error loading restaurant for user #{user_id}: {e}")
        raise InternalError() from e


@router.put(
    "",
    response_model=RestaurantEnvelope,
    responses=ERROR_RESPONSES,
    summary="Update Own Restaurant",
)
async def update_restaurant(
    user_id: int = Depends(is_authenticated),
    restaurant_name: str = Form(..., min_length=1, max_length=100),
    city: str = Form(..., min_length=1, max_length=50),
    country: str = Form(..., min_length=1, max_length=50),
    delivery_time: int = Form(..., ge=0),
    cuisines: str = Form(...),
    image_file: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_db),
    image_service: BaseImageService = Depends(get_image_service),
) -> RestaurantEnvelope:
    """
    Replace the caller's restaurant profile.

    Every profile field is overwritten. The image is replaced only when a
    new file is sent; the old one stays on the image host.
    """
    try:
        restaurant = await get_restaurant_by_owner(db, user_id)
        if restaurant is None:
            raise NotFound("Restaurant not found")

        restaurant.restaurant_name = restaurant_name
        restaurant.city = city
        restaurant.country = country
        restaurant.delivery_time = delivery_time
        restaurant.cuisines = parse_cuisines(cuisines)

        image = await read_image(image_file)
        if image is not None:
            restaurant.image_url = await image_service.upload(image)

        await db.commit()

        logger.info(f"Restaurant #{restaurant.id} updated")
        return RestaurantEnvelope(
            message="Restaurant updated successfully",
            restaurant=RestaurantResponse.model_validate(restaurant),
        )

    except APIError:
        raise
    except Exception as e:
        logger.exception(f"Error updating restaurant for user #{user_id}: {e}")
        raise InternalError() from e


@router.get(
    "/order",
    response_model=OrderListEnvelope,
    responses=ERROR_RESPONSES,
    summary="List Restaurant Orders",
)
async def get_restaurant_orders(
    user_id: int = Depends(is_authenticated),
    db: AsyncSession = Depends(get_db),
) -> OrderListEnvelope:
    """Return every order placed with the caller's restaurant."""
    try:
        restaurant = await get_restaurant_by_owner(db, user_id)
        if restaurant is None:
            raise NotFound("Restaurant not found")

        result = await db.execute(
            select(Order)
            .where(Order.restaurant_id == restaurant.id)
            .options(selectinload(Order.restaurant), selectinload(Order.user))
            .order_by(Order.created_at, Order.id)
        )
        orders = result.scalars().all()

        return OrderListEnvelope(
            orders=[OrderResponse.model_validate(order) for order in orders],
        )

    except APIError:
        raise
    except Exception as e:
        logger.exception(f"Error loading orders for user #{user_id}: {e}")
        raise InternalError() from e


@router.put(
    "/order/{order_id}/status",
    response_model=OrderStatusEnvelope,
    responses=ERROR_RESPONSES,
    summary="Update Order Status",
)
async def update_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    user_id: int = Depends(is_authenticated),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> OrderStatusEnvelope:
    """
    Move an order to a new status.

    Any status string is accepted unless ENFORCE_ORDER_STATUS_TRANSITIONS
    is enabled, in which case it must follow the OrderStatus workflow.
    """
    try:
        order = await db.get(Order, order_id)
        if order is None:
            raise NotFound("Order not found")

        if settings.enforce_order_status_transitions and not is_allowed_transition(
            order.status, payload.status
        ):
            raise InvalidStatusTransition(
                f"Cannot change order status from '{order.status}' to '{payload.status}'"
            )

        previous = order.status
        order.status = payload.status
        await db.commit()

        logger.info(f"Order #{order.id} status {previous} -> {order.status} (by user #{user_id})")
        return OrderStatusEnvelope(
            status=order.status,
            message="Order status updated successfully",
        )

    except APIError:
        raise
    except Exception as e:
        logger.exception(f"Error updating status of order #{order_id}: {e}")
        raise InternalError() from e


# =============================================================================
# CUSTOMER ENDPOINTS
# =============================================================================

@router.get(
    "/search/{search_text}",
    response_model=RestaurantSearchEnvelope,
    responses=ERROR_RESPONSES,
    summary="Search Restaurants",
)
async def search_restaurant(
    search_text: str,
    search_query: str = Query("", alias="searchQuery"),
    selected_cuisines: str = Query("", alias="selectedCuisines", description="Comma-separated"),
    user_id: int = Depends(is_authenticated),
    db: AsyncSession = Depends(get_db),
) -> RestaurantSearchEnvelope:
    """Find restaurants by free text and cuisine. Results are unranked."""
    try:
        cuisines = [c for c in selected_cuisines.split(",") if c]
        filters = build_search_filters(search_text, search_query, cuisines)

        result = await db.execute(select(Restaurant).where(*filters))
        restaurants = result.scalars().all()

        logger.debug(
            f"Search text={search_text!r} query={search_query!r} "
            f"cuisines={cuisines} -> {len(restaurants)} results"
        )
        return RestaurantSearchEnvelope(
            data=[RestaurantResponse.model_validate(r) for r in restaurants],
        )

    except APIError:
        raise
    except Exception as e:
        logger.exception(f"Error searching restaurants: {e}")
        raise InternalError() from e


@router.get(
    "/{restaurant_id}",
    response_model=RestaurantWithMenusEnvelope,
    responses=ERROR_RESPONSES,
    summary="Get Restaurant",
)
async def get_single_restaurant(
    restaurant_id: int,
    user_id: int = Depends(is_authenticated),
    db: AsyncSession = Depends(get_db),
) -> RestaurantWithMenusEnvelope:
    """Return one restaurant with its menus, newest first."""
    try:
        restaurant = await db.get(Restaurant, restaurant_id)
        if restaurant is None:
            raise NotFound("Restaurant not found")

        result = await db.execute(
            select(Menu)
            .where(Menu.restaurant_id == restaurant.id)
            .order_by(Menu.created_at.desc(), Menu.id.desc())
        )
        set_committed_value(restaurant, "menus", list(result.scalars().all()))

        return RestaurantWithMenusEnvelope(
            restaurant=RestaurantWithMenus.model_validate(restaurant),
        )

    except APIError:
        raise
    except Exception as e:
        logger.exception(f"Error loading restaurant #{restaurant_id}: {e}")
        raise InternalError() from e
