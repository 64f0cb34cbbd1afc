"""
Menu Endpoints

Restaurant owners add menu items to their restaurant and edit them.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_api.api.deps import is_authenticated, read_image
from restaurant_api.api.restaurant import get_restaurant_by_owner
from restaurant_api.core.exceptions import APIError, InternalError, MissingInput, NotFound
from restaurant_api.database import get_db
from restaurant_api.models import Menu
from restaurant_api.schemas import ErrorResponse, MenuEnvelope, MenuResponse, MenuUpdate
from restaurant_api.services.images import BaseImageService, get_image_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/menu", tags=["Menus"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.post(
    "",
    status_code=201,
    response_model=MenuEnvelope,
    responses=ERROR_RESPONSES,
    summary="Add Menu",
)
async def add_menu(
    user_id: int = Depends(is_authenticated),
    name: Optional[str] = Form(None, max_length=100),
    description: Optional[str] = Form(None),
    price: Optional[float] = Form(None, ge=0),
    image: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_db),
    image_service: BaseImageService = Depends(get_image_service),
) -> MenuEnvelope:
    """
    Create a menu item and link it to the caller's restaurant.

    The menu row and the link are committed together. A caller without a
    restaurant still gets the menu, unlinked.
    """
    try:
        image_file = await read_image(image)
        if image_file is None:
            raise MissingInput("Image is required")

        missing = [
            field for field, value in
            (("name", name), ("description", description), ("price", price))
            if value is None
        ]
        if missing:
            raise MissingInput(f"Missing required fields: {', '.join(missing)}")

        image_url = await image_service.upload(image_file)

        restaurant = await get_restaurant_by_owner(db, user_id)
        if restaurant is None:
            logger.warning(f"User #{user_id} has no restaurant; menu '{name}' will be unlinked")

        menu = Menu(
            name=name,
            description=description,
            price=price,
            image=image_url,
            restaurant_id=restaurant.id if restaurant is not None else None,
        )
        db.add(menu)
        await db.commit()

        logger.info(f"Menu #{menu.id} '{menu.name}' added by user #{user_id}")
        return MenuEnvelope(
            message="Menu added successfully",
            menu=MenuResponse.model_validate(menu),
        )

    except APIError:
        raise
    except Exception as e:
        logger.exception(f"Error adding menu: {e}")
        raise InternalError() from e


@router.put(
    "/{menu_id}",
    response_model=MenuEnvelope,
    responses=ERROR_RESPONSES,
    summary="Edit Menu",
)
async def edit_menu(
    menu_id: int,
    user_id: int = Depends(is_authenticated),
    name: Optional[str] = Form(None, min_length=1, max_length=100),
    description: Optional[str] = Form(None),
    price: Optional[float] = Form(None, ge=0),
    image: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_db),
    image_service: BaseImageService = Depends(get_image_service),
) -> MenuEnvelope:
    """
    Apply a partial update to a menu item.

    Only fields present in the form are changed. A new image replaces the
    stored URL; the previous image is left on the image host.
    """
    try:
        menu = await db.get(Menu, menu_id)
        if menu is None:
            raise NotFound("Menu not found!")

        supplied = {
            field: value
            for field, value in (("name", name), ("description", description), ("price", price))
            if value is not None
        }
        changes = MenuUpdate(**supplied).model_dump(exclude_unset=True)
        for field, value in changes.items():
            setattr(menu, field, value)

        image_file = await read_image(image)
        if image_file is not None:
            menu.image = await image_service.upload(image_file)

        await db.commit()

        logger.info(f"Menu #{menu.id} updated (fields={sorted(changes)}, image={image_file is not None})")
        return MenuEnvelope(
            message="Menu updated",
            menu=MenuResponse.model_validate(menu),
        )

    except APIError:
        raise
    except Exception as e:
        logger.exception(f"Error editing menu #{menu_id}: {e}")
        raise InternalError() from e
