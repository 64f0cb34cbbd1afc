"""
SQLAlchemy Database Models

Restaurants, their menus, and the orders placed against them:
- One restaurant per owning user
- Menus linked to the owner's restaurant when created
- Orders referencing a restaurant and the user who placed them
"""

import enum
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Float, DateTime, Text, ForeignKey, JSON
from sqlalchemy.orm import relationship

from restaurant_api.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderStatus(str, enum.Enum):
    """Order status workflow."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    OUT_FOR_DELIVERY = "outfordelivery"
    DELIVERED = "delivered"


# Statuses an order may move to from each status. Only consulted when
# ENFORCE_ORDER_STATUS_TRANSITIONS is enabled.
ORDER_STATUS_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.PREPARING}),
    OrderStatus.PREPARING: frozenset({OrderStatus.OUT_FOR_DELIVERY}),
    OrderStatus.OUT_FOR_DELIVERY: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
}


def is_allowed_transition(current: str, new: str) -> bool:
    """Check ``current -> new`` against the transition table."""
    try:
        current_status = OrderStatus(current)
        new_status = OrderStatus(new)
    except ValueError:
        return False
    return new_status in ORDER_STATUS_TRANSITIONS[current_status]


class User(Base):
    """
    Registered user. Rows are written by the sign-up flow; this service
    only reads them to resolve order owners.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    fullname = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    contact = Column(String(20), nullable=True)
    address = Column(String(255), nullable=True)
    city = Column(String(50), nullable=True)
    country = Column(String(50), nullable=True)
    profile_picture = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    def __repr__(self):
        return f"<User #{self.id} - {self.email}>"


class Restaurant(Base):
    """
    A restaurant profile. Each user owns at most one.
    """
    __tablename__ = "restaurants"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True, index=True)

    restaurant_name = Column(String(100), nullable=False, index=True)
    city = Column(String(50), nullable=False)
    country = Column(String(50), nullable=False)
    delivery_time = Column(Integer, nullable=False)  # minutes
    image_url = Column(String(500), nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    cuisine_entries = relationship(
        "RestaurantCuisine",
        cascade="all, delete-orphan",
        order_by="RestaurantCuisine.id",
        lazy="selectin",
    )
    menus = relationship(
        "Menu",
        back_populates="restaurant",
        order_by="[Menu.created_at, Menu.id]",
    )

    @property
    def cuisines(self) -> list[str]:
        return [entry.name for entry in self.cuisine_entries]

    @cuisines.setter
    def cuisines(self, names: list[str]) -> None:
        # Replaces the whole set; dropped entries are deleted as orphans
        self.cuisine_entries = [RestaurantCuisine(name=name) for name in names]

    def __repr__(self):
        return f"<Restaurant #{self.id} - {self.restaurant_name} ({self.city}, {self.country})>"


class RestaurantCuisine(Base):
    """One cuisine label of a restaurant."""
    __tablename__ = "restaurant_cuisines"

    id = Column(Integer, primary_key=True, autoincrement=True)
    restaurant_id = Column(
        Integer,
        ForeignKey("restaurants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(String(50), nullable=False, index=True)


class Menu(Base):
    """
    A sellable item. A menu without a restaurant is one that was created
    by a user who owns no restaurant.
    """
    __tablename__ = "menus"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"), nullable=True, index=True)

    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Float, nullable=False)
    image = Column(String(500), nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    restaurant = relationship("Restaurant", back_populates="menus")

    def __repr__(self):
        return f"<Menu #{self.id} - {self.name} - {self.price}>"


class Order(Base):
    """
    An order placed by a user against a restaurant. Created by the checkout
    flow; this service only moves its status.
    """
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"), nullable=False, index=True)

    delivery_details = Column(JSON, nullable=False, default=dict)  # email, name, address, city
    cart_items = Column(JSON, nullable=False, default=list)  # menu_id, name, image, price, quantity
    total_amount = Column(Float, nullable=True)

    # Free-form: status values are only checked when transition
    # enforcement is enabled
    status = Column(String(50), nullable=False, default=OrderStatus.PENDING.value, index=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    restaurant = relationship("Restaurant")
    user = relationship("User")

    def __repr__(self):
        return f"<Order #{self.id} - restaurant {self.restaurant_id} - {self.status}>"
