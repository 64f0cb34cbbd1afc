"""
Seeding and lookup helpers for tests. Each call uses its own session so
results reflect what is committed.
"""

from sqlalchemy import func, select

from restaurant_api.models import Order, Restaurant, User


async def create_user(session_maker, email: str = "owner@example.com", fullname: str = "Olivia Owner") -> int:
    async with session_maker() as session:
        user = User(fullname=fullname, email=email, contact="5551234567", city="Lyon", country="France")
        session.add(user)
        await session.commit()
        return user.id


async def create_restaurant(
    session_maker,
    user_id: int,
    restaurant_name: str = "Chez Olivia",
    city: str = "Lyon",
    country: str = "France",
    cuisines: tuple[str, ...] = ("French",),
    delivery_time: int = 30,
) -> int:
    async with session_maker() as session:
        restaurant = Restaurant(
            user_id=user_id,
            restaurant_name=restaurant_name,
            city=city,
            country=country,
            delivery_time=delivery_time,
            cuisines=list(cuisines),
            image_url="https://img.example.com/restaurant.jpg",
        )
        session.add(restaurant)
        await session.commit()
        return restaurant.id


async def create_order(session_maker, user_id: int, restaurant_id: int, status: str = "pending") -> int:
    async with session_maker() as session:
        order = Order(
            user_id=user_id,
            restaurant_id=restaurant_id,
            delivery_details={"email": "eater@example.com", "name": "Eli Eater", "address": "1 Rue X", "city": "Lyon"},
            cart_items=[{"menu_id": 1, "name": "Quiche", "image": "", "price": 12.0, "quantity": 2}],
            total_amount=24.0,
            status=status,
        )
        session.add(order)
        await session.commit()
        return order.id


async def count_rows(session_maker, model) -> int:
    async with session_maker() as session:
        return (await session.execute(select(func.count()).select_from(model))).scalar_one()


async def get_row(session_maker, model, row_id):
    async with session_maker() as session:
        return await session.get(model, row_id)
