"""Tests for restaurant search."""

import pytest

from tests.factories import create_restaurant, create_user


@pytest.fixture
async def catalog(database):
    """Four restaurants, each with its own owner; returns name -> id."""
    rows = [
        ("Pizza Palace", "Naples", "Italy", ("Italian", "Pizza")),
        ("Sushi Bar", "Pizzaville", "Japan", ("Japanese",)),
        ("Le Bistro", "Lyon", "France", ("French", "Bistro")),
        ("100% Vegan", "Berlin", "Germany", ("Vegan",)),
    ]
    ids = {}
    for index, (name, city, country, cuisines) in enumerate(rows):
        owner = await create_user(database, email=f"owner{index}@example.com")
        ids[name] = await create_restaurant(
            database, owner, restaurant_name=name, city=city, country=country, cuisines=cuisines,
        )
    return ids


async def search(client, headers, text, **params):
    response = await client.get(f"/api/v1/restaurant/search/{text}", params=params, headers=headers)
    assert response.status_code == 200
    assert response.json()["success"] is True
    return {r["restaurant_name"] for r in response.json()["data"]}


async def test_text_matches_name_or_city_case_insensitively(client, database, catalog, auth):
    viewer = await create_user(database, email="viewer@example.com")

    assert await search(client, auth(viewer), "PIZZA") == {"Pizza Palace", "Sushi Bar"}


async def test_text_matches_country(client, database, catalog, auth):
    viewer = await create_user(database, email="viewer@example.com")

    assert await search(client, auth(viewer), "fran") == {"Le Bistro"}


async def test_query_matches_cuisine(client, database, catalog, auth):
    viewer = await create_user(database, email="viewer@example.com")

    assert await search(client, auth(viewer), "a", searchQuery="japan") == {"Sushi Bar"}


async def test_query_takes_precedence_over_text(client, database, catalog, auth):
    viewer = await create_user(database, email="viewer@example.com")

    # "Lyon" alone would match Le Bistro; only the cuisine query applies
    assert await search(client, auth(viewer), "Lyon", searchQuery="italian") == {"Pizza Palace"}


async def test_selected_cuisines_filter(client, database, catalog, auth):
    viewer = await create_user(database, email="viewer@example.com")

    result = await search(client, auth(viewer), "a", selectedCuisines="French,Vegan")

    assert result == {"Le Bistro", "100% Vegan"}


async def test_selected_cuisines_combine_with_text(client, database, catalog, auth):
    viewer = await create_user(database, email="viewer@example.com")

    assert await search(client, auth(viewer), "pizza", selectedCuisines="Japanese") == {"Sushi Bar"}


async def test_selected_cuisines_match_exactly(client, database, catalog, auth):
    viewer = await create_user(database, email="viewer@example.com")

    assert await search(client, auth(viewer), "a", selectedCuisines="italian") == set()


async def test_percent_is_literal(client, database, catalog, auth):
    viewer = await create_user(database, email="viewer@example.com")

    assert await search(client, auth(viewer), "%25") == {"100% Vegan"}


async def test_no_match_is_empty(client, database, catalog, auth):
    viewer = await create_user(database, email="viewer@example.com")

    assert await search(client, auth(viewer), "tacos") == set()
