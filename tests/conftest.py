"""
Pytest configuration and shared fixtures.
"""

import pytest
from typing import Any, Dict, List
from unittest.mock import Mock

import requests

from mealpicker.logger import get_logger

# Create the shared logger before package modules bind it, without console/file output
get_logger(enable_console=False, enable_file=False)


def make_meal(meal_id: str, name: str = "", **extra) -> Dict[str, Any]:
    meal = {
        "idMeal": meal_id,
        "strMeal": name or f"Meal {meal_id}",
        "strCategory": "Vegetarian",
        "strArea": "Italian",
        "strInstructions": "Cook it.",
        "strMealThumb": f"https://www.themealdb.com/images/media/meals/{meal_id}.jpg",
        "strYoutube": "",
        "strIngredient1": "Rice",
        "strMeasure1": "1 cup",
    }
    meal.update(extra)
    return meal


def make_response(payload: Any, status_code: int = 200) -> Mock:
    """Mock requests.Response returning payload from .json()."""
    resp = Mock()
    resp.status_code = status_code
    resp.json.return_value = payload
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.exceptions.HTTPError(
            f"{status_code} Error", response=resp
        )
    else:
        resp.raise_for_status.return_value = None
    return resp


class FakeClient:
    """In-memory stand-in for MealDBClient."""

    def __init__(self, categories=None, areas=None, random_meal=None):
        self.categories: Dict[str, List[str]] = categories or {}
        self.areas: Dict[str, List[str]] = areas or {}
        self.random_meal = random_meal or make_meal("52772", "Teriyaki Chicken Casserole")
        self.calls: List[tuple] = []

    def filter_by_category(self, category):
        self.calls.append(("category", category))
        return list(self.categories.get(category, []))

    def filter_by_area(self, area):
        self.calls.append(("area", area))
        return list(self.areas.get(area, []))

    def lookup_meal(self, meal_id):
        self.calls.append(("lookup", meal_id))
        return make_meal(meal_id)

    def fetch_random_meal(self):
        self.calls.append(("random",))
        return self.random_meal

    def list_categories(self):
        return sorted(self.categories)

    def list_areas(self):
        return sorted(self.areas)


class ScriptedRandom:
    """randrange() that replays a fixed list of indices."""

    def __init__(self, indices: List[int]):
        self.indices = list(indices)
        self.calls = 0

    def randrange(self, stop: int) -> int:
        i = self.indices[self.calls]
        self.calls += 1
        assert 0 <= i < stop
        return i


@pytest.fixture
def sample_meal() -> Dict[str, Any]:
    """Full TheMealDB meal record as returned by lookup.php."""
    return {
        "idMeal": "52772",
        "strMeal": "Teriyaki Chicken Casserole",
        "strCategory": "Chicken",
        "strArea": "Japanese",
        "strInstructions": "Preheat oven to 350F.\r\nCombine soy sauce and water.\r\n\r\nBake for 35 minutes.",
        "strMealThumb": "https://www.themealdb.com/images/media/meals/wvpsxx1468256321.jpg",
        "strYoutube": "https://www.youtube.com/watch?v=4aZr5hZXP_s",
        "strIngredient1": "soy sauce",
        "strMeasure1": "3/4 cup",
        "strIngredient2": "water",
        "strMeasure2": "1/2 cup ",
        "strIngredient3": "Chicken Breast",
        "strMeasure3": "2",
        "strIngredient4": "",
        "strMeasure4": "",
        "strIngredient5": None,
        "strMeasure5": None,
    }


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient(
        categories={"Vegetarian": ["1", "2", "3", "4"], "Vegan": ["10", "11"]},
        areas={"Italian": ["20", "21", "22"], "Atlantis": []},
    )
