"""
Turn raw TheMealDB meal records into Recipe objects.

The API stores ingredients in twenty numbered field pairs
(strIngredient1..20 / strMeasure1..20); unused slots are null or blank.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .schema import validate_meal

INGREDIENT_IMG_URL = "https://www.themealdb.com/images/ingredients/"
MAX_INGREDIENTS = 20


@dataclass(frozen=True)
class Ingredient:
    name: str
    measure: str
    image_url: str

    @property
    def text(self) -> str:
        return f"{self.measure} {self.name}".strip()


@dataclass
class Recipe:
    meal_id: str
    name: str
    thumbnail: Optional[str] = None
    category: Optional[str] = None
    area: Optional[str] = None
    instructions: str = ""
    youtube: Optional[str] = None
    ingredients: List[Ingredient] = field(default_factory=list)


def _clean(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def ingredient_image_url(name: str) -> str:
    """Whitespace becomes %20; every other character is passed through as-is."""
    encoded = re.sub(r"\s", "%20", name)
    return f"{INGREDIENT_IMG_URL}{encoded}-Small.png"


def extract_ingredients(meal: Dict[str, Any]) -> List[Ingredient]:
    ingredients = []
    for i in range(1, MAX_INGREDIENTS + 1):
        name = _clean(meal.get(f"strIngredient{i}"))
        if not name:
            continue
        measure = _clean(meal.get(f"strMeasure{i}"))
        ingredients.append(Ingredient(name=name, measure=measure, image_url=ingredient_image_url(name)))
    return ingredients


def parse_meal(meal: Dict[str, Any]) -> Recipe:
    """Validate and convert a meal record.

    Raises ValueError listing the validation problems if the record is malformed.
    """
    errors = validate_meal(meal)
    if errors:
        raise ValueError("Invalid meal record: " + "; ".join(errors))

    return Recipe(
        meal_id=meal["idMeal"].strip(),
        name=meal["strMeal"].strip(),
        thumbnail=_clean(meal.get("strMealThumb")) or None,
        category=_clean(meal.get("strCategory")) or None,
        area=_clean(meal.get("strArea")) or None,
        instructions=_clean(meal.get("strInstructions")),
        youtube=_clean(meal.get("strYoutube")) or None,
        ingredients=extract_ingredients(meal),
    )


def ingredients_text(recipe: Recipe) -> str:
    """Plain-text ingredient list as copied to the clipboard."""
    lines = ["Ingredients:"]
    lines.extend(f"- {ing.text}" for ing in recipe.ingredients)
    return "\n".join(lines) + "\n"
