"""
Browsing session: filter context, recency cache and the fetch sequence.

A session owns one RecencyCache. Changing the filter (category or area)
clears it, since ids remembered for one candidate pool mean nothing for
another.
"""

from typing import List, Optional, Tuple

from .logger import get_logger
from .mealdb import MealDBClient
from .recency import RecencyCache
from .recipe import Recipe, ingredients_text, parse_meal
from .selector import DEFAULT_MAX_ATTEMPTS, RandomSource, select_and_remember

logger = get_logger()

CATEGORY = "category"
AREA = "area"


class NoRecipesFound(ValueError):
    """The active filter matched no recipes."""
    pass


class BrowseSession:
    def __init__(
        self,
        client: MealDBClient,
        cache_capacity: int = 10,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        rng: Optional[RandomSource] = None,
    ):
        self.client = client
        self.cache = RecencyCache(cache_capacity)
        self.max_attempts = max_attempts
        self.rng = rng
        self.filter: Optional[Tuple[str, str]] = None
        self.current: Optional[Recipe] = None
        self._candidates: Optional[List[str]] = None

    def _set_filter(self, new_filter: Optional[Tuple[str, str]]) -> None:
        if new_filter == self.filter:
            return
        logger.info(
            "Filter changed, clearing recency cache",
            old=self.filter,
            new=new_filter,
            cleared=len(self.cache),
        )
        self.filter = new_filter
        self.cache.clear()
        self._candidates = None

    def set_category(self, category: str) -> None:
        """Filter by dietary/meal category. Replaces any area filter."""
        self._set_filter((CATEGORY, category.strip()) if category.strip() else None)

    def set_area(self, area: str) -> None:
        """Filter by cuisine/area. Replaces any category filter."""
        self._set_filter((AREA, area.strip()) if area.strip() else None)

    def clear_filter(self) -> None:
        self._set_filter(None)

    def candidates(self) -> List[str]:
        """Candidate ids for the active filter, fetched once per filter context."""
        if self.filter is None:
            return []
        if self._candidates is None:
            kind, name = self.filter
            if kind == CATEGORY:
                self._candidates = self.client.filter_by_category(name)
            else:
                self._candidates = self.client.filter_by_area(name)
            logger.debug("Loaded candidate list", kind=kind, name=name, count=len(self._candidates))
        return self._candidates

    def next_recipe(self) -> Recipe:
        """
        Fetch the next recipe for the active filter.

        Raises:
            NoRecipesFound: If the filter matches nothing
            ValueError: On API/transport failures or a malformed meal record
        """
        if self.filter is None:
            # random.php picks server-side; there is no candidate list to steer
            recipe = parse_meal(self.client.fetch_random_meal())
        else:
            ids = self.candidates()
            if not ids:
                kind, name = self.filter
                raise NoRecipesFound(f"No recipes found for {kind} '{name}'.")
            meal_id = select_and_remember(ids, self.cache, max_attempts=self.max_attempts, rng=self.rng)
            recipe = parse_meal(self.client.lookup_meal(meal_id))

        self.current = recipe
        logger.info("Selected recipe", meal_id=recipe.meal_id, name=recipe.name, filter=self.filter)
        return recipe

    def copy_text(self) -> str:
        if self.current is None:
            raise ValueError("No recipe loaded yet.")
        if not self.current.ingredients:
            raise ValueError("This recipe has no ingredients to copy.")
        return ingredients_text(self.current)
