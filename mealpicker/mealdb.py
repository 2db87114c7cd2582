"""
Client for TheMealDB JSON API.

Every endpoint answers with {"meals": [...]} or {"meals": null} when nothing
matches. Transport failures are retried with backoff and reported as
ValueError with a user-facing message.
"""

from typing import Any, Dict, List, Optional

import requests

from .config import Settings
from .logger import get_logger
from .retry import (
    CircuitBreaker,
    CircuitOpenError,
    RetryError,
    exponential_backoff,
    is_transient_error,
)

logger = get_logger()


class MealNotFound(ValueError):
    """The API returned no meal for a random or id lookup."""
    pass


def _log_retry(attempt: int, exc: Exception, delay: float) -> None:
    logger.warning("Retrying TheMealDB request", attempt=attempt, error=str(exc), delay=delay)


@exponential_backoff(
    max_retries=2,
    base_delay=0.5,
    exceptions=(requests.exceptions.Timeout, requests.exceptions.ConnectionError),
    on_retry=_log_retry,
)
def _fetch_with_retry(url: str, params: Optional[Dict[str, str]], timeout: float):
    """GET with automatic retry on transient errors."""
    return requests.get(url, params=params, timeout=timeout)


class MealDBClient:
    """Thin wrapper over the TheMealDB endpoints used by the browser."""

    def __init__(self, settings: Optional[Settings] = None, breaker: Optional[CircuitBreaker] = None):
        self.settings = settings or Settings()
        self.breaker = breaker or CircuitBreaker(
            failure_threshold=3,
            recovery_timeout=30,
            expected_exception=(RetryError, requests.exceptions.RequestException),
        )

    def _request(self, url: str, params: Optional[Dict[str, str]]):
        resp = _fetch_with_retry(url, params, self.settings.timeout)
        resp.raise_for_status()
        return resp

    def _get_meals(self, endpoint: str, params: Optional[Dict[str, str]] = None) -> List[Dict[str, Any]]:
        """Call an endpoint and return its "meals" list ([] when the API says null).

        Raises:
            ValueError: On HTTP errors, timeouts, open circuit or a malformed body
        """
        url = f"{self.settings.api_root}/{endpoint}"
        logger.record_api_call()
        logger.record_request_attempt(endpoint)
        logger.debug("Requesting TheMealDB", url=url, params=params)

        try:
            resp = self.breaker.call(self._request, url, params)
        except CircuitOpenError as e:
            logger.record_request_failure(endpoint, "CircuitOpen")
            logger.warning("TheMealDB circuit open", endpoint=endpoint)
            raise ValueError(str(e))
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else "HTTPError"
            logger.record_request_failure(endpoint, f"HTTPError_{status}")
            if status == 404:
                logger.warning("TheMealDB endpoint not found", url=url, status=404)
                raise ValueError(f"TheMealDB endpoint not found (404): {url}")
            logger.error("TheMealDB request failed", url=url, status=status, transient=is_transient_error(e))
            raise ValueError(f"TheMealDB request failed ({status}). Please try again later.")
        except RetryError as e:
            cause = e.__cause__
            error_type = type(cause).__name__ if cause is not None else "RetryError"
            logger.record_request_failure(endpoint, error_type)
            logger.warning("TheMealDB request gave up after retries", url=url, error=str(cause))
            if isinstance(cause, requests.exceptions.Timeout):
                raise ValueError("TheMealDB request timed out. Try again later.")
            raise ValueError(f"Could not reach TheMealDB: {cause}")
        except requests.exceptions.RequestException as e:
            logger.record_request_failure(endpoint, "RequestException")
            logger.error("TheMealDB request error", url=url, error=str(e))
            raise ValueError(f"TheMealDB request error: {e}")

        try:
            data = resp.json()
        except ValueError:
            logger.record_request_failure(endpoint, "InvalidJSON")
            logger.error("TheMealDB returned invalid JSON", url=url)
            raise ValueError("TheMealDB returned an unreadable response.")

        meals = data.get("meals") if isinstance(data, dict) else None
        logger.record_request_success(endpoint)
        return meals or []

    def fetch_random_meal(self) -> Dict[str, Any]:
        meals = self._get_meals("random.php")
        if not meals:
            raise MealNotFound("No recipe found. Please try again.")
        return meals[0]

    def lookup_meal(self, meal_id: str) -> Dict[str, Any]:
        meals = self._get_meals("lookup.php", {"i": meal_id})
        if not meals:
            raise MealNotFound(f"Recipe {meal_id} not found.")
        return meals[0]

    def filter_by_category(self, category: str) -> List[str]:
        """Ids of all meals in a category (e.g. Vegetarian, Vegan, Seafood)."""
        meals = self._get_meals("filter.php", {"c": category})
        return [m["idMeal"] for m in meals if m.get("idMeal")]

    def filter_by_area(self, area: str) -> List[str]:
        """Ids of all meals from a cuisine/area (e.g. Italian, Japanese)."""
        meals = self._get_meals("filter.php", {"a": area})
        return [m["idMeal"] for m in meals if m.get("idMeal")]

    def list_categories(self) -> List[str]:
        meals = self._get_meals("list.php", {"c": "list"})
        return sorted(m["strCategory"] for m in meals if m.get("strCategory"))

    def list_areas(self) -> List[str]:
        meals = self._get_meals("list.php", {"a": "list"})
        return sorted(m["strArea"] for m in meals if m.get("strArea"))
