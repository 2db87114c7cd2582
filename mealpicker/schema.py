from typing import Any, Dict, List
from urllib.parse import urlparse

REQUIRED_STR_FIELDS = ["idMeal", "strMeal"]
OPTIONAL_STR_FIELDS = [
    "strCategory",
    "strArea",
    "strInstructions",
    "strMealThumb",
    "strYoutube",
]
URL_FIELDS = ["strMealThumb", "strYoutube"]


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _valid_url(v: str) -> bool:
    p = urlparse(v)
    return bool(p.scheme and p.netloc)


def validate_meal(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages for a TheMealDB meal record.
    Empty list means valid.
    """
    errors: List[str] = []

    for f in REQUIRED_STR_FIELDS:
        if f not in data:
            errors.append(f"Missing required field: {f}")
        elif not _is_non_empty_str(data[f]):
            errors.append(f"Field '{f}' must be a non-empty string")

    # The API sends null for absent optional values
    for f in OPTIONAL_STR_FIELDS:
        if data.get(f) is not None and not isinstance(data[f], str):
            errors.append(f"Field '{f}' must be a string if provided")

    for f in URL_FIELDS:
        if _is_non_empty_str(data.get(f)) and not _valid_url(data[f].strip()):
            errors.append(f"Field '{f}' must be a valid absolute URL (scheme + host)")

    return errors
