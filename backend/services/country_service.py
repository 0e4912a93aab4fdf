import json
import logging

from pydantic import ValidationError

from config import settings
from models.country import CountryPolicy

logger = logging.getLogger(__name__)

_countries: tuple[CountryPolicy, ...] = ()


class CatalogError(ValueError):
    """The country catalog file is malformed or inconsistent."""


def _load() -> tuple[CountryPolicy, ...]:
    global _countries
    if not _countries:
        _countries = load_catalog(settings.catalog_path.read_text(encoding="utf-8"))
        logger.info("Loaded %d countries from %s", len(_countries), settings.catalog_path)
    return _countries


def load_catalog(raw_json: str) -> tuple[CountryPolicy, ...]:
    try:
        raw = json.loads(raw_json)
    except json.JSONDecodeError as e:
        raise CatalogError(f"Catalog is not valid JSON: {e}") from e
    if not isinstance(raw, list):
        raise CatalogError("Catalog must be a JSON array of country records")

    countries = []
    seen: set[str] = set()
    for i, record in enumerate(raw):
        try:
            country = CountryPolicy(**record)
        except ValidationError as e:
            raise CatalogError(f"Invalid country record at index {i}: {e}") from e
        if country.country_id in seen:
            raise CatalogError(f"Duplicate country id: {country.country_id}")
        seen.add(country.country_id)
        countries.append(country)
    return tuple(countries)


def get_all() -> tuple[CountryPolicy, ...]:
    return _load()


def get_by_id(country_id: str) -> CountryPolicy | None:
    country_id = country_id.lower()
    return next((c for c in _load() if c.country_id == country_id), None)
