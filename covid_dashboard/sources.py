"""HTTP sources: the REST Countries directory and disease.sh history.

Both calls are plain ``requests`` GETs. Any transport, HTTP status or JSON
problem is re-raised as :class:`SourceError`; a history payload that lacks one
of the three mappings raises :class:`InvalidTimelineError` instead so callers
can tell a data-quality issue from a network failure.
"""

import logging
import unicodedata
from typing import Any, Dict, List, NamedTuple, Optional

import requests

from .config import Settings

logger = logging.getLogger(__name__)

METRICS = ("cases", "recovered", "deaths")


class SourceError(Exception):
    pass


class InvalidTimelineError(SourceError):
    def __init__(self, code: str, missing):
        self.code = code
        self.missing = tuple(missing)
        super().__init__(f"Invalid timeline data for {code!r}: missing {', '.join(self.missing)}")


class Country(NamedTuple):
    name: str
    code: str


def _get_json(url: str, params: Optional[Dict[str, Any]], timeout: int, session=None) -> Any:
    getter = session.get if session is not None else requests.get
    try:
        resp = getter(url, params=params, timeout=timeout)
        resp.raise_for_status()
        return resp.json()
    except requests.RequestException as e:
        raise SourceError(f"Request to {url} failed: {e}") from e
    except ValueError as e:
        raise SourceError(f"Response from {url} is not JSON: {e}") from e


# --- Country directory ---

def _sort_key(name: str):
    folded = unicodedata.normalize("NFKD", name)
    folded = "".join(ch for ch in folded if not unicodedata.combining(ch))
    return (folded.casefold(), name)


def sort_countries(countries: List[Country]) -> List[Country]:
    """Sort by display name, ignoring case and accents ("Åland" sorts with "A")."""
    return sorted(countries, key=lambda c: _sort_key(c.name))


def parse_country(record: Dict[str, Any]) -> Optional[Country]:
    names = record.get("name") if isinstance(record, dict) else None
    name = names.get("common") if isinstance(names, dict) else None
    if not name or not isinstance(name, str):
        return None
    code = record.get("cca2") or record.get("cca3") or name
    if not isinstance(code, str):
        return None
    return Country(name=name, code=code.lower())


def parse_countries(payload: Any) -> List[Country]:
    if not isinstance(payload, list):
        raise SourceError(f"Expected a list of countries, got {type(payload).__name__}")
    countries = []
    for record in payload:
        try:
            country = parse_country(record)
        except (AttributeError, TypeError) as e:
            raise SourceError(f"Malformed country record {record!r}: {e}") from e
        if country is None:
            logger.debug("Skipping malformed country record: %r", record)
            continue
        countries.append(country)
    return sort_countries(countries)


def fetch_countries(settings: Settings, session=None) -> List[Country]:
    payload = _get_json(settings.countries_url, None, settings.request_timeout, session)
    countries = parse_countries(payload)
    logger.info("Loaded %d countries", len(countries))
    return countries


# --- Historical timeline ---

def extract_timeline(payload: Any, code: str = "") -> Dict[str, Dict[str, int]]:
    """Return the ``cases``/``recovered``/``deaths`` mappings from a history payload.

    disease.sh nests per-country data under ``timeline`` but returns the
    mappings at the top level for ``/historical/all``; both are accepted.
    """
    if not isinstance(payload, dict):
        raise InvalidTimelineError(code, METRICS)
    timeline = payload.get("timeline") or payload
    if not isinstance(timeline, dict):
        raise InvalidTimelineError(code, METRICS)
    missing = [m for m in METRICS if not isinstance(timeline.get(m), dict)]
    if missing:
        raise InvalidTimelineError(code, missing)
    return {m: timeline[m] for m in METRICS}


def fetch_timeline(code: str, settings: Settings, session=None) -> Dict[str, Dict[str, int]]:
    url = f"{settings.historical_url}/{code}"
    payload = _get_json(url, {"lastdays": settings.lookback_days}, settings.request_timeout, session)
    timeline = extract_timeline(payload, code)
    logger.info("Loaded %d days of history for %s", len(timeline["cases"]), code)
    return timeline
