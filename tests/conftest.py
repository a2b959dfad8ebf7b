import pytest
import requests

from covid_dashboard.config import Settings


class FakeResponse:
    def __init__(self, payload=None, status_code=200, error=None):
        self.payload = payload
        self.status_code = status_code
        self.error = error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        if self.error is not None:
            raise self.error
        return self.payload


class FakeSession:
    """Stands in for ``requests``: routes GETs by URL prefix and records calls."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params))
        for prefix, result in self.routes.items():
            if url.startswith(prefix):
                if isinstance(result, Exception):
                    raise result
                if isinstance(result, FakeResponse):
                    return result
                return FakeResponse(result)
        raise requests.ConnectionError(f"no route for {url}")

    def urls(self):
        return [url for url, _ in self.calls]


@pytest.fixture
def settings():
    return Settings(
        countries_url="https://countries.test/all",
        historical_url="https://history.test/historical",
    )


@pytest.fixture
def timeline():
    return {
        "cases": {"d1": 10, "d2": 20},
        "recovered": {"d1": 1, "d2": 5},
        "deaths": {"d1": 0, "d2": 1},
    }


@pytest.fixture
def country_records():
    return [
        {"name": {"common": "Zambia"}, "cca2": "ZM", "cca3": "ZMB"},
        {"name": {"common": "Åland Islands"}, "cca2": "AX", "cca3": "ALA"},
        {"name": {"common": "India"}, "cca2": "IN", "cca3": "IND"},
        {"name": {"common": "Kosovo"}, "cca3": "UNK"},
        {"name": {"common": "Nowhere"}},
        {"name": {"common": "Brazil"}, "cca2": "BR"},
    ]
