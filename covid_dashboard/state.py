"""Dashboard state and the controller that drives it.

The state is an immutable :class:`DashboardState`; each event produces a new
one through the ``with_*`` functions. :class:`DashboardController` owns the
current state for one Streamlit session and is the only place where source
errors are caught.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import List, Optional

from . import sources
from .config import Settings
from .metrics import EMPTY_SNAPSHOT, Snapshot, Timeline, compute_snapshot
from .sources import Country, InvalidTimelineError, SourceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardState:
    selected_country: str
    countries: List[Country] = field(default_factory=list)
    timeline: Optional[Timeline] = None
    stats: Snapshot = EMPTY_SNAPSHOT
    generation: int = 0

    @property
    def has_data(self) -> bool:
        return self.timeline is not None


def with_countries(state: DashboardState, countries: List[Country]) -> DashboardState:
    return replace(state, countries=list(countries))


def with_selection(state: DashboardState, code: str) -> DashboardState:
    return replace(state, selected_country=code)


def with_timeline(state: DashboardState, timeline: Timeline) -> DashboardState:
    return replace(state, timeline=timeline, stats=compute_snapshot(timeline))


def without_timeline(state: DashboardState) -> DashboardState:
    return replace(state, timeline=None, stats=EMPTY_SNAPSHOT)


class DashboardController:
    def __init__(self, settings: Settings = None, session=None, directory_loader=None):
        self.settings = settings or Settings()
        self.session = session
        self.directory_loader = directory_loader or sources.fetch_countries
        self.state = DashboardState(selected_country=self.settings.default_country)

    def start(self):
        """First run of a session: load the directory and the default country."""
        self.load_directory()
        self.refresh()
        return self.state

    def load_directory(self):
        try:
            countries = self.directory_loader(self.settings, self.session)
        except SourceError as e:
            logger.error("Error fetching countries: %s", e)
            return self.state
        self.state = with_countries(self.state, countries)
        return self.state

    def select_country(self, code: str):
        code = (code or "").strip().lower()
        if code == self.state.selected_country and self.state.generation:
            return self.state
        self.state = with_selection(self.state, code)
        return self.refresh()

    def refresh(self):
        code = self.state.selected_country
        if not code:
            return self.state
        token = self.begin_request()
        try:
            timeline = sources.fetch_timeline(code, self.settings, self.session)
        except SourceError as e:
            return self.fail_request(token, e)
        return self.complete_request(token, timeline)

    # Each fetch carries a generation token; only the latest one may land.

    def begin_request(self) -> int:
        self.state = replace(self.state, generation=self.state.generation + 1)
        return self.state.generation

    def _is_stale(self, token: int) -> bool:
        if token != self.state.generation:
            logger.debug("Discarding stale response (token %d, latest %d)", token, self.state.generation)
            return True
        return False

    def complete_request(self, token: int, timeline: Timeline):
        if not self._is_stale(token):
            self.state = with_timeline(self.state, timeline)
        return self.state

    def fail_request(self, token: int, exc: Exception):
        if self._is_stale(token):
            return self.state
        if isinstance(exc, InvalidTimelineError):
            logger.warning("Invalid timeline data for: %s", exc.code)
        else:
            logger.error("Error fetching historical data for %s: %s", self.state.selected_country, exc)
        self.state = without_timeline(self.state)
        return self.state
