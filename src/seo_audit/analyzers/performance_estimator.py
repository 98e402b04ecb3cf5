"""Synthetic performance estimates derived from resource counts."""

import random
from abc import abstractmethod

from bs4 import BeautifulSoup

from ..models import PerformanceMetrics
from .base import BaseAnalyzer

# Placeholder ranges for the randomized fields, inclusive
FCP_RANGE = (800, 1200)
LCP_RANGE = (1200, 2000)
CLS_RANGE = (0.0, 0.25)
FID_RANGE = (50, 150)
TTI_RANGE = (1500, 2500)


class PerformanceProvider(BaseAnalyzer):
    """Source of the performance snapshot attached to an analysis."""

    @abstractmethod
    def analyze(self, document: BeautifulSoup) -> PerformanceMetrics:
        pass


class PerformanceEstimator(PerformanceProvider):
    """Estimates load figures from script, stylesheet and image counts.

    Nothing is measured. ``load_time``, ``page_size`` and ``requests`` are
    deterministic; the paint and interactivity fields are random
    placeholders drawn from the module-level ranges.
    """

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()

    def analyze(self, document: BeautifulSoup) -> PerformanceMetrics:
        scripts = len(document.find_all("script"))
        stylesheets = len(document.find_all("link", attrs={"rel": "stylesheet"}))
        images = len(document.find_all("img"))

        return PerformanceMetrics(
            load_time=1000 + scripts * 100 + stylesheets * 50 + images * 20,
            page_size=50000 + scripts * 5000 + stylesheets * 3000 + images * 10000,
            requests=scripts + stylesheets + images + 5,
            first_contentful_paint=self._sample(FCP_RANGE),
            largest_contentful_paint=self._sample(LCP_RANGE),
            cumulative_layout_shift=round(self._rng.uniform(*CLS_RANGE), 2),
            first_input_delay=self._sample(FID_RANGE),
            time_to_interactive=self._sample(TTI_RANGE),
        )

    def _sample(self, bounds: tuple[int, int]) -> int:
        return round(self._rng.uniform(*bounds))
