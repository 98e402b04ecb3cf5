"""Analysis engine that turns fetched HTML into an audit result."""

from datetime import datetime, timezone

import structlog

from .analyzers import (
    AccessibilityAnalyzer,
    PerformanceEstimator,
    PerformanceProvider,
    SecurityAnalyzer,
)
from .document import load_document
from .extractors import MetadataExtractor, TechnicalExtractor
from .models import AnalysisResult
from .rules import evaluate_rules
from .scoring import calculate_score

logger = structlog.get_logger()


class SEOAnalyzer:
    """Runs every pass over one parsed page.

    An instance is bound to a single (html, url) pair and is meant to be
    evaluated once; create a new analyzer for each page.
    """

    def __init__(
        self,
        html: str,
        page_url: str,
        performance: PerformanceProvider | None = None,
    ):
        self.page_url = page_url
        self.document = load_document(html)
        self.performance = performance or PerformanceEstimator()

    def analyze(self) -> AnalysisResult:
        """Derive metadata, technical facts, issues and scores for the page."""
        metadata = MetadataExtractor().extract(self.document)
        technical_details = TechnicalExtractor(self.page_url).extract(self.document)
        issues = evaluate_rules(metadata, technical_details, self.page_url)
        score = calculate_score(issues)

        result = AnalysisResult(
            url=self.page_url,
            timestamp=datetime.now(timezone.utc),
            score=score,
            issues=tuple(issues),
            metadata=metadata,
            performance=self.performance.analyze(self.document),
            technical_details=technical_details,
            accessibility=AccessibilityAnalyzer().analyze(self.document),
            security=SecurityAnalyzer(self.page_url).analyze(self.document),
        )

        logger.debug(
            "Analysis complete",
            url=self.page_url,
            overall=score.overall,
            issues=len(issues),
        )
        return result


def analyze(
    html: str,
    page_url: str,
    performance: PerformanceProvider | None = None,
) -> AnalysisResult:
    """Analyze one page. ``page_url`` must already be an absolute http(s) URL."""
    return SEOAnalyzer(html, page_url, performance=performance).analyze()
