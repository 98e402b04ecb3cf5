"""Accessibility heuristics derived from static markup."""

import re

import structlog
from bs4 import BeautifulSoup

from ..models import AccessibilityIssue, AccessibilityMetrics, clamp_score
from .base import BaseAnalyzer

logger = structlog.get_logger()

MISSING_ALT_PENALTY = 15
HEADING_SKIP_PENALTY = 10


def wcag_level(score: int) -> str:
    """Map an accessibility score to the WCAG conformance level shown to users."""
    if score >= 90:
        return "AAA"
    if score >= 70:
        return "AA"
    return "A"


class AccessibilityAnalyzer(BaseAnalyzer):
    """Approximates accessibility compliance without rendering the page."""

    def analyze(self, document: BeautifulSoup) -> AccessibilityMetrics:
        score = 100
        issues: list[AccessibilityIssue] = []

        images_without_alt = [img for img in document.find_all("img") if not img.has_attr("alt")]
        if images_without_alt:
            issues.append(
                AccessibilityIssue(
                    type="missing-alt-text",
                    severity="serious",
                    description=f"{len(images_without_alt)} images missing alt text",
                    recommendation="Add descriptive alt text to all images",
                )
            )
            score -= MISSING_ALT_PENALTY

        previous_level = 0
        for heading in document.find_all(re.compile(r"^h[1-6]$")):
            level = int(heading.name[1])
            if level > previous_level + 1:
                issues.append(
                    AccessibilityIssue(
                        type="heading-hierarchy",
                        severity="moderate",
                        description="Improper heading hierarchy detected",
                        element=heading.name.upper(),
                        recommendation="Ensure headings follow proper hierarchy (H1 → H2 → H3, etc.)",
                    )
                )
                score -= HEADING_SKIP_PENALTY
            previous_level = level

        # Contrast cannot be computed statically, so this only flags inline colors
        if document.find(style=lambda value: value is not None and "color" in value):
            issues.append(
                AccessibilityIssue(
                    type="color-contrast",
                    severity="moderate",
                    description="Manual color contrast verification needed",
                    recommendation="Ensure all text meets WCAG AA contrast requirements (4.5:1)",
                )
            )

        score = clamp_score(score)
        logger.debug("Accessibility analysis complete", score=score, issues=len(issues))

        return AccessibilityMetrics(score=score, issues=tuple(issues), wcag_level=wcag_level(score))
