"""Tests for the analysis engine."""

import random
from dataclasses import replace

from seo_audit import SEOAnalyzer, analyze
from seo_audit.analyzers import PerformanceEstimator, PerformanceProvider
from seo_audit.models import PerformanceMetrics

BARE_PAGE = """
<!DOCTYPE html>
<html>
    <head></head>
    <body>
        <h1>Welcome</h1>
        <p>Nothing else here.</p>
    </body>
</html>
"""

FULL_PAGE = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <title>Acme Widgets - Handmade widgets since 1999</title>
    <meta name="description" content="Acme builds durable handmade widgets for homes and workshops. Browse the catalogue, compare models and order online with free delivery.">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <meta property="og:title" content="Acme Widgets">
    <meta property="og:description" content="Handmade widgets">
    <meta http-equiv="Content-Security-Policy" content="default-src 'self'">
    <link rel="canonical" href="https://acme.example/">
    <link rel="stylesheet" href="/site.css">
    <script type="application/ld+json">{"@context": "https://schema.org", "@type": "Organization", "name": "Acme"}</script>
</head>
<body>
    <h1>Acme Widgets</h1>
    <h2>Catalogue</h2>
    <img src="/widget.png" alt="A blue widget">
    <a href="/catalogue">Catalogue</a>
    <a href="https://partner.example/">Partner</a>
</body>
</html>
"""


class FixedPerformance(PerformanceProvider):
    """Performance provider returning a constant snapshot."""

    def analyze(self, document):
        return PerformanceMetrics(load_time=1234, page_size=4321, requests=7)


class TestSEOAnalyzer:
    """Test cases for the engine."""

    def test_end_to_end_bare_page(self):
        """Test the bare page scenario from issues to scores."""
        result = analyze(BARE_PAGE, "https://example.com")
        ids = [issue.id for issue in result.issues]

        assert ids[0] == "missing-title"
        for expected in (
            "missing-title",
            "missing-meta-description",
            "missing-viewport",
            "missing-open-graph",
            "missing-structured-data",
            "missing-canonical",
        ):
            assert expected in ids
        assert "missing-h1" not in ids
        assert "not-https" not in ids

        assert result.score.on_page == 55
        assert result.score.technical == 80
        assert result.score.security == 100
        assert result.score.overall == 89

    def test_full_page(self):
        """Test a well-formed page produces no issues and sensible facts."""
        result = analyze(FULL_PAGE, "https://acme.example/")

        assert result.issues == ()
        assert result.score.overall == 100
        assert result.metadata.language == "en"
        assert result.technical_details.doctype == "html"
        assert [link.type.value for link in result.technical_details.links] == [
            "internal",
            "external",
        ]
        assert result.security.csp is True
        assert result.accessibility.score == 100

    def test_http_page(self):
        """Test http pages carry the issue and the security flag."""
        result = analyze(BARE_PAGE, "http://example.com")

        assert "not-https" in [issue.id for issue in result.issues]
        assert result.security.https is False

    def test_sub_scores_do_not_feed_category_scores(self):
        """Test heuristic penalties stay out of the main score."""
        result = analyze("<h1>T</h1><h4>skip</h4>", "https://example.com")

        assert result.accessibility.score == 90
        assert result.score.accessibility == 100
        assert result.security.score == 85
        assert result.score.security == 100

    def test_empty_html(self):
        """Test empty input still yields a complete result."""
        result = analyze("", "https://example.com")

        assert result.metadata.title is None
        assert result.technical_details.headings == ()
        assert "missing-h1" in [issue.id for issue in result.issues]

    def test_undecodable_json_ld_does_not_abort(self):
        """Test an oversized JSON-LD number still yields a full result."""
        block = '<script type="application/ld+json">{"n": ' + "9" * 5000 + "}</script>"
        result = analyze(block + FULL_PAGE, "https://acme.example/")

        assert result.technical_details.structured_data[0].type == "Invalid"
        assert result.technical_details.structured_data[1].type == "Organization"
        assert result.score.overall == 100

    def test_idempotent_apart_from_placeholders(self):
        """Test repeated analysis differs only in timestamp and placeholders."""
        first = analyze(FULL_PAGE, "https://acme.example/")
        second = analyze(FULL_PAGE, "https://acme.example/")

        def stable(result):
            performance = replace(
                result.performance,
                first_contentful_paint=None,
                largest_contentful_paint=None,
                cumulative_layout_shift=None,
                first_input_delay=None,
                time_to_interactive=None,
            )
            return replace(result, timestamp=None, performance=performance)

        assert stable(first) == stable(second)

    def test_custom_performance_provider(self):
        """Test the performance source can be swapped."""
        result = SEOAnalyzer(BARE_PAGE, "https://example.com", performance=FixedPerformance()).analyze()
        assert result.performance == PerformanceMetrics(load_time=1234, page_size=4321, requests=7)

    def test_seeded_estimator(self):
        """Test a seeded estimator makes the whole result reproducible."""
        first = analyze(BARE_PAGE, "https://example.com", PerformanceEstimator(random.Random(1)))
        second = analyze(BARE_PAGE, "https://example.com", PerformanceEstimator(random.Random(1)))

        assert first.performance == second.performance
        assert replace(first, timestamp=None) == replace(second, timestamp=None)
