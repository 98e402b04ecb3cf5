"""Tests for data models."""

import pytest
from dataclasses import FrozenInstanceError
from datetime import datetime, timezone

from seo_audit.models import (
    AnalysisResult,
    FetchedPage,
    MetaData,
    PerformanceMetrics,
    SEOAuditResult,
    SEOScore,
    TechnicalDetails,
    clamp_score,
    round_half_up,
)


def make_analysis(**overrides) -> AnalysisResult:
    values = dict(
        url="https://example.com",
        timestamp=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
        score=SEOScore.from_categories(),
        issues=(),
        metadata=MetaData(title="Example"),
        performance=PerformanceMetrics(load_time=1000, page_size=50000, requests=5),
        technical_details=TechnicalDetails(),
    )
    values.update(overrides)
    return AnalysisResult(**values)


class TestScoreHelpers:
    """Test cases for score clamping and rounding."""

    def test_clamp_score(self):
        """Test values are clamped into 0-100."""
        assert clamp_score(-15) == 0
        assert clamp_score(0) == 0
        assert clamp_score(55) == 55
        assert clamp_score(140) == 100

    def test_round_half_up(self):
        """Test halves round towards positive infinity."""
        assert round_half_up(88.5) == 89
        assert round_half_up(2.5) == 3
        assert round_half_up(89.4) == 89


class TestSEOScore:
    """Test cases for SEOScore."""

    def test_defaults_are_perfect(self):
        """Test a score with no penalties."""
        score = SEOScore.from_categories()

        assert score.overall == 100
        assert set(score.categories().values()) == {100}

    def test_overall_is_rounded_mean(self):
        """Test overall equals the rounded mean of six categories."""
        score = SEOScore.from_categories(technical=80, on_page=55)

        # (80 + 55 + 400) / 6 = 89.17
        assert score.overall == 89
        assert score.on_page == 55
        assert score.technical == 80

    def test_overall_rounds_half_up(self):
        """Test a .5 mean rounds up."""
        # (97 + 500) / 6 = 99.5
        score = SEOScore.from_categories(security=97)
        assert score.overall == 100

    def test_categories_are_clamped(self):
        """Test out-of-range inputs are clamped."""
        score = SEOScore.from_categories(technical=-40, content=250)

        assert score.technical == 0
        assert score.content == 100
        assert 0 <= score.overall <= 100

    def test_categories_keys(self):
        """Test category keys use the category values."""
        keys = list(SEOScore.from_categories().categories())
        assert keys == ["technical", "on-page", "content", "performance", "accessibility", "security"]


class TestAnalysisResult:
    """Test cases for the analysis envelope."""

    def test_is_immutable(self):
        """Test results cannot be mutated after creation."""
        analysis = make_analysis()

        with pytest.raises(FrozenInstanceError):
            analysis.url = "https://other.com"

    def test_to_audit_result(self):
        """Test insights and screenshot are merged into the envelope."""
        analysis = make_analysis()
        result = analysis.to_audit_result(
            insights=["First insight text"],
            screenshot="data:image/png;base64,AAAA",
        )

        assert isinstance(result, SEOAuditResult)
        assert result.url == analysis.url
        assert result.metadata == analysis.metadata
        assert result.insights == ("First insight text",)
        assert result.screenshot == "data:image/png;base64,AAAA"

    def test_to_audit_result_with_empty_insights(self):
        """Test the envelope works with no insights at all."""
        result = make_analysis().to_audit_result()

        assert result.insights == ()
        assert result.screenshot is None


class TestFetchedPage:
    """Test cases for FetchedPage."""

    def test_default_values(self):
        """Test default values are set correctly."""
        page = FetchedPage(url="https://example.com", html="<html></html>")

        assert page.screenshot is None
        assert page.links == []
