"""Tests for report rendering and storage."""

import asyncio
import csv
import io
import json
from dataclasses import replace
from datetime import datetime, timezone

import pytest

from seo_audit import analyze
from seo_audit.exceptions import ReportFormatError
from seo_audit.storage import (
    ReportFormat,
    ReportOptions,
    ReportWriter,
    audit_to_dict,
    generate_html_report,
    parse_format,
    render_report,
    report_filename,
)

PAGE = """
<html>
<head><title>Fish &amp; Chips &lt;Best&gt; in town</title></head>
<body>
    <h1>Menu</h1>
    <script src="/app.js" async></script>
    <img src="/fish.png">
</body>
</html>
"""


@pytest.fixture
def result():
    analysis = analyze(PAGE, "https://shop.example/menu")
    analysis = replace(analysis, timestamp=datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc))
    return analysis.to_audit_result(
        insights=["Add a meta description, people compare \"fish\" & chips, shops."],
        screenshot="data:image/png;base64,iVBORw0KGgo=",
    )


class TestAuditToDict:
    """Test cases for JSON conversion."""

    def test_camel_case_keys(self, result):
        """Test keys follow the camelCase envelope naming."""
        data = audit_to_dict(result)

        assert set(data) >= {"url", "timestamp", "score", "issues", "metadata", "technicalDetails"}
        assert data["score"]["onPage"] == result.score.on_page
        assert data["performance"]["loadTime"] == result.performance.load_time
        assert data["timestamp"] == "2024-05-01T09:30:00+00:00"

    def test_async_script_key(self, result):
        """Test the script async flag is exported as ``async``."""
        script = audit_to_dict(result)["technicalDetails"]["scripts"][0]

        assert script["async"] is True
        assert "isAsync" not in script

    def test_enums_and_absent_fields(self, result):
        """Test enums become values and absent fields are omitted."""
        data = audit_to_dict(result)

        assert data["issues"][0]["category"] in {"on-page", "technical", "accessibility", "security"}
        assert "description" not in data["metadata"]
        assert "canonical" not in data["metadata"]

    def test_rejects_non_dataclass(self):
        """Test arbitrary objects are refused."""
        with pytest.raises(TypeError):
            audit_to_dict({"url": "https://example.com"})


class TestFormats:
    """Test cases for format handling."""

    def test_parse_format(self):
        """Test format names are coerced."""
        assert parse_format("csv") == ReportFormat.CSV
        assert parse_format(ReportFormat.HTML) == ReportFormat.HTML

    def test_unknown_format(self):
        """Test unsupported formats raise ReportFormatError."""
        with pytest.raises(ReportFormatError):
            parse_format("pdf")

    def test_report_filename(self, result):
        """Test file names include host and date."""
        assert report_filename(result, "json") == "seo-audit-shop.example-2024-05-01.json"
        assert report_filename(result, ReportFormat.HTML).endswith(".html")


class TestRenderReport:
    """Test cases for the renderers."""

    def test_json_report(self, result):
        """Test the JSON report drops the screenshot unless requested."""
        data = json.loads(render_report(result, ReportOptions(format=ReportFormat.JSON)))

        assert "screenshot" not in data
        assert data["reportOptions"]["format"] == "json"
        assert "generatedAt" in data
        assert data["insights"] == list(result.insights)

        with_shot = json.loads(
            render_report(result, ReportOptions(format=ReportFormat.JSON, include_screenshot=True))
        )
        assert with_shot["screenshot"] == result.screenshot

    def test_json_report_without_issues(self, result):
        """Test issue and insight sections can be left out."""
        options = ReportOptions(include_issues=False, include_insights=False)
        data = json.loads(render_report(result, options))

        assert data["issues"] == []
        assert data["insights"] == []

    def test_csv_report(self, result):
        """Test the CSV report quotes every cell and lists issues."""
        text = render_report(result, ReportOptions(format=ReportFormat.CSV))
        rows = list(csv.reader(io.StringIO(text)))

        assert text.startswith('"SEO Audit Report"\n')
        assert ["URL", "https://shop.example/menu"] in rows
        assert ["Overall Score", str(result.score.overall)] in rows

        header = rows.index(
            ["ID", "Title", "Category", "Severity", "Impact", "Difficulty", "Description", "Recommendation"]
        )
        assert rows[header + 1][0] == result.issues[0].id
        assert [result.insights[0]] in rows

    def test_html_report_escapes_content(self, result):
        """Test page text cannot inject markup into the report."""
        report = generate_html_report(result, ReportOptions(format=ReportFormat.HTML))

        assert "<Best>" not in report
        assert "&lt;Best&gt;" in report
        assert "&quot;fish&quot; &amp; chips" in report
        assert "https://shop.example/menu" in report
        assert result.screenshot not in report

    def test_html_report_with_screenshot(self, result):
        """Test the screenshot is embedded when requested."""
        options = ReportOptions(format=ReportFormat.HTML, include_screenshot=True)
        report = render_report(result, options)

        assert f'src="{result.screenshot}"' in report


class TestReportWriter:
    """Test cases for ReportWriter."""

    def test_creates_output_directory(self, tmp_path):
        """Test that the output directory is created."""
        output_dir = tmp_path / "reports" / "nested"
        writer = ReportWriter(output_dir)

        assert output_dir.exists()
        assert writer.get_output_dir() == output_dir

    def test_save_all(self, tmp_path, result):
        """Test every requested format is written to disk."""
        writer = ReportWriter(tmp_path)
        paths = asyncio.run(writer.save_all(result, ["json", ReportFormat.CSV, "html"]))

        assert [path.name for path in paths] == [
            "seo-audit-shop.example-2024-05-01.json",
            "seo-audit-shop.example-2024-05-01.csv",
            "seo-audit-shop.example-2024-05-01.html",
        ]
        data = json.loads(paths[0].read_text(encoding="utf-8"))
        assert data["url"] == "https://shop.example/menu"
        assert paths[2].read_text(encoding="utf-8").startswith("<!DOCTYPE html>")

    def test_save_all_rejects_unknown_format(self, tmp_path, result):
        """Test a bad format fails before anything is written."""
        writer = ReportWriter(tmp_path)

        with pytest.raises(ReportFormatError):
            asyncio.run(writer.save_all(result, ["pdf"]))
        assert list(tmp_path.iterdir()) == []
