"""Report writer for audit results."""

import csv
import io
import json
import re
from dataclasses import asdict, dataclass, is_dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from urllib.parse import urlparse

import aiofiles
import structlog

from ..config import settings
from ..exceptions import ReportFormatError
from ..models import SEOAuditResult
from .html_report import generate_html_report

logger = structlog.get_logger()

# Field names that do not follow the plain snake_case -> camelCase mapping
FIELD_ALIASES = {"is_async": "async"}


class ReportFormat(str, Enum):
    JSON = "json"
    CSV = "csv"
    HTML = "html"


@dataclass
class ReportOptions:
    """What a generated report should contain."""

    format: ReportFormat = ReportFormat.JSON
    include_issues: bool = True
    include_insights: bool = True
    include_screenshot: bool = False

    def to_dict(self) -> dict:
        return {
            "format": ReportFormat(self.format).value,
            "includeIssues": self.include_issues,
            "includeInsights": self.include_insights,
            "includeScreenshot": self.include_screenshot,
        }


def parse_format(value: "ReportFormat | str") -> ReportFormat:
    """Coerce a user-supplied format name, rejecting unknown ones."""
    try:
        return ReportFormat(value)
    except ValueError as e:
        raise ReportFormatError(f"Unsupported format: {value}") from e


def _camel_case(name: str) -> str:
    if name in FIELD_ALIASES:
        return FIELD_ALIASES[name]
    return re.sub(r"_([a-z])", lambda m: m.group(1).upper(), name)


def _to_jsonable(value):
    if isinstance(value, dict):
        return {
            _camel_case(key): _to_jsonable(item)
            for key, item in value.items()
            if item is not None
        }
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(item) for item in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def audit_to_dict(result: SEOAuditResult) -> dict:
    """Convert an audit envelope into camelCase JSON data; absent fields are omitted."""
    if not is_dataclass(result):
        raise TypeError(f"Expected an audit result, got {type(result).__name__}")
    return _to_jsonable(asdict(result))


def report_filename(result: SEOAuditResult, report_format: ReportFormat | str) -> str:
    """File name such as ``seo-audit-example.com-2024-05-01.json``."""
    host = urlparse(result.url).hostname or "unknown"
    date = result.timestamp.date().isoformat()
    return f"seo-audit-{host}-{date}.{parse_format(report_format).value}"


def render_json_report(result: SEOAuditResult, options: ReportOptions) -> str:
    data = audit_to_dict(result)
    if not options.include_screenshot:
        data.pop("screenshot", None)
    if not options.include_issues:
        data["issues"] = []
    if not options.include_insights:
        data["insights"] = []

    data["generatedAt"] = datetime.now(timezone.utc).isoformat()
    data["reportOptions"] = options.to_dict()
    return json.dumps(data, indent=2, ensure_ascii=False)


def render_csv_report(result: SEOAuditResult, options: ReportOptions) -> str:
    score = result.score
    performance = result.performance

    rows = [
        ["SEO Audit Report"],
        ["URL", result.url],
        ["Generated", result.timestamp.strftime("%Y-%m-%d %H:%M:%S %Z").strip()],
        [""],
        ["Scores"],
        ["Overall Score", score.overall],
        ["Technical SEO", score.technical],
        ["On-Page SEO", score.on_page],
        ["Content Quality", score.content],
        ["Performance", score.performance],
        ["Accessibility", score.accessibility],
        ["Security", score.security],
    ]

    if options.include_issues:
        rows += [
            [""],
            ["Issues"],
            ["ID", "Title", "Category", "Severity", "Impact", "Difficulty", "Description", "Recommendation"],
        ]
        rows += [
            [
                issue.id,
                issue.title,
                issue.category.value,
                issue.severity.value,
                issue.impact.value,
                issue.difficulty.value,
                issue.description,
                issue.recommendation,
            ]
            for issue in result.issues
        ]

    if options.include_insights and result.insights:
        rows += [[""], ["Insights"]]
        rows += [[insight] for insight in result.insights]

    rows += [
        [""],
        ["Performance Metrics"],
        ["Load Time (ms)", performance.load_time],
        ["Page Size (bytes)", performance.page_size],
        ["HTTP Requests", performance.requests],
    ]

    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerows(rows)
    return buffer.getvalue()


RENDERERS = {
    ReportFormat.JSON: render_json_report,
    ReportFormat.CSV: render_csv_report,
    ReportFormat.HTML: generate_html_report,
}


def render_report(result: SEOAuditResult, options: ReportOptions) -> str:
    """Render a report to text in the requested format."""
    return RENDERERS[parse_format(options.format)](result, options)


class ReportWriter:
    """Writes audit reports to disk."""

    def __init__(self, output_dir: Path | None = None):
        self.output_dir = output_dir or settings.reports_dir
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def get_output_dir(self) -> Path:
        """Get the reports directory path."""
        return self.output_dir

    async def save(self, result: SEOAuditResult, options: ReportOptions) -> Path:
        """Render and save one report, returning its path."""
        content = render_report(result, options)
        filepath = self.output_dir / report_filename(result, options.format)

        async with aiofiles.open(filepath, "w", encoding="utf-8") as f:
            await f.write(content)

        logger.info("Saved report", format=parse_format(options.format).value, path=str(filepath))
        return filepath

    async def save_all(
        self,
        result: SEOAuditResult,
        formats: list[ReportFormat | str],
        include_screenshot: bool = False,
    ) -> list[Path]:
        """Save the same audit in several formats."""
        paths = []
        for report_format in formats:
            options = ReportOptions(
                format=parse_format(report_format),
                include_screenshot=include_screenshot,
            )
            paths.append(await self.save(result, options))
        return paths
