"""Main orchestrator that coordinates fetching, analysis, insights and reports."""

import base64
from pathlib import Path
from urllib.parse import urlparse

import structlog

from .ai.insights import fallback_insights, generate_insights
from .browser import AuditBrowser
from .engine import analyze
from .exceptions import InvalidURLError
from .models import AnalysisResult, FetchedPage, SEOAuditResult
from .storage import ReportFormat, ReportWriter, parse_format

logger = structlog.get_logger()


def is_valid_url(url: str) -> bool:
    """Whether ``url`` is an absolute http(s) URL with a host."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def screenshot_data_uri(screenshot: bytes | None) -> str | None:
    if not screenshot:
        return None
    return f"data:image/png;base64,{base64.b64encode(screenshot).decode('ascii')}"


class AuditOrchestrator:
    """Orchestrates the complete single-page audit workflow.

    The page is rendered with Playwright, analyzed by the engine, enriched
    with narrative insights and optionally written out as reports.
    """

    def __init__(
        self,
        url: str,
        include_screenshot: bool = False,
        include_links: bool = False,
        enable_ai: bool = False,
        ai_api_key: str | None = None,
        output_dir: Path | None = None,
        formats: list[ReportFormat | str] | None = None,
    ):
        if not is_valid_url(url):
            raise InvalidURLError(f"Invalid URL provided: {url}")

        self.url = url
        self.include_screenshot = include_screenshot
        self.include_links = include_links
        self.enable_ai = enable_ai
        self.ai_api_key = ai_api_key
        self.formats = [parse_format(f) for f in formats or []]
        self.writer = ReportWriter(output_dir) if self.formats else None

        # Results
        self.page: FetchedPage | None = None
        self.result: SEOAuditResult | None = None
        self.report_paths: list[Path] = []

    async def run(self) -> SEOAuditResult:
        """Run the complete audit workflow."""
        logger.info("Starting audit", url=self.url)

        logger.info("Phase 1: Rendering page with Playwright")
        async with AuditBrowser() as browser:
            self.page = await browser.render(
                self.url,
                include_screenshot=self.include_screenshot,
                include_links=self.include_links,
            )

        self.result = await self.audit_html(self.page.html, screenshot=self.page.screenshot)
        await self.write_reports(self.result)

        logger.info(
            "Audit completed",
            url=self.url,
            overall=self.result.score.overall,
            issues=len(self.result.issues),
        )
        return self.result

    async def write_reports(self, result: SEOAuditResult) -> list[Path]:
        """Write the configured report formats for a finished audit."""
        if self.writer:
            logger.info("Writing reports", formats=[f.value for f in self.formats])
            self.report_paths = await self.writer.save_all(
                result,
                self.formats,
                include_screenshot=self.include_screenshot,
            )
        return self.report_paths

    async def audit_html(self, html: str, screenshot: bytes | None = None) -> SEOAuditResult:
        """Analyze already-fetched HTML and merge in insights and the screenshot."""
        logger.info("Phase 2: Analyzing page")
        analysis = analyze(html, self.url)

        logger.info("Phase 3: Generating insights", ai=self.enable_ai)
        insights = await self._insights(analysis)

        return analysis.to_audit_result(
            insights=insights,
            screenshot=screenshot_data_uri(screenshot),
        )

    async def _insights(self, analysis: AnalysisResult) -> list[str]:
        if not self.enable_ai:
            return fallback_insights(analysis)
        return await generate_insights(analysis, api_key=self.ai_api_key)
