"""Narrative insight generation for audit results."""

import re

import httpx
import structlog

from ..config import settings
from ..models import AnalysisResult, Severity
from .client import OpenRouterClient

logger = structlog.get_logger()

MIN_INSIGHT_LENGTH = 20
MAX_FALLBACK_INSIGHTS = 6

BULLET_PATTERN = re.compile(r"^[-•*]\s*")
NUMBERING_PATTERN = re.compile(r"^\d+\.\s*")

# Used when the model replies but nothing usable can be parsed out of it
DEFAULT_INSIGHTS = [
    "Focus on creating high-quality, original content that provides genuine value to your target audience.",
    "Optimize your website's loading speed by compressing images and minimizing HTTP requests.",
    "Ensure your website is mobile-friendly, as mobile-first indexing is now the standard for search engines.",
    "Build high-quality backlinks from reputable websites in your industry to improve domain authority.",
    "Regularly update your content to keep it fresh and relevant to current search trends.",
]

# Used when no AI client can be configured at all
STATIC_INSIGHTS = [
    "Prioritize fixing critical SEO issues to improve your website's search engine visibility.",
    "Focus on creating high-quality, keyword-optimized content that serves user intent.",
    "Improve your website's technical performance to enhance both user experience and search rankings.",
    "Ensure your website follows SEO best practices for meta tags, headings, and internal linking.",
    "Monitor your SEO progress regularly and adjust your strategy based on performance data.",
]


def build_prompt(analysis: AnalysisResult) -> str:
    """Build the consultant prompt summarizing an analysis."""
    score = analysis.score
    metadata = analysis.metadata
    performance = analysis.performance

    critical = [i for i in analysis.issues if i.severity == Severity.CRITICAL]
    warnings = [i for i in analysis.issues if i.severity == Severity.WARNING]

    critical_lines = "\n".join(f"- {i.title}: {i.description}" for i in critical)
    warning_lines = "\n".join(f"- {i.title}: {i.description}" for i in warnings)

    return f"""You are an expert SEO consultant analyzing a website audit. Provide actionable, specific insights based on the data below.

WEBSITE: {analysis.url}
OVERALL SEO SCORE: {score.overall}/100

SCORES BY CATEGORY:
- Technical SEO: {score.technical}/100
- On-Page SEO: {score.on_page}/100
- Content Quality: {score.content}/100
- Performance: {score.performance}/100

METADATA:
- Title: {metadata.title or "Missing"}
- Description: {metadata.description or "Missing"}
- Open Graph Title: {metadata.og_title or "Missing"}
- Canonical URL: {metadata.canonical or "Missing"}

CRITICAL ISSUES ({len(critical)}):
{critical_lines}

WARNING ISSUES ({len(warnings)}):
{warning_lines}

PERFORMANCE METRICS:
- Load Time: {performance.load_time}ms
- Page Size: {round(performance.page_size / 1024)}KB
- HTTP Requests: {performance.requests}

Provide 5-8 specific, actionable insights that prioritize:
1. High-impact improvements
2. Quick wins (easy to implement)
3. Technical optimizations
4. Content strategy recommendations
5. Competitive advantages

Format each insight as a complete sentence. Focus on WHY each recommendation matters and HOW it will improve SEO performance."""


def parse_insights(text: str, limit: int | None = None) -> list[str]:
    """Split a model reply into clean insight sentences."""
    limit = limit or settings.ai_max_insights
    insights = []

    for line in text.splitlines():
        line = line.strip()
        if len(line) <= MIN_INSIGHT_LENGTH:
            continue

        line = NUMBERING_PATTERN.sub("", BULLET_PATTERN.sub("", line))
        lowered = line.lower()
        # Section headers such as "Key insights:" or "Recommendations"
        if "insight" in lowered or "recommendation" in lowered:
            continue

        insights.append(line)

    return insights[:limit] or list(DEFAULT_INSIGHTS)


def fallback_insights(analysis: AnalysisResult) -> list[str]:
    """Rule-based insights used when the model cannot be reached."""
    score = analysis.score
    insights = []

    if score.overall < 70:
        insights.append(
            "Your website has significant SEO opportunities that could dramatically improve "
            "search rankings with focused optimization efforts."
        )

    if score.technical < 80:
        insights.append(
            "Technical SEO improvements should be your top priority, as they provide the "
            "foundation for all other optimization efforts."
        )

    critical_count = sum(1 for i in analysis.issues if i.severity == Severity.CRITICAL)
    if critical_count:
        insights.append(
            f"Address the {critical_count} critical SEO issues immediately, as they are likely "
            "preventing search engines from properly indexing your content."
        )

    if not analysis.metadata.title:
        insights.append(
            "Adding a compelling title tag is the single most important on-page SEO "
            "improvement you can make right now."
        )

    if not analysis.metadata.description:
        insights.append(
            "A well-crafted meta description can significantly improve your click-through rates "
            "from search results, acting as your website's elevator pitch."
        )

    if analysis.performance.load_time > 3000:
        insights.append(
            "Page speed optimization should be prioritized, as faster loading times directly "
            "correlate with better search rankings and user experience."
        )

    return insights[:MAX_FALLBACK_INSIGHTS]


class InsightGenerator:
    """Turns an analysis into narrative recommendations via an LLM."""

    def __init__(self, client: OpenRouterClient):
        self.client = client

    async def generate(self, analysis: AnalysisResult) -> list[str]:
        """Ask the model for insights, falling back to rule-based text on failure."""
        try:
            reply = await self.client.complete(build_prompt(analysis))
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("AI insights generation failed", url=analysis.url, error=str(e))
            return fallback_insights(analysis)

        insights = parse_insights(reply)
        logger.info("AI insights generated", url=analysis.url, count=len(insights))
        return insights


async def generate_insights(
    analysis: AnalysisResult,
    api_key: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[str]:
    """Generate insights for an analysis, never raising to the caller."""
    try:
        client = OpenRouterClient(api_key=api_key, transport=transport)
    except ValueError as e:
        logger.warning("AI insights unavailable", error=str(e))
        return list(STATIC_INSIGHTS)

    async with client:
        return await InsightGenerator(client).generate(analysis)
