"""HTML report generator for static, printable audit reports."""

import html

from ..models import SEOAuditResult


def score_class(score: int) -> str:
    """CSS band for a 0-100 score."""
    if score >= 90:
        return "excellent"
    if score >= 80:
        return "good"
    if score >= 70:
        return "fair"
    return "poor"


def generate_html_report(result: SEOAuditResult, options) -> str:
    """Generate a self-contained HTML report for one audit."""
    score = result.score
    score_cards = [
        ("Overall Score", score.overall),
        ("Technical SEO", score.technical),
        ("On-Page SEO", score.on_page),
        ("Content", score.content),
        ("Performance", score.performance),
        ("Accessibility", score.accessibility),
        ("Security", score.security),
    ]

    cards_html = ""
    for label, value in score_cards:
        cards_html += f'''
            <div class="score-item">
                <div class="score-circle score-{score_class(value)}">{value}</div>
                <h3>{label}</h3>
            </div>'''

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>SEO Audit Report - {html.escape(result.url)}</title>
    <style>
        :root {{
            --success: #10b981;
            --info: #3b82f6;
            --warning: #f59e0b;
            --danger: #ef4444;
            --gray-50: #f9fafb;
            --gray-200: #e5e7eb;
            --gray-500: #6b7280;
            --gray-900: #111827;
        }}

        body {{
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif;
            margin: 0;
            padding: 20px;
            color: var(--gray-900);
        }}

        .header {{ text-align: center; margin-bottom: 30px; border-bottom: 2px solid var(--gray-200); padding-bottom: 20px; }}
        .score-section {{ display: flex; flex-wrap: wrap; justify-content: space-around; margin: 30px 0; }}
        .score-item {{ text-align: center; margin: 0 10px; }}
        .score-circle {{
            width: 80px;
            height: 80px;
            border-radius: 50%;
            display: flex;
            align-items: center;
            justify-content: center;
            margin: 0 auto 10px;
            font-size: 24px;
            font-weight: bold;
            color: white;
        }}
        .score-excellent {{ background-color: var(--success); }}
        .score-good {{ background-color: var(--info); }}
        .score-fair {{ background-color: var(--warning); }}
        .score-poor {{ background-color: var(--danger); }}

        .issue-item {{ margin: 15px 0; padding: 15px; border-left: 4px solid var(--gray-200); background: var(--gray-50); }}
        .issue-critical {{ border-left-color: var(--danger); }}
        .issue-warning {{ border-left-color: var(--warning); }}
        .issue-info {{ border-left-color: var(--info); }}

        .insight-item {{ margin: 10px 0; padding: 10px; background: #f0f9ff; border-radius: 6px; }}
        .data-table {{ width: 100%; border-collapse: collapse; }}
        .data-table th, .data-table td {{ padding: 8px; text-align: left; border-bottom: 1px solid var(--gray-200); }}
        .screenshot {{ max-width: 100%; border: 1px solid var(--gray-200); }}
        .footer {{ margin-top: 50px; text-align: center; color: var(--gray-500); font-size: 12px; }}
    </style>
</head>
<body>
    <header class="header">
        <h1>SEO Audit Report</h1>
        <h2>{html.escape(result.url)}</h2>
        <p>Generated on {result.timestamp.strftime('%B %d, %Y at %H:%M')}</p>
    </header>

    <section class="score-section">{cards_html}
    </section>

    {_generate_issues_section(result) if options.include_issues else ''}

    {_generate_insights_section(result) if options.include_insights else ''}

    {_generate_metadata_section(result)}

    {_generate_performance_section(result)}

    {_generate_screenshot_section(result) if options.include_screenshot else ''}

    <footer class="footer">
        <p>Generated by <strong>SEO Audit</strong></p>
        <p>Report ID: {result.timestamp.isoformat()}</p>
    </footer>
</body>
</html>"""


def _generate_issues_section(result: SEOAuditResult) -> str:
    """Generate the ranked issue list."""
    issues_html = ""
    for issue in result.issues:
        severity = html.escape(issue.severity.value)
        category = html.escape(issue.category.value)
        impact = html.escape(issue.impact.value)
        issues_html += f'''
        <div class="issue-item issue-{severity}">
            <h3>{html.escape(issue.title)}</h3>
            <p><strong>Category:</strong> {category} | <strong>Severity:</strong> {severity} | <strong>Impact:</strong> {impact}</p>
            <p>{html.escape(issue.description)}</p>
            <p><strong>Recommendation:</strong> {html.escape(issue.recommendation)}</p>
        </div>'''

    return f'''
    <section class="issues-section">
        <h2>SEO Issues ({len(result.issues)})</h2>
        {issues_html}
    </section>'''


def _generate_insights_section(result: SEOAuditResult) -> str:
    if not result.insights:
        return ""

    insights_html = "".join(
        f'''
        <div class="insight-item"><strong>{index}.</strong> {html.escape(insight)}</div>'''
        for index, insight in enumerate(result.insights, start=1)
    )

    return f'''
    <section class="insights-section">
        <h2>Insights</h2>
        {insights_html}
    </section>'''


def _generate_metadata_section(result: SEOAuditResult) -> str:
    metadata = result.metadata
    rows = [
        ("Title", metadata.title),
        ("Description", metadata.description),
        ("Canonical URL", metadata.canonical),
        ("Open Graph Title", metadata.og_title),
    ]

    rows_html = ""
    for label, value in rows:
        status = "&#10003;" if value else "&#10007;"
        rows_html += f"<tr><td>{label}</td><td>{html.escape(value or 'Missing')}</td><td>{status}</td></tr>"

    return f'''
    <section class="metadata-section">
        <h2>Page Metadata</h2>
        <table class="data-table">
            <tr><th>Property</th><th>Value</th><th>Status</th></tr>
            {rows_html}
        </table>
    </section>'''


def _generate_performance_section(result: SEOAuditResult) -> str:
    performance = result.performance
    return f'''
    <section class="performance-section">
        <h2>Performance Metrics (estimated)</h2>
        <table class="data-table">
            <tr><th>Metric</th><th>Value</th></tr>
            <tr><td>Load Time</td><td>{performance.load_time}ms</td></tr>
            <tr><td>Page Size</td><td>{round(performance.page_size / 1024)}KB</td></tr>
            <tr><td>HTTP Requests</td><td>{performance.requests}</td></tr>
        </table>
    </section>'''


def _generate_screenshot_section(result: SEOAuditResult) -> str:
    if not result.screenshot:
        return ""

    return f'''
    <section class="screenshot-section">
        <h2>Screenshot</h2>
        <img class="screenshot" src="{html.escape(result.screenshot)}" alt="Screenshot of {html.escape(result.url)}">
    </section>'''
