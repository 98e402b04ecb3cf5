"""Report storage module."""

from .html_report import generate_html_report
from .manager import (
    ReportFormat,
    ReportOptions,
    ReportWriter,
    audit_to_dict,
    parse_format,
    render_report,
    report_filename,
)

__all__ = [
    "ReportFormat",
    "ReportOptions",
    "ReportWriter",
    "audit_to_dict",
    "generate_html_report",
    "parse_format",
    "render_report",
    "report_filename",
]
