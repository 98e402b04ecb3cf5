"""Exceptions raised by the layers around the analysis engine."""


class AuditError(Exception):
    """Base class for audit failures."""


class InvalidURLError(AuditError, ValueError):
    """The URL to audit is not an absolute http(s) URL."""


class FetchError(AuditError):
    """The page could not be loaded."""


class ReportFormatError(AuditError, ValueError):
    """The requested report format is not supported."""
