"""Console and request log output for httpr"""

from httpr.reports.console import print_banner, format_banner, print_probe_summary, format_probe_summary
from httpr.reports.request_log import RequestLogger, RequestRecord, format_raw, format_json

__all__ = [
    "print_banner",
    "format_banner",
    "print_probe_summary",
    "format_probe_summary",
    "RequestLogger",
    "RequestRecord",
    "format_raw",
    "format_json",
]
