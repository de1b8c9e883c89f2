"""lhreport - classification and aggregation of audit run results."""

__version__ = "1.0.0"

from lhreport.loader import ResultLoader  # noqa: E402
from lhreport.protocol import LighthouseResult  # noqa: E402
from lhreport.report import ReportModel, build_report  # noqa: E402

__all__ = [
    "__version__",
    "LighthouseResult",
    "ReportModel",
    "ResultLoader",
    "build_report",
]
