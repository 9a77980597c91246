"""Service layer shared by the command line and the web UI."""

from .analysis_service import AnalysisService, LookupResult, StanzaReport, build_shelf
from .result_formatter import ResultFormatter

__all__ = [
    "AnalysisService",
    "LookupResult",
    "ResultFormatter",
    "StanzaReport",
    "build_shelf",
]
