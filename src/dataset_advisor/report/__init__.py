from .schema import (
    PROBLEM_TYPES,
    REQUIRED_SECTIONS,
    AnalysisReport,
    ReportValidationError,
    validate_report_obj,
)
from .builder import render_report_markdown

__all__ = [
    "PROBLEM_TYPES",
    "REQUIRED_SECTIONS",
    "AnalysisReport",
    "ReportValidationError",
    "render_report_markdown",
    "validate_report_obj",
]
