"""Dataset Advisor: CSV profiling plus LLM-generated ML strategy reports."""

from .errors import AnalysisError, ChatError, ConfigurationError, MissingCredentialError, ParseError
from .models import ColumnType, DatasetSnapshot
from .orchestrator import AnalysisOrchestrator
from .profile import profile_csv_file, profile_csv_text
from .report import AnalysisReport
from .session import AnalysisSession

__version__ = "0.1.0"

__all__ = [
    "AnalysisError",
    "AnalysisOrchestrator",
    "AnalysisReport",
    "AnalysisSession",
    "ChatError",
    "ColumnType",
    "ConfigurationError",
    "DatasetSnapshot",
    "MissingCredentialError",
    "ParseError",
    "profile_csv_file",
    "profile_csv_text",
]
