from __future__ import annotations

from typing import Any, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from ..errors import AnalysisError

ProblemType = Literal["classification", "regression", "clustering", "time-series", "unknown"]
Importance = Literal["high", "medium", "low"]

PROBLEM_TYPES: tuple[str, ...] = ("classification", "regression", "clustering", "time-series", "unknown")

REQUIRED_SECTIONS: tuple[str, ...] = (
    "summary",
    "problemType",
    "targetSuggestion",
    "featureEngineering",
    "modelRecommendations",
    "metricRationale",
    "edaInsights",
    "baselineNotebook",
    "simulatedTraining",
    "correlations",
)


class ReportValidationError(AnalysisError):
    """Raised when the model's JSON does not have the report's structure."""


class _ReportModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class FeatureEngineeringStep(_ReportModel):
    title: str
    description: str
    reasoning: str


class Hyperparameter(_ReportModel):
    param: str
    range: str
    description: str = ""

    @field_validator("range", mode="before")
    @classmethod
    def _range_as_text(cls, v: Any) -> Any:
        # Models sometimes answer "True" or 0.1 instead of a string range.
        return v if isinstance(v, str) else str(v)


class ModelRecommendation(_ReportModel):
    model_config = ConfigDict(protected_namespaces=())

    model_name: str
    suitability: str
    pros: list[str]
    cons: list[str]
    hyperparameters: list[Hyperparameter] = Field(default_factory=list)


class MetricRationale(_ReportModel):
    recommended_metric: str
    why: str
    alternatives: list[str] = Field(default_factory=list)


class EdaInsight(_ReportModel):
    observation: str
    importance: Importance = "medium"

    @field_validator("importance", mode="before")
    @classmethod
    def _lower(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v


class TrainingLog(BaseModel):
    # Per-epoch keys are snake_case on the wire.
    model_config = ConfigDict(frozen=True)

    epoch: int
    loss: float
    val_loss: float
    metric: float
    val_metric: float


class FeatureImportance(_ReportModel):
    feature: str
    importance: float


class ResidualPoint(_ReportModel):
    predicted: float
    actual: float


class SimulatedTraining(_ReportModel):
    logs: list[TrainingLog]
    final_metric_score: float
    feature_importance: list[FeatureImportance]
    confusion_matrix: Optional[list[list[float]]] = None
    residuals: Optional[list[ResidualPoint]] = None

    @field_validator("confusion_matrix", mode="after")
    @classmethod
    def _drop_ragged_matrix(cls, v: Optional[list[list[float]]]) -> Optional[list[list[float]]]:
        # Optional section: an empty or ragged matrix is treated as absent.
        if not v or not v[0] or any(len(row) != len(v[0]) for row in v):
            return None
        return v


class Correlation(_ReportModel):
    x: str
    y: str
    value: float


class AnalysisReport(_ReportModel):
    """
    Structured, model-generated analysis for one dataset snapshot.

    Only structure is checked. The content is generated and never verified.
    """
    summary: str
    problem_type: ProblemType
    target_suggestion: str
    feature_engineering: list[FeatureEngineeringStep]
    model_recommendations: list[ModelRecommendation]
    metric_rationale: MetricRationale
    eda_insights: list[EdaInsight]
    baseline_notebook: str
    simulated_training: SimulatedTraining
    correlations: list[Correlation]

    @field_validator("problem_type", mode="before")
    @classmethod
    def _normalize_problem_type(cls, v: Any) -> Any:
        if not isinstance(v, str):
            return v
        s = v.strip().lower().replace("_", "-").replace(" ", "-")
        if s == "timeseries":
            s = "time-series"
        return s if s in PROBLEM_TYPES else "unknown"

    def to_json_obj(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def validate_report_obj(obj: Any) -> AnalysisReport:
    """Validate a decoded JSON object as an AnalysisReport.

    Raises ReportValidationError naming the missing or malformed sections.
    """
    if not isinstance(obj, Mapping):
        raise ReportValidationError("Invalid response format from AI: expected a JSON object.")

    missing = [k for k in REQUIRED_SECTIONS if k not in obj and _snake(k) not in obj]
    if missing:
        raise ReportValidationError(f"Invalid response format from AI: missing sections {missing}.")

    try:
        return AnalysisReport.model_validate(obj)
    except ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        raise ReportValidationError(
            f"Invalid response format from AI: malformed fields {fields[:8]}."
        ) from e


def _snake(camel: str) -> str:
    out = []
    for ch in camel:
        if ch.isupper():
            out.append("_")
            out.append(ch.lower())
        else:
            out.append(ch)
    return "".join(out)
