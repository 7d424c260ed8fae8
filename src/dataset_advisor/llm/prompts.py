from __future__ import annotations

import json
from typing import Any

from ..report.schema import AnalysisReport

ANALYSIS_SYSTEM_PROMPT = (
    "You are a world-class Kaggle Grandmaster assistant. "
    "You only see column metadata and a handful of sample rows, never the full dataset. "
    "Return ONLY valid JSON matching the requested schema."
)

CHAT_GREETING = (
    "Hello! I've finished analyzing your dataset. You can ask me anything about the "
    "feature engineering steps, model choices, or the baseline code I generated."
)

CHAT_EMPTY_ANSWER = "I'm sorry, I couldn't generate a response."

# Progress messages shown while the analysis request is outstanding.
ANALYSIS_PHASES: tuple[str, ...] = (
    "Identifying Problem Type...",
    "Designing Feature Pipeline...",
    "Selecting Optimal Architectures...",
    "Synthesizing Baseline Code...",
    "Finalizing Grandmaster Report...",
)

_REQUESTED_OUTPUT = [
    "summary: a concise dataset summary.",
    "problemType: classification, regression, clustering, or time-series.",
    "targetSuggestion: the recommended target column name.",
    "featureEngineering: array of {title, description, reasoning}.",
    "modelRecommendations: array of {modelName, suitability, pros[], cons[], hyperparameters[{param, range, description}]}.",
    "metricRationale: {recommendedMetric, why, alternatives[]}.",
    "edaInsights: array of {observation, importance: high|medium|low}.",
    "baselineNotebook: a full Python script using pandas, sklearn, and a boosting library.",
    "simulatedTraining: {logs: 10 objects (epoch 1-10) with loss, val_loss, metric, val_metric; "
    "finalMetricScore; featureImportance: top 8 {feature, importance 0-1}; "
    "confusionMatrix: 2x2 normalized array (if classification); "
    "residuals: 20 {predicted, actual} (if regression)}.",
    "correlations: array of {x, y, value} between important features.",
]

_REQUIRED_JSON_SCHEMA: dict[str, Any] = {
    "summary": "...",
    "problemType": "classification|regression|clustering|time-series",
    "targetSuggestion": "...",
    "featureEngineering": [{"title": "...", "description": "...", "reasoning": "..."}],
    "modelRecommendations": [
        {
            "modelName": "...",
            "suitability": "...",
            "pros": ["..."],
            "cons": ["..."],
            "hyperparameters": [{"param": "...", "range": "...", "description": "..."}],
        }
    ],
    "metricRationale": {"recommendedMetric": "...", "why": "...", "alternatives": ["..."]},
    "edaInsights": [{"observation": "...", "importance": "high|medium|low"}],
    "baselineNotebook": "...",
    "simulatedTraining": {
        "logs": [{"epoch": 1, "loss": 0.0, "val_loss": 0.0, "metric": 0.0, "val_metric": 0.0}],
        "finalMetricScore": 0.0,
        "featureImportance": [{"feature": "...", "importance": 0.0}],
        "confusionMatrix": [[0.0, 0.0], [0.0, 0.0]],
        "residuals": [{"predicted": 0.0, "actual": 0.0}],
    },
    "correlations": [{"x": "...", "y": "...", "value": 0.0}],
}


def build_analysis_prompt(payload: dict[str, Any]) -> str:
    """payload is the snapshot's wire form: columns, rowCount, sampleRows."""
    prompt_obj = {
        "dataset_metadata": {
            "total_rows": payload.get("rowCount"),
            "columns": payload.get("columns", []),
            "sample_rows": payload.get("sampleRows", []),
        },
        "requested_output": _REQUESTED_OUTPUT,
        "required_json_schema": _REQUIRED_JSON_SCHEMA,
    }
    return (
        "Analyze the following dataset metadata and suggest the best ML strategy. "
        "Provide a comprehensive report strictly in JSON format."
        + "\n\n"
        + json.dumps(prompt_obj, indent=2, ensure_ascii=False)
    )


def build_chat_system_instruction(report: AnalysisReport) -> str:
    return (
        "You are a Kaggle Grandmaster assistant. You have already analyzed the user's dataset "
        "and provided a report.\n"
        f"Context of dataset: {report.summary}. Problem: {report.problem_type}. "
        f"Suggested target: {report.target_suggestion}. "
        f"Recommended metric: {report.metric_rationale.recommended_metric}.\n"
        "Answer follow-up questions about feature engineering, model selection, "
        "or implementation details."
    )
