from __future__ import annotations

import copy
from typing import Any, Mapping, Sequence

import pytest

from dataset_advisor.errors import AnalysisError


_REPORT_OBJ: dict[str, Any] = {
    "summary": "Small mixed-type table with a binary label.",
    "problemType": "classification",
    "targetSuggestion": "b",
    "featureEngineering": [
        {"title": "One-hot encode b", "description": "Expand the categorical column.", "reasoning": "Trees handle it fine."}
    ],
    "modelRecommendations": [
        {
            "modelName": "LightGBM",
            "suitability": "High",
            "pros": ["Fast"],
            "cons": ["Needs tuning"],
            "hyperparameters": [{"param": "num_leaves", "range": "15-63", "description": "Tree size"}],
        }
    ],
    "metricRationale": {"recommendedMetric": "ROC-AUC", "why": "Threshold independent.", "alternatives": ["F1"]},
    "edaInsights": [
        {"observation": "Column a is uniformly spread.", "importance": "low"},
        {"observation": "Column b is balanced.", "importance": "high"},
    ],
    "baselineNotebook": "import pandas as pd\nprint('baseline')\n",
    "simulatedTraining": {
        "logs": [
            {"epoch": 1, "loss": 0.7, "val_loss": 0.72, "metric": 0.6, "val_metric": 0.58},
            {"epoch": 2, "loss": 0.5, "val_loss": 0.55, "metric": 0.7, "val_metric": 0.66},
        ],
        "finalMetricScore": 0.66,
        "featureImportance": [{"feature": "a", "importance": 0.8}, {"feature": "b", "importance": 0.2}],
        "confusionMatrix": [[0.8, 0.2], [0.3, 0.7]],
    },
    "correlations": [{"x": "a", "y": "b", "value": -0.25}],
}


class FakeClient:
    """In-memory LLMClient: canned JSON for analysis, scripted chat answers."""

    def __init__(self, report_obj: Any = None, chat_answers: Sequence[Any] = ()) -> None:
        self.report_obj = report_obj
        self.chat_answers = list(chat_answers)
        self.json_calls: list[dict[str, str]] = []
        self.chat_calls: list[list[dict[str, str]]] = []

    def complete_json(self, *, system: str, prompt: str) -> dict[str, Any]:
        self.json_calls.append({"system": system, "prompt": prompt})
        if isinstance(self.report_obj, Exception):
            raise self.report_obj
        return copy.deepcopy(self.report_obj)

    def chat(self, messages: Sequence[Mapping[str, str]]) -> str:
        self.chat_calls.append([dict(m) for m in messages])
        answer = self.chat_answers.pop(0) if self.chat_answers else "ok"
        if isinstance(answer, Exception):
            raise answer
        return answer


@pytest.fixture
def report_obj() -> dict[str, Any]:
    return copy.deepcopy(_REPORT_OBJ)


@pytest.fixture
def fake_client(report_obj: dict[str, Any]) -> FakeClient:
    return FakeClient(report_obj=report_obj, chat_answers=["Use target encoding."])


@pytest.fixture
def failing_client() -> FakeClient:
    return FakeClient(report_obj=AnalysisError("upstream timed out"))


@pytest.fixture
def small_csv() -> str:
    return "a,b\n1,x\n2,y\n3,x\n"
