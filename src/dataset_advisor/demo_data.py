"""Bundled example datasets with pre-built reports.

These let the dashboard and CLI show a complete report without an API key.
Column statistics are the published figures for each dataset, not profiler
output; sample_rows are left empty.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .models import CategoricalColumn, ColumnStats, DatasetSnapshot, NumericColumn, NumericStats
from .report.schema import AnalysisReport


@dataclass(frozen=True)
class DemoDataset:
    key: str
    name: str
    task: str
    snapshot: DatasetSnapshot
    report: AnalysisReport


def _num(name: str, samples: list[Any], *, mean: float, unique: int, missing: int = 0) -> NumericColumn:
    return NumericColumn(
        name=name,
        sample_values=tuple(str(s) for s in samples),
        stats=NumericStats(unique_count=unique, missing_count=missing, mean=mean),
    )


def _cat(name: str, samples: list[Any], *, unique: int, missing: int = 0) -> CategoricalColumn:
    return CategoricalColumn(
        name=name,
        sample_values=tuple(str(s) for s in samples),
        stats=ColumnStats(unique_count=unique, missing_count=missing),
    )


def _snapshot(source_name: str, columns: list[Any], row_count: int) -> DatasetSnapshot:
    return DatasetSnapshot(
        header=tuple(c.name for c in columns),
        columns=tuple(columns),
        row_count=row_count,
        source_name=source_name,
    )


def _logs(n: int, *, loss: float, d_loss: float, val_loss: float, d_val_loss: float,
          metric: float, d_metric: float, val_metric: float, d_val_metric: float) -> list[dict[str, Any]]:
    return [
        {
            "epoch": i + 1,
            "loss": round(loss - i * d_loss, 6),
            "val_loss": round(val_loss - i * d_val_loss, 6),
            "metric": round(metric + i * d_metric, 6),
            "val_metric": round(val_metric + i * d_val_metric, 6),
        }
        for i in range(n)
    ]


def _residuals(actuals: list[float]) -> list[dict[str, float]]:
    # Alternating over/under predictions, a few percent off.
    return [
        {"predicted": round(a * (1 + (0.04 if i % 2 else -0.06)), 2), "actual": a}
        for i, a in enumerate(actuals)
    ]


_TITANIC = DemoDataset(
    key="titanic",
    name="Titanic Survival",
    task="Classification",
    snapshot=_snapshot(
        "titanic.csv",
        [
            _cat("Survived", [0, 1, 1, 0], unique=2),
            _num("Pclass", [3, 1, 3, 1], mean=2.3, unique=3),
            _num("Age", [22, 38, 26, 35], mean=29.7, unique=88, missing=177),
            _num("Fare", [7.25, 71.28, 7.92, 53.1], mean=32.2, unique=248),
            _cat("Sex", ["male", "female"], unique=2),
        ],
        891,
    ),
    report=AnalysisReport.model_validate(
        {
            "summary": "A classic binary classification task. Signal is concentrated in demographic and socio-economic features.",
            "problemType": "classification",
            "targetSuggestion": "Survived",
            "featureEngineering": [
                {"title": "Title Extraction", "description": "Mapping names to social status.", "reasoning": "Captures age and rank nuances."},
                {"title": "Family Grouping", "description": "Aggregating SibSp and Parch.", "reasoning": "Social survival dynamics."},
            ],
            "modelRecommendations": [
                {
                    "modelName": "XGBoost",
                    "suitability": "High",
                    "pros": ["Non-linear", "Fast"],
                    "cons": ["Overfitting"],
                    "hyperparameters": [{"param": "depth", "range": "3-6", "description": "Complexity"}],
                }
            ],
            "metricRationale": {"recommendedMetric": "Accuracy", "why": "Balanced target distribution.", "alternatives": ["F1"]},
            "edaInsights": [{"observation": "Female survival rate is 3x higher.", "importance": "high"}],
            "baselineNotebook": (
                "# Titanic baseline\n"
                "import pandas as pd\n"
                "from sklearn.model_selection import cross_val_score\n"
                "from xgboost import XGBClassifier\n\n"
                "df = pd.read_csv('titanic.csv')\n"
                "X = pd.get_dummies(df[['Pclass', 'Sex', 'Age', 'Fare']])\n"
                "y = df['Survived']\n"
                "print(cross_val_score(XGBClassifier(max_depth=4), X, y, cv=5).mean())\n"
            ),
            "simulatedTraining": {
                "logs": _logs(5, loss=0.5, d_loss=0.05, val_loss=0.52, d_val_loss=0.04,
                              metric=0.7, d_metric=0.02, val_metric=0.68, d_val_metric=0.02),
                "finalMetricScore": 0.82,
                "featureImportance": [{"feature": "Sex", "importance": 0.5}, {"feature": "Pclass", "importance": 0.3}],
                "confusionMatrix": [[0.88, 0.12], [0.21, 0.79]],
            },
            "correlations": [{"x": "Sex", "y": "Survived", "value": 0.54}],
        }
    ),
)

_HOUSING = DemoDataset(
    key="housing",
    name="Ames Housing Prices",
    task="Regression",
    snapshot=_snapshot(
        "ames_housing.csv",
        [
            _num("SalePrice", [208500, 181500], mean=180921, unique=663),
            _num("GrLivArea", [1710, 1262], mean=1515, unique=861),
            _num("YearBuilt", [2003, 1976], mean=1971, unique=112),
            _num("TotalBsmtSF", [856, 1262], mean=1057, unique=721),
        ],
        1460,
    ),
    report=AnalysisReport.model_validate(
        {
            "summary": "High-dimensional regression problem. Focus on square footage and temporal features.",
            "problemType": "regression",
            "targetSuggestion": "SalePrice",
            "featureEngineering": [
                {"title": "Log Transformation", "description": "Scaling the target variable.", "reasoning": "Addresses right-skewness in price."},
                {"title": "Total Square Feet", "description": "Summing basement and living area.", "reasoning": "Stronger linear correlation."},
            ],
            "modelRecommendations": [
                {
                    "modelName": "Ridge Regression",
                    "suitability": "Solid Baseline",
                    "pros": ["Interpretability"],
                    "cons": ["Linear only"],
                    "hyperparameters": [{"param": "alpha", "range": "0.1-10", "description": "Regularization"}],
                }
            ],
            "metricRationale": {"recommendedMetric": "RMSE", "why": "Standard for price prediction.", "alternatives": ["MAE"]},
            "edaInsights": [{"observation": "Strong correlation between GrLivArea and SalePrice.", "importance": "high"}],
            "baselineNotebook": (
                "# Housing regression baseline\n"
                "import numpy as np\n"
                "import pandas as pd\n"
                "from sklearn.linear_model import Ridge\n"
                "from sklearn.model_selection import cross_val_score\n\n"
                "df = pd.read_csv('ames_housing.csv')\n"
                "X = df[['GrLivArea', 'YearBuilt', 'TotalBsmtSF']].fillna(0)\n"
                "y = np.log1p(df['SalePrice'])\n"
                "print(-cross_val_score(Ridge(alpha=1.0), X, y, cv=5, scoring='neg_root_mean_squared_error').mean())\n"
            ),
            "simulatedTraining": {
                "logs": _logs(5, loss=100, d_loss=10, val_loss=110, d_val_loss=9,
                              metric=0.2, d_metric=0.1, val_metric=0.18, d_val_metric=0.08),
                "finalMetricScore": 0.125,
                "featureImportance": [{"feature": "GrLivArea", "importance": 0.6}, {"feature": "OverallQual", "importance": 0.4}],
                "residuals": _residuals([208500, 181500, 223500, 140000, 250000, 143000, 307000, 200000]),
            },
            "correlations": [{"x": "GrLivArea", "y": "SalePrice", "value": 0.71}],
        }
    ),
)

_FRAUD = DemoDataset(
    key="fraud",
    name="Credit Card Fraud",
    task="Imbalanced Tabular",
    snapshot=_snapshot(
        "creditcard.csv",
        [
            _cat("Class", [0, 0, 0, 1], unique=2),
            _num("Amount", [149.62, 2.69], mean=88.34, unique=32767),
            _num("V1", [-1.35, 1.19], mean=0.0, unique=32767),
        ],
        284807,
    ),
    report=AnalysisReport.model_validate(
        {
            "summary": "Massively imbalanced fraud detection. 0.17% positive class. Requires precision-recall optimization.",
            "problemType": "classification",
            "targetSuggestion": "Class",
            "featureEngineering": [
                {"title": "Robust Scaling", "description": "Handling outliers in V-features.", "reasoning": "Standard scalers fail with extreme fraud patterns."},
                {"title": "SMOTE Oversampling", "description": "Synthetic minority class generation.", "reasoning": "Addresses extreme imbalance."},
            ],
            "modelRecommendations": [
                {
                    "modelName": "LightGBM",
                    "suitability": "Excellent",
                    "pros": ["Fast on large data"],
                    "cons": ["Memory intensive"],
                    "hyperparameters": [{"param": "is_unbalance", "range": "True", "description": "Class weighting"}],
                }
            ],
            "metricRationale": {"recommendedMetric": "PR-AUC", "why": "Accuracy is misleading for imbalanced data.", "alternatives": ["AUPRC"]},
            "edaInsights": [{"observation": "V17 and V14 show strongest separation for fraud.", "importance": "high"}],
            "baselineNotebook": (
                "# Fraud detection baseline\n"
                "import pandas as pd\n"
                "from lightgbm import LGBMClassifier\n"
                "from sklearn.metrics import average_precision_score\n"
                "from sklearn.model_selection import train_test_split\n\n"
                "df = pd.read_csv('creditcard.csv')\n"
                "X, y = df.drop(columns=['Class']), df['Class']\n"
                "X_tr, X_te, y_tr, y_te = train_test_split(X, y, stratify=y, random_state=42)\n"
                "model = LGBMClassifier(is_unbalance=True).fit(X_tr, y_tr)\n"
                "print(average_precision_score(y_te, model.predict_proba(X_te)[:, 1]))\n"
            ),
            "simulatedTraining": {
                "logs": _logs(5, loss=0.1, d_loss=0.01, val_loss=0.12, d_val_loss=0.008,
                              metric=0.9, d_metric=0.01, val_metric=0.88, d_val_metric=0.01),
                "finalMetricScore": 0.94,
                "featureImportance": [{"feature": "V17", "importance": 0.7}, {"feature": "Amount", "importance": 0.1}],
                "confusionMatrix": [[0.999, 0.001], [0.18, 0.82]],
            },
            "correlations": [{"x": "V17", "y": "Class", "value": -0.32}],
        }
    ),
)

DEMO_DATASETS: dict[str, DemoDataset] = {d.key: d for d in (_TITANIC, _HOUSING, _FRAUD)}


def list_demos() -> list[DemoDataset]:
    return list(DEMO_DATASETS.values())


def get_demo(key: str) -> DemoDataset:
    try:
        return DEMO_DATASETS[key.strip().lower()]
    except KeyError:
        raise KeyError(f"Unknown demo '{key}'. Available: {sorted(DEMO_DATASETS)}") from None
