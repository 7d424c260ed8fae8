from __future__ import annotations

from typing import Optional

from ..models import DatasetSnapshot
from .schema import AnalysisReport

_IMPORTANCE_RANK = {"high": 3, "medium": 2, "low": 1}


def _fmt(v: float, digits: int = 4) -> str:
    return f"{v:.{digits}g}"


def render_report_markdown(report: AnalysisReport, snapshot: Optional[DatasetSnapshot] = None) -> str:
    """Render a report as deterministic Markdown (CLI output and downloads)."""

    lines: list[str] = []
    title = snapshot.source_name if snapshot is not None and snapshot.source_name else "dataset"
    lines.append(f"# Analysis report: {title}\n")
    if snapshot is not None:
        lines.append(f"\n_{snapshot.row_count} rows × {snapshot.column_count} columns._\n")

    lines.append("\n## Summary\n\n")
    lines.append(report.summary.strip() + "\n")

    lines.append("\n## Problem\n\n")
    lines.append(f"- Problem type: **{report.problem_type}**\n")
    lines.append(f"- Suggested target: `{report.target_suggestion}`\n")

    mr = report.metric_rationale
    lines.append("\n## Evaluation metric\n\n")
    lines.append(f"- Recommended: **{mr.recommended_metric}**. {mr.why.strip()}\n")
    if mr.alternatives:
        lines.append(f"- Alternatives: {', '.join(mr.alternatives)}\n")

    if report.feature_engineering:
        lines.append("\n## Feature engineering\n\n")
        for i, step in enumerate(report.feature_engineering, 1):
            lines.append(f"{i}. **{step.title}**: {step.description.strip()}\n")
            lines.append(f"   - Why: {step.reasoning.strip()}\n")

    if report.model_recommendations:
        lines.append("\n## Model recommendations\n")
        for m in report.model_recommendations:
            lines.append(f"\n### {m.model_name} ({m.suitability})\n\n")
            if m.pros:
                lines.append(f"- Pros: {'; '.join(m.pros)}\n")
            if m.cons:
                lines.append(f"- Cons: {'; '.join(m.cons)}\n")
            if m.hyperparameters:
                lines.append("\n| param | range | description |\n|---|---|---|\n")
                for hp in m.hyperparameters:
                    lines.append(f"| {hp.param} | {hp.range} | {hp.description} |\n")

    if report.eda_insights:
        lines.append("\n## EDA insights\n\n")
        # Stable sort keeps the model's order within one importance level.
        ordered = sorted(report.eda_insights, key=lambda e: -_IMPORTANCE_RANK.get(e.importance, 0))
        for e in ordered:
            lines.append(f"- [{e.importance}] {e.observation.strip()}\n")

    st = report.simulated_training
    lines.append("\n## Simulated training\n\n")
    lines.append("_Generated by the model for illustration; no model was trained._\n\n")
    lines.append(f"- Final validation score: {_fmt(st.final_metric_score)}\n")
    if st.logs:
        lines.append("\n| epoch | loss | val_loss | metric | val_metric |\n|---|---|---|---|---|\n")
        for log in st.logs:
            lines.append(
                f"| {log.epoch} | {_fmt(log.loss)} | {_fmt(log.val_loss)} | {_fmt(log.metric)} | {_fmt(log.val_metric)} |\n"
            )
    if st.feature_importance:
        lines.append("\nTop features:\n\n")
        for fi in sorted(st.feature_importance, key=lambda f: -f.importance):
            lines.append(f"- {fi.feature}: {_fmt(fi.importance, 3)}\n")
    if st.confusion_matrix:
        lines.append("\nConfusion matrix (normalized):\n\n")
        for row in st.confusion_matrix:
            lines.append("    " + "  ".join(f"{v:.2f}" for v in row) + "\n")
    if st.residuals:
        lines.append(f"\nResiduals: {len(st.residuals)} predicted/actual pairs.\n")

    if report.correlations:
        lines.append("\n## Correlations\n\n")
        for c in sorted(report.correlations, key=lambda c: -abs(c.value)):
            lines.append(f"- {c.x} ~ {c.y}: {c.value:+.2f}\n")

    lines.append("\n## Baseline code\n\n```python\n")
    lines.append(report.baseline_notebook.rstrip() + "\n")
    lines.append("```\n")

    return "".join(lines).strip() + "\n"
