"""Report sections: overview, features & models, training, code."""
import streamlit as st

from dataset_advisor.models import DatasetSnapshot
from dataset_advisor.report import AnalysisReport, render_report_markdown
from dataset_advisor.utils import safe_slug

from style_utils import IMPORTANCE_ICONS
from ui_components.plots import (
    render_confusion_matrix,
    render_feature_importance,
    render_residuals,
    render_training_curves,
)


def render_overview(report: AnalysisReport):
    st.subheader("Summary")
    st.markdown(report.summary)

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Problem Type", report.problem_type)
    with col2:
        st.metric("Suggested Target", report.target_suggestion)
    with col3:
        st.metric("Metric", report.metric_rationale.recommended_metric)

    st.markdown(f"**Why this metric:** {report.metric_rationale.why}")
    if report.metric_rationale.alternatives:
        st.caption("Alternatives: " + ", ".join(report.metric_rationale.alternatives))

    if report.eda_insights:
        st.subheader("EDA Insights")
        rank = {"high": 0, "medium": 1, "low": 2}
        for insight in sorted(report.eda_insights, key=lambda i: rank.get(i.importance, 3)):
            icon = IMPORTANCE_ICONS.get(insight.importance, "⚪")
            st.markdown(f"- {icon} {insight.observation}")

    if report.correlations:
        st.subheader("Correlations")
        for c in sorted(report.correlations, key=lambda c: -abs(c.value)):
            st.markdown(f"- `{c.x}` ~ `{c.y}`: **{c.value:+.2f}**")


def render_features_and_models(report: AnalysisReport):
    st.subheader("Feature Engineering")
    if not report.feature_engineering:
        st.info("No feature-engineering suggestions in this report.")
    for i, step in enumerate(report.feature_engineering, 1):
        with st.expander(f"{i}. {step.title}", expanded=i == 1):
            st.markdown(step.description)
            st.caption(f"Why: {step.reasoning}")

    st.subheader("Model Recommendations")
    for m in report.model_recommendations:
        st.markdown(f"**{m.model_name}** · _{m.suitability}_")
        col1, col2 = st.columns(2)
        with col1:
            for p in m.pros:
                st.markdown(f"- ✅ {p}")
        with col2:
            for c in m.cons:
                st.markdown(f"- ⚠️ {c}")
        if m.hyperparameters:
            st.table([{"param": h.param, "range": h.range, "description": h.description} for h in m.hyperparameters])


def render_training(report: AnalysisReport):
    training = report.simulated_training
    st.info("These curves are generated by the model for illustration. No model was trained.")
    st.metric("Final validation score", f"{training.final_metric_score:.4g}")
    render_training_curves(training)

    col1, col2 = st.columns(2)
    with col1:
        render_feature_importance(training)
    with col2:
        render_confusion_matrix(training)
        render_residuals(training)


def render_code(report: AnalysisReport, snapshot: DatasetSnapshot):
    st.subheader("Baseline Code")
    st.code(report.baseline_notebook, language="python")

    name = safe_slug(snapshot.source_name or "dataset")
    col1, col2 = st.columns(2)
    with col1:
        st.download_button(
            label="Download Code",
            data=report.baseline_notebook,
            file_name=f"{name}_baseline.py",
            mime="text/x-python",
        )
    with col2:
        st.download_button(
            label="Download Report (Markdown)",
            data=render_report_markdown(report, snapshot),
            file_name=f"{name}_report.md",
            mime="text/markdown",
        )
