"""Plot rendering for the simulated training section."""
import matplotlib.pyplot as plt
import pandas as pd
import streamlit as st

from dataset_advisor.report.schema import SimulatedTraining


def training_logs_frame(training: SimulatedTraining) -> pd.DataFrame:
    return pd.DataFrame(
        [log.model_dump() for log in training.logs],
        columns=["epoch", "loss", "val_loss", "metric", "val_metric"],
    ).set_index("epoch")


def render_training_curves(training: SimulatedTraining):
    """Loss and metric curves per epoch."""
    if not training.logs:
        st.info("No training logs in this report.")
        return

    df = training_logs_frame(training)
    col1, col2 = st.columns(2)
    with col1:
        st.markdown("**Loss**")
        st.line_chart(df[["loss", "val_loss"]])
    with col2:
        st.markdown("**Metric**")
        st.line_chart(df[["metric", "val_metric"]])


def render_feature_importance(training: SimulatedTraining):
    if not training.feature_importance:
        return
    df = pd.DataFrame(
        [{"feature": f.feature, "importance": f.importance} for f in training.feature_importance]
    ).sort_values("importance", ascending=False)
    st.markdown("**Feature importance**")
    st.bar_chart(df.set_index("feature"))


def render_confusion_matrix(training: SimulatedTraining):
    matrix = training.confusion_matrix
    # Needs a non-empty rectangular grid for imshow.
    if not matrix or not matrix[0] or any(len(row) != len(matrix[0]) for row in matrix):
        return
    fig, ax = plt.subplots(figsize=(3.2, 2.8))
    ax.imshow(matrix, cmap="Blues", vmin=0, vmax=1)
    for i, row in enumerate(matrix):
        for j, v in enumerate(row):
            ax.text(j, i, f"{v:.2f}", ha="center", va="center", fontsize=9)
    ax.set_xlabel("Predicted")
    ax.set_ylabel("Actual")
    ax.set_xticks(range(len(matrix[0])))
    ax.set_yticks(range(len(matrix)))
    st.markdown("**Confusion matrix (normalized)**")
    st.pyplot(fig)
    plt.close(fig)


def render_residuals(training: SimulatedTraining):
    if not training.residuals:
        return
    predicted = [r.predicted for r in training.residuals]
    actual = [r.actual for r in training.residuals]
    fig, ax = plt.subplots(figsize=(3.6, 2.8))
    ax.scatter(actual, predicted, s=14)
    lo, hi = min(actual + predicted), max(actual + predicted)
    ax.plot([lo, hi], [lo, hi], linestyle="--", linewidth=1, color="gray")
    ax.set_xlabel("Actual")
    ax.set_ylabel("Predicted")
    st.markdown("**Predicted vs actual**")
    st.pyplot(fig)
    plt.close(fig)
