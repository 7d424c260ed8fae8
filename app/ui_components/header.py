"""Shared dataset summary header component."""
import streamlit as st

from dataset_advisor.models import DatasetSnapshot

from style_utils import format_number, section_divider


def render_dataset_header(snapshot: DatasetSnapshot, demo_name: str = None):
    """
    Render a consistent dataset summary header across all tabs.

    Args:
        snapshot: The current dataset snapshot
        demo_name: Display name when the snapshot is a bundled demo
    """
    total_missing = sum(c.stats.missing_count for c in snapshot.columns)
    cells = snapshot.row_count * snapshot.column_count
    numeric = sum(1 for c in snapshot.columns if c.type == "numeric")

    section_divider()

    col1, col2, col3, col4 = st.columns(4)

    with col1:
        st.metric("Rows", format_number(snapshot.row_count))
        st.caption(f"**Source:** `{demo_name or snapshot.source_name or 'upload'}`")

    with col2:
        st.metric("Columns", snapshot.column_count)
        st.caption(f"**Numeric:** {numeric}")

    with col3:
        st.metric("Missing Cells", format_number(total_missing))
        pct = (total_missing / cells * 100) if cells else 0.0
        st.caption(f"**Missing:** {pct:.1f}%")

    with col4:
        categorical = sum(1 for c in snapshot.columns if c.type == "categorical")
        st.metric("Categorical", categorical)
        st.caption(f"**Text/unknown:** {snapshot.column_count - numeric - categorical}")

    section_divider()
