"""Per-column statistic cards."""
import html

import streamlit as st

from dataset_advisor.models import Column, DatasetSnapshot
from dataset_advisor.profile.summarize import missing_fraction, sample_rows_frame, snapshot_to_frame

from style_utils import COLORS, format_percent, type_badge


def column_card_html(column: Column, row_count: int) -> str:
    """Card markup for one column. The name comes from the upload and is escaped."""
    missing = missing_fraction(column.stats.missing_count, row_count)
    color = COLORS["critical"] if column.stats.missing_count else COLORS["success"]
    mean = getattr(column.stats, "mean", None)
    mean_line = f"<br/>Mean: <b>{mean:,.2f}</b>" if mean is not None else ""
    return f"""
<div style="border: 1px solid rgba(0,0,0,0.1); border-radius: 8px; padding: 10px 12px; margin-bottom: 10px;">
    <div style="display: flex; justify-content: space-between; align-items: center;">
        <strong>{html.escape(column.name)}</strong> {type_badge(column.type)}
    </div>
    <div style="font-size: 0.85em; margin-top: 6px;">
        Missing: <b style="color: {color};">{format_percent(missing)}</b>
        &nbsp;·&nbsp; Unique: <b>{column.stats.unique_count:,}</b>{mean_line}
    </div>
</div>
"""


def render_column_cards(snapshot: DatasetSnapshot, cards_per_row: int = 3):
    """Render one card per column: type badge, missing %, unique count, mean."""
    if not snapshot.columns:
        st.info("No columns found.")
        return

    columns = list(snapshot.columns)
    for start in range(0, len(columns), cards_per_row):
        cols = st.columns(cards_per_row)
        for slot, column in zip(cols, columns[start:start + cards_per_row]):
            with slot:
                st.markdown(column_card_html(column, snapshot.row_count), unsafe_allow_html=True)
                if column.sample_values:
                    st.caption("e.g. " + ", ".join(f"`{v[:30]}`" for v in column.sample_values[:3]))


def render_profile_table(snapshot: DatasetSnapshot):
    """Tabular view of the same statistics plus the first rows."""
    st.dataframe(snapshot_to_frame(snapshot), hide_index=True, width="stretch")
    if snapshot.sample_rows:
        with st.expander(f"First {len(snapshot.sample_rows)} rows"):
            st.dataframe(sample_rows_frame(snapshot), hide_index=True, width="stretch")
