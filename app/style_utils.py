"""Style utilities for consistent UI presentation."""
import streamlit as st

COLORS = {
    "primary": "#1E88E5",
    "secondary": "#6C757D",
    "success": "#28A745",
    "warning": "#FFC107",
    "critical": "#DC3545",
    "info": "#17A2B8",
    "purple": "#8E44AD",
}

TYPE_COLORS = {
    "numeric": COLORS["primary"],
    "categorical": COLORS["purple"],
    "text": COLORS["secondary"],
    "unknown": COLORS["secondary"],
}

IMPORTANCE_ICONS = {
    "high": "🔴",
    "medium": "🟠",
    "low": "🔵",
}


def format_number(value: float, decimals: int = 0) -> str:
    """Format a number with thousands separators."""
    if decimals == 0:
        return f"{value:,.0f}"
    return f"{value:,.{decimals}f}"


def format_percent(value: float, decimals: int = 1) -> str:
    return f"{value * 100:.{decimals}f}%"


def type_badge(column_type: str) -> str:
    color = TYPE_COLORS.get(column_type, COLORS["secondary"])
    return (
        f'<span style="font-size: 0.7em; font-weight: 700; text-transform: uppercase; '
        f'color: {color}; background: rgba(0,0,0,0.05); padding: 2px 6px; border-radius: 4px;">'
        f"{column_type}</span>"
    )


def section_divider():
    st.markdown("---")
