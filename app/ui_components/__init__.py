"""UI components for the Dataset Advisor dashboard."""
from .header import render_dataset_header
from .data_stats import render_column_cards, render_profile_table
from .analysis import render_code, render_features_and_models, render_overview, render_training
from .chat import render_chat

__all__ = [
    "render_dataset_header",
    "render_column_cards",
    "render_profile_table",
    "render_overview",
    "render_features_and_models",
    "render_training",
    "render_code",
    "render_chat",
]
