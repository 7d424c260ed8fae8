from __future__ import annotations

import sys
from pathlib import Path
from types import SimpleNamespace

APP_DIR = Path(__file__).resolve().parents[1] / "app"
if str(APP_DIR) not in sys.path:
    sys.path.insert(0, str(APP_DIR))

from dataset_advisor.profile.csv_profiler import profile_csv_text  # noqa: E402
from ui_components import plots  # noqa: E402
from ui_components.data_stats import column_card_html  # noqa: E402


def test_column_card_escapes_header_markup() -> None:
    snap = profile_csv_text("<b>price</b>,qty\n1,2\n")
    card = column_card_html(snap.columns[0], snap.row_count)

    assert "&lt;b&gt;price&lt;/b&gt;" in card
    assert "<b>price</b>" not in card
    assert "Mean: <b>1.00</b>" in card


def test_confusion_matrix_skips_ragged_input(monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(plots.plt, "subplots", lambda *a, **k: calls.append(a))

    for matrix in ([[]], [[0.9, 0.1], [0.2]], None):
        plots.render_confusion_matrix(SimpleNamespace(confusion_matrix=matrix))

    assert calls == []
