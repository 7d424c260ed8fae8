from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from dataset_advisor.cli import app
from dataset_advisor.orchestrator import AnalysisOrchestrator
from dataset_advisor.session import AnalysisSession

runner = CliRunner()


def _write_csv(tmp_path: Path, text: str, name: str = "data.csv") -> Path:
    p = tmp_path / name
    p.write_text(text, encoding="utf-8")
    return p


@pytest.fixture
def offline_session(monkeypatch, fake_client):
    def _create(settings=None, client=None):
        return AnalysisSession(orchestrator=AnalysisOrchestrator(fake_client))

    monkeypatch.setattr("dataset_advisor.cli.AnalysisSession.create", _create)
    return fake_client


def test_profile_table(tmp_path, small_csv):
    result = runner.invoke(app, ["profile", str(_write_csv(tmp_path, small_csv))])

    assert result.exit_code == 0, result.output
    assert "data.csv: 3 rows x 2 columns" in result.output
    assert "numeric" in result.output
    assert "categorical" in result.output


def test_profile_json(tmp_path, small_csv):
    result = runner.invoke(app, ["profile", str(_write_csv(tmp_path, small_csv)), "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["rowCount"] == 3
    a, b = payload["columns"]
    assert a["type"] == "numeric" and a["stats"]["mean"] == 2.0
    assert "mean" not in b["stats"]
    assert payload["sampleRows"][0] == {"a": "1", "b": "x"}


def test_profile_empty_file_exits_with_parse_code(tmp_path):
    result = runner.invoke(app, ["profile", str(_write_csv(tmp_path, "\n  \n"))])
    assert result.exit_code == 2
    assert "empty file" in result.output


def test_analyze_writes_report_and_renders(tmp_path, small_csv, offline_session):
    out = tmp_path / "out" / "report.json"
    result = runner.invoke(app, ["analyze", str(_write_csv(tmp_path, small_csv)), "--out", str(out)])

    assert result.exit_code == 0, result.output
    assert out.exists()
    assert json.loads(out.read_text(encoding="utf-8"))["problemType"] == "classification"
    assert "# Analysis report: data.csv" in result.output

    rendered = runner.invoke(app, ["render", str(out)])
    assert rendered.exit_code == 0, rendered.output
    assert "## Model recommendations" in rendered.output


def test_analyze_without_key_exits_with_config_code(tmp_path, small_csv, monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("AI_INTEGRATIONS_OPENAI_API_KEY", raising=False)

    result = runner.invoke(app, ["analyze", str(_write_csv(tmp_path, small_csv))])

    assert result.exit_code == 3
    assert "OPENAI_API_KEY" in result.output


def test_analyze_failure_exits_1(tmp_path, small_csv, offline_session, report_obj):
    del report_obj["summary"]
    offline_session.report_obj = report_obj

    result = runner.invoke(app, ["analyze", str(_write_csv(tmp_path, small_csv)), "--no-markdown"])

    assert result.exit_code == 1
    assert "summary" in result.output


def test_chat_loop(tmp_path, small_csv, offline_session):
    result = runner.invoke(app, ["chat", str(_write_csv(tmp_path, small_csv))], input="How to encode b?\nexit\n")

    assert result.exit_code == 0, result.output
    assert "Problem type: classification" in result.output
    assert "assistant: Use target encoding." in result.output
    assert len(offline_session.chat_calls) == 1


def test_render_rejects_invalid_report(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"summary": "only this"}), encoding="utf-8")

    result = runner.invoke(app, ["render", str(bad)])

    assert result.exit_code == 1
    assert "missing sections" in result.output


def test_demo_list_and_show():
    listed = runner.invoke(app, ["demo", "list"])
    assert listed.exit_code == 0
    assert "titanic\tTitanic Survival (Classification, 891 rows)" in listed.output

    shown = runner.invoke(app, ["demo", "show", "housing"])
    assert shown.exit_code == 0
    assert "SalePrice" in shown.output

    as_json = runner.invoke(app, ["demo", "show", "fraud", "--json"])
    assert json.loads(as_json.output)["targetSuggestion"] == "Class"

    missing = runner.invoke(app, ["demo", "show", "iris"])
    assert missing.exit_code == 1
    assert "Unknown demo" in missing.output
