from __future__ import annotations

import json

import pytest

from dataset_advisor.errors import AnalysisError, ChatError, MissingCredentialError
from dataset_advisor.llm.prompts import ANALYSIS_SYSTEM_PROMPT, CHAT_EMPTY_ANSWER
from dataset_advisor.orchestrator import AnalysisOrchestrator
from dataset_advisor.profile.csv_profiler import profile_csv_text
from dataset_advisor.report.schema import ReportValidationError


def test_request_analysis_sends_only_metadata(fake_client, small_csv):
    snap = profile_csv_text("a,b\n" + "\n".join(f"{i},v{i}" for i in range(20)))
    orch = AnalysisOrchestrator(fake_client)

    report = orch.request_analysis(snap)

    assert report.problem_type == "classification"
    assert orch.chat_ready
    (call,) = fake_client.json_calls
    assert call["system"] == ANALYSIS_SYSTEM_PROMPT

    # Instruction sentence first, then the JSON body.
    prompt = json.loads(call["prompt"].split("\n\n", 1)[1])
    meta = prompt["dataset_metadata"]
    assert meta["total_rows"] == 20
    # Only the first 5 rows leave the machine.
    assert len(meta["sample_rows"]) == 5
    assert "v19" not in call["prompt"]
    assert [c["name"] for c in meta["columns"]] == ["a", "b"]


def test_malformed_report_is_an_analysis_error(fake_client, report_obj, small_csv):
    del report_obj["correlations"]
    fake_client.report_obj = report_obj
    orch = AnalysisOrchestrator(fake_client)

    with pytest.raises(AnalysisError) as ei:
        orch.request_analysis(profile_csv_text(small_csv))

    assert isinstance(ei.value, ReportValidationError)
    assert "correlations" in str(ei.value)
    assert not orch.chat_ready


def test_provider_failure_propagates_without_retry(failing_client, small_csv):
    orch = AnalysisOrchestrator(failing_client)

    with pytest.raises(AnalysisError):
        orch.request_analysis(profile_csv_text(small_csv))

    assert len(failing_client.json_calls) == 1
    assert not orch.chat_ready


def test_missing_credentials_surface_as_configuration_error(fake_client, small_csv):
    fake_client.report_obj = MissingCredentialError()
    orch = AnalysisOrchestrator(fake_client)

    with pytest.raises(MissingCredentialError):
        orch.request_analysis(profile_csv_text(small_csv))


def test_chat_before_analysis_is_rejected(fake_client):
    orch = AnalysisOrchestrator(fake_client)
    with pytest.raises(ChatError):
        orch.ask_follow_up("What model?")
    assert fake_client.chat_calls == []


def test_follow_up_carries_report_context_and_history(fake_client, small_csv):
    fake_client.chat_answers = ["First answer.", "Second answer."]
    orch = AnalysisOrchestrator(fake_client)
    orch.request_analysis(profile_csv_text(small_csv))

    assert orch.ask_follow_up("Why LightGBM?") == "First answer."
    assert orch.ask_follow_up("  And the metric?  ") == "Second answer."

    first, second = fake_client.chat_calls
    assert first[0]["role"] == "system"
    assert "ROC-AUC" in first[0]["content"]
    assert first[-1] == {"role": "user", "content": "Why LightGBM?"}

    # Second call replays the completed first turn.
    assert second[1:] == [
        {"role": "user", "content": "Why LightGBM?"},
        {"role": "assistant", "content": "First answer."},
        {"role": "user", "content": "And the metric?"},
    ]


def test_empty_answer_gets_fallback_text(fake_client, small_csv):
    fake_client.chat_answers = ["   "]
    orch = AnalysisOrchestrator(fake_client)
    orch.request_analysis(profile_csv_text(small_csv))

    assert orch.ask_follow_up("Hello?") == CHAT_EMPTY_ANSWER


def test_failed_follow_up_is_chat_error_and_not_remembered(fake_client, small_csv):
    fake_client.chat_answers = [AnalysisError("timeout"), "Recovered."]
    orch = AnalysisOrchestrator(fake_client)
    orch.request_analysis(profile_csv_text(small_csv))

    with pytest.raises(ChatError) as ei:
        orch.ask_follow_up("First?")
    assert isinstance(ei.value.__cause__, AnalysisError)

    assert orch.ask_follow_up("Again?") == "Recovered."
    last_call = fake_client.chat_calls[-1]
    assert {"role": "user", "content": "First?"} not in last_call


def test_blank_question_is_rejected(fake_client, small_csv):
    orch = AnalysisOrchestrator(fake_client)
    orch.request_analysis(profile_csv_text(small_csv))
    with pytest.raises(ChatError):
        orch.ask_follow_up("   ")
    assert fake_client.chat_calls == []


def test_new_analysis_replaces_chat_channel(fake_client, small_csv):
    fake_client.chat_answers = ["one", "two"]
    orch = AnalysisOrchestrator(fake_client)
    orch.request_analysis(profile_csv_text(small_csv))
    orch.ask_follow_up("q1")

    orch.request_analysis(profile_csv_text(small_csv))
    orch.ask_follow_up("q2")

    # Fresh channel: system message plus the new question only.
    assert len(fake_client.chat_calls[-1]) == 2


def test_reset_drops_chat(fake_client, small_csv):
    orch = AnalysisOrchestrator(fake_client)
    orch.request_analysis(profile_csv_text(small_csv))
    orch.reset()
    assert not orch.chat_ready


def test_unexpected_chat_failure_becomes_chat_error(fake_client, small_csv):
    fake_client.chat_answers = [RuntimeError("socket closed")]
    orch = AnalysisOrchestrator(fake_client)
    orch.request_analysis(profile_csv_text(small_csv))

    with pytest.raises(ChatError) as ei:
        orch.ask_follow_up("Still there?")
    assert isinstance(ei.value.__cause__, RuntimeError)
    assert orch.chat_ready
