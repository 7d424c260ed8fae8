from __future__ import annotations

import pytest

from dataset_advisor.errors import AnalysisError, ChatError, ParseError
from dataset_advisor.llm.prompts import CHAT_GREETING
from dataset_advisor.session import AnalysisSession


def test_load_csv_replaces_previous_state(fake_client, small_csv):
    session = AnalysisSession.create(client=fake_client)
    session.load_csv(small_csv, source_name="first.csv")
    session.analyze()
    session.ask("Which features matter?")
    assert session.report is not None
    assert len(session.transcript) == 3

    snap = session.load_csv(b"x,y,z\n1,2,3\n", source_name="second.csv")

    assert session.snapshot is snap
    assert snap.header == ("x", "y", "z")
    assert session.report is None
    assert session.transcript == []
    assert not session.can_chat
    assert session.state.status == "completed"


def test_failed_upload_keeps_previous_dataset(fake_client, small_csv):
    session = AnalysisSession.create(client=fake_client)
    first = session.load_csv(small_csv, source_name="good.csv")

    with pytest.raises(ParseError):
        session.load_csv("  \n\n", source_name="empty.csv")

    assert session.snapshot is first
    assert session.state.status == "error"
    assert "empty file" in session.state.error


def test_analyze_requires_a_dataset(fake_client):
    session = AnalysisSession.create(client=fake_client)
    with pytest.raises(AnalysisError):
        session.analyze()
    assert fake_client.json_calls == []


def test_analyze_seeds_greeting_and_enables_chat(fake_client, small_csv):
    session = AnalysisSession.create(client=fake_client)
    session.load_csv(small_csv, source_name="data.csv")

    report = session.analyze()

    assert session.report is report
    assert session.can_chat
    assert session.state.status == "completed"
    assert [m.role for m in session.transcript] == ["assistant"]
    assert session.transcript[0].content == CHAT_GREETING


def test_failed_analysis_sets_error_state(failing_client, small_csv):
    session = AnalysisSession.create(client=failing_client)
    snap = session.load_csv(small_csv)

    with pytest.raises(AnalysisError):
        session.analyze()

    assert session.snapshot is snap
    assert session.report is None
    assert session.state.status == "error"
    assert session.state.error == "upstream timed out"

    # A later attempt is allowed.
    with pytest.raises(AnalysisError):
        session.analyze()
    assert len(failing_client.json_calls) == 2


def test_chat_before_analysis_records_nothing(fake_client, small_csv):
    session = AnalysisSession.create(client=fake_client)
    session.load_csv(small_csv)

    with pytest.raises(ChatError):
        session.ask("Hello?")
    assert session.transcript == []


def test_chat_turns_are_recorded(fake_client, small_csv):
    session = AnalysisSession.create(client=fake_client)
    session.load_csv(small_csv)
    session.analyze()

    answer = session.ask("  How to encode b?  ")

    assert answer == "Use target encoding."
    assert [(m.role, m.content) for m in session.transcript[1:]] == [
        ("user", "How to encode b?"),
        ("assistant", "Use target encoding."),
    ]


def test_failed_chat_turn_records_apology_and_keeps_report(fake_client, small_csv):
    fake_client.chat_answers = [AnalysisError("boom")]
    session = AnalysisSession.create(client=fake_client)
    session.load_csv(small_csv)
    report = session.analyze()

    with pytest.raises(ChatError):
        session.ask("Why?")

    assert session.report is report
    assert session.transcript[-2].role == "user"
    assert session.transcript[-1].role == "assistant"
    assert session.transcript[-1].content == ChatError.default_message
    assert session.can_chat


def test_load_demo_needs_no_remote_call(fake_client):
    session = AnalysisSession.create(client=fake_client)

    session.load_demo("Titanic")

    assert session.demo_key == "titanic"
    assert session.snapshot.row_count == 891
    assert session.report is not None
    assert fake_client.json_calls == []
    # Demo reports are static; chat needs a real analysis first.
    assert not session.can_chat


def test_load_demo_unknown_key(fake_client):
    session = AnalysisSession.create(client=fake_client)
    with pytest.raises(KeyError):
        session.load_demo("mnist")


def test_reset_returns_to_idle(fake_client, small_csv):
    session = AnalysisSession.create(client=fake_client)
    session.load_csv(small_csv)
    session.analyze()

    session.reset()

    assert session.snapshot is None
    assert session.report is None
    assert session.transcript == []
    assert session.state.status == "idle"
    assert not session.orchestrator.chat_ready


class _BrokenClient:
    def complete_json(self, *, system, prompt):
        raise RuntimeError("socket closed")

    def chat(self, messages):
        raise RuntimeError("socket closed")


def test_unexpected_analysis_failure_does_not_lock_the_session(small_csv):
    session = AnalysisSession.create(client=_BrokenClient())
    session.load_csv(small_csv)

    with pytest.raises(AnalysisError) as ei:
        session.analyze()
    assert isinstance(ei.value.__cause__, RuntimeError)
    assert session.state.status == "error"

    # Retrying reaches the client again instead of "already in progress".
    with pytest.raises(AnalysisError) as ei:
        session.analyze()
    assert isinstance(ei.value.__cause__, RuntimeError)


def test_unexpected_profiling_failure_sets_error_state(monkeypatch, fake_client, small_csv):
    session = AnalysisSession.create(client=fake_client)
    first = session.load_csv(small_csv)

    def _boom(text, *, source_name=None):
        raise RuntimeError("bad input")

    monkeypatch.setattr("dataset_advisor.session.profile_csv_text", _boom)
    with pytest.raises(ParseError) as ei:
        session.load_csv("a\n1\n")

    assert isinstance(ei.value.__cause__, RuntimeError)
    assert session.state.status == "error"
    assert session.snapshot is first


def test_huge_numbers_load_cleanly(fake_client):
    session = AnalysisSession.create(client=fake_client)
    snap = session.load_csv("a\n1e308\n1e308\n1e400\n")
    assert session.state.status == "completed"
    assert snap.columns[0].stats.mean is None
