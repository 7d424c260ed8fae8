from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Union

from .config import Settings
from .demo_data import get_demo
from .errors import AnalysisError, ChatError, DatasetAdvisorError, ParseError
from .llm.client import LLMClient, OpenAIClient
from .llm.prompts import CHAT_GREETING
from .models import ChatMessage, DatasetSnapshot, ProcessingState
from .orchestrator import AnalysisOrchestrator
from .profile.csv_profiler import profile_csv_bytes, profile_csv_text
from .report.schema import AnalysisReport

logger = logging.getLogger(__name__)


@dataclass
class AnalysisSession:
    """
    Everything one user is working on: the current snapshot, its report and
    the chat transcript.

    Every change is a wholesale replacement. A new upload discards the old
    snapshot, report and transcript together; a failed upload keeps them.
    """
    orchestrator: AnalysisOrchestrator
    snapshot: Optional[DatasetSnapshot] = None
    report: Optional[AnalysisReport] = None
    transcript: list[ChatMessage] = field(default_factory=list)
    state: ProcessingState = field(default_factory=ProcessingState)
    demo_key: Optional[str] = None
    _chat_in_flight: bool = field(default=False, init=False, repr=False)

    @classmethod
    def create(cls, settings: Optional[Settings] = None, client: Optional[LLMClient] = None) -> "AnalysisSession":
        return cls(orchestrator=AnalysisOrchestrator(client or OpenAIClient(settings)))

    @property
    def can_chat(self) -> bool:
        return self.report is not None and self.orchestrator.chat_ready

    def _fail(self, err: DatasetAdvisorError) -> None:
        self.state = ProcessingState(status="error", progress=0, error=err.message)

    def load_csv(self, content: Union[str, bytes], *, source_name: Optional[str] = None) -> DatasetSnapshot:
        """Profile an upload and make it the current dataset."""
        self.state = ProcessingState(status="parsing", progress=10)
        try:
            if isinstance(content, bytes):
                snapshot = profile_csv_bytes(content, source_name=source_name)
            else:
                snapshot = profile_csv_text(content, source_name=source_name)
        except ParseError as e:
            self._fail(e)
            raise
        except Exception as e:
            logger.exception("unexpected failure while profiling %s", source_name or "<upload>")
            err = ParseError()
            self._fail(err)
            raise err from e

        self.orchestrator.reset()
        self.snapshot = snapshot
        self.report = None
        self.transcript = []
        self.demo_key = None
        self.state = ProcessingState(status="completed", progress=100)
        return snapshot

    def load_demo(self, key: str) -> None:
        """Install a bundled snapshot and report. No remote call is made."""
        demo = get_demo(key)
        self.orchestrator.reset()
        self.snapshot = demo.snapshot
        self.report = demo.report
        self.transcript = []
        self.demo_key = demo.key
        self.state = ProcessingState(status="completed", progress=100)

    def analyze(self) -> AnalysisReport:
        if self.snapshot is None or not self.snapshot.columns:
            raise AnalysisError("Upload a dataset before requesting an analysis.")
        if self.state.status == "analyzing":
            raise AnalysisError("An analysis is already in progress.")

        self.state = ProcessingState(status="analyzing", progress=50)
        self.report = None
        self.transcript = []
        try:
            report = self.orchestrator.request_analysis(self.snapshot)
        except AnalysisError as e:
            self._fail(e)
            raise
        except Exception as e:
            logger.exception("unexpected failure during analysis")
            err = AnalysisError()
            self._fail(err)
            raise err from e

        self.report = report
        self.demo_key = None
        self.transcript = [ChatMessage(role="assistant", content=CHAT_GREETING)]
        self.state = ProcessingState(status="completed", progress=100)
        return report

    def ask(self, message: str) -> str:
        """
        Ask a follow-up question.

        Fails fast with ChatError (nothing recorded) before any analysis.
        Otherwise the user turn is recorded; on ChatError the fixed apology is
        recorded as the assistant turn and the error is re-raised. The report
        is kept either way.
        """
        if not self.orchestrator.chat_ready:
            raise ChatError("Analysis must be performed before chatting.")
        if self._chat_in_flight:
            raise ChatError("Please wait for the previous answer.")
        if not message or not message.strip():
            raise ChatError("Please enter a question.")

        self.transcript.append(ChatMessage(role="user", content=message.strip()))
        self._chat_in_flight = True
        try:
            answer = self.orchestrator.ask_follow_up(message)
        except ChatError as e:
            self.transcript.append(ChatMessage(role="assistant", content=ChatError.default_message))
            logger.info("chat turn failed: %s", e)
            raise
        finally:
            self._chat_in_flight = False

        self.transcript.append(ChatMessage(role="assistant", content=answer))
        return answer

    def reset(self) -> None:
        self.orchestrator.reset()
        self.snapshot = None
        self.report = None
        self.transcript = []
        self.demo_key = None
        self.state = ProcessingState()
