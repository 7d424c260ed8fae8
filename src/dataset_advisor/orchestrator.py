from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from .errors import ChatError, DatasetAdvisorError
from .llm.client import LLMClient
from .llm.prompts import (
    ANALYSIS_SYSTEM_PROMPT,
    CHAT_EMPTY_ANSWER,
    build_analysis_prompt,
    build_chat_system_instruction,
)
from .models import DatasetSnapshot
from .profile.summarize import snapshot_to_payload
from .report.schema import AnalysisReport, validate_report_obj

logger = logging.getLogger(__name__)


@dataclass
class ChatChannel:
    """Follow-up conversation bound to one report.

    history holds completed user/assistant turns only; a failed turn leaves
    it untouched.
    """

    client: LLMClient
    system_instruction: str
    history: list[dict[str, str]] = field(default_factory=list)

    def send(self, message: str) -> str:
        messages = [{"role": "system", "content": self.system_instruction}]
        messages.extend(self.history)
        messages.append({"role": "user", "content": message})
        answer = self.client.chat(messages).strip()
        if not answer:
            answer = CHAT_EMPTY_ANSWER
        self.history.append({"role": "user", "content": message})
        self.history.append({"role": "assistant", "content": answer})
        return answer


class AnalysisOrchestrator:
    """Single-attempt analysis requests plus the follow-up chat channel.

    - request_analysis: snapshot metadata -> validated AnalysisReport.
      Raises AnalysisError (or ConfigurationError / MissingCredentialError).
    - ask_follow_up: only after a successful request_analysis; raises ChatError.
    """

    def __init__(self, client: LLMClient) -> None:
        self._client = client
        self._chat: Optional[ChatChannel] = None

    @property
    def chat_ready(self) -> bool:
        return self._chat is not None

    def reset(self) -> None:
        """Drop the chat channel (new upload, demo load, or session reset)."""
        self._chat = None

    def request_analysis(self, snapshot: DatasetSnapshot) -> AnalysisReport:
        # Any previous conversation belongs to the previous report.
        self._chat = None

        prompt = build_analysis_prompt(snapshot_to_payload(snapshot))
        obj = self._client.complete_json(system=ANALYSIS_SYSTEM_PROMPT, prompt=prompt)
        report = validate_report_obj(obj)

        self._chat = ChatChannel(
            client=self._client,
            system_instruction=build_chat_system_instruction(report),
        )
        logger.info(
            "analysis complete: problem_type=%s target=%s",
            report.problem_type, report.target_suggestion,
        )
        return report

    def ask_follow_up(self, message: str) -> str:
        if self._chat is None:
            raise ChatError("Analysis must be performed before chatting.")
        if not message or not message.strip():
            raise ChatError("Please enter a question.")
        try:
            return self._chat.send(message.strip())
        except DatasetAdvisorError as e:
            logger.warning("follow-up failed: %s", e)
            raise ChatError() from e
        except Exception as e:
            logger.exception("unexpected follow-up failure")
            raise ChatError() from e
