from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional, Protocol, Sequence

from ..config import Settings
from ..errors import AnalysisError, ConfigurationError, MissingCredentialError

logger = logging.getLogger(__name__)


class LLMClient(Protocol):
    """What the orchestrator needs from an inference provider."""

    def complete_json(self, *, system: str, prompt: str) -> dict[str, Any]:
        ...

    def chat(self, messages: Sequence[Mapping[str, str]]) -> str:
        ...


class OpenAIClient:
    """OpenAI chat-completions backend.

    One attempt per call (SDK retries disabled). SDK failures are mapped to:
    - AuthenticationError / PermissionDeniedError -> ConfigurationError
    - any other OpenAIError -> AnalysisError
    A missing key raises MissingCredentialError before any request is made.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or Settings.from_env()
        self._client: Any = None

    @property
    def configured(self) -> bool:
        return bool(self.settings.api_key)

    def _get_client(self) -> Any:
        if not self.settings.api_key:
            raise MissingCredentialError()
        if self._client is None:
            # Lazy import so profiling-only use and tests stay offline.
            from openai import OpenAI

            self._client = OpenAI(
                api_key=self.settings.api_key,
                base_url=self.settings.base_url,
                timeout=self.settings.timeout,
                max_retries=0,
            )
        return self._client

    def _create(self, messages: list[dict[str, str]], **kwargs: Any) -> str:
        import openai

        client = self._get_client()
        logger.info("requesting completion model=%s messages=%d", self.settings.model, len(messages))
        try:
            resp = client.chat.completions.create(
                model=self.settings.model,
                messages=messages,
                temperature=self.settings.temperature,
                **kwargs,
            )
        except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
            raise ConfigurationError(
                "The AI service rejected the configured API key. Check OPENAI_API_KEY."
            ) from e
        except openai.NotFoundError as e:
            raise ConfigurationError(
                f"Model '{self.settings.model}' is not available. Check DATASET_ADVISOR_LLM_MODEL."
            ) from e
        except openai.OpenAIError as e:
            logger.warning("completion failed: %s", type(e).__name__)
            raise AnalysisError(f"AI request failed: {type(e).__name__}.") from e

        if not resp.choices:
            return ""
        return (resp.choices[0].message.content or "").strip()

    def complete_json(self, *, system: str, prompt: str) -> dict[str, Any]:
        text = self._create(
            [{"role": "system", "content": system}, {"role": "user", "content": prompt}],
            response_format={"type": "json_object"},
        )
        try:
            obj = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning("model returned non-JSON output (%d chars)", len(text))
            raise AnalysisError("Invalid response format from AI. Please try again.") from e
        if not isinstance(obj, dict):
            raise AnalysisError("Invalid response format from AI. Please try again.")
        return obj

    def chat(self, messages: Sequence[Mapping[str, str]]) -> str:
        return self._create([{"role": m["role"], "content": m["content"]} for m in messages])
