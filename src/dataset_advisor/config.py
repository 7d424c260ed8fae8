from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TIMEOUT_SECONDS = 60.0
DEFAULT_LOG_LEVEL = "WARNING"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    """Runtime configuration, read from the environment.

    api_key: OPENAI_API_KEY, falling back to AI_INTEGRATIONS_OPENAI_API_KEY
    base_url: OPENAI_BASE_URL (optional, for compatible gateways)
    model: DATASET_ADVISOR_LLM_MODEL
    timeout: DATASET_ADVISOR_LLM_TIMEOUT in seconds
    log_level: DATASET_ADVISOR_LOG_LEVEL
    """

    api_key: Optional[str] = None
    base_url: Optional[str] = None
    model: str = DEFAULT_MODEL
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    temperature: float = 0.2
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        api_key = env.get("OPENAI_API_KEY") or env.get("AI_INTEGRATIONS_OPENAI_API_KEY") or None
        base_url = env.get("OPENAI_BASE_URL") or env.get("AI_INTEGRATIONS_OPENAI_BASE_URL") or None
        return cls(
            api_key=api_key,
            base_url=base_url,
            model=(env.get("DATASET_ADVISOR_LLM_MODEL") or DEFAULT_MODEL).strip(),
            timeout=_get_positive_float(env.get("DATASET_ADVISOR_LLM_TIMEOUT"), DEFAULT_TIMEOUT_SECONDS),
            log_level=(env.get("DATASET_ADVISOR_LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper(),
        )

    def with_api_key(self, api_key: Optional[str]) -> "Settings":
        """Return a copy with an explicit key (e.g. from st.secrets) taking priority."""
        if not api_key:
            return self
        return Settings(
            api_key=api_key,
            base_url=self.base_url,
            model=self.model,
            timeout=self.timeout,
            temperature=self.temperature,
            log_level=self.log_level,
        )


def _get_positive_float(raw: Optional[str], default: float) -> float:
    if raw is None or raw.strip() == "":
        return default
    try:
        v = float(raw)
        return v if v > 0 else default
    except ValueError:
        return default


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.WARNING), format=LOG_FORMAT)
