"""Remote inference boundary: provider client and prompt text."""

from .client import LLMClient, OpenAIClient
from .prompts import (
    ANALYSIS_PHASES,
    ANALYSIS_SYSTEM_PROMPT,
    CHAT_EMPTY_ANSWER,
    CHAT_GREETING,
    build_analysis_prompt,
    build_chat_system_instruction,
)

__all__ = [
    "ANALYSIS_PHASES",
    "ANALYSIS_SYSTEM_PROMPT",
    "CHAT_EMPTY_ANSWER",
    "CHAT_GREETING",
    "LLMClient",
    "OpenAIClient",
    "build_analysis_prompt",
    "build_chat_system_instruction",
]
