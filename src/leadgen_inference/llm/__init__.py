"""
Provider client abstraction and implementations.

Components:
- BaseLLMClient: Abstract base class for provider clients
- OpenAIClient: Primary provider (Chat Completions + function calling)
- GeminiClient: Secondary provider (generateContent, JSON mode with plain-text fallback)
- PromptBuilder: Renders per-attempt prompts from Jinja2 templates
- exceptions: Provider client exceptions
"""

from leadgen_inference.llm.base_client import BaseLLMClient
from leadgen_inference.llm.gemini_client import GeminiClient
from leadgen_inference.llm.openai_client import OpenAIClient
from leadgen_inference.llm.prompt_builder import PromptBuilder
from leadgen_inference.llm.exceptions import (
    LLMAuthenticationError,
    LLMClientError,
    LLMConnectionError,
    LLMGenerationError,
    LLMRateLimitError,
    LLMServiceUnavailableError,
    LLMTimeoutError,
)

__all__ = [
    "BaseLLMClient",
    "OpenAIClient",
    "GeminiClient",
    "PromptBuilder",
    "LLMClientError",
    "LLMConnectionError",
    "LLMTimeoutError",
    "LLMRateLimitError",
    "LLMServiceUnavailableError",
    "LLMAuthenticationError",
    "LLMGenerationError",
]
