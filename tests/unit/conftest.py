"""Unit test fixtures: provider errors as the clients raise them."""

import pytest

from leadgen_inference.llm.exceptions import (
    LLMAuthenticationError,
    LLMConnectionError,
    LLMServiceUnavailableError,
)


@pytest.fixture
def unavailable_error() -> LLMServiceUnavailableError:
    return LLMServiceUnavailableError(
        "Gemini API error (503): The model is overloaded. Please try again later.",
        status_code=503,
        status="UNAVAILABLE",
    )


@pytest.fixture
def auth_error() -> LLMAuthenticationError:
    return LLMAuthenticationError(
        "OpenAI API error (401): Incorrect API key provided",
        status_code=401,
    )


@pytest.fixture
def connection_error() -> LLMConnectionError:
    return LLMConnectionError("Unable to connect to OpenAI: [Errno 111] Connection refused")
