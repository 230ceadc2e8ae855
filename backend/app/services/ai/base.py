"""
Base AI Service Classes

Provides the abstract completion client used by every generator, with
standardized error types, usage tracking and provider abstraction.
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional
import logging

import tiktoken

from app.core.config import settings

logger = logging.getLogger(__name__)


class AIProvider(str, Enum):
    """Supported AI providers"""
    ANTHROPIC = "anthropic"
    OPENAI = "openai"


@dataclass
class AIUsageMetrics:
    """Tracks AI service usage for cost reporting"""
    provider: str
    model: str
    tokens_input: int = 0
    tokens_output: int = 0
    requests_count: int = 0
    latency_ms: int = 0
    timestamp: float = 0.0

    def __post_init__(self):
        if self.timestamp == 0.0:
            self.timestamp = time.time()


@dataclass
class AIResponse:
    """Standardized AI response format"""
    content: str
    usage: AIUsageMetrics
    metadata: Dict[str, Any]
    success: bool = True
    error: Optional[str] = None


class AIServiceError(Exception):
    """Base exception for AI service errors"""
    def __init__(self, message: str, provider: str = "", model: str = "", original_error: Exception = None):
        self.message = message
        self.provider = provider
        self.model = model
        self.original_error = original_error
        super().__init__(self.message)


class RateLimitError(AIServiceError):
    """Rate limit exceeded error"""
    pass


class TokenLimitError(AIServiceError):
    """Token limit exceeded error"""
    pass


class ProviderError(AIServiceError):
    """Provider-specific error"""
    pass


class TokenCounter:
    """Utility class for counting prompt tokens"""

    def __init__(self):
        self._encoders = {}

    def count_tokens(self, text: str, model: str = "") -> int:
        """Count tokens for given text. Claude and GPT prompts are close enough under cl100k."""
        try:
            encoding_name = "cl100k_base"
            if encoding_name not in self._encoders:
                self._encoders[encoding_name] = tiktoken.get_encoding(encoding_name)

            return len(self._encoders[encoding_name].encode(text))

        except Exception as e:
            logger.warning(f"Failed to count tokens for model {model}: {e}")
            # Fallback: rough estimation (4 chars per token)
            return len(text) // 4


class BaseAIService(ABC):
    """Abstract base class for text completion services"""

    def __init__(self, provider: AIProvider, model: str):
        self.provider = provider
        self.model = model
        self.token_counter = TokenCounter()

    @abstractmethod
    async def _make_request(self, prompt: str, **kwargs) -> AIResponse:
        """Make the actual API request to the AI provider"""
        pass

    def validate_input(self, text: str, max_tokens: Optional[int] = None) -> bool:
        """Validate input before making AI request"""
        if not text or not text.strip():
            raise AIServiceError("Input text cannot be empty", self.provider, self.model)

        token_count = self.token_counter.count_tokens(text, self.model)
        max_allowed = max_tokens or settings.MAX_TOKENS_PER_REQUEST

        if token_count > max_allowed:
            raise TokenLimitError(
                f"Input token count ({token_count}) exceeds maximum ({max_allowed})",
                provider=self.provider,
                model=self.model
            )

        return True

    async def generate(self, prompt: str, **kwargs) -> AIResponse:
        """Single request to the provider. Failures are reported on the response, not raised."""
        start_time = time.time()

        try:
            self.validate_input(prompt)
            response = await self._make_request(prompt=prompt, **kwargs)
            response.usage.latency_ms = int((time.time() - start_time) * 1000)

            logger.debug(
                f"{self.model} used {response.usage.tokens_input} input and "
                f"{response.usage.tokens_output} output tokens in {response.usage.latency_ms}ms"
            )

            return response

        except Exception as e:
            error_msg = f"AI generation failed: {str(e)}"
            logger.error(error_msg)

            return AIResponse(
                content="",
                usage=AIUsageMetrics(
                    provider=self.provider,
                    model=self.model,
                    latency_ms=int((time.time() - start_time) * 1000)
                ),
                metadata={},
                success=False,
                error=error_msg
            )

    async def complete(self, prompt: str, **kwargs) -> str:
        """Prompt in, text out. Raises AIServiceError when the provider call failed."""
        response = await self.generate(prompt, **kwargs)
        if not response.success:
            raise AIServiceError(response.error or "AI generation failed", self.provider, self.model)
        return response.content.strip()

