"""
AI Provider Implementations

Concrete completion clients for Anthropic Claude (default) and OpenAI,
behind the BaseAIService interface.
"""

from typing import Optional

import openai
import anthropic
from openai import AsyncOpenAI
from anthropic import AsyncAnthropic

from app.core.config import settings
from app.services.ai.base import (
    BaseAIService,
    AIProvider,
    AIResponse,
    AIUsageMetrics,
    AIServiceError,
    RateLimitError,
    ProviderError,
)

import logging

logger = logging.getLogger(__name__)


class AnthropicService(BaseAIService):
    """Anthropic Claude service implementation"""

    def __init__(self, model: str = None):
        super().__init__(AIProvider.ANTHROPIC, model or settings.DEFAULT_TEXT_MODEL)

        if not settings.ANTHROPIC_API_KEY:
            raise AIServiceError("Anthropic API key not configured", "anthropic", self.model)

        self.client = AsyncAnthropic(
            api_key=settings.ANTHROPIC_API_KEY,
            timeout=settings.AI_REQUEST_TIMEOUT,
            max_retries=0,
        )

    async def _make_request(self, prompt: str, **kwargs) -> AIResponse:
        """Make request to Anthropic API"""
        try:
            max_tokens = kwargs.get('max_tokens', settings.MAX_OUTPUT_TOKENS)
            temperature = kwargs.get('temperature', 0.7)
            system_prompt = kwargs.get('system_prompt')

            request = {
                "model": self.model,
                "max_tokens": max_tokens,
                "temperature": temperature,
                "messages": [{"role": "user", "content": prompt}],
            }
            if system_prompt:
                request["system"] = system_prompt

            response = await self.client.messages.create(**request)

            content = "".join(
                block.text for block in response.content if getattr(block, "type", "text") == "text"
            )

            usage_metrics = AIUsageMetrics(
                provider=self.provider,
                model=self.model,
                tokens_input=response.usage.input_tokens,
                tokens_output=response.usage.output_tokens,
                requests_count=1,
            )

            return AIResponse(
                content=content,
                usage=usage_metrics,
                metadata={
                    "stop_reason": response.stop_reason,
                    "model": response.model
                }
            )

        except anthropic.RateLimitError as e:
            raise RateLimitError(f"Anthropic rate limit exceeded: {e}", "anthropic", self.model)
        except anthropic.APIError as e:
            raise ProviderError(f"Anthropic API error: {e}", "anthropic", self.model, e)
        except Exception as e:
            raise AIServiceError(f"Unexpected Anthropic error: {e}", "anthropic", self.model, e)


class OpenAIService(BaseAIService):
    """OpenAI GPT service implementation"""

    def __init__(self, model: str = None):
        super().__init__(AIProvider.OPENAI, model or settings.DEFAULT_OPENAI_MODEL)

        if not settings.OPENAI_API_KEY:
            raise AIServiceError("OpenAI API key not configured", "openai", self.model)

        self.client = AsyncOpenAI(
            api_key=settings.OPENAI_API_KEY,
            timeout=settings.AI_REQUEST_TIMEOUT,
            max_retries=0,
        )

    async def _make_request(self, prompt: str, **kwargs) -> AIResponse:
        """Make request to OpenAI API"""
        try:
            max_tokens = kwargs.get('max_tokens', settings.MAX_OUTPUT_TOKENS)
            temperature = kwargs.get('temperature', 0.7)
            system_prompt = kwargs.get('system_prompt', '')

            messages = []
            if system_prompt:
                messages.append({"role": "system", "content": system_prompt})
            messages.append({"role": "user", "content": prompt})

            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=max_tokens,
                temperature=temperature,
            )

            usage = response.usage
            usage_metrics = AIUsageMetrics(
                provider=self.provider,
                model=self.model,
                tokens_input=usage.prompt_tokens if usage else 0,
                tokens_output=usage.completion_tokens if usage else 0,
                requests_count=1,
            )

            return AIResponse(
                content=response.choices[0].message.content or "",
                usage=usage_metrics,
                metadata={
                    "finish_reason": response.choices[0].finish_reason,
                    "model": response.model
                }
            )

        except openai.RateLimitError as e:
            raise RateLimitError(f"OpenAI rate limit exceeded: {e}", "openai", self.model)
        except openai.APIError as e:
            raise ProviderError(f"OpenAI API error: {e}", "openai", self.model, e)
        except Exception as e:
            raise AIServiceError(f"Unexpected OpenAI error: {e}", "openai", self.model, e)


class AIServiceFactory:
    """Factory for creating completion service instances"""

    @staticmethod
    def create_text_service(provider: Optional[str] = None, model: Optional[str] = None) -> BaseAIService:
        """Create a text generation service"""
        provider = provider or settings.DEFAULT_MODEL_PROVIDER

        if provider == "anthropic":
            return AnthropicService(model)
        elif provider == "openai":
            return OpenAIService(model)
        else:
            raise AIServiceError(f"Unsupported provider: {provider}")
