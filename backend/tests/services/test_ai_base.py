import logging

import pytest

from app.services.ai.base import AIProvider, AIResponse, AIServiceError, AIUsageMetrics, BaseAIService


class ScriptedService(BaseAIService):
    """Completion service whose provider call returns a fixed reply or raises"""

    def __init__(self, reply="", error=None):
        super().__init__(AIProvider.ANTHROPIC, "test-model")
        self.reply = reply
        self.error = error

    async def _make_request(self, prompt: str, **kwargs) -> AIResponse:
        if self.error:
            raise self.error
        return AIResponse(
            content=self.reply,
            usage=AIUsageMetrics(provider=self.provider, model=self.model, tokens_input=12, tokens_output=30),
            metadata={},
        )


@pytest.fixture
def scripted(mocker):
    def _build(**kwargs):
        service = ScriptedService(**kwargs)
        mocker.patch.object(service.token_counter, "count_tokens", return_value=12)
        return service
    return _build


@pytest.mark.unit
class TestBaseAIService:

    @pytest.mark.asyncio
    async def test_complete_returns_stripped_text(self, scripted, caplog):
        service = scripted(reply='  ["Brewed at the Peak"]\n')

        with caplog.at_level(logging.DEBUG, logger="app.services.ai.base"):
            text = await service.complete("Write a slogan")

        assert text == '["Brewed at the Peak"]'
        assert "test-model used 12 input and 30 output tokens" in caplog.text

    @pytest.mark.asyncio
    async def test_provider_failure_raises_on_complete(self, scripted):
        service = scripted(error=RuntimeError("upstream 529"))

        response = await service.generate("Write a slogan")
        assert response.success is False
        assert "upstream 529" in response.error

        with pytest.raises(AIServiceError, match="upstream 529"):
            await service.complete("Write a slogan")

    @pytest.mark.asyncio
    async def test_blank_prompt_is_rejected(self, scripted):
        with pytest.raises(AIServiceError):
            await scripted(reply="anything").complete("   ")
