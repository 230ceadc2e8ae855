"""
Stability AI text-to-image client used for logo generation.
"""

import base64
from dataclasses import dataclass
from typing import Optional
import logging

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)

NEGATIVE_PROMPT = "blurry, low quality, pixelated, watermark, text artifacts"
LOGO_PROMPT_SUFFIX = "logo design, transparent background, high quality, professional"


@dataclass
class GeneratedImage:
    """One image artifact returned by the provider"""
    base64: str
    seed: Optional[int] = None

    def to_bytes(self) -> bytes:
        return base64.b64decode(self.base64)


class StabilityImageClient:
    """Synchronous request/response wrapper around the Stability text-to-image endpoint"""

    model_tag = "stability-diffusion-xl"

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_host: Optional[str] = None,
        engine_id: Optional[str] = None,
        timeout: Optional[float] = None,
        size: Optional[int] = None,
    ):
        self.api_key = settings.STABILITY_API_KEY if api_key is None else api_key
        self.api_host = (api_host or settings.STABILITY_API_HOST).rstrip("/")
        self.engine_id = engine_id or settings.STABILITY_ENGINE_ID
        self.timeout = timeout or settings.IMAGE_REQUEST_TIMEOUT
        self.size = size or settings.LOGO_IMAGE_SIZE

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    @property
    def endpoint(self) -> str:
        return f"{self.api_host}/v1/generation/{self.engine_id}/text-to-image"

    def build_payload(self, prompt: str) -> dict:
        return {
            "text_prompts": [
                {"text": f"{prompt}, {LOGO_PROMPT_SUFFIX}", "weight": 1},
                {"text": NEGATIVE_PROMPT, "weight": -1},
            ],
            "cfg_scale": 7,
            "height": self.size,
            "width": self.size,
            "steps": 30,
            "samples": 1,
        }

    async def generate(self, prompt: str) -> Optional[GeneratedImage]:
        """
        Generate one image for the prompt.

        Returns None when the client is not configured or the provider
        answered with an error status or no artifacts. Transport errors
        (timeouts, connection failures) propagate to the caller.
        """
        if not self.configured:
            logger.warning("Stability API key not configured, skipping image generation")
            return None

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(self.endpoint, json=self.build_payload(prompt), headers=headers)

        if response.status_code >= 400:
            logger.error(f"Stability API error {response.status_code}: {response.text[:500]}")
            return None

        artifacts = response.json().get("artifacts") or []
        if not artifacts or not artifacts[0].get("base64"):
            logger.warning("Stability API returned no artifacts")
            return None

        artifact = artifacts[0]
        return GeneratedImage(base64=artifact["base64"], seed=artifact.get("seed"))
