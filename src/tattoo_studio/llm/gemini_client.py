from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Sequence

from google import genai
from google.genai import types

from ..config import load_settings
from ..media.reference import MediaReference
from ..prompts.prompt_builder import MediaPart, Part
from .client_base import ImageModelClient, MediaAsset, ModelResponse

logger = logging.getLogger(__name__)

GEMINI_IMAGE_MODEL = "gemini-2.0-flash-preview-image-generation"
RESPONSE_MODALITIES = ["TEXT", "IMAGE"]


@dataclass
class GeminiImageClient(ImageModelClient):
    """
    Gemini image generation client (google-genai SDK, async API).

    Reads the API key from GEMINI_API_KEY or GOOGLE_API_KEY (a .env file is
    honoured). Each generate() call issues exactly one generate_content
    request; there is no retry, caching or timeout at this layer.
    """
    model_name: str = GEMINI_IMAGE_MODEL

    def __post_init__(self):
        settings = load_settings()
        if not settings.google_api_key:
            raise RuntimeError(
                "Missing Gemini API key. Set GEMINI_API_KEY or GOOGLE_API_KEY."
            )
        self._api_key = settings.google_api_key

    @staticmethod
    def _to_sdk_part(part: Part) -> types.Part:
        if isinstance(part, MediaPart):
            return types.Part.from_bytes(data=part.media.data, mime_type=part.media.mime_type)
        return types.Part.from_text(text=part.text)

    @staticmethod
    def _iter_response_parts(response: Any) -> Iterable[Any]:
        for candidate in getattr(response, "candidates", None) or []:
            content = getattr(candidate, "content", None)
            for part in getattr(content, "parts", None) or []:
                yield part

    @classmethod
    def _to_model_response(cls, response: Any, model_name: str) -> ModelResponse:
        texts: List[str] = []
        media: List[MediaAsset] = []

        for part in cls._iter_response_parts(response):
            text = getattr(part, "text", None)
            if text:
                texts.append(text)

            inline_data = getattr(part, "inline_data", None)
            if inline_data is None:
                continue
            mime_type = getattr(inline_data, "mime_type", None) or "image/png"
            data = getattr(inline_data, "data", None)
            url = MediaReference.from_bytes(data, mime_type).uri if data else None
            media.append(MediaAsset(url=url, content_type=mime_type))

        return ModelResponse(text="".join(texts), media=tuple(media), model_name=model_name)

    async def generate(self, *, parts: Sequence[Part]) -> ModelResponse:
        contents = [types.Content(role="user", parts=[self._to_sdk_part(p) for p in parts])]
        config = types.GenerateContentConfig(response_modalities=RESPONSE_MODALITIES)

        # One SDK client per call; its async transport is closed before returning.
        client = genai.Client(api_key=self._api_key)
        logger.debug("Calling %s with %d parts", self.model_name, len(parts))
        try:
            response = await client.aio.models.generate_content(
                model=self.model_name,
                contents=contents,
                config=config,
            )
        finally:
            await client.aio.aclose()
        return self._to_model_response(response, self.model_name)
