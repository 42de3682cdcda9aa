from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence, Tuple

from ..prompts.prompt_builder import Part


@dataclass(frozen=True)
class MediaAsset:
    """One generated media item, as returned by the model."""
    url: Optional[str]
    content_type: Optional[str] = None


@dataclass(frozen=True)
class ModelResponse:
    """
    Standard response object returned by any image model client.

    `media` holds zero or more generated assets in the order the model
    returned them.
    """
    text: str
    media: Tuple[MediaAsset, ...]
    model_name: str


class ImageModelClient(Protocol):
    """
    Protocol for multimodal image generation clients.

    A client takes the ordered prompt parts and makes exactly one call to
    its model. Failures are raised as-is; clients do not retry.
    """

    async def generate(self, *, parts: Sequence[Part]) -> ModelResponse:
        ...
