from __future__ import annotations

import asyncio
import hashlib
from dataclasses import dataclass
from typing import Sequence

from ..media.reference import MediaReference
from ..prompts.prompt_builder import MediaPart, Part
from .client_base import ImageModelClient, MediaAsset, ModelResponse

# Smallest valid PNG: 1x1 transparent pixel.
_PNG_1X1 = bytes.fromhex(
    "89504e470d0a1a0a0000000d49484452000000010000000108060000001f15c489"
    "0000000d49444154789c6300010000000500010d0a2db40000000049454e44ae426082"
)


def _fingerprint(parts: Sequence[Part]) -> str:
    h = hashlib.sha256()
    for p in parts:
        if isinstance(p, MediaPart):
            h.update(p.media.uri.encode("utf-8"))
        else:
            h.update(p.text.encode("utf-8"))
        h.update(b"\x00")
    return h.hexdigest()


@dataclass
class MockImageClient(ImageModelClient):
    """
    Offline client: returns a 1x1 PNG tagged with a fingerprint of the parts.

    The PNG bytes are followed by the fingerprint, so two calls with
    different parts always return different images.
    """
    model_name: str = "mock-image"

    async def generate(self, *, parts: Sequence[Part]) -> ModelResponse:
        # Yield once so concurrent calls actually interleave.
        await asyncio.sleep(0)

        fp = _fingerprint(parts)
        media = MediaReference.from_bytes(_PNG_1X1 + fp.encode("ascii"), "image/png")
        return ModelResponse(
            text=f"mock:{fp}",
            media=(MediaAsset(url=media.uri, content_type="image/png"),),
            model_name=self.model_name,
        )
