from __future__ import annotations

from .client_base import ImageModelClient


def create_client(backend: str) -> ImageModelClient:
    """Return a new client for the named backend ("gemini" or "mock")."""
    if backend == "mock":
        from .mock_client import MockImageClient
        return MockImageClient()
    if backend == "gemini":
        from .gemini_client import GeminiImageClient
        return GeminiImageClient()
    raise ValueError(f"Unsupported llm_backend: {backend}")
