from __future__ import annotations

from typing import Optional

from ..errors import EmptyResultError
from ..llm.client_base import ModelResponse
from ..schemas.models import (
    GenerateTattooDesignOutput,
    SimulateTattooPlacementOutput,
    validate_generation_result,
    validate_placement_result,
)


def first_media_url(response: ModelResponse) -> Optional[str]:
    """Return the url of the first generated asset that has one."""
    for asset in response.media or ():
        if asset is not None and asset.url:
            return asset.url
    return None


def extract_generation_result(response: ModelResponse) -> GenerateTattooDesignOutput:
    """
    Pull the generated design out of a model response.

    Raises EmptyResultError when the response carries no image, and
    ValidationError when the image is not a well-formed data URI.
    """
    url = first_media_url(response)
    if not url:
        raise EmptyResultError("No tattoo design was generated.")
    return validate_generation_result({"tattooDesign": {"url": url}})


def extract_placement_result(response: ModelResponse) -> SimulateTattooPlacementOutput:
    url = first_media_url(response)
    if not url:
        raise EmptyResultError("No tattoo placement simulation was generated.")
    return validate_placement_result({"simulatedTattooUri": url})
