from __future__ import annotations

import logging
from typing import Any, Optional

from .extraction.extractor import extract_generation_result, extract_placement_result
from .llm.client_base import ImageModelClient
from .llm.factory import create_client
from .prompts.prompt_builder import build_generation_parts, build_placement_parts, describe_parts
from .schemas.models import (
    GenerateTattooDesignOutput,
    SimulateTattooPlacementOutput,
    validate_generation_request,
    validate_placement_request,
)

logger = logging.getLogger(__name__)


async def generate_tattoo_design(
    request: Any,
    *,
    llm_backend: str = "gemini",
    client: Optional[ImageModelClient] = None,
) -> GenerateTattooDesignOutput:
    """
    Generate a tattoo design from a text prompt.

      request -> validate -> parts -> one model call -> extracted design

    `request` may be a mapping ({"prompt": ...}) or a GenerateTattooDesignInput.
    Raises ValidationError before any model call when the request is invalid,
    and EmptyResultError when the model returns no image. Errors from the
    model client propagate unchanged.
    """
    validated = validate_generation_request(request)
    parts = build_generation_parts(validated)

    if client is None:
        client = create_client(llm_backend)

    logger.info("generate_tattoo_design: calling model %s", getattr(client, "model_name", "?"))
    logger.debug("generate_tattoo_design parts: %s", describe_parts(parts))
    response = await client.generate(parts=parts)

    result = extract_generation_result(response)
    logger.info("generate_tattoo_design: received %d media asset(s)", len(response.media))
    return result


async def simulate_tattoo_placement(
    request: Any,
    *,
    llm_backend: str = "gemini",
    client: Optional[ImageModelClient] = None,
) -> SimulateTattooPlacementOutput:
    """
    Composite a tattoo design onto a photo of a body part.

    `request` may be a mapping with tattooDataUri, bodyPart and
    bodyPartPhotoUri, or a SimulateTattooPlacementInput.
    """
    validated = validate_placement_request(request)
    parts = build_placement_parts(validated)

    if client is None:
        client = create_client(llm_backend)

    logger.info(
        "simulate_tattoo_placement: body_part=%r model=%s",
        validated.body_part,
        getattr(client, "model_name", "?"),
    )
    logger.debug("simulate_tattoo_placement parts: %s", describe_parts(parts))
    response = await client.generate(parts=parts)

    result = extract_placement_result(response)
    logger.info("simulate_tattoo_placement: received %d media asset(s)", len(response.media))
    return result
