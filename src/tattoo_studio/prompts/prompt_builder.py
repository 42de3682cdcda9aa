from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Sequence, Tuple, Union

from ..media.reference import MediaReference
from ..schemas.models import GenerateTattooDesignInput, SimulateTattooPlacementInput


@dataclass(frozen=True)
class TextPart:
    text: str


@dataclass(frozen=True)
class MediaPart:
    media: MediaReference


Part = Union[TextPart, MediaPart]


@dataclass(frozen=True)
class TextSegment:
    """Text with {name} placeholders, filled from the render variables."""
    template: str


@dataclass(frozen=True)
class MediaSlot:
    """Position of a MediaReference taken from the render variables."""
    name: str


Template = Tuple[Union[TextSegment, MediaSlot], ...]


GENERATION_TEMPLATE: Template = (
    TextSegment(
        "Generate a tattoo design based on the following prompt: {prompt}. "
        "The design should be high quality and suitable for tattooing. "
        "Return only the image."
    ),
)

# Design first, then the target surface, then the instruction.
PLACEMENT_TEMPLATE: Template = (
    MediaSlot("tattoo"),
    MediaSlot("body_part_photo"),
    TextSegment(
        "Simulate this tattoo on the {body_part}. "
        "Create a realistic composite of the tattoo design on the body part shown in the photo."
    ),
)


def render(template: Template, variables: Mapping[str, Any]) -> Tuple[Part, ...]:
    """
    Render a template into the ordered parts sent to the model.

    Pure and deterministic. Values are substituted once, so braces inside
    user text come through verbatim. A missing variable raises KeyError.
    """
    parts: List[Part] = []
    for segment in template:
        if isinstance(segment, MediaSlot):
            media = variables[segment.name]
            if not isinstance(media, MediaReference):
                media = MediaReference.parse(media)
            parts.append(MediaPart(media=media))
        else:
            parts.append(TextPart(text=segment.template.format_map(variables)))
    return tuple(parts)


def build_generation_parts(request: GenerateTattooDesignInput) -> Tuple[Part, ...]:
    return render(GENERATION_TEMPLATE, {"prompt": request.prompt})


def build_placement_parts(request: SimulateTattooPlacementInput) -> Tuple[Part, ...]:
    return render(
        PLACEMENT_TEMPLATE,
        {
            "tattoo": request.tattoo,
            "body_part_photo": request.body_part_photo,
            "body_part": request.body_part,
        },
    )


def describe_parts(parts: Sequence[Part]) -> List[str]:
    """Short, payload-free summary of parts for logging."""
    out: List[str] = []
    for p in parts:
        if isinstance(p, MediaPart):
            out.append(f"media({p.media.mime_type}, {len(p.media.payload)} b64 chars)")
        else:
            out.append(f"text({len(p.text)} chars)")
    return out
