from __future__ import annotations

from typing import Annotated, Any, Type, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from ..errors import ValidationError
from ..media.reference import MediaReference

MIN_PROMPT_LENGTH = 10


def _check_media_reference(value: str) -> str:
    MediaReference.parse(value)
    return value


MediaReferenceStr = Annotated[str, AfterValidator(_check_media_reference)]


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class GenerateTattooDesignInput(_FrozenModel):
    prompt: str = Field(
        ...,
        min_length=MIN_PROMPT_LENGTH,
        description="A text prompt describing the tattoo design.",
    )


class SimulateTattooPlacementInput(_FrozenModel):
    tattoo_data_uri: MediaReferenceStr = Field(
        ...,
        alias="tattooDataUri",
        description="The tattoo design as a data URI: 'data:<mimetype>;base64,<encoded_data>'.",
    )
    body_part: str = Field(
        ...,
        alias="bodyPart",
        description="The body part where the tattoo will be placed (e.g., arm, leg, back).",
    )
    body_part_photo_uri: MediaReferenceStr = Field(
        ...,
        alias="bodyPartPhotoUri",
        description="A photo of the body part as a data URI: 'data:<mimetype>;base64,<encoded_data>'.",
    )

    @property
    def tattoo(self) -> MediaReference:
        return MediaReference.parse(self.tattoo_data_uri)

    @property
    def body_part_photo(self) -> MediaReference:
        return MediaReference.parse(self.body_part_photo_uri)


class TattooDesign(_FrozenModel):
    url: MediaReferenceStr = Field(..., description="The generated tattoo design image as a data URI.")


class GenerateTattooDesignOutput(_FrozenModel):
    tattoo_design: TattooDesign = Field(..., alias="tattooDesign")


class SimulateTattooPlacementOutput(_FrozenModel):
    simulated_tattoo_uri: MediaReferenceStr = Field(
        ...,
        alias="simulatedTattooUri",
        description="The tattoo simulated on the body part, as a data URI.",
    )


M = TypeVar("M", bound=BaseModel)


def _validate(model_cls: Type[M], value: Any) -> M:
    """
    Validate `value` against `model_cls`.

    An instance of the model is returned unchanged, so re-validating is a no-op.
    """
    if isinstance(value, model_cls):
        return value
    try:
        return model_cls.model_validate(value)
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic(e, model=model_cls.__name__) from e


def validate_generation_request(value: Any) -> GenerateTattooDesignInput:
    return _validate(GenerateTattooDesignInput, value)


def validate_placement_request(value: Any) -> SimulateTattooPlacementInput:
    return _validate(SimulateTattooPlacementInput, value)


def validate_generation_result(value: Any) -> GenerateTattooDesignOutput:
    return _validate(GenerateTattooDesignOutput, value)


def validate_placement_result(value: Any) -> SimulateTattooPlacementOutput:
    return _validate(SimulateTattooPlacementOutput, value)
