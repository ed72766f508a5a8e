"""Image generation, editing and search contracts."""

from __future__ import annotations

from typing import Annotated

from pydantic import AfterValidator, Field, StrictBool, StrictInt

from scout.tools.base import ToolContract, ToolInput
from scout.tools.types import AbsolutePath, AspectRatio, NonEmptyStr, PngPath

RESTRICTED_PROMPT_WORDS = (
    "graph",
    "chart",
    "diagram",
    "wireframe",
    "mockup",
    "flowchart",
    "ui design",
    "sitemap",
    "plot",
    "mind map",
)


def _unrestricted_prompt(value: str) -> str:
    lowered = value.lower()
    if any(word in lowered for word in RESTRICTED_PROMPT_WORDS):
        raise ValueError(
            "Prompt cannot contain restricted words like graph, chart, mockup, etc. "
            "Use code generation instead."
        )
    return value


class ImageGenerateInput(ToolInput):
    path: PngPath
    prompt: Annotated[str, Field(min_length=1), AfterValidator(_unrestricted_prompt)]
    aspect_ratio: AspectRatio
    reference_image_paths: list[AbsolutePath] | None = Field(
        default=None, alias="referenceImagePaths"
    )
    transparency: StrictBool = False
    include_text: StrictBool = False


class ImageEditInput(ToolInput):
    image_paths: list[AbsolutePath] = Field(alias="imagePaths", min_length=1)
    prompt: NonEmptyStr
    output_path: PngPath = Field(alias="outputPath")
    transparency: StrictBool = False


class ImageSearchInput(ToolInput):
    query: NonEmptyStr
    count: StrictInt = Field(default=5, ge=5, le=10)


IMAGE_GENERATE = ToolContract(
    name="image_generate",
    description="AI image generation tool.",
    input_schema=ImageGenerateInput,
)
IMAGE_EDIT = ToolContract(
    name="image_edit",
    description="AI image editing tool.",
    input_schema=ImageEditInput,
)
IMAGE_SEARCH = ToolContract(
    name="image_search",
    description="Web image search engine.",
    input_schema=ImageSearchInput,
)

CONTRACTS = (IMAGE_GENERATE, IMAGE_EDIT, IMAGE_SEARCH)
