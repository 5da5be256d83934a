"""Image generation requests embedded in slide Markdown.

Syntax: ``![image: prompt text](placeholder)`` or ``![image: prompt text]()``.
The link target is ignored; the prompt is what gets sent to the generator.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List

from .slide_models import ImageRequest, StaticImage

IMAGE_REQUEST_RE = re.compile(r"!\[(image:\s*([^\]]+))\]\([^)]*\)", re.IGNORECASE)
MARKDOWN_IMAGE_RE = re.compile(r"!\[([^\]]*)\]\(([^)]*)\)")
IMAGE_PREFIX = "image:"
PLACEHOLDER_SRC = "placeholder"


@dataclass(slots=True)
class ImageReferences:
    generated: List[ImageRequest] = field(default_factory=list)
    static: List[StaticImage] = field(default_factory=list)


def parse_images(slide_content: str, slide_index: int) -> List[ImageRequest]:
    """Return the generation requests of a slide in document order."""

    images: List[ImageRequest] = []
    for match in IMAGE_REQUEST_RE.finditer(slide_content):
        prompt = match.group(2).strip()
        if not prompt:
            continue
        images.append(
            ImageRequest(
                prompt=prompt,
                slide_index=slide_index,
                image_index=len(images),
            )
        )
    return images


def extract_image_references(slide_content: str, slide_index: int = 0) -> ImageReferences:
    """Separate generation requests from ordinary images.

    Static images with an empty or ``placeholder`` source are skipped since
    there is nothing to load for them.
    """

    references = ImageReferences()
    for match in MARKDOWN_IMAGE_RE.finditer(slide_content):
        alt, src = match.group(1), match.group(2).strip()
        if alt.lower().startswith(IMAGE_PREFIX):
            prompt = alt[len(IMAGE_PREFIX):].strip()
            if prompt:
                references.generated.append(
                    ImageRequest(
                        prompt=prompt,
                        slide_index=slide_index,
                        image_index=len(references.generated),
                    )
                )
        elif src and src != PLACEHOLDER_SRC:
            references.static.append(StaticImage(alt=alt, src=src))
    return references
