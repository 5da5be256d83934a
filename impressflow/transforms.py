"""Word level animation blocks.

A transform block turns ``>>>marked<<<`` phrases into substeps that the
presentation reveals one at a time::

    ::: transform-appear
    Most tools are >>>boring<<< and >>>flat<<<.
    :::

Blocks naming an unknown transform are left exactly as written.
"""

from __future__ import annotations

import hashlib
import logging
import re
from typing import Tuple

LOGGER = logging.getLogger(__name__)

TRANSFORM_TYPES: Tuple[str, ...] = (
    "appear",
    "reveal",
    "slideup",
    "slideleft",
    "skew",
    "glow",
    "big",
    "highlight",
)

TRANSFORM_BLOCK_RE = re.compile(
    r"^:::[ \t]*transform-(\w+)[ \t]*\n(.*?)\n[ \t]*:::[ \t]*$",
    re.MULTILINE | re.DOTALL,
)
SUBSTEP_MARKER_RE = re.compile(r">>>([^<]+?)<<<")

MAX_SKEW_DEGREES = 17


def has_transform_blocks(content: str) -> bool:
    return any(
        match.group(1) in TRANSFORM_TYPES
        for match in TRANSFORM_BLOCK_RE.finditer(content)
    )


def parse_transform_blocks(content: str) -> str:
    """Replace every known transform block with its substep markup."""

    return TRANSFORM_BLOCK_RE.sub(_render_block, content)


def _render_block(match: re.Match) -> str:
    kind, body = match.group(1), match.group(2)
    if kind not in TRANSFORM_TYPES:
        LOGGER.debug("Leaving unknown transform block %r untouched", kind)
        return match.group(0)

    counter = 0

    def substep(marker: re.Match) -> str:
        nonlocal counter
        counter += 1
        return _substep_span(kind, marker.group(1), counter)

    annotated = SUBSTEP_MARKER_RE.sub(substep, body)
    # Blank lines let the Markdown renderer treat the inner text as Markdown.
    return f'<div class="transform-block transform-{kind}">\n\n{annotated}\n\n</div>'


def _substep_span(kind: str, text: str, ordinal: int) -> str:
    attributes = f'class="substep substep-{kind}" data-substep="{ordinal}"'
    if kind == "skew":
        attributes += f' style="--skew-angle: {skew_angle(text, ordinal)}deg"'
    return f"<span {attributes}>{text}</span>"


def skew_angle(text: str, ordinal: int) -> int:
    """Stable tilt between 1 and 17 degrees, either sign, for a skew substep."""

    digest = hashlib.sha256(f"{ordinal}:{text}".encode("utf-8")).digest()
    magnitude = digest[0] % MAX_SKEW_DEGREES + 1
    return magnitude if digest[1] % 2 == 0 else -magnitude
