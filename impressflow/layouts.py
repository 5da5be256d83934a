"""Per-slide layout detection.

A slide can request a layout explicitly with a directive block::

    ::: two-column
    ### Left
    ...
    ### Right
    ...
    :::

Without a valid directive the layout is inferred from the shape of the
content. Unknown directive names are ignored, never rejected.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from .slide_models import LayoutType

LOGGER = logging.getLogger(__name__)

DIRECTIVE_RE = re.compile(r"^:::[ \t]*([\w-]+)[ \t]*$", re.MULTILINE)
DIRECTIVE_BLOCK_RE = re.compile(
    r"^:::[ \t]*([\w-]+)[ \t]*$(.*?)^:::[ \t]*$",
    re.MULTILINE | re.DOTALL,
)
H1_LINE_RE = re.compile(r"^#[ \t]+.+$", re.MULTILINE)
H2_LINE_RE = re.compile(r"^##[ \t]+.+$", re.MULTILINE)
H3_SPLIT_RE = re.compile(r"^###[ \t]*", re.MULTILINE)
COLUMN_MARKER_RE = re.compile(r"^---column---$", re.MULTILINE)
IMAGE_LEFT_RE = re.compile(r"!\[(?:image:left|left:)")
IMAGE_RIGHT_RE = re.compile(r"!\[(?:image:right|right:)")

_COLUMN_COUNTS = {
    LayoutType.TWO_COLUMN: 2,
    LayoutType.THREE_COLUMN: 3,
}


@dataclass(frozen=True, slots=True)
class LayoutContent:
    """Slide content with the directive delimiters removed."""

    layout: LayoutType
    content: str
    columns: Optional[List[str]] = None


def is_layout_type(name: str) -> bool:
    return name in LayoutType.values()


def detect_layout(slide_content: str) -> LayoutType:
    """Return the explicit directive layout, or infer one from content."""

    match = DIRECTIVE_RE.search(slide_content)
    if match:
        name = match.group(1)
        if is_layout_type(name):
            return LayoutType(name)
        LOGGER.debug("Ignoring unknown layout directive %r", name)
    return infer_layout(slide_content)


def infer_layout(content: str) -> LayoutType:
    if content.strip().startswith(">"):
        return LayoutType.QUOTE

    remainder = H1_LINE_RE.sub("", content, count=1)
    remainder = H2_LINE_RE.sub("", remainder, count=1)
    if H1_LINE_RE.search(content) and not remainder.strip():
        return LayoutType.TITLE_ONLY

    # A left hint anywhere in the slide wins over a right hint.
    if IMAGE_LEFT_RE.search(content):
        return LayoutType.IMAGE_LEFT
    if IMAGE_RIGHT_RE.search(content):
        return LayoutType.IMAGE_RIGHT

    return LayoutType.SINGLE


def extract_layout_content(slide_content: str) -> LayoutContent:
    """Remove directive delimiters and split column layouts into columns."""

    layout = detect_layout(slide_content)
    match = DIRECTIVE_BLOCK_RE.search(slide_content)
    if match is None:
        return LayoutContent(layout=layout, content=slide_content)

    inner = match.group(2).strip()
    column_count = _COLUMN_COUNTS.get(layout)
    if column_count is None:
        return LayoutContent(layout=layout, content=inner)
    return LayoutContent(
        layout=layout,
        content=inner,
        columns=split_columns(inner, column_count),
    )


def split_columns(content: str, count: int) -> List[str]:
    """Split ``content`` into ``count`` columns.

    ``###`` headings win, then ``---column---`` separator lines. When neither
    yields enough parts the whole content lands in the first column and the
    rest stay empty.
    """

    parts = [part for part in H3_SPLIT_RE.split(content) if part.strip()]
    if len(parts) >= count:
        return [part.strip() for part in parts[:count]]

    parts = [part for part in COLUMN_MARKER_RE.split(content) if part.strip()]
    if len(parts) >= count:
        return [part.strip() for part in parts[:count]]

    LOGGER.debug("Could not split content into %d columns", count)
    return [content.strip()] + [""] * (count - 1)


def strip_directive_markers(content: str) -> str:
    """Drop ``::: name`` / ``:::`` delimiter lines, keeping the inner content."""

    return DIRECTIVE_BLOCK_RE.sub(lambda match: match.group(2).strip(), content)
