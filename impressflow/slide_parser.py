"""Markdown → :class:`SlideAST` conversion."""

from __future__ import annotations

import logging
import re

import mistune

from .frontmatter import extract_frontmatter
from .images import parse_images
from .layouts import detect_layout, strip_directive_markers
from .slide_models import Slide, SlideAST
from .slide_splitter import split_slides_with_directions
from .transforms import parse_transform_blocks

LOGGER = logging.getLogger(__name__)

TITLE_RE = re.compile(r"^#[ \t]+(.+)$", re.MULTILINE)
NOTES_RE = re.compile(r"<!--\s*NOTES:\s*(.*?)-->", re.IGNORECASE | re.DOTALL)

_markdown = mistune.create_markdown(escape=False, plugins=["strikethrough", "table"])


def parse_markdown(content: str) -> SlideAST:
    """Parse a whole document; ``directions`` is left empty."""

    ast = parse_markdown_with_directions(content)
    ast.directions = []
    return ast


def parse_markdown_with_directions(content: str) -> SlideAST:
    """Parse a whole document and keep the ``^`` direction of every slide."""

    frontmatter, body = extract_frontmatter(content)
    split = split_slides_with_directions(body)
    slides = [build_slide(raw, index) for index, raw in enumerate(split.slides)]
    LOGGER.debug("Parsed %d slides", len(slides))
    return SlideAST(
        frontmatter=frontmatter,
        slides=slides,
        directions=list(split.directions),
    )


def build_slide(raw: str, index: int) -> Slide:
    return Slide(
        index=index,
        title=extract_title(raw),
        content=render_content(raw),
        layout=detect_layout(raw),
        images=parse_images(raw, index),
        notes=extract_notes(raw),
    )


def extract_title(slide_content: str) -> str:
    match = TITLE_RE.search(slide_content)
    return match.group(1).strip() if match else ""


def extract_notes(slide_content: str) -> str:
    """Speaker notes written as ``<!-- NOTES: ... -->``."""

    match = NOTES_RE.search(slide_content)
    return match.group(1).strip() if match else ""


def render_content(slide_content: str) -> str:
    """Render the slide body to HTML without notes or directive delimiters."""

    text = NOTES_RE.sub("", slide_content)
    text = parse_transform_blocks(text)
    text = strip_directive_markers(text)
    return render_markdown(text)


def render_markdown(text: str) -> str:
    return _markdown(text).strip()
