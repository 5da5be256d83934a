"""Markdown to 3D presentation planning: slide parsing and slide placement."""

from .config import Settings, configure_logging, load_settings
from .deck_plan import DeckPlan, plan_deck, resolve_layout_name
from .exceptions import ImpressFlowError, PositioningError, UnknownLayoutError
from .frontmatter import extract_frontmatter
from .images import extract_image_references, parse_images
from .layouts import LayoutContent, detect_layout, extract_layout_content
from .positioning import (
    LayoutName,
    calculate_line_positions,
    calculate_positions,
    coerce_config,
    default_config,
    get_positioner,
    is_valid_layout,
    layout_names,
    overview_position,
    position_of,
)
from .slide_models import (
    Direction,
    Frontmatter,
    ImageRequest,
    LayoutType,
    Position,
    Slide,
    SlideAST,
)
from .slide_parser import parse_markdown, parse_markdown_with_directions
from .slide_splitter import split_slides, split_slides_with_directions
from .transforms import TRANSFORM_TYPES, parse_transform_blocks

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "configure_logging",
    "load_settings",
    "DeckPlan",
    "plan_deck",
    "resolve_layout_name",
    "ImpressFlowError",
    "PositioningError",
    "UnknownLayoutError",
    "extract_frontmatter",
    "extract_image_references",
    "parse_images",
    "LayoutContent",
    "detect_layout",
    "extract_layout_content",
    "LayoutName",
    "calculate_line_positions",
    "calculate_positions",
    "coerce_config",
    "default_config",
    "get_positioner",
    "is_valid_layout",
    "layout_names",
    "overview_position",
    "position_of",
    "Direction",
    "Frontmatter",
    "ImageRequest",
    "LayoutType",
    "Position",
    "Slide",
    "SlideAST",
    "parse_markdown",
    "parse_markdown_with_directions",
    "split_slides",
    "split_slides_with_directions",
    "TRANSFORM_TYPES",
    "parse_transform_blocks",
]
