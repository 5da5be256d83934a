"""Everything a renderer needs to lay out one deck."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .config import Settings
from .positioning import (
    ConfigInput,
    LayoutName,
    calculate_positions,
    is_valid_layout,
    line_config_for,
    overview_position,
    resolve_layout,
)
from .slide_models import Position, SlideAST
from .slide_parser import parse_markdown_with_directions

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class DeckPlan:
    """Parsed deck with one pose per slide and the overview pose."""

    ast: SlideAST
    layout_name: LayoutName
    positions: List[Position] = field(default_factory=list)
    overview: Position = field(default_factory=Position)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ast": self.ast.to_dict(),
            "layout": self.layout_name.value,
            "positions": [position.to_dict() for position in self.positions],
            "overview": self.overview.to_dict(),
        }

    def slide_positions(self):
        """Yield ``(slide, position)`` pairs in deck order."""

        return zip(self.ast.slides, self.positions)


def resolve_layout_name(
    ast: SlideAST,
    layout: Union[str, LayoutName, None] = None,
    settings: Optional[Settings] = None,
) -> LayoutName:
    """Explicit layout, then the document's ``layout`` key, then the default.

    An explicit layout that is unknown is an error; an unknown layout written in
    the document falls back to the configured default.
    """

    if layout is not None:
        return resolve_layout(layout)

    settings = settings or Settings()
    requested = ast.frontmatter.layout
    if requested is not None:
        if is_valid_layout(requested):
            return LayoutName(requested)
        LOGGER.warning(
            "Document asks for unknown layout %r, using %s", requested, settings.layout
        )
    return resolve_layout(settings.layout)


def plan_deck(
    content: str,
    layout: Union[str, LayoutName, None] = None,
    config: ConfigInput = None,
    settings: Optional[Settings] = None,
) -> DeckPlan:
    """Parse ``content`` and place its slides."""

    settings = settings or Settings()
    ast = parse_markdown_with_directions(content)
    layout_name = resolve_layout_name(ast, layout, settings)

    if layout_name is LayoutName.LINE:
        config = line_config_for(ast.directions, config)
    positions = calculate_positions(layout_name, len(ast.slides), config)
    return DeckPlan(
        ast=ast,
        layout_name=layout_name,
        positions=positions,
        overview=overview_position(positions, scale=settings.overview_scale),
    )
