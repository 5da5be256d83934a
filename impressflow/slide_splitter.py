"""Split a Markdown body into slide sources.

Rules:

1. ``# Title`` (level-1 heading) starts a new slide when the current one has
   content.
2. ``---``, ``***`` or ``___`` (horizontal rule) always ends the current slide.
3. A slide whose last non-blank line is ``^`` is marked ``down``: the line
   layout places the next slide below it instead of beside it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import reduce
from typing import List, NamedTuple, Sequence, Tuple

from .slide_models import Direction

H1_RE = re.compile(r"^#\s+.+")
DIRECTION_MARKER = "^"
_RULE_CHARS = ("-", "*", "_")


@dataclass(slots=True)
class SplitResult:
    """Slide sources and the direction marker of each slide."""

    slides: List[str] = field(default_factory=list)
    directions: List[Direction] = field(default_factory=list)


class _SplitState(NamedTuple):
    buffer: Tuple[str, ...] = ()
    slides: Tuple[str, ...] = ()
    directions: Tuple[Direction, ...] = ()

    def flush(self) -> "_SplitState":
        content, direction = extract_direction_marker(self.buffer)
        if not content:
            return self._replace(buffer=())
        return _SplitState(
            buffer=(),
            slides=self.slides + (content,),
            directions=self.directions + (direction,),
        )


def split_slides(body: str) -> List[str]:
    """Return the slide sources of ``body`` without direction markers."""

    return split_slides_with_directions(body).slides


def split_slides_with_directions(body: str) -> SplitResult:
    """Split ``body`` into slides, keeping one direction per slide."""

    state = reduce(_consume_line, body.split("\n"), _SplitState())
    if state.buffer:
        state = state.flush()
    return SplitResult(slides=list(state.slides), directions=list(state.directions))


def _consume_line(state: _SplitState, line: str) -> _SplitState:
    stripped = line.strip()
    if is_horizontal_rule(stripped):
        return state.flush() if state.buffer else state
    if is_h1_heading(stripped) and state.buffer:
        return state.flush()._replace(buffer=(line,))
    return state._replace(buffer=state.buffer + (line,))


def extract_direction_marker(lines: Sequence[str]) -> Tuple[str, Direction]:
    """Strip a trailing ``^`` line and report the slide direction."""

    last = len(lines) - 1
    while last >= 0 and not lines[last].strip():
        last -= 1

    if last >= 0 and lines[last].strip() == DIRECTION_MARKER:
        kept = list(lines[:last]) + list(lines[last + 1:])
        return "\n".join(kept).strip(), Direction.DOWN
    return "\n".join(lines).strip(), Direction.RIGHT


def is_horizontal_rule(line: str) -> bool:
    """Three or more ``-``, ``*`` or ``_`` characters, spaces allowed between."""

    compact = re.sub(r"\s", "", line)
    if len(compact) < 3:
        return False
    return any(compact == char * len(compact) for char in _RULE_CHARS)


def is_h1_heading(line: str) -> bool:
    return H1_RE.match(line) is not None
