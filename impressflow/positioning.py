"""3D placement of slides.

Every layout is a pure function of ``(index, total, config)`` returning a
:class:`Position`, except ``line``: each of its poses depends on the direction
markers of all earlier slides, so it is computed with one forward walk.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .exceptions import PositioningError, UnknownLayoutError
from .slide_models import IDENTITY_POSITION, Direction, Position

LOGGER = logging.getLogger(__name__)


class LayoutName(str, Enum):
    SPIRAL = "spiral"
    GRID = "grid"
    HERRINGBONE = "herringbone"
    ZOOM = "zoom"
    SPHERE = "sphere"
    CASCADE = "cascade"
    LINE = "line"


# ----------------------------------------------------------------------
# Configuration records
# ----------------------------------------------------------------------

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


class _ConfigMixin:
    __slots__ = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]):
        """Build a config from snake_case or camelCase keys; unknown keys are ignored."""

        names = {item.name for item in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in data.items():
            name = _CAMEL_RE.sub("_", key).lower()
            if name in names and value is not None:
                values[name] = value
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return {item.name: getattr(self, item.name) for item in fields(self)}


@dataclass(frozen=True, slots=True)
class SpiralConfig(_ConfigMixin):
    start_radius: float = 1000
    radius_increment: float = 300
    angle_increment: float = 45  # degrees


@dataclass(frozen=True, slots=True)
class GridConfig(_ConfigMixin):
    columns: int = 4
    cell_width: float = 2200
    cell_height: float = 1400

    def __post_init__(self) -> None:
        if int(self.columns) < 1:
            raise PositioningError(f"Grid needs at least one column, got {self.columns}")


@dataclass(frozen=True, slots=True)
class HerringboneConfig(_ConfigMixin):
    step_x: float = 1800
    zigzag_amplitude: float = 600
    rotation_angle: float = 15


@dataclass(frozen=True, slots=True)
class ZoomConfig(_ConfigMixin):
    scale_multiplier: float = 3
    z_depth: float = -3000
    direction: str = "in"  # "in" | "out"

    def __post_init__(self) -> None:
        if self.scale_multiplier <= 0:
            raise PositioningError(
                f"Zoom scale multiplier must be positive, got {self.scale_multiplier}"
            )


@dataclass(frozen=True, slots=True)
class SphereConfig(_ConfigMixin):
    radius: float = 4000


@dataclass(frozen=True, slots=True)
class CascadeConfig(_ConfigMixin):
    step_x: float = 1600
    step_y: float = 800
    step_z: float = -200
    rotation: float = 5


@dataclass(frozen=True, slots=True)
class LineConfig(_ConfigMixin):
    step_x: float = 2200
    step_y: float = 1400
    directions: Tuple[Direction, ...] = ()

    def __post_init__(self) -> None:
        # Accept plain strings and lists from callers and documents.
        normalized = tuple(
            Direction.DOWN if str(getattr(item, "value", item)) == Direction.DOWN.value
            else Direction.RIGHT
            for item in self.directions
        )
        object.__setattr__(self, "directions", normalized)

    def to_dict(self) -> Dict[str, Any]:
        payload = _ConfigMixin.to_dict(self)
        payload["directions"] = [item.value for item in self.directions]
        return payload


PositionConfig = Union[
    SpiralConfig,
    GridConfig,
    HerringboneConfig,
    ZoomConfig,
    SphereConfig,
    CascadeConfig,
    LineConfig,
]
ConfigInput = Union[PositionConfig, Mapping[str, Any], None]


# ----------------------------------------------------------------------
# Algorithms
# ----------------------------------------------------------------------

def spiral(index: int, total: int, config: SpiralConfig = SpiralConfig()) -> Position:
    """Slides on an outward spiral, turning with the angle."""

    angle = math.radians(index * config.angle_increment)
    radius = config.start_radius + index * config.radius_increment
    return Position(
        x=math.cos(angle) * radius,
        y=math.sin(angle) * radius,
        rotate_z=math.fmod(index * config.angle_increment, 360),
    )


def grid(index: int, total: int, config: GridConfig = GridConfig()) -> Position:
    columns = int(config.columns)
    column = index % columns
    row = index // columns
    return Position(x=column * config.cell_width, y=row * config.cell_height)


def herringbone(
    index: int, total: int, config: HerringboneConfig = HerringboneConfig()
) -> Position:
    """Zigzag above and below the x axis, tilting with each step."""

    direction = 1 if index % 2 == 0 else -1
    return Position(
        x=index * config.step_x,
        y=direction * config.zigzag_amplitude,
        rotate_z=direction * config.rotation_angle,
    )


def zoom(index: int, total: int, config: ZoomConfig = ZoomConfig()) -> Position:
    """Slides along the z axis with exponentially growing (or shrinking) scale."""

    factor = config.scale_multiplier if config.direction == "in" else 1 / config.scale_multiplier
    return Position(z=index * config.z_depth, scale=factor ** index)


def sphere(index: int, total: int, config: SphereConfig = SphereConfig()) -> Position:
    """Fibonacci sphere: even spacing from the golden angle, facing outward."""

    phi = math.acos(1 - 2 * (index + 0.5) / total)
    theta = math.pi * (1 + math.sqrt(5)) * index
    radius = config.radius
    return Position(
        x=radius * math.sin(phi) * math.cos(theta),
        y=radius * math.sin(phi) * math.sin(theta),
        z=radius * math.cos(phi),
        rotate_x=math.degrees(phi) - 90,
        rotate_y=math.degrees(theta),
    )


def cascade(index: int, total: int, config: CascadeConfig = CascadeConfig()) -> Position:
    """Diagonal stack receding in depth; scale never drops below 0.5."""

    return Position(
        x=index * config.step_x,
        y=index * config.step_y,
        z=index * config.step_z,
        rotate_x=index * config.rotation * 0.5,
        rotate_z=index * config.rotation,
        scale=max(0.5, 1 - index * 0.02),
    )


def calculate_line_positions(total: int, config: LineConfig = LineConfig()) -> List[Position]:
    """Walk the slide path once.

    A slide marked ``down`` sends the next one a row lower and reverses the
    horizontal direction, giving a snake::

        [1] → [2] → [3]
                     ↓
              [5] ← [4]
    """

    positions: List[Position] = []
    x = 0.0
    y = 0.0
    heading = 1  # 1 = right, -1 = left
    for index in range(total):
        positions.append(Position(x=x, y=y))
        if index < len(config.directions) and config.directions[index] is Direction.DOWN:
            y += config.step_y
            heading = -heading
        else:
            x += config.step_x * heading
    return positions


def line(index: int, total: int, config: LineConfig = LineConfig()) -> Position:
    """Single pose of the line layout; replays the walk from the first slide."""

    return calculate_line_positions(index + 1, config)[index]


# ----------------------------------------------------------------------
# Registry
# ----------------------------------------------------------------------

PositionFn = Callable[[int, int, Any], Position]

_ALGORITHMS: Dict[LayoutName, Tuple[PositionFn, type]] = {
    LayoutName.SPIRAL: (spiral, SpiralConfig),
    LayoutName.GRID: (grid, GridConfig),
    LayoutName.HERRINGBONE: (herringbone, HerringboneConfig),
    LayoutName.ZOOM: (zoom, ZoomConfig),
    LayoutName.SPHERE: (sphere, SphereConfig),
    LayoutName.CASCADE: (cascade, CascadeConfig),
    LayoutName.LINE: (line, LineConfig),
}


def layout_names() -> List[str]:
    return [name.value for name in _ALGORITHMS]


def is_valid_layout(name: Any) -> bool:
    try:
        resolve_layout(name)
    except UnknownLayoutError:
        return False
    return True


def resolve_layout(name: Any) -> LayoutName:
    """Map a layout name to its enum member or raise :class:`UnknownLayoutError`."""

    if isinstance(name, LayoutName):
        return name
    try:
        return LayoutName(str(name))
    except ValueError:
        raise UnknownLayoutError(str(name), layout_names()) from None


def get_positioner(name: Union[str, LayoutName]) -> PositionFn:
    """Return the position function registered for ``name``."""

    return _ALGORITHMS[resolve_layout(name)][0]


def default_config(name: Union[str, LayoutName]) -> PositionConfig:
    """Immutable configuration record holding the defaults of ``name``."""

    return _ALGORITHMS[resolve_layout(name)][1]()


def coerce_config(name: Union[str, LayoutName], config: ConfigInput = None) -> PositionConfig:
    """Turn ``None``, a mapping or a config record into the record for ``name``."""

    config_cls = _ALGORITHMS[resolve_layout(name)][1]
    if config is None:
        return config_cls()
    if isinstance(config, config_cls):
        return config
    if isinstance(config, Mapping):
        return config_cls.from_dict(config)
    raise PositioningError(
        f"Expected {config_cls.__name__} or a mapping for layout {name!s}, "
        f"got {type(config).__name__}"
    )


def position_of(
    name: Union[str, LayoutName],
    index: int,
    total: int,
    config: ConfigInput = None,
) -> Position:
    """Pose of slide ``index`` out of ``total`` for the given layout."""

    layout = resolve_layout(name)
    if total <= 0:
        raise PositioningError(f"total must be positive, got {total}")
    if index < 0:
        raise PositioningError(f"index must not be negative, got {index}")
    # acos leaves its domain past the last slide of a sphere.
    if layout is LayoutName.SPHERE and index >= total:
        raise PositioningError(f"index {index} out of range for {total} slides")
    fn, _ = _ALGORITHMS[layout]
    return fn(index, total, coerce_config(layout, config))


def calculate_positions(
    name: Union[str, LayoutName],
    total: int,
    config: ConfigInput = None,
) -> List[Position]:
    """Poses for every slide of a deck of ``total`` slides."""

    layout = resolve_layout(name)
    if total < 0:
        raise PositioningError(f"total must not be negative, got {total}")
    resolved = coerce_config(layout, config)
    LOGGER.debug("Positioning %d slides with %s layout", total, layout.value)
    if layout is LayoutName.LINE:
        return calculate_line_positions(total, resolved)
    fn, _ = _ALGORITHMS[layout]
    return [fn(index, total, resolved) for index in range(total)]


def overview_position(positions: Sequence[Position], scale: float = 1.0) -> Position:
    """Centre of all poses, seen from far enough away to frame them.

    Only x and y are averaged; the camera stays flat at z = 0. An empty deck
    gets the identity pose.
    """

    if not positions:
        return IDENTITY_POSITION
    count = len(positions)
    return Position(
        x=sum(position.x for position in positions) / count,
        y=sum(position.y for position in positions) / count,
        scale=scale,
    )


def line_config_for(
    directions: Sequence[Union[str, Direction]],
    config: Optional[ConfigInput] = None,
) -> LineConfig:
    """Line config carrying a deck's direction markers."""

    base = coerce_config(LayoutName.LINE, config)
    return LineConfig(step_x=base.step_x, step_y=base.step_y, directions=tuple(directions))
