"""Data models representing parsed slide decks and their 3D poses."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional


class LayoutType(str, Enum):
    """Content arrangement of a single slide."""

    SINGLE = "single"
    TWO_COLUMN = "two-column"
    THREE_COLUMN = "three-column"
    IMAGE_LEFT = "image-left"
    IMAGE_RIGHT = "image-right"
    FULL_BLEED = "full-bleed"
    TITLE_ONLY = "title-only"
    QUOTE = "quote"

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]


class Direction(str, Enum):
    """Where the line layout places the slide that follows."""

    RIGHT = "right"
    DOWN = "down"


ASPECT_RATIOS = ("16:9", "4:3")

# Frontmatter keys as written in documents -> attribute names.
_FRONTMATTER_FIELDS = {
    "title": "title",
    "theme": "theme",
    "transitionDuration": "transition_duration",
    "aspectRatio": "aspect_ratio",
    "author": "author",
    "date": "date",
}


@dataclass(frozen=True, slots=True)
class Frontmatter:
    """Document level metadata taken from the leading YAML block."""

    title: Optional[str] = None
    theme: str = "default"
    transition_duration: Any = 1000
    aspect_ratio: str = "16:9"
    author: Optional[str] = None
    date: Optional[str] = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Frontmatter":
        known = {
            attr: data[key]
            for key, attr in _FRONTMATTER_FIELDS.items()
            if key in data
        }
        extra = {
            key: value
            for key, value in data.items()
            if key not in _FRONTMATTER_FIELDS
        }
        return cls(**known, extra=extra)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = dict(self.extra)
        for key, attr in _FRONTMATTER_FIELDS.items():
            value = getattr(self, attr)
            if value is not None:
                payload[key] = value
        return payload

    def get(self, key: str, default: Any = None) -> Any:
        """Look a key up by the name used in the document."""

        attr = _FRONTMATTER_FIELDS.get(key)
        if attr is not None:
            value = getattr(self, attr)
            return default if value is None else value
        return self.extra.get(key, default)

    @property
    def layout(self) -> Optional[str]:
        """Positioning layout requested by the document, if any."""

        value = self.extra.get("layout")
        return str(value) if value is not None else None


@dataclass(frozen=True, slots=True)
class ImageRequest:
    """A ``![image: prompt]()`` generation request found in a slide."""

    prompt: str
    slide_index: int
    image_index: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "prompt": self.prompt,
            "slideIndex": self.slide_index,
            "imageIndex": self.image_index,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ImageRequest":
        return cls(
            prompt=data.get("prompt", ""),
            slide_index=int(data.get("slideIndex", data.get("slide_index", 0))),
            image_index=int(data.get("imageIndex", data.get("image_index", 0))),
        )


@dataclass(frozen=True, slots=True)
class StaticImage:
    """An ordinary Markdown image that points at an existing file or URL."""

    alt: str
    src: str

    def to_dict(self) -> Dict[str, str]:
        return {"alt": self.alt, "src": self.src}


@dataclass(slots=True)
class Slide:
    """A single slide within a parsed deck."""

    index: int
    title: str = ""
    content: str = ""
    layout: LayoutType = LayoutType.SINGLE
    images: List[ImageRequest] = field(default_factory=list)
    notes: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "title": self.title,
            "content": self.content,
            "layout": self.layout.value,
            "images": [image.to_dict() for image in self.images],
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Slide":
        layout = data.get("layout", LayoutType.SINGLE.value)
        return cls(
            index=int(data.get("index", 0)),
            title=data.get("title", ""),
            content=data.get("content", ""),
            layout=LayoutType(layout) if layout in LayoutType.values() else LayoutType.SINGLE,
            images=[ImageRequest.from_dict(item) for item in data.get("images", [])],
            notes=data.get("notes", ""),
        )


@dataclass(slots=True)
class SlideAST:
    """Source independent representation of a presentation."""

    frontmatter: Frontmatter = field(default_factory=Frontmatter)
    slides: List[Slide] = field(default_factory=list)
    directions: List[Direction] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "frontmatter": self.frontmatter.to_dict(),
            "slides": [slide.to_dict() for slide in self.slides],
            "directions": [direction.value for direction in self.directions],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SlideAST":
        slides = [Slide.from_dict(item) for item in data.get("slides", [])]
        for idx, slide in enumerate(slides):
            slide.index = idx
        return cls(
            frontmatter=Frontmatter.from_dict(dict(data.get("frontmatter", {}))),
            slides=slides,
            directions=[
                Direction.DOWN if item == Direction.DOWN.value else Direction.RIGHT
                for item in data.get("directions", [])
            ],
        )

    @property
    def image_requests(self) -> List[ImageRequest]:
        """Every generation request in the deck, in slide order."""

        return [image for slide in self.slides for image in slide.images]


@dataclass(frozen=True, slots=True)
class Position:
    """Translation, rotation (degrees) and scale of one slide."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    rotate_x: float = 0.0
    rotate_y: float = 0.0
    rotate_z: float = 0.0
    scale: float = 1.0

    def to_dict(self) -> Dict[str, float]:
        return {
            "x": self.x,
            "y": self.y,
            "z": self.z,
            "rotateX": self.rotate_x,
            "rotateY": self.rotate_y,
            "rotateZ": self.rotate_z,
            "scale": self.scale,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Position":
        return cls(
            x=float(data.get("x", 0)),
            y=float(data.get("y", 0)),
            z=float(data.get("z", 0)),
            rotate_x=float(data.get("rotateX", data.get("rotate_x", 0))),
            rotate_y=float(data.get("rotateY", data.get("rotate_y", 0))),
            rotate_z=float(data.get("rotateZ", data.get("rotate_z", 0))),
            scale=float(data.get("scale", 1)),
        )


IDENTITY_POSITION = Position()
