"""Extraction of the leading YAML metadata block of a deck."""

from __future__ import annotations

import datetime as _dt
import logging
import re
from typing import Any, Dict, Tuple

import yaml

from .slide_models import ASPECT_RATIOS, Frontmatter

LOGGER = logging.getLogger(__name__)

DEFAULT_FRONTMATTER: Dict[str, Any] = {
    "theme": "default",
    "transitionDuration": 1000,
    "aspectRatio": "16:9",
}

FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(?P<yaml>.*?)(?:\r?\n)?^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)
_LEADING_INT_RE = re.compile(r"^\s*([-+]?\d+)")

_INT_TAG = "tag:yaml.org,2002:int"
_FLOAT_TAG = "tag:yaml.org,2002:float"


class _FrontmatterLoader(yaml.SafeLoader):
    """Safe loader without YAML 1.1 base-60 numbers.

    PyYAML reads ``16:9`` as the integer 969; deck authors mean the ratio.
    """


_FrontmatterLoader.yaml_implicit_resolvers = {
    first: [
        (tag, regexp)
        for tag, regexp in resolvers
        if tag not in (_INT_TAG, _FLOAT_TAG)
    ]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
_FrontmatterLoader.add_implicit_resolver(
    _INT_TAG,
    re.compile(r"^(?:[-+]?0b[0-1_]+|[-+]?0[0-7_]+|[-+]?(?:0|[1-9][0-9_]*)|[-+]?0x[0-9a-fA-F_]+)$"),
    list("-+0123456789"),
)
_FrontmatterLoader.add_implicit_resolver(
    _FLOAT_TAG,
    re.compile(
        r"^(?:[-+]?(?:[0-9][0-9_]*)\.[0-9_]*(?:[eE][-+]?[0-9]+)?"
        r"|\.[0-9][0-9_]*(?:[eE][-+]?[0-9]+)?"
        r"|[-+]?\.(?:inf|Inf|INF)"
        r"|\.(?:nan|NaN|NAN))$"
    ),
    list("-+0123456789."),
)


def extract_frontmatter(content: str) -> Tuple[Frontmatter, str]:
    """Split ``content`` into validated frontmatter and the remaining body.

    Defaults fill only the keys that are absent; unknown keys are kept as-is.
    """

    data, body = _split_frontmatter(content)
    merged: Dict[str, Any] = {**DEFAULT_FRONTMATTER, **data}

    aspect_ratio = merged.get("aspectRatio")
    if aspect_ratio not in ASPECT_RATIOS:
        LOGGER.warning("Unsupported aspectRatio %r, using 16:9", aspect_ratio)
        merged["aspectRatio"] = "16:9"

    duration = merged.get("transitionDuration")
    if isinstance(duration, str):
        merged["transitionDuration"] = _parse_leading_int(duration)

    for key in ("title", "author", "date"):
        value = merged.get(key)
        if isinstance(value, (_dt.date, _dt.datetime)):
            merged[key] = value.isoformat()
        elif value is not None and not isinstance(value, str):
            merged[key] = str(value)

    return Frontmatter.from_dict(merged), body


def _split_frontmatter(content: str) -> Tuple[Dict[str, Any], str]:
    match = FRONTMATTER_RE.match(content)
    if match is None:
        return {}, content

    body = content[match.end():]
    try:
        parsed = yaml.load(match.group("yaml"), Loader=_FrontmatterLoader)
    except yaml.YAMLError as exc:
        LOGGER.warning("Ignoring malformed frontmatter: %s", exc)
        return {}, body

    if parsed is None:
        return {}, body
    if not isinstance(parsed, dict):
        LOGGER.warning("Frontmatter is not a mapping (%s), ignoring it", type(parsed).__name__)
        return {}, body
    return {str(key): value for key, value in parsed.items()}, body


def _parse_leading_int(text: str) -> int:
    match = _LEADING_INT_RE.match(text)
    if match is None:
        LOGGER.warning(
            "transitionDuration %r is not a number, using %s",
            text,
            DEFAULT_FRONTMATTER["transitionDuration"],
        )
        return DEFAULT_FRONTMATTER["transitionDuration"]
    return int(match.group(1))
