"""Runtime settings loaded from the environment (and an optional ``.env``)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

LOGGER = logging.getLogger(__name__)

DEFAULT_LAYOUT = "spiral"
OVERVIEW_SCALE = 10.0
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True, slots=True)
class Settings:
    """Defaults applied when a document or caller does not choose them."""

    layout: str = DEFAULT_LAYOUT
    overview_scale: float = OVERVIEW_SCALE
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        overview_scale = OVERVIEW_SCALE
        raw_scale = env.get("IMPRESSFLOW_OVERVIEW_SCALE")
        if raw_scale:
            try:
                overview_scale = float(raw_scale)
            except ValueError:
                LOGGER.warning(
                    "Ignoring non-numeric IMPRESSFLOW_OVERVIEW_SCALE=%r", raw_scale
                )
        return cls(
            layout=(env.get("IMPRESSFLOW_LAYOUT") or DEFAULT_LAYOUT).strip().lower(),
            overview_scale=overview_scale,
            log_level=(env.get("IMPRESSFLOW_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        )


def load_settings(dotenv_path: Optional[str] = None) -> Settings:
    """Read ``.env`` (without overriding real variables) and build settings."""

    load_dotenv(dotenv_path, override=False)
    return Settings.from_env()


def configure_logging(settings: Optional[Settings] = None) -> None:
    settings = settings or Settings()
    level = getattr(logging, settings.log_level, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
