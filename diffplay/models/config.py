"""
Presentation config model

Options coming from the playground UI are validated once per change. An
invalid value never blocks a render: each bad field falls back to its
documented default and a warning is logged.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Literal, Mapping

from pydantic import model_validator
from pydantic.alias_generators import to_snake

from .base import FrozenModel

logger = logging.getLogger(__name__)

DEFAULT_THEMES = {"dark": "pierre-dark", "light": "pierre-light"}

_THEME_ID_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_./-]*$")

# field name -> allowed values
_CHOICES: dict[str, tuple[str, ...]] = {
    "active_theme": ("dark", "light"),
    "diff_style": ("split", "unified"),
    "indicator_style": ("bars", "classic", "none"),
    "line_refinement": ("none", "word", "word-alt"),
    "overflow_policy": ("scroll", "wrap"),
}

_FLAGS = ("show_line_numbers", "show_file_header")


class ThemePair(FrozenModel):
    """Theme identifiers for both color schemes"""

    dark: str = DEFAULT_THEMES["dark"]
    light: str = DEFAULT_THEMES["light"]


class PresentationConfig(FrozenModel):
    """Validated presentation options for one render"""

    themes: ThemePair = ThemePair()
    active_theme: Literal["dark", "light"] = "dark"
    diff_style: Literal["split", "unified"] = "split"
    indicator_style: Literal["bars", "classic", "none"] = "bars"
    line_refinement: Literal["none", "word", "word-alt"] = "word-alt"
    show_line_numbers: bool = True
    overflow_policy: Literal["scroll", "wrap"] = "scroll"
    show_file_header: bool = True

    @model_validator(mode="before")
    @classmethod
    def _fail_closed(cls, data: Any) -> Any:
        if isinstance(data, PresentationConfig):
            return data
        if not isinstance(data, Mapping):
            if data is not None:
                logger.warning("Ignoring presentation options of type %s", type(data).__name__)
            return {}

        cleaned: dict[str, Any] = {}
        for raw_key, value in data.items():
            key = to_snake(str(raw_key))

            if key == "themes":
                cleaned[key] = _clean_themes(value)
            elif key in _CHOICES:
                if isinstance(value, str) and value in _CHOICES[key]:
                    cleaned[key] = value
                else:
                    logger.warning("Invalid %s %r, using default", key, value)
            elif key in _FLAGS:
                if isinstance(value, bool):
                    cleaned[key] = value
                else:
                    logger.warning("Invalid %s %r, using default", key, value)
            else:
                logger.debug("Ignoring unknown presentation option %r", raw_key)

        return cleaned

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | PresentationConfig | None = None) -> PresentationConfig:
        """Build a config from UI options; never raises for bad values"""
        if isinstance(options, PresentationConfig):
            return options
        return cls.model_validate(options)

    @property
    def theme_id(self) -> str:
        """Identifier of the theme currently in use"""
        return getattr(self.themes, self.active_theme)


def _clean_themes(value: Any) -> dict[str, str]:
    if isinstance(value, ThemePair):
        value = value.model_dump()
    if not isinstance(value, Mapping):
        logger.warning("Invalid themes %r, using defaults", value)
        return dict(DEFAULT_THEMES)

    themes = {}
    for key, default in DEFAULT_THEMES.items():
        theme_id = value.get(key)
        if isinstance(theme_id, str) and _THEME_ID_RE.match(theme_id.strip()):
            themes[key] = theme_id.strip()
        else:
            logger.warning("Invalid %s theme %r, using %s", key, theme_id, default)
            themes[key] = default
    return themes
